"""Error taxonomy for the publish pipeline.

Only ValidationError (and its UnknownDestination subtype) ever reaches the
caller of a publish. AdapterError and InternalFault are converted into a
failed outcome for the destination that raised them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldIssue:
    """One violated constraint on one request field."""
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationError(Exception):
    """Raised when a publish request is malformed. No destination is contacted."""

    def __init__(self, issues: list[FieldIssue]) -> None:
        self.issues = list(issues)
        summary = "; ".join(f"{i.field}: {i.message}" for i in self.issues)
        super().__init__(f"Validation failed: {summary}")

    @property
    def fields(self) -> list[str]:
        return [i.field for i in self.issues]


class UnknownDestination(ValidationError):
    """Raised when a destination key is not in the registry."""

    def __init__(self, key: object, issues: list[FieldIssue] | None = None) -> None:
        self.key = key
        super().__init__(issues or [FieldIssue("platforms", f"Unknown destination: {key!r}")])


class AdapterError(Exception):
    """Raised inside an adapter when its destination call does not succeed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class InternalFault(Exception):
    """Wraps an unanticipated exception raised while shaping or dispatching."""

    def __init__(self, platform: str, cause: BaseException) -> None:
        self.platform = platform
        self.cause = cause
        super().__init__(f"{type(cause).__name__}: {cause}")
