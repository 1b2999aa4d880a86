"""Base class shared by every destination adapter.

Follows the live/mock pattern: in mock mode a publish is recorded locally
and answered with a synthetic identifier, in live mode it makes exactly one
HTTP call to the destination.
"""

from __future__ import annotations

import hashlib
import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from crosspost.credentials import CredentialSource, is_present
from crosspost.errors import AdapterError
from crosspost.publisher import PublishOutcome
from crosspost.registry import Destination, DestinationDescriptor, describe
from crosspost.transport import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class DestinationAdapter(ABC):
    """Publishes shaped payloads to one destination.

    Subclasses set ``destination`` and ``payload_type`` and implement
    ``_send``, which returns a dict with at least ``id`` and optionally
    ``url`` and raises AdapterError on failure.
    """

    destination: ClassVar[Destination]
    payload_type: ClassVar[type]

    def __init__(
        self,
        credentials: CredentialSource,
        live: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.credentials = credentials
        self.timeout = timeout
        self._live = live
        self._posted: list[dict[str, Any]] = []

    @property
    def descriptor(self) -> DestinationDescriptor:
        return describe(self.destination)

    @property
    def live(self) -> bool:
        return self._live

    def missing_credentials(self) -> list[str]:
        names = list(self.descriptor.env_vars)
        try:
            return [name for name in names if not is_present(self.credentials, name)]
        except Exception:
            logger.exception("Credential lookup failed for %s", self.destination.value)
            return names

    def has_credentials(self) -> bool:
        return not self.missing_credentials()

    def credential(self, name: str) -> str:
        value = self.credentials.get(name)
        if not value:
            raise AdapterError(f"Missing credential {name}")
        return value.strip()

    def publish(self, shaped: Any) -> PublishOutcome:
        """Publish a shaped payload. Never raises AdapterError."""
        if not isinstance(shaped, self.payload_type):
            return PublishOutcome.failed(
                self.destination,
                f"Expected {self.payload_type.__name__}, got {type(shaped).__name__}",
            )

        try:
            result = self._send(shaped) if self._live else self._mock(shaped)
        except AdapterError as exc:
            logger.warning("%s publish failed: %s", self.destination.value, exc)
            return PublishOutcome.failed(self.destination, str(exc))

        url = result.get("url") or None
        label = self.descriptor.label
        if url:
            message = f"Published to {label}: {url}"
        else:
            message = f"Published to {label} (id {result.get('id', 'unknown')})"
        return PublishOutcome.success(self.destination, message, url=url)

    @abstractmethod
    def _send(self, shaped: Any) -> dict[str, Any]:
        """Make the single live API call for this destination."""

    def _mock(self, shaped: Any) -> dict[str, Any]:
        # Same payload, same id: mock runs are repeatable across requests.
        digest = hashlib.sha256(repr(shaped).encode("utf-8")).hexdigest()[:12]
        result = {"id": f"mock-{self.destination.value}-{digest}", "url": self._mock_url(digest)}
        self._posted.append(result)
        return result

    def _mock_url(self, digest: str) -> str | None:
        return None

    @property
    def post_count(self) -> int:
        return len(self._posted)
