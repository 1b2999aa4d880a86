"""Canonical content model and request validation.

All field constraints are enforced here, once, before any destination is
contacted. A single violated constraint rejects the whole request.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import urlparse

from crosspost.errors import FieldIssue, UnknownDestination, ValidationError
from crosspost.registry import Destination, parse_destination

MIN_TITLE_CHARS = 5
MIN_SUMMARY_CHARS = 24
MIN_CONTENT_CHARS = 100
MAX_TAGS = 8


@dataclass(frozen=True)
class ContentPayload:
    title: str
    summary: str
    content: str
    canonical_url: str | None = None
    image_url: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(split_tags(self.tags)))


@dataclass(frozen=True)
class PublishRequest:
    content: ContentPayload
    destinations: tuple[Destination, ...]


def split_tags(raw: Any) -> list[Any]:
    """Accept a comma-separated string or a sequence of tags."""
    if raw is None:
        return []
    if isinstance(raw, str):
        return raw.split(",")
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _check_text(issues: list[FieldIssue], name: str, value: Any, minimum: int, label: str) -> None:
    if not isinstance(value, str):
        issues.append(FieldIssue(name, f"{label} must be a string."))
    elif len(value) < minimum:
        issues.append(FieldIssue(name, f"{label} must be at least {minimum} characters."))


def _check_url(issues: list[FieldIssue], name: str, value: Any) -> None:
    if value is None or value == "":
        return
    if not isinstance(value, str) or not _is_url(value):
        issues.append(FieldIssue(name, "Invalid url"))


def check_content(content: ContentPayload) -> list[FieldIssue]:
    """Return every constraint the content violates, in field order."""
    issues: list[FieldIssue] = []
    _check_text(issues, "title", content.title, MIN_TITLE_CHARS, "Title")
    _check_text(issues, "summary", content.summary, MIN_SUMMARY_CHARS, "Summary")
    _check_text(issues, "content", content.content, MIN_CONTENT_CHARS, "Content")
    _check_url(issues, "canonicalUrl", content.canonical_url)
    _check_url(issues, "imageUrl", content.image_url)

    if any(not isinstance(t, str) for t in content.tags):
        issues.append(FieldIssue("tags", "Tags must be strings."))
    elif len(normalize_tags(content.tags)) > MAX_TAGS:
        issues.append(FieldIssue("tags", f"At most {MAX_TAGS} tags are allowed."))
    return issues


def normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    return tuple(t.strip() for t in tags if t.strip())


def normalize_content(content: ContentPayload) -> ContentPayload:
    """Trim tags and turn empty-string URLs into None. Assumes valid content."""
    return replace(
        content,
        canonical_url=content.canonical_url or None,
        image_url=content.image_url or None,
        tags=normalize_tags(content.tags),
    )


def check_destinations(
    keys: Iterable[Destination | str],
) -> tuple[tuple[Destination, ...], list[FieldIssue], list[object]]:
    """Resolve keys in first-seen order, dropping duplicates.

    Returns the resolved keys, the issues found and the unknown raw keys.
    """
    resolved: list[Destination] = []
    issues: list[FieldIssue] = []
    unknown: list[object] = []
    for raw in keys:
        try:
            key = parse_destination(raw)
        except UnknownDestination:
            unknown.append(raw)
            issues.append(FieldIssue("platforms", f"Unknown destination: {raw!r}"))
            continue
        if key not in resolved:
            resolved.append(key)
    if not resolved and not unknown:
        issues.append(FieldIssue("platforms", "Select at least one platform."))
    return tuple(resolved), issues, unknown


def build_request(
    content: ContentPayload,
    keys: Iterable[Destination | str] | None,
) -> PublishRequest:
    """Validate content and destination keys together.

    Raises:
        UnknownDestination: If the only problems are unknown destination keys.
        ValidationError: For any other combination of violated constraints.
    """
    content_issues = check_content(content)
    if not isinstance(keys, Iterable) or isinstance(keys, (str, Destination)):
        destinations: tuple[Destination, ...] = ()
        key_issues = [FieldIssue("platforms", "Expected a list of platforms.")]
        unknown: list[object] = []
    else:
        destinations, key_issues, unknown = check_destinations(keys)

    issues = content_issues + key_issues
    if unknown and not content_issues and len(key_issues) == len(unknown):
        raise UnknownDestination(unknown[0], issues)
    if issues:
        raise ValidationError(issues)
    return PublishRequest(content=normalize_content(content), destinations=destinations)


def parse_request(raw: Mapping[str, Any]) -> PublishRequest:
    """Build a PublishRequest from an inbound request body.

    Accepts camelCase (canonicalUrl) or snake_case (canonical_url) URL keys
    and tags as a list or a comma-separated string.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError([FieldIssue("body", "Expected a JSON object.")])

    content = ContentPayload(
        title=raw.get("title"),  # type: ignore[arg-type]
        summary=raw.get("summary"),  # type: ignore[arg-type]
        content=raw.get("content"),  # type: ignore[arg-type]
        canonical_url=raw.get("canonicalUrl", raw.get("canonical_url")),
        image_url=raw.get("imageUrl", raw.get("image_url")),
        tags=tuple(split_tags(raw.get("tags"))),
    )
    return build_request(content, raw.get("platforms"))
