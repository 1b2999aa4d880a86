"""Shared fixtures and test doubles."""

from __future__ import annotations

import threading
from typing import Any

import pytest

from crosspost.adapters import DestinationAdapter
from crosspost.content import ContentPayload
from crosspost.credentials import MappingCredentialSource
from crosspost.errors import AdapterError
from crosspost.registry import Destination, describe

BODY = (
    "## Why async\n\n"
    "Resilient services overlap slow network calls instead of waiting on each one. "
    "This post walks through **structured concurrency**, timeouts and isolation.\n\n"
    "- bounded fan-out\n- per-call deadlines\n"
)


def make_content(**overrides: Any) -> ContentPayload:
    fields: dict[str, Any] = {
        "title": "Async Patterns for Reliable Systems",
        "summary": "A deep dive into resilient async orchestration patterns for production.",
        "content": BODY,
        "canonical_url": "https://blog.example.com/async-patterns",
        "tags": ("async", "reliability"),
    }
    fields.update(overrides)
    return ContentPayload(**fields)


def credentials_for(*destinations: Destination) -> dict[str, str]:
    return {
        name: f"test-{name.lower()}"
        for d in destinations
        for name in describe(d).env_vars
    }


class RecordingAdapter(DestinationAdapter):
    """Adapter double that counts live calls and can fail on demand."""

    payload_type = object

    def __init__(
        self,
        destination: Destination,
        credentials: dict[str, str] | None = None,
        fail: str | None = None,
        raise_exc: Exception | None = None,
        block: threading.Event | None = None,
    ) -> None:
        self.destination = destination
        super().__init__(MappingCredentialSource(credentials or {}), live=True)
        self.calls = 0
        self.received: list[Any] = []
        self._fail = fail
        self._raise = raise_exc
        self._block = block

    def _send(self, shaped: Any) -> dict[str, Any]:
        self.calls += 1
        self.received.append(shaped)
        if self._block is not None:
            self._block.wait(timeout=5)
        if self._fail:
            raise AdapterError(self._fail, status_code=401)
        if self._raise:
            raise self._raise
        key = self.destination.value
        return {"id": f"{key}-1", "url": f"https://{key}.example.com/post/1"}


@pytest.fixture
def content() -> ContentPayload:
    return make_content()


@pytest.fixture
def all_credentials() -> dict[str, str]:
    return credentials_for(*Destination)
