"""Publish orchestrator: fan one article out to many destinations.

Validates the request, skips destinations that are not configured,
shapes and dispatches the rest concurrently, and reports one outcome per
requested destination in the order they were requested.

A destination's failure never affects its siblings. Adapter errors come
back as failed outcomes; anything unexpected is caught here, logged as an
InternalFault and reported the same way. Only ValidationError escapes.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from crosspost.content import ContentPayload, PublishRequest, build_request
from crosspost.errors import InternalFault
from crosspost.registry import Destination, describe
from crosspost.shaping import DestinationPayload, shape

if TYPE_CHECKING:
    from crosspost.adapters import DestinationAdapter
    from crosspost.config import PublisherConfig

logger = logging.getLogger(__name__)


class OutcomeStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PublishOutcome:
    platform: Destination
    status: OutcomeStatus
    message: str
    url: str | None = None

    @classmethod
    def success(cls, platform: Destination, message: str, url: str | None = None) -> PublishOutcome:
        return cls(platform, OutcomeStatus.SUCCESS, message, url)

    @classmethod
    def skipped(cls, platform: Destination, message: str) -> PublishOutcome:
        return cls(platform, OutcomeStatus.SKIPPED, message)

    @classmethod
    def failed(cls, platform: Destination, message: str) -> PublishOutcome:
        return cls(platform, OutcomeStatus.FAILED, message)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "platform": self.platform.value,
            "status": self.status.value,
            "message": self.message,
        }
        if self.url:
            data["url"] = self.url
        return data


class PublishOrchestrator:
    """Publishes one article to a selection of destinations.

    Args:
        adapters: One adapter per destination. A destination with no adapter
            is reported as skipped.
        timeout: Seconds the whole batch may take before destinations still
            in flight are reported as failed. None waits indefinitely.
        shaper: Content transformer, replaceable in tests.
        clock: Monotonic clock used for the timeout deadline.
    """

    def __init__(
        self,
        adapters: Mapping[Destination, DestinationAdapter],
        timeout: float | None = None,
        shaper: Callable[[ContentPayload, Destination], DestinationPayload] = shape,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._adapters = dict(adapters)
        self._timeout = timeout
        self._shape = shaper
        self._clock = clock

    @property
    def adapters(self) -> dict[Destination, DestinationAdapter]:
        return dict(self._adapters)

    def publish_to_platforms(
        self,
        content: ContentPayload,
        keys: Iterable[Destination | str],
    ) -> list[PublishOutcome]:
        """Validate, then publish to every requested destination.

        Raises:
            ValidationError: If the content or destination selection is
                invalid. No destination is contacted in that case.
        """
        request = build_request(content, keys)
        return self.dispatch(request)

    def dispatch(self, request: PublishRequest) -> list[PublishOutcome]:
        outcomes: dict[Destination, PublishOutcome] = {}
        runnable: list[tuple[Destination, DestinationAdapter]] = []

        for key in request.destinations:
            adapter = self._adapters.get(key)
            if adapter is None:
                outcomes[key] = PublishOutcome.skipped(key, f"No adapter configured for {key.value}")
                continue
            missing = adapter.missing_credentials()
            if missing:
                outcomes[key] = PublishOutcome.skipped(
                    key, f"Missing credentials: {', '.join(missing)}",
                )
                continue
            runnable.append((key, adapter))

        logger.info(
            "Publishing %r to %d destination(s), %d skipped",
            request.content.title, len(runnable), len(outcomes),
        )

        if runnable:
            executor = ThreadPoolExecutor(max_workers=len(runnable), thread_name_prefix="crosspost")
            try:
                futures = {
                    key: executor.submit(self._publish_one, key, adapter, request.content)
                    for key, adapter in runnable
                }
                deadline = None if self._timeout is None else self._clock() + self._timeout
                for key, future in futures.items():
                    outcomes[key] = self._collect(key, future, deadline)
            finally:
                # Stragglers past the deadline are abandoned, not awaited.
                executor.shutdown(wait=False, cancel_futures=True)

        results = [outcomes[key] for key in request.destinations]
        for outcome in results:
            logger.info("[%s] %s: %s", outcome.status.value.upper(), outcome.platform.value, outcome.message)
        return results

    def _publish_one(
        self,
        key: Destination,
        adapter: DestinationAdapter,
        content: ContentPayload,
    ) -> PublishOutcome:
        try:
            shaped = self._shape(content, key)
            outcome = adapter.publish(shaped)
        except Exception as exc:
            fault = InternalFault(key.value, exc)
            logger.error(
                "Internal fault while publishing to %s", key.value,
                exc_info=exc, extra={"fault": fault},
            )
            return PublishOutcome.failed(key, f"Internal error: {fault}")

        if not isinstance(outcome, PublishOutcome) or outcome.platform is not key:
            logger.error("Adapter for %s returned %r", key.value, outcome)
            return PublishOutcome.failed(key, "Internal error: adapter returned an invalid outcome")
        return outcome

    def _collect(
        self,
        key: Destination,
        future: Future[PublishOutcome],
        deadline: float | None,
    ) -> PublishOutcome:
        remaining = None if deadline is None else max(0.0, deadline - self._clock())
        try:
            return future.result(timeout=remaining)
        except FutureTimeoutError:
            logger.warning("Timed out waiting for %s after %gs", key.value, self._timeout)
            return PublishOutcome.failed(
                key, f"Timed out after {self._timeout:g}s waiting for {describe(key).label}",
            )


def publish_to_platforms(
    content: ContentPayload,
    keys: Iterable[Destination | str],
    config: PublisherConfig | None = None,
) -> list[PublishOutcome]:
    """Publish with adapters built from config (loaded from the environment if None)."""
    from crosspost.config import load_config
    from crosspost.factory import build_orchestrator

    return build_orchestrator(config or load_config()).publish_to_platforms(content, keys)
