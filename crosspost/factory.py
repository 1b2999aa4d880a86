"""Factory for building adapters and a PublishOrchestrator from PublisherConfig.

Shared by the CLI and the request handler so adapter construction lives
in one place.
"""

from __future__ import annotations

from crosspost.adapters import DestinationAdapter
from crosspost.config import PublisherConfig
from crosspost.credentials import CredentialSource
from crosspost.devto import DevtoAdapter
from crosspost.facebook import FacebookAdapter
from crosspost.linkedin import LinkedInAdapter
from crosspost.medium import MediumAdapter
from crosspost.publisher import PublishOrchestrator
from crosspost.registry import Destination
from crosspost.twitter import TwitterAdapter


def build_adapters(
    cfg: PublisherConfig,
    credentials: CredentialSource | None = None,
) -> dict[Destination, DestinationAdapter]:
    """Build one adapter per registered destination.

    Args:
        cfg: Publisher configuration with credentials and live_mode.
        credentials: Optional credential source overriding cfg.credentials.

    Returns:
        Adapters keyed by destination, in registry order.
    """
    source = credentials or cfg.credential_source()
    common = {"live": cfg.live_mode, "timeout": cfg.http_timeout}
    adapters: list[DestinationAdapter] = [
        TwitterAdapter(source, **common),
        LinkedInAdapter(source, **common),
        FacebookAdapter(source, **common),
        MediumAdapter(source, publish_status=cfg.medium_publish_status, **common),
        DevtoAdapter(source, **common),
    ]
    return {a.destination: a for a in adapters}


def build_orchestrator(
    cfg: PublisherConfig,
    credentials: CredentialSource | None = None,
) -> PublishOrchestrator:
    """Build a fully wired PublishOrchestrator from a PublisherConfig."""
    return PublishOrchestrator(build_adapters(cfg, credentials), timeout=cfg.timeout)
