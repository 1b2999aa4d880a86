"""Destination registry: the closed set of publishing destinations.

Built once at import time and never mutated. Descriptors are used for
presentation and for credential lookups only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from crosspost.errors import UnknownDestination


class Destination(Enum):
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    FACEBOOK = "facebook"
    MEDIUM = "medium"
    DEVTO = "devto"


@dataclass(frozen=True)
class DestinationDescriptor:
    key: Destination
    label: str
    brand_color: str
    description: str
    env_vars: tuple[str, ...]


_DESCRIPTORS = (
    DestinationDescriptor(
        key=Destination.TWITTER,
        label="X (Twitter)",
        brand_color="#1DA1F2",
        description="Short post with title, hashtags and a link back to the canonical article.",
        env_vars=(
            "TWITTER_API_KEY",
            "TWITTER_API_SECRET",
            "TWITTER_ACCESS_TOKEN",
            "TWITTER_ACCESS_SECRET",
        ),
    ),
    DestinationDescriptor(
        key=Destination.LINKEDIN,
        label="LinkedIn",
        brand_color="#0A66C2",
        description="Article share using the summary and canonical link.",
        env_vars=("LINKEDIN_ACCESS_TOKEN", "LINKEDIN_AUTHOR_URN"),
    ),
    DestinationDescriptor(
        key=Destination.FACEBOOK,
        label="Facebook Page",
        brand_color="#1877F2",
        description="Page feed post with summary, hashtags and canonical link.",
        env_vars=("FACEBOOK_PAGE_ID", "FACEBOOK_PAGE_ACCESS_TOKEN"),
    ),
    DestinationDescriptor(
        key=Destination.MEDIUM,
        label="Medium",
        brand_color="#00AB6C",
        description="Full article rendered to HTML with a canonical reference.",
        env_vars=("MEDIUM_INTEGRATION_TOKEN", "MEDIUM_AUTHOR_ID"),
    ),
    DestinationDescriptor(
        key=Destination.DEVTO,
        label="DEV.to",
        brand_color="#0A0A0A",
        description="Full markdown article with tags and a canonical reference.",
        env_vars=("DEVTO_API_KEY",),
    ),
)

REGISTRY = MappingProxyType({d.key: d for d in _DESCRIPTORS})


def parse_destination(value: Destination | str) -> Destination:
    """Resolve a raw key to a Destination, raising UnknownDestination."""
    if isinstance(value, Destination):
        return value
    if isinstance(value, str):
        try:
            return Destination(value.strip().lower())
        except ValueError:
            pass
    raise UnknownDestination(value)


def describe(key: Destination | str) -> DestinationDescriptor:
    return REGISTRY[parse_destination(key)]


def all_keys() -> tuple[Destination, ...]:
    return tuple(REGISTRY)
