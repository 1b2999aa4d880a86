"""Content transformer: canonical article -> destination-specific payload.

Every function here is pure. Shaping the same content for the same
destination twice yields equal payloads, and nothing touches the network.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Callable, ClassVar, Union

import markdown

from crosspost.content import ContentPayload
from crosspost.registry import Destination, parse_destination

TWEET_MAX_CHARS = 280
TWEET_URL_CHARS = 23  # t.co wraps every link to this length
LINKEDIN_MAX_CHARS = 3000
FACEBOOK_MAX_CHARS = 5000
MEDIUM_MAX_TAGS = 5
MEDIUM_MAX_TAG_CHARS = 25
DEVTO_MAX_TAGS = 4

MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "sane_lists")


@dataclass(frozen=True)
class TweetPayload:
    destination: ClassVar[Destination] = Destination.TWITTER
    text: str


@dataclass(frozen=True)
class LinkedInPayload:
    destination: ClassVar[Destination] = Destination.LINKEDIN
    commentary: str
    title: str
    description: str
    link: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class FacebookPayload:
    destination: ClassVar[Destination] = Destination.FACEBOOK
    message: str
    link: str | None = None


@dataclass(frozen=True)
class MediumPayload:
    destination: ClassVar[Destination] = Destination.MEDIUM
    title: str
    content_html: str
    tags: tuple[str, ...] = ()
    canonical_url: str | None = None


@dataclass(frozen=True)
class DevtoPayload:
    destination: ClassVar[Destination] = Destination.DEVTO
    title: str
    body_markdown: str
    description: str
    tags: tuple[str, ...] = ()
    canonical_url: str | None = None
    main_image: str | None = None


DestinationPayload = Union[TweetPayload, LinkedInPayload, FacebookPayload, MediumPayload, DevtoPayload]


def truncate(text: str, limit: int) -> str:
    """Truncate at a word boundary, reserving room for an ellipsis."""
    if len(text) <= limit:
        return text
    trunc_at = text.rfind(" ", 0, limit - 3)
    if trunc_at <= 0:
        trunc_at = limit - 3
    return text[:trunc_at].rstrip() + "..."


def hashtags(tags: tuple[str, ...]) -> str:
    """Join tags as hashtags, dropping punctuation and case-insensitive repeats."""
    seen: set[str] = set()
    out: list[str] = []
    for tag in tags:
        word = re.sub(r"\W", "", tag)
        if word and word.lower() not in seen:
            seen.add(word.lower())
            out.append(f"#{word}")
    return " ".join(out)


def _join(*parts: str | None) -> str:
    return "\n\n".join(p for p in parts if p)


URL_PATTERN = re.compile(r"https?://\S+")


def weighted_length(text: str) -> int:
    """Tweet length as X counts it: every link weighs TWEET_URL_CHARS."""
    return len(URL_PATTERN.sub("x" * TWEET_URL_CHARS, text))


def render_markdown(text: str) -> str:
    return markdown.markdown(text, extensions=list(MARKDOWN_EXTENSIONS))


def shape_twitter(content: ContentPayload) -> TweetPayload:
    tags = hashtags(content.tags)
    budget = TWEET_MAX_CHARS
    if content.canonical_url:
        budget -= TWEET_URL_CHARS + 2

    body = _join(content.title, tags)
    if weighted_length(body) > budget:
        # Drop hashtags before cutting into the title.
        body = truncate(content.title, budget)
    return TweetPayload(text=_join(body, content.canonical_url))


def shape_linkedin(content: ContentPayload) -> LinkedInPayload:
    commentary = truncate(_join(content.summary, hashtags(content.tags)), LINKEDIN_MAX_CHARS)
    return LinkedInPayload(
        commentary=commentary,
        title=content.title,
        description=content.summary,
        link=content.canonical_url,
        image_url=content.image_url,
    )


def shape_facebook(content: ContentPayload) -> FacebookPayload:
    message = _join(content.title, content.summary, hashtags(content.tags))
    return FacebookPayload(
        message=truncate(message, FACEBOOK_MAX_CHARS),
        link=content.canonical_url,
    )


def _medium_tags(tags: tuple[str, ...]) -> tuple[str, ...]:
    out: list[str] = []
    for tag in tags:
        tag = tag[:MEDIUM_MAX_TAG_CHARS]
        if tag.lower() not in (t.lower() for t in out):
            out.append(tag)
    return tuple(out[:MEDIUM_MAX_TAGS])


def shape_medium(content: ContentPayload) -> MediumPayload:
    parts = [f"<h1>{html.escape(content.title)}</h1>"]
    if content.image_url:
        parts.append(
            f'<img src="{html.escape(content.image_url)}" alt="{html.escape(content.title)}">'
        )
    parts.append(render_markdown(content.content))
    return MediumPayload(
        title=content.title,
        content_html="\n".join(parts),
        tags=_medium_tags(content.tags),
        canonical_url=content.canonical_url,
    )


def _devto_tags(tags: tuple[str, ...]) -> tuple[str, ...]:
    out: list[str] = []
    for tag in tags:
        slug = re.sub(r"[^a-z0-9]", "", tag.lower())
        if slug and slug not in out:
            out.append(slug)
    return tuple(out[:DEVTO_MAX_TAGS])


def shape_devto(content: ContentPayload) -> DevtoPayload:
    return DevtoPayload(
        title=content.title,
        body_markdown=content.content,
        description=content.summary,
        tags=_devto_tags(content.tags),
        canonical_url=content.canonical_url,
        main_image=content.image_url,
    )


SHAPERS: dict[Destination, Callable[[ContentPayload], DestinationPayload]] = {
    Destination.TWITTER: shape_twitter,
    Destination.LINKEDIN: shape_linkedin,
    Destination.FACEBOOK: shape_facebook,
    Destination.MEDIUM: shape_medium,
    Destination.DEVTO: shape_devto,
}


def shape(content: ContentPayload, key: Destination | str) -> DestinationPayload:
    """Shape content for one destination. Raises UnknownDestination."""
    return SHAPERS[parse_destination(key)](content)
