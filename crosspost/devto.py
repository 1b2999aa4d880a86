"""DEV.to (Forem) integration module."""

from __future__ import annotations

from typing import Any

from crosspost.adapters import DestinationAdapter
from crosspost.errors import AdapterError
from crosspost.registry import Destination
from crosspost.shaping import DevtoPayload
from crosspost.transport import post_json

ARTICLES_URL = "https://dev.to/api/articles"


def build_article(shaped: DevtoPayload, published: bool = True) -> dict[str, Any]:
    article: dict[str, Any] = {
        "title": shaped.title,
        "body_markdown": shaped.body_markdown,
        "description": shaped.description,
        "published": published,
        "tags": list(shaped.tags),
    }
    if shaped.canonical_url:
        article["canonical_url"] = shaped.canonical_url
    if shaped.main_image:
        article["main_image"] = shaped.main_image
    return {"article": article}


class DevtoAdapter(DestinationAdapter):
    """Client for publishing markdown articles to DEV.to."""

    destination = Destination.DEVTO
    payload_type = DevtoPayload

    def _send(self, shaped: DevtoPayload) -> dict[str, Any]:
        resp = post_json(
            ARTICLES_URL,
            build_article(shaped),
            headers={
                "api-key": self.credential("DEVTO_API_KEY"),
                "Accept": "application/vnd.forem.api-v1+json",
            },
            timeout=self.timeout,
            label="DEV.to API",
        )
        body = resp.body if isinstance(resp.body, dict) else {}
        if not body.get("id"):
            raise AdapterError("DEV.to API response missing article id")
        return {"id": body["id"], "url": body.get("url")}

    def _mock_url(self, digest: str) -> str:
        return f"https://dev.to/mock/article-{digest}"
