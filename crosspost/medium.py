"""Medium integration module.

Creates a post under the configured author with HTML content and a
canonical reference back to the original article.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from crosspost.adapters import DestinationAdapter
from crosspost.credentials import CredentialSource
from crosspost.errors import AdapterError
from crosspost.registry import Destination
from crosspost.shaping import MediumPayload
from crosspost.transport import DEFAULT_TIMEOUT, post_json

MEDIUM_API_URL = "https://api.medium.com/v1"
PUBLISH_STATUSES = ("public", "draft", "unlisted")


class MediumAdapter(DestinationAdapter):
    """Client for publishing to Medium via the v1 API."""

    destination = Destination.MEDIUM
    payload_type = MediumPayload

    def __init__(
        self,
        credentials: CredentialSource,
        live: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        publish_status: str = "public",
    ) -> None:
        super().__init__(credentials, live=live, timeout=timeout)
        if publish_status not in PUBLISH_STATUSES:
            raise ValueError(f"publish_status must be one of {PUBLISH_STATUSES}")
        self.publish_status = publish_status

    def build_body(self, shaped: MediumPayload) -> dict[str, Any]:
        body: dict[str, Any] = {
            "title": shaped.title,
            "contentFormat": "html",
            "content": shaped.content_html,
            "publishStatus": self.publish_status,
        }
        if shaped.tags:
            body["tags"] = list(shaped.tags)
        if shaped.canonical_url:
            body["canonicalUrl"] = shaped.canonical_url
        return body

    def _send(self, shaped: MediumPayload) -> dict[str, Any]:
        author_id = self.credential("MEDIUM_AUTHOR_ID")
        resp = post_json(
            f"{MEDIUM_API_URL}/users/{quote(author_id, safe='')}/posts",
            self.build_body(shaped),
            headers={
                "Authorization": f"Bearer {self.credential('MEDIUM_INTEGRATION_TOKEN')}",
                "Accept-Charset": "utf-8",
            },
            timeout=self.timeout,
            label="Medium API",
        )
        data = resp.body.get("data") if isinstance(resp.body, dict) else None
        if not isinstance(data, dict) or not data.get("id"):
            raise AdapterError("Medium API response missing post data")
        return {"id": data["id"], "url": data.get("url")}

    def _mock_url(self, digest: str) -> str:
        return f"https://medium.com/p/mock-{digest}"
