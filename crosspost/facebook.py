"""Facebook Page integration module (Graph API page feed)."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from crosspost.adapters import DestinationAdapter
from crosspost.errors import AdapterError
from crosspost.registry import Destination
from crosspost.shaping import FacebookPayload
from crosspost.transport import post_json

GRAPH_API_URL = "https://graph.facebook.com/v19.0"


class FacebookAdapter(DestinationAdapter):
    destination = Destination.FACEBOOK
    payload_type = FacebookPayload

    def _send(self, shaped: FacebookPayload) -> dict[str, Any]:
        page_id = self.credential("FACEBOOK_PAGE_ID")
        body: dict[str, Any] = {
            "message": shaped.message,
            "access_token": self.credential("FACEBOOK_PAGE_ACCESS_TOKEN"),
        }
        if shaped.link:
            body["link"] = shaped.link

        resp = post_json(
            f"{GRAPH_API_URL}/{quote(page_id, safe='')}/feed",
            body,
            timeout=self.timeout,
            label="Facebook Graph API",
        )
        post_id = resp.body.get("id") if isinstance(resp.body, dict) else None
        if not post_id:
            raise AdapterError("Facebook Graph API response missing post id")
        return {"id": post_id, "url": f"https://www.facebook.com/{post_id}"}
