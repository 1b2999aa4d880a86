"""LinkedIn integration module.

Shares the article through the UGC Posts API as the configured author
(a person or organization URN).
"""

from __future__ import annotations

from typing import Any

from crosspost.adapters import DestinationAdapter
from crosspost.errors import AdapterError
from crosspost.registry import Destination
from crosspost.shaping import LinkedInPayload
from crosspost.transport import post_json

UGC_POSTS_URL = "https://api.linkedin.com/v2/ugcPosts"


def build_ugc_post(author: str, shaped: LinkedInPayload) -> dict[str, Any]:
    content: dict[str, Any] = {
        "shareCommentary": {"text": shaped.commentary},
        "shareMediaCategory": "NONE",
    }
    if shaped.link:
        media: dict[str, Any] = {
            "status": "READY",
            "originalUrl": shaped.link,
            "title": {"text": shaped.title},
            "description": {"text": shaped.description},
        }
        if shaped.image_url:
            media["thumbnails"] = [{"url": shaped.image_url}]
        content["shareMediaCategory"] = "ARTICLE"
        content["media"] = [media]

    return {
        "author": author,
        "lifecycleState": "PUBLISHED",
        "specificContent": {"com.linkedin.ugc.ShareContent": content},
        "visibility": {"com.linkedin.ugc.MemberNetworkVisibility": "PUBLIC"},
    }


class LinkedInAdapter(DestinationAdapter):
    """Client for sharing articles on LinkedIn."""

    destination = Destination.LINKEDIN
    payload_type = LinkedInPayload

    def _send(self, shaped: LinkedInPayload) -> dict[str, Any]:
        author = self.credential("LINKEDIN_AUTHOR_URN")
        resp = post_json(
            UGC_POSTS_URL,
            build_ugc_post(author, shaped),
            headers={
                "Authorization": f"Bearer {self.credential('LINKEDIN_ACCESS_TOKEN')}",
                "X-Restli-Protocol-Version": "2.0.0",
            },
            timeout=self.timeout,
            label="LinkedIn API",
        )
        body = resp.body if isinstance(resp.body, dict) else {}
        post_id = body.get("id") or resp.headers.get("x-restli-id")
        if not post_id:
            raise AdapterError("LinkedIn API response missing post id")
        return {"id": post_id, "url": f"https://www.linkedin.com/feed/update/{post_id}/"}
