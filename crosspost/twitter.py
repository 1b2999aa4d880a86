"""X (Twitter) integration module.

Posts via the v2 create-tweet endpoint with an OAuth 1.0a user-context
signature. In mock mode, tweets are recorded locally without API calls.
"""

from __future__ import annotations

from typing import Any

from crosspost.adapters import DestinationAdapter
from crosspost.errors import AdapterError
from crosspost.oauth1 import OAuth1Credentials, build_authorization_header
from crosspost.registry import Destination
from crosspost.shaping import TWEET_MAX_CHARS, TweetPayload, weighted_length
from crosspost.transport import post_json

TWEETS_URL = "https://api.twitter.com/2/tweets"


class TwitterAdapter(DestinationAdapter):
    """Client for posting to X via the v2 API."""

    destination = Destination.TWITTER
    payload_type = TweetPayload

    def _oauth_credentials(self) -> OAuth1Credentials:
        return OAuth1Credentials(
            consumer_key=self.credential("TWITTER_API_KEY"),
            consumer_secret=self.credential("TWITTER_API_SECRET"),
            token=self.credential("TWITTER_ACCESS_TOKEN"),
            token_secret=self.credential("TWITTER_ACCESS_SECRET"),
        )

    def _send(self, shaped: TweetPayload) -> dict[str, Any]:
        if not 0 < weighted_length(shaped.text) <= TWEET_MAX_CHARS:
            raise AdapterError("Tweet text exceeds character limit or is empty")

        auth = build_authorization_header("POST", TWEETS_URL, self._oauth_credentials())
        resp = post_json(
            TWEETS_URL,
            {"text": shaped.text},
            headers={"Authorization": auth},
            timeout=self.timeout,
            label="X API",
        )
        data = resp.body.get("data") if isinstance(resp.body, dict) else None
        tweet_id = data.get("id") if isinstance(data, dict) else None
        if not tweet_id:
            raise AdapterError(f"X API response missing tweet id: {resp.body!r}"[:300])
        return {"id": tweet_id, "url": f"https://x.com/i/web/status/{tweet_id}"}

    def _mock_url(self, digest: str) -> str:
        return f"https://x.com/i/web/status/mock-{digest}"
