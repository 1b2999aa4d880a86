"""OAuth 1.0a request signing (HMAC-SHA1) for the X/Twitter API.

Builds the Authorization header for user-context requests. JSON request
bodies are not part of the signature base string, only the oauth_*
parameters and any query parameters are.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time
from base64 import b64encode
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit


@dataclass(frozen=True)
class OAuth1Credentials:
    consumer_key: str
    consumer_secret: str
    token: str
    token_secret: str


def percent_encode(value: str) -> str:
    """RFC 3986 encoding as OAuth 1.0a requires (only unreserved chars kept)."""
    return quote(value, safe="~")


def signature_base_string(method: str, url: str, params: dict[str, str]) -> str:
    parts = urlsplit(url)
    base_url = urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path, "", ""))
    all_params = list(params.items()) + parse_qsl(parts.query, keep_blank_values=True)
    encoded = sorted((percent_encode(k), percent_encode(v)) for k, v in all_params)
    param_string = "&".join(f"{k}={v}" for k, v in encoded)
    return "&".join([
        method.upper(),
        percent_encode(base_url),
        percent_encode(param_string),
    ])


def sign(base_string: str, consumer_secret: str, token_secret: str) -> str:
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(key.encode(), base_string.encode(), hashlib.sha1).digest()
    return b64encode(digest).decode("ascii")


def build_authorization_header(
    method: str,
    url: str,
    creds: OAuth1Credentials,
    nonce: str | None = None,
    timestamp: int | None = None,
) -> str:
    """Build an OAuth 1.0a Authorization header value.

    Args:
        method: HTTP method of the request being signed.
        url: Full request URL, including any query string.
        creds: Consumer and access token credentials.
        nonce: Fixed nonce (tests only). Random when None.
        timestamp: Fixed epoch seconds (tests only). Current time when None.
    """
    oauth_params = {
        "oauth_consumer_key": creds.consumer_key,
        "oauth_nonce": nonce or secrets.token_hex(16),
        "oauth_signature_method": "HMAC-SHA1",
        "oauth_timestamp": str(timestamp if timestamp is not None else int(time.time())),
        "oauth_token": creds.token,
        "oauth_version": "1.0",
    }
    base = signature_base_string(method, url, oauth_params)
    oauth_params["oauth_signature"] = sign(base, creds.consumer_secret, creds.token_secret)

    header_params = ", ".join(
        f'{percent_encode(k)}="{percent_encode(v)}"' for k, v in sorted(oauth_params.items())
    )
    return f"OAuth {header_params}"
