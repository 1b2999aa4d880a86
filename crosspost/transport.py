"""Outbound JSON POST shared by every destination adapter.

Transport failures, non-2xx responses and unreadable bodies all surface
as AdapterError so adapters have a single exception to convert.
"""

from __future__ import annotations

import json
import logging
import socket
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any

from crosspost.errors import AdapterError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
MAX_ERROR_BODY = 500


@dataclass
class JsonResponse:
    status: int
    body: Any
    headers: dict[str, str] = field(default_factory=dict)


def post_json(
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    label: str = "API",
) -> JsonResponse:
    """POST a JSON body and decode the JSON reply.

    Raises:
        AdapterError: On HTTP error status, connection failure, timeout,
            or a response body that is not JSON.
    """
    data = json.dumps(payload).encode("utf-8")
    req = urllib.request.Request(
        url,
        data=data,
        headers={
            "Content-Type": "application/json",
            "Accept": "application/json",
            **(headers or {}),
        },
        method="POST",
    )
    logger.debug("POST %s", url)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8")
            status = resp.status
            resp_headers = {k.lower(): v for k, v in resp.headers.items()}
    except urllib.error.HTTPError as exc:
        body = exc.read().decode("utf-8", errors="replace")[:MAX_ERROR_BODY]
        raise AdapterError(f"{label} error {exc.code}: {body}", status_code=exc.code) from exc
    except urllib.error.URLError as exc:
        if isinstance(exc.reason, socket.timeout):
            raise AdapterError(f"{label} request timed out after {timeout:g}s") from exc
        raise AdapterError(f"{label} connection error: {exc.reason}") from exc
    except (socket.timeout, TimeoutError) as exc:
        raise AdapterError(f"{label} request timed out after {timeout:g}s") from exc
    except OSError as exc:
        raise AdapterError(f"{label} connection error: {exc}") from exc

    if not raw:
        return JsonResponse(status=status, body={}, headers=resp_headers)
    try:
        body = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise AdapterError(f"{label} returned a non-JSON response (HTTP {status})") from exc
    return JsonResponse(status=status, body=body, headers=resp_headers)
