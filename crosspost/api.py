"""Request boundary: inbound body dict in, response dict out.

The web layer passes the decoded JSON body here and serializes whatever
comes back. Validation failures and internal faults produce distinct
``kind`` values so callers can map them to different status codes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from crosspost.content import parse_request
from crosspost.errors import ValidationError
from crosspost.publisher import PublishOrchestrator

logger = logging.getLogger(__name__)


def handle_publish(orchestrator: PublishOrchestrator, body: Mapping[str, Any]) -> dict[str, Any]:
    try:
        request = parse_request(body)
        results = orchestrator.dispatch(request)
    except ValidationError as exc:
        return {
            "ok": False,
            "kind": "validation",
            "message": "Validation failed",
            "issues": [issue.to_dict() for issue in exc.issues],
        }
    except Exception as exc:
        logger.exception("[publish] Unexpected error")
        return {
            "ok": False,
            "kind": "internal",
            "message": "Failed to publish content.",
            "detail": str(exc) or type(exc).__name__,
        }
    return {"ok": True, "results": [r.to_dict() for r in results]}


def status_code(response: Mapping[str, Any]) -> int:
    """Suggested HTTP status for a handle_publish response."""
    if response.get("ok"):
        return 200
    return 422 if response.get("kind") == "validation" else 500
