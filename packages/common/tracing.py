"""Tracing helpers for FastAPI.

Adds a request-level trace middleware that injects/propagates `X-Request-ID`
and a content-event helper used by the service facades for audit logging.
"""

from .logging import set_request_id
from fastapi import Request, Response
from typing import Any, Callable, Awaitable, Dict, Optional
import logging
import time
import uuid

logger = logging.getLogger("tierlearn.events")


async def trace_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """ASGI middleware to attach a correlation id and echo it in the response.

    - Reads `X-Request-ID` from the incoming request or generates a UUIDv4.
    - Stores it in a ContextVar so logs include the same id.
    - Sets the same header on the outgoing response.

    Args:
        request: Incoming FastAPI request.
        call_next: The next ASGI callable that returns a `Response`.

    Returns:
        The downstream response with `X-Request-ID` header set.
    """
    rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    set_request_id(rid)
    try:
        response = await call_next(request)
    finally:
        set_request_id(None)
    response.headers["X-Request-ID"] = rid
    return response


def content_event(kind: str, verb: str, entity_id: int, actor_id: Optional[str] = None, **extras: Any) -> Dict[str, Any]:
    """Log a structured content lifecycle event and return its payload.

    Args:
        kind: Entity kind (e.g. "video", "testimonial").
        verb: Lifecycle action ("created", "updated", "deleted").
        entity_id: Id of the affected record.
        actor_id: Id of the user who triggered the change, when known.
        **extras: Additional key/value fields (e.g. changed field names).

    Returns:
        A dictionary containing the event payload.
    """
    event: Dict[str, Any] = {
        "kind": kind,
        "verb": verb,
        "id": entity_id,
        "actor": actor_id,
        "ts": round(time.time(), 3),
        "extras": extras,
    }
    logger.info("%s %s %s", kind, verb, entity_id, extra={"event": event})
    return event
