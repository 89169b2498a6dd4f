"""Portal FastAPI application.

Builds the service container once at start-up, attaches tracing middleware,
includes the content, community and admin routes and maps portal errors to
HTTP responses.
"""

from contextlib import asynccontextmanager
import logging
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from packages.common.auth import Viewer, get_viewer
from packages.common.config import get_settings
from packages.common.errors import InvalidInputError, NotFoundError
from packages.common.logging import configure_logging
from packages.common.ordering import latest
from packages.common.tracing import trace_middleware
from services.community.routes import router as community_router
from services.content.routes import router as content_router
from services.content.views import post_card, video_card
from services.users.routes import router as admin_router
from .container import Container, build_container, get_container

log = logging.getLogger(__name__)


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    log.info("not found: %s", exc)
    return JSONResponse(status_code=404, content={"detail": str(exc), "kind": exc.kind, "id": exc.entity_id})


async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
    log.info("invalid input: %s", exc)
    return JSONResponse(status_code=422, content={"detail": exc.errors, "kind": exc.kind})


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Create the portal app.

    Args:
        container: Pre-built container (tests pass fresh ones). When omitted the
            container is built from settings during application start-up.

    Returns:
        A configured FastAPI application.
    """
    s = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize service dependencies at application startup."""
        if getattr(app.state, "container", None) is None:
            app.state.container = build_container(s)
        yield

    app = FastAPI(title="Tierlearn Portal", version="1.0.0", lifespan=lifespan)
    app.state.container = container
    app.middleware("http")(trace_middleware)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(InvalidInputError, _invalid_input)
    app.include_router(content_router)
    app.include_router(community_router)
    app.include_router(admin_router)

    @app.get("/ping", tags=["portal"])
    def ping() -> Dict[str, bool]:
        return {"ok": True}

    @app.get("/home", tags=["portal"])
    async def home(viewer: Viewer = Depends(get_viewer), c: Container = Depends(get_container)) -> Dict[str, Any]:
        """Three newest videos and posts, gated for the viewer."""
        return {
            "videos": [video_card(v, viewer.role) for v in latest(await c.videos.get_all())],
            "posts": [post_card(p, viewer.role) for p in latest(await c.posts.get_all())],
        }

    return app


def main() -> FastAPI:
    """ASGI factory entry point (`uvicorn services.portal.app:main --factory`)."""
    configure_logging(get_settings().LOG_LEVEL)
    return create_app()
