"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize the FastAPI application (title, version, tags)
  - Configure middleware (request context, CORS)
  - Mount the console routers (auth, users, reports, preferences, toasts)
  - Restore a persisted operator session at startup
  - Expose the /healthz endpoint

Collaborators:
  - RequestContextMiddleware: request id + logging context
  - container: session gateway and shared HTTP client lifecycle
  - exception_handlers: RFC 7807 error mapping

Notes:
  - Middleware order matters: RequestContext -> CORS -> routes
  - Settings are validated in the lifespan, not at import time
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..container import close_http_client, get_session_gateway
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers
from .preference_routes import router as preference_router
from .report_routes import router as report_router
from .toast_routes import router as toast_router
from .user_routes import router as user_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and restores the session."""
    settings = get_settings()

    try:
        session = await get_session_gateway().restore()

        logger.info(
            "SST Console API starting up",
            extra={
                "app_env": settings.app_env,
                "session_restored": session is not None,
                "reports_configured": bool(settings.reports_api_url),
                "action_script_configured": bool(settings.action_script_url),
            },
        )

        yield

    finally:
        await close_http_client()
        logger.info("SST Console API shutting down")


# R: Fallback for tests that import the app without env vars
def _get_allowed_origins() -> list[str]:
    try:
        return get_settings().get_allowed_origins_list()
    except Exception:
        return ["http://localhost:3000"]


def create_app() -> FastAPI:
    app = FastAPI(
        title="SST Console API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Operator session"},
            {"name": "users", "description": "User management (writes require admin)"},
            {"name": "reports", "description": "Compliance reports"},
            {"name": "preferences", "description": "Interface language"},
            {"name": "toasts", "description": "Transient notifications"},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )
    # R: Added last = outermost; request id is set before CORS runs
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    for router in (auth_router, user_router, report_router, preference_router, toast_router):
        app.include_router(router)

    @app.get("/healthz", tags=["health"])
    def healthz() -> dict:
        gateway = get_session_gateway()
        return {
            "ok": True,
            "session": "authenticated" if gateway.is_authenticated else "anonymous",
        }

    return app


app = create_app()
