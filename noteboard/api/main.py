"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (body limit, request context, CORS)
  - Mount board router (notes/events) under /v1 prefix and auth routes at root
  - Expose health check and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID, logging context and metrics
  - interfaces.api.http.router: board endpoints
  - api.auth_routes: register/login/logout/me/users

Notes:
  - Middleware order matters: BodyLimit → RequestContext → CORS → routes
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics
  - Test environment (APP_ENV=test) skips the DB pool: repositories are in-memory
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..container import get_note_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Initializes the DB pool outside tests."""
    settings = get_settings()
    use_pool = not settings.is_test()

    if use_pool:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        logger.info(
            "Noteboard API starting up",
            extra={
                "app_env": settings.app_env,
                "visibility_mode": settings.visibility_mode,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        if use_pool:
            close_pool()
        logger.info("Noteboard API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Noteboard API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "notes", "description": "Team notes, versions and comments"},
            {"name": "events", "description": "Team calendar events"},
            {"name": "auth", "description": "User authentication (JWT)"},
        ],
    )

    # Orden (último agregado = primero en ejecutar): CORS → RequestContext → BodyLimit
    app.add_middleware(BodyLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(
        RequestContextMiddleware, metrics_enabled=settings.metrics_enabled
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    app.include_router(router, prefix="/v1")
    app.include_router(auth_router)

    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """
        Health check: verifica el backend de persistencia.

        Returns:
            ok: True si la DB responde
            db: "connected" o "disconnected"
            request_id: ID de correlación
        """
        db_status = "disconnected"
        try:
            if get_note_repository().ping():
                db_status = "connected"
        except Exception as e:
            logger.warning("Health check: DB no disponible", extra={"error": str(e)})

        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics")
    def metrics():
        """Métricas Prometheus (formato texto)."""
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
