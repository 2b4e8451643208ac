import os
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .config import settings
from .errors import FieldForceError
from .logging import setup_logging, RequestIdMiddleware
from .routes.benefits import router as benefits_router
from .routes.employees import router as employees_router
from .routes.logs import router as logs_router
from .routes.reports import router as reports_router
from .routes.tasks import router as tasks_router
from .routes.tracking import router as tracking_router
from .storage.provider import Storage
from .storage.sql_provider import SqlStorage


logger = structlog.get_logger(__name__)


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app_name)

    if storage is None:
        storage = SqlStorage.from_url(settings.database_url)
    app.state.storage = storage

    # Middlewares
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    @app.exception_handler(FieldForceError)
    async def _fieldforce_error(request: Request, exc: FieldForceError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log("request_failed", path=request.url.path, error_code=exc.error_code, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("request_invalid", path=request.url.path, errors=len(exc.errors()))
        first = exc.errors()[0] if exc.errors() else {}
        loc = [str(p) for p in first.get("loc", []) if p != "body"]
        return JSONResponse(
            status_code=400,
            content={
                "error": first.get("msg", "Invalid request"),
                "error_code": "VALIDATION_ERROR",
                "field": ".".join(loc) or None,
            },
        )

    # Routers
    app.include_router(employees_router)
    app.include_router(tasks_router)
    app.include_router(tracking_router)
    app.include_router(benefits_router)
    app.include_router(reports_router)
    app.include_router(logs_router)

    @app.get("/ping", response_class=PlainTextResponse)
    def ping():
        return "Backend OK ✅"

    # Metrics
    Instrumentator().instrument(app).expose(app)

    @app.on_event("startup")
    def _startup():
        # Ensure local SQLite directory exists
        if settings.database_url.startswith("sqlite:///./"):
            os.makedirs("var", exist_ok=True)
        if settings.auto_create_db and isinstance(app.state.storage, SqlStorage):
            app.state.storage.create_schema()
            logger.info("schema_ready")

    return app


app = create_app()
