from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.errors import RegistryError
from app.core.logging import setup_logging
from app.db.bootstrap import run_migrations_and_seed
from app.db.session import SessionLocal
from app.services.registry import CertificateRegistry

logger = structlog.get_logger(__name__)


def create_app(registry: Optional[CertificateRegistry] = None, *, bootstrap: bool = True) -> FastAPI:
    """
    ``registry`` injetado = testes (sem migrations/seed).
    Sem registro: usa o engine de app.db.session e roda bootstrap no startup.
    """
    if registry is None:
        registry = CertificateRegistry(SessionLocal)

    api = FastAPI(
        title="Certificate Registry API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
    )
    api.state.registry = registry

    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # métricas /metrics (Prometheus)
    Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

    api.include_router(api_router, prefix="/api/v1")

    @api.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    if bootstrap:
        @api.on_event("startup")
        def startup():
            run_migrations_and_seed(registry)

    @api.exception_handler(RegistryError)
    def handle_registry_error(request: Request, exc: RegistryError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @api.exception_handler(IntegrityError)
    def handle_integrity_error(request: Request, exc: IntegrityError):
        return JSONResponse(
            status_code=409,
            content={"code": "UNIQUE_VIOLATION", "message": "Duplicate record.", "details": str(getattr(exc, "orig", exc))},
        )

    @api.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={"code": "INTERNAL_ERROR", "message": "Internal error.", "details": str(exc)},
        )

    return api


setup_logging()

api = create_app()
