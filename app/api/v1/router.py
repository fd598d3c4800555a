# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1 import (
    auth,
    certificates,
    events,
    issuers,
    registry,
)

api_router = APIRouter()

api_router.include_router(auth.router,         prefix="/auth",         tags=["auth"])
api_router.include_router(registry.router,     prefix="/registry",     tags=["registry"])
api_router.include_router(certificates.router, prefix="/certificates", tags=["certificates"])
api_router.include_router(issuers.router,      prefix="/issuers",      tags=["issuers"])
api_router.include_router(events.router,       prefix="/events",       tags=["events"])
