# app/api/v1/events.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_registry
from app.schemas.event import RegistryEvent as RegistryEventOut
from app.services.registry import CertificateRegistry

router = APIRouter()

@router.get("", response_model=List[RegistryEventOut])
def list_events(
    name: Optional[str] = Query(None, description="CertificateIssued, CertificateRevoked, ..."),
    after_id: int = Query(0, ge=0, description="Replay a partir deste id (exclusivo)"),
    limit: int = Query(100, ge=1, le=1000),
    registry: CertificateRegistry = Depends(get_registry),
):
    return [RegistryEventOut.model_validate(e) for e in registry.get_events(name=name, after_id=after_id, limit=limit)]
