# app/api/v1/issuers.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.deps import get_registry, get_caller
from app.core.identity import normalize_identity
from app.schemas.certificate import CertificateIdList
from app.schemas.issuer import IssuerList, IssuerStats, IssuerStatus
from app.services.registry import CertificateRegistry

router = APIRouter()

@router.get("", response_model=IssuerList)
def list_authorized_issuers(registry: CertificateRegistry = Depends(get_registry)):
    return IssuerList(issuers=registry.get_all_authorized_issuers())

@router.get("/{identity}", response_model=IssuerStatus)
def issuer_status(
    identity: str = Path(...),
    registry: CertificateRegistry = Depends(get_registry),
):
    return IssuerStatus(issuer=normalize_identity(identity), authorized=registry.is_authorized_issuer(identity))

# -------- owner-only --------
@router.put("/{identity}", response_model=IssuerStatus)
def authorize_issuer(
    identity: str = Path(...),
    caller: str = Depends(get_caller),
    registry: CertificateRegistry = Depends(get_registry),
):
    registry.authorize_issuer(caller, identity)
    return IssuerStatus(issuer=normalize_identity(identity), authorized=True)

@router.delete("/{identity}", status_code=status.HTTP_204_NO_CONTENT)
def revoke_issuer(
    identity: str = Path(...),
    caller: str = Depends(get_caller),
    registry: CertificateRegistry = Depends(get_registry),
):
    registry.revoke_issuer(caller, identity)

# -------- índice por issuer --------
@router.get("/{identity}/certificates", response_model=CertificateIdList)
def issuer_certificates(
    identity: str = Path(...),
    course_name: Optional[str] = Query(None, description="Filtra por curso (igualdade exata)"),
    registry: CertificateRegistry = Depends(get_registry),
):
    if course_name is not None:
        ids = registry.get_certificates_by_course(identity, course_name)
    else:
        ids = registry.get_all_certificates_issued_by(identity)
    return CertificateIdList(certificate_ids=ids, count=len(ids))

@router.get("/{identity}/stats", response_model=IssuerStats)
def issuer_stats(
    identity: str = Path(...),
    registry: CertificateRegistry = Depends(get_registry),
):
    return IssuerStats(
        issuer=normalize_identity(identity),
        certificate_count=registry.get_certificate_count_by_issuer(identity),
        valid_certificate_count=registry.get_valid_certificate_count_by_issuer(identity),
    )
