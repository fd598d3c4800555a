# app/api/v1/certificates.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Query

from app.api.deps import get_registry, get_caller
from app.schemas.certificate import (
    Certificate as CertificateOut,
    CertificateExists,
    CertificateHash,
    CertificateIdList,
    CertificateIssue,
    CertificateIssued,
    CertificateTransfer,
    Verification as VerificationOut,
)
from app.services.registry import CertificateRegistry

router = APIRouter()

def _ids(ids: List[str]) -> CertificateIdList:
    return CertificateIdList(certificate_ids=ids, count=len(ids))

# -------------------------- emissão --------------------------

@router.post("", response_model=CertificateIssued, status_code=201)
def issue_certificate(
    body: CertificateIssue,
    caller: str = Depends(get_caller),
    registry: CertificateRegistry = Depends(get_registry),
):
    issued = registry.issue(
        caller,
        body.recipient_name,
        body.course_name,
        body.issuing_institution,
        body.certificate_hash,
    )
    return CertificateIssued(certificate_id=issued.certificate_id, issue_date=issued.issue_date)

# --------------------- buscas globais (públicas) ---------------------
# declaradas antes de /{certificate_id} para não colidir

@router.get("/by-institution", response_model=CertificateIdList)
def by_institution(
    institution: str = Query(...),
    registry: CertificateRegistry = Depends(get_registry),
):
    return _ids(registry.get_certificates_by_institution(institution))

@router.get("/by-recipient", response_model=CertificateIdList)
def by_recipient(
    recipient_name: str = Query(...),
    registry: CertificateRegistry = Depends(get_registry),
):
    return _ids(registry.get_certificates_by_recipient(recipient_name))

# -------------------------- leitura --------------------------

@router.get("/{certificate_id}", response_model=CertificateOut)
def get_certificate(
    certificate_id: str = Path(...),
    registry: CertificateRegistry = Depends(get_registry),
):
    return CertificateOut.model_validate(registry.get_certificate(certificate_id))

@router.get("/{certificate_id}/verify", response_model=VerificationOut)
def verify_certificate(
    certificate_id: str = Path(...),
    registry: CertificateRegistry = Depends(get_registry),
):
    # id inexistente -> is_valid=False e campos vazios (não é 404)
    return VerificationOut(**registry.verify_certificate(certificate_id)._asdict())

@router.get("/{certificate_id}/exists", response_model=CertificateExists)
def certificate_exists(
    certificate_id: str = Path(...),
    registry: CertificateRegistry = Depends(get_registry),
):
    return CertificateExists(certificate_id=certificate_id, exists=registry.certificate_exists(certificate_id))

@router.get("/{certificate_id}/hash", response_model=CertificateHash)
def certificate_hash(
    certificate_id: str = Path(...),
    registry: CertificateRegistry = Depends(get_registry),
):
    return CertificateHash(
        certificate_id=certificate_id,
        certificate_hash=registry.get_certificate_hash(certificate_id),
    )

# ------------------------ mutações (issuer) ------------------------

@router.post("/{certificate_id}/revoke", response_model=CertificateOut)
def revoke_certificate(
    certificate_id: str = Path(...),
    caller: str = Depends(get_caller),
    registry: CertificateRegistry = Depends(get_registry),
):
    registry.revoke_certificate(caller, certificate_id)
    return CertificateOut.model_validate(registry.get_certificate(certificate_id))

@router.post("/{certificate_id}/transfer", response_model=CertificateOut)
def transfer_certificate(
    body: CertificateTransfer,
    certificate_id: str = Path(...),
    caller: str = Depends(get_caller),
    registry: CertificateRegistry = Depends(get_registry),
):
    registry.transfer_certificate(caller, certificate_id, body.new_recipient_name)
    return CertificateOut.model_validate(registry.get_certificate(certificate_id))
