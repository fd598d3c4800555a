# app/api/v1/registry.py
from fastapi import APIRouter, Depends

from app.api.deps import get_registry, get_caller
from app.schemas.issuer import OwnerChange, RegistryInfo
from app.services.registry import CertificateRegistry

router = APIRouter()

def _info(registry: CertificateRegistry) -> RegistryInfo:
    return RegistryInfo(owner=registry.owner(), total_certificates=registry.total_certificates())

@router.get("", response_model=RegistryInfo)
def registry_info(registry: CertificateRegistry = Depends(get_registry)):
    return _info(registry)

@router.put("/owner", response_model=RegistryInfo)
def change_owner(
    body: OwnerChange,
    caller: str = Depends(get_caller),
    registry: CertificateRegistry = Depends(get_registry),
):
    registry.change_owner(caller, body.new_owner)
    return _info(registry)
