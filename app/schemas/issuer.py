from typing import List
from pydantic import BaseModel

class IssuerStatus(BaseModel):
    issuer: str
    authorized: bool

class IssuerList(BaseModel):
    issuers: List[str]

class IssuerStats(BaseModel):
    issuer: str
    certificate_count: int
    valid_certificate_count: int

class RegistryInfo(BaseModel):
    owner: str
    total_certificates: int

class OwnerChange(BaseModel):
    new_owner: str
