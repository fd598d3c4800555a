from typing import List
from pydantic import BaseModel, Field

class CertificateIssue(BaseModel):
    # vazio é rejeitado pelo registro (InvalidInput); sem strip/normalização
    recipient_name: str
    course_name: str
    issuing_institution: str
    certificate_hash: str

class CertificateTransfer(BaseModel):
    new_recipient_name: str

class CertificateIssued(BaseModel):
    certificate_id: str
    issue_date: int

class Certificate(BaseModel):
    certificate_id: str
    recipient_name: str
    course_name: str
    issuing_institution: str
    issue_date: int
    certificate_hash: str
    is_valid: bool
    issuer: str

    model_config = {"from_attributes": True}

class Verification(BaseModel):
    is_valid: bool
    recipient_name: str
    course_name: str
    issuing_institution: str
    issue_date: int

class CertificateExists(BaseModel):
    certificate_id: str
    exists: bool

class CertificateHash(BaseModel):
    certificate_id: str
    certificate_hash: str

class CertificateIdList(BaseModel):
    certificate_ids: List[str] = Field(default_factory=list)
    count: int = 0
