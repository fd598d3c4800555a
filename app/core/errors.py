# app/core/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional


class RegistryError(Exception):
    """Base das falhas do registro. Nenhuma escrita acontece antes do raise."""

    code = "REGISTRY_ERROR"
    status_code = 400
    default_message = "Registry operation failed."

    def __init__(self, message: Optional[str] = None, **details: Any) -> None:
        self.message = message or self.default_message
        self.details: Dict[str, Any] = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details or None}


class Unauthorized(RegistryError):
    code = "UNAUTHORIZED"
    status_code = 403
    default_message = "Caller lacks the required role."


class InvalidInput(RegistryError):
    code = "INVALID_INPUT"
    status_code = 422
    default_message = "Invalid input."


class NotFound(RegistryError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Certificate not found."


class DuplicateCertificate(RegistryError):
    code = "DUPLICATE_CERTIFICATE"
    status_code = 409
    default_message = "Certificate already exists."


class AlreadyRevoked(RegistryError):
    code = "ALREADY_REVOKED"
    status_code = 409
    default_message = "Certificate already revoked."


class InvalidState(RegistryError):
    code = "INVALID_STATE"
    status_code = 409
    default_message = "Certificate is not valid."


class AlreadyAuthorized(RegistryError):
    code = "ALREADY_AUTHORIZED"
    status_code = 409
    default_message = "Issuer already authorized."


class NotAuthorized(RegistryError):
    code = "NOT_AUTHORIZED"
    status_code = 409
    default_message = "Issuer not authorized."


class CannotRevokeOwner(RegistryError):
    code = "CANNOT_REVOKE_OWNER"
    status_code = 409
    default_message = "Cannot revoke owner."
