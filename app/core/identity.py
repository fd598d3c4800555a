# app/core/identity.py
import re

from app.core.errors import InvalidInput

ZERO_IDENTITY = "0x" + "0" * 40

_IDENTITY_RE = re.compile(r"^0x[0-9a-f]{40}$")

def normalize_identity(value: str | None, *, allow_null: bool = True) -> str:
    """
    Endereço canônico: ``0x`` + 40 hex minúsculos.
    Vazio/None vira a identidade nula; ``allow_null=False`` rejeita a nula.
    """
    ident = (value or "").strip().lower()
    if not ident:
        ident = ZERO_IDENTITY
    if not _IDENTITY_RE.match(ident):
        raise InvalidInput("Malformed identity.", identity=value)
    if not allow_null and ident == ZERO_IDENTITY:
        raise InvalidInput("Null identity.", identity=value)
    return ident

def identity_bytes(identity: str) -> bytes:
    return bytes.fromhex(normalize_identity(identity)[2:])
