# app/services/certificate_id.py
from __future__ import annotations

import hashlib
from app.core.identity import identity_bytes

def _text(value: str) -> bytes:
    raw = value.encode("utf-8")
    return len(raw).to_bytes(4, "big") + raw

def compute_certificate_id(
    *,
    recipient_name: str,
    course_name: str,
    issuing_institution: str,
    issue_date: int,
    issuer: str,
) -> str:
    # textos com prefixo de tamanho: ("ab","c") e ("a","bc") não colidem
    payload = b"".join(
        (
            _text(recipient_name),
            _text(course_name),
            _text(issuing_institution),
            int(issue_date).to_bytes(32, "big"),
            identity_bytes(issuer),
        )
    )
    return "0x" + hashlib.sha3_256(payload).hexdigest()
