# app/core/security.py
from __future__ import annotations
from typing import Tuple
from passlib.context import CryptContext

# argon2 (argon2-cffi); hashes antigos com parâmetros diferentes são re-hasheados no login
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=19456,
    argon2__parallelism=1,
)

def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)

def verify_and_maybe_upgrade(plain: str, stored_hash: str) -> Tuple[bool, str | None]:
    ok, new_hash = pwd_context.verify_and_update(plain, stored_hash)
    return ok, new_hash
