# app/api/v1/auth.py
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Body
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from sqlalchemy import select

from app.api.deps import get_db, require_owner
from app.core.errors import InvalidInput
from app.core.identity import normalize_identity
from app.core.security import hash_password, verify_and_maybe_upgrade
from app.core.tokens import create_access_token
from app.models.account import Account
from app.schemas.account import AccountCreate, AccountOut, Token

logger = structlog.get_logger(__name__)

router = APIRouter()

# ---------- helpers ----------
def ensure_password_policy(password: str):
    if not isinstance(password, str) or len(password) < 8 or len(password) > 128:
        raise HTTPException(status_code=400, detail="Password must have 8-128 characters.")

def _identity_or_401(raw: str) -> str:
    try:
        return normalize_identity(raw, allow_null=False)
    except InvalidInput:
        raise HTTPException(status_code=401, detail="Invalid credentials.") from None

def authenticate(db: Session, identity: str, password: str) -> Account:
    acc = db.execute(select(Account).where(Account.identity == identity)).scalar_one_or_none()
    if not acc:
        raise HTTPException(status_code=401, detail="Invalid credentials.")
    ok, new_hash = verify_and_maybe_upgrade(password, acc.hashed_password)
    if not ok:
        raise HTTPException(status_code=401, detail="Invalid credentials.")
    if new_hash:
        acc.hashed_password = new_hash
        db.add(acc); db.commit()
    return acc

def _token_for(acc: Account) -> Token:
    return Token(access_token=create_access_token(sub=acc.identity), identity=acc.identity)

# ---------- endpoints ----------
@router.post("/register", response_model=AccountOut, status_code=201)
def register(
    body: AccountCreate,
    owner: str = Depends(require_owner),
    db: Session = Depends(get_db),
):
    # só o owner cria credenciais; a credencial em si não dá papel nenhum
    identity = normalize_identity(body.identity, allow_null=False)
    exists = db.execute(select(Account).where(Account.identity == identity)).scalar_one_or_none()
    if exists:
        raise HTTPException(status_code=409, detail="Identity already registered.")
    acc = Account(identity=identity, hashed_password=hash_password(body.password))
    db.add(acc); db.commit(); db.refresh(acc)
    logger.info("account_registered", identity=identity, by=owner)
    return acc

@router.post("/token", response_model=Token)
def login_oauth2_form(
    form: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    # OAuth2: "username" carrega a identidade
    identity = _identity_or_401(form.username)
    password = form.password or ""
    ensure_password_policy(password)
    return _token_for(authenticate(db, identity, password))

@router.post("/login", response_model=Token)
def login_json(
    identity: str = Body(...),
    password: str = Body(...),
    db: Session = Depends(get_db),
):
    ensure_password_policy(password)
    return _token_for(authenticate(db, _identity_or_401(identity), password))
