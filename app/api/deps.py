from typing import Generator

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.errors import Unauthorized
from app.core.tokens import decode_access
from app.services.registry import CertificateRegistry

# ----------------------------------------------------------------------
# Registro e sessão vêm do app.state (montados em app.main.create_app)
# ----------------------------------------------------------------------
def get_registry(request: Request) -> CertificateRegistry:
    return request.app.state.registry

def get_db(registry: CertificateRegistry = Depends(get_registry)) -> Generator[Session, None, None]:
    db = registry.session_factory()
    try:
        yield db
    finally:
        db.close()

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization (sem usar OAuth2PasswordBearer)
# ----------------------------------------------------------------------
def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header")
    return parts[1]

# ----------------------------------------------------------------------
# Identidade do chamador = claim "sub" do access token.
# Papéis (owner/issuer) NÃO vêm do token: o registro decide a cada operação.
# ----------------------------------------------------------------------
def get_caller(token: str = Depends(get_bearer_token)) -> str:
    payload = decode_access(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token")
    return str(payload["sub"]).lower()

# ----------------------------------------------------------------------
# Rotas administrativas: só o owner atual do registro
# ----------------------------------------------------------------------
def require_owner(
    caller: str = Depends(get_caller),
    registry: CertificateRegistry = Depends(get_registry),
) -> str:
    if caller != registry.owner():
        raise Unauthorized("Only owner can perform this action.")
    return caller
