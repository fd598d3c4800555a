# app/db/init_db.py
import structlog
from sqlalchemy import select

from app.core.config import settings
from app.core.identity import normalize_identity
from app.core.security import hash_password
from app.models.account import Account
from app.services.registry import CertificateRegistry

logger = structlog.get_logger(__name__)

def init_db(registry: CertificateRegistry) -> None:
    """Seed idempotente: deploy do registro + login do deployer."""
    deployer = normalize_identity(settings.REGISTRY_DEPLOYER, allow_null=False)

    if registry.deploy(deployer):
        logger.info("registry_deployed", owner=deployer)

    with registry.session_factory() as db:
        acc = db.scalar(select(Account).where(Account.identity == deployer))
        if not acc:
            db.add(Account(identity=deployer, hashed_password=hash_password(settings.REGISTRY_DEPLOYER_PASSWORD)))
            db.commit()
            logger.info("deployer_account_seeded", identity=deployer)
