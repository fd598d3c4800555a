# app/db/bootstrap.py
import os

import structlog
from alembic import command
from alembic.config import Config

from app.core.config import settings
from app.db.init_db import init_db
from app.services.registry import CertificateRegistry

logger = structlog.get_logger(__name__)

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

def run_migrations() -> None:
    # Aponta explicitamente para alembic.ini e migrations/
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "migrations"))
    command.upgrade(cfg, "head")

def run_migrations_and_seed(registry: CertificateRegistry) -> None:
    if settings.RUN_MIGRATIONS:
        run_migrations()
        logger.info("migrations_applied")
    init_db(registry)
