# app/db/base.py
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import MetaData

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=naming_convention)

# IMPORTE TODOS OS MODELS AQUI (alembic/create_all dependem disso)
from app.models.account import Account  # noqa: E402,F401
from app.models.certificate import Certificate  # noqa: E402,F401
from app.models.issuer import Issuer, IssuerCertificate  # noqa: E402,F401
from app.models.registry_state import RegistryState  # noqa: E402,F401
from app.models.event import RegistryEvent  # noqa: E402,F401
