from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Boolean, Integer, ForeignKey
from app.db.base import Base

class Issuer(Base):
    """Histórico de issuers: nunca apagado, ``id`` preserva a ordem da 1ª autorização."""
    __tablename__ = "issuers"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    identity: Mapped[str] = mapped_column(String(42), unique=True, index=True)
    authorized: Mapped[bool] = mapped_column(Boolean, default=True)
    issued_count: Mapped[int] = mapped_column(Integer, default=0)

class IssuerCertificate(Base):
    """Índice secundário issuer -> certificados, na ordem de emissão."""
    __tablename__ = "issuer_certificates"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    issuer_id: Mapped[int] = mapped_column(ForeignKey("issuers.id"), index=True)
    certificate_id: Mapped[str] = mapped_column(ForeignKey("certificates.certificate_id"), unique=True)
