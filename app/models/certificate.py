from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, BigInteger, Boolean
from app.db.base import Base

class Certificate(Base):
    __tablename__ = "certificates"
    # 0x + sha3-256 hex
    certificate_id: Mapped[str] = mapped_column(String(66), primary_key=True)
    recipient_name: Mapped[str] = mapped_column(Text())
    course_name: Mapped[str] = mapped_column(Text())
    issuing_institution: Mapped[str] = mapped_column(Text())
    issue_date: Mapped[int] = mapped_column(BigInteger)  # unix seconds
    certificate_hash: Mapped[str] = mapped_column(Text())
    is_valid: Mapped[bool] = mapped_column(Boolean, default=True)
    issuer: Mapped[str] = mapped_column(String(42), index=True)
