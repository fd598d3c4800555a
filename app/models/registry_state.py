from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer
from app.db.base import Base

class RegistryState(Base):
    __tablename__ = "registry_state"
    id: Mapped[int] = mapped_column(primary_key=True)  # sempre 1
    owner: Mapped[str] = mapped_column(String(42))
    total_certificates: Mapped[int] = mapped_column(Integer, default=0)
