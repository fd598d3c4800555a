from typing import Any, Dict
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, JSON, DateTime, func
from app.db.base import Base

class RegistryEvent(Base):
    __tablename__ = "registry_events"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(40), index=True)
    # campo indexado do evento (certificateId, issuer ou newOwner)
    key: Mapped[str] = mapped_column(String(66), index=True)
    args: Mapped[Dict[str, Any]] = mapped_column(JSON)
    caller: Mapped[str] = mapped_column(String(42))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
