from typing import Any, Dict
from datetime import datetime
from pydantic import BaseModel

class RegistryEvent(BaseModel):
    id: int
    name: str
    key: str
    args: Dict[str, Any]
    caller: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
