# app/core/config.py
import os
from typing import ClassVar, List
from pydantic import BaseModel, Field

from dotenv import load_dotenv

load_dotenv()

def _default_database_url() -> str:
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(data_dir, 'registry.db')}")

def _csv(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [p.strip() for p in raw.split(",") if p.strip()]

class Settings(BaseModel):
    # Constante (não vira campo Pydantic)
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    DATABASE_URL: str = Field(default_factory=_default_database_url)
    RUN_MIGRATIONS: bool = Field(default_factory=lambda: os.getenv("RUN_MIGRATIONS", "1") not in ("0", "false", "no"))

    # auth
    SECRET_KEY: str = Field(default_factory=lambda: os.getenv("SECRET_KEY", "CHANGE_ME_SUPER_SECRET"))
    JWT_ALGORITHM: str = Field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")))

    # deployer = owner inicial + issuer autorizado
    REGISTRY_DEPLOYER: str = Field(
        default_factory=lambda: os.getenv("REGISTRY_DEPLOYER", "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266")
    )
    REGISTRY_DEPLOYER_PASSWORD: str = Field(default_factory=lambda: os.getenv("REGISTRY_DEPLOYER_PASSWORD", "deployer123"))

    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    LOG_FORMAT: str = Field(default_factory=lambda: os.getenv("LOG_FORMAT", "console"))
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: _csv("CORS_ORIGINS", "*"))

settings = Settings()
