"""IntelliWatt configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "IntelliWatt"
    debug: bool = True
    environment: str = "development"
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 3000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5500",
    ]

    # Storage paths (relative resolved from backend/ at runtime)
    data_dir: str = "./data"
    log_dir: str = "./data/logs"
    database_path: str = "./data/intelliwatt.db"
    # Full SQLAlchemy async URL, e.g. postgresql+asyncpg://user:pw@host/db.
    # Overrides database_path when set.
    database_url: str = ""

    # Energy logging
    energy_sample_interval_seconds: int = 60  # each reading covers this much time
    energy_default_rate_per_kwh: float = 15.0  # pesos per kWh
    currency_symbol: str = "₱"

    # Prepaid balance (static provider until a metering backend is wired in)
    balance_prepaid: float = 45.5
    balance_low_threshold: float = 20.0

    # Server limits
    uvicorn_workers: int = 1
    max_db_connections: int = 5

    @property
    def is_sqlite(self) -> bool:
        return not self.database_url or self.database_url.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="INTELLIWATT_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:3000"]

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure data directories are absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        for field in ("data_dir", "log_dir", "database_path"):
            val = getattr(self, field)
            if not Path(val).is_absolute():
                setattr(self, field, str(base / val))
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
