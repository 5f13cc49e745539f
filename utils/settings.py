"""Environment-driven configuration for the e2e suites."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

DEFAULT_CHT_URL = "http://localhost:4988"
DEFAULT_WAIT_TIMEOUT = 15  # seconds


class Settings(BaseModel):
    cht_url: str = DEFAULT_CHT_URL
    admin_username: str = "admin"
    admin_password: str = "pass"
    cht_config_dir: Optional[Path] = None
    environment: str = ""
    wait_timeout: int = DEFAULT_WAIT_TIMEOUT
    pushbullet_api_key: Optional[str] = None
    e2e_enabled: bool = False

    @field_validator("cht_url")
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def headless(self) -> bool:
        return self.environment.lower() == "production"


def load_settings() -> Settings:
    """Build settings from the process environment (after loading `.env`)."""
    load_dotenv()

    cht_url = os.getenv("CHT_URL", "").strip()
    run_e2e = os.getenv("RUN_E2E", "").strip().lower() in {"1", "true", "yes"}
    config_dir = os.getenv("CHT_CONFIG_DIR", "").strip()

    return Settings(
        cht_url=cht_url or DEFAULT_CHT_URL,
        admin_username=os.getenv("CHT_ADMIN_USERNAME", "admin"),
        admin_password=os.getenv("CHT_ADMIN_PASSWORD", "pass"),
        cht_config_dir=Path(config_dir) if config_dir else None,
        environment=os.getenv("ENVIRONMENT", ""),
        wait_timeout=int(os.getenv("WAIT_TIMEOUT", DEFAULT_WAIT_TIMEOUT)),
        pushbullet_api_key=os.getenv("PUSHBULLET_API_KEY") or None,
        e2e_enabled=bool(cht_url) or run_e2e,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
