import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, ValidationError


class Settings(BaseModel):
    product_api_url: HttpUrl = Field(alias="PRODUCT_API_URL")
    product_api_timeout: float = Field(default=10.0, alias="PRODUCT_API_TIMEOUT")
    admin_path: str = Field(default="admin", alias="ADMIN_PATH")
    edit_max_workers: int = Field(default=8, ge=1, alias="EDIT_MAX_WORKERS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    env: str = Field(default="local", alias="APP_ENV")


def _load_dotenv():
    # Load from repo root if present, otherwise rely on environment variables.
    root_env = Path(__file__).resolve().parents[2] / ".env"
    if root_env.exists():
        load_dotenv(root_env)
    else:
        load_dotenv()


@lru_cache()
def get_settings() -> Settings:
    _load_dotenv()
    try:
        return Settings(**os.environ)
    except ValidationError as exc:
        missing = [e["loc"][0] for e in exc.errors() if e["type"] == "missing"]
        if not missing:
            raise RuntimeError(f"Invalid configuration: {exc}") from exc
        detail = f"Missing required environment variables: {', '.join(missing)}"
        raise RuntimeError(detail) from exc
