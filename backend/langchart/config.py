import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .exceptions import ConfigurationError

# Load env from a root .env if present
load_dotenv()


class Settings(BaseModel):
    github_token: Optional[str] = None
    github_timeout: int = 10
    cache_max_age: int = 86400
    chart_credit: Optional[str] = None
    allow_origins: List[str] = ["*"]
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value}")
    return value


def get_settings() -> Settings:
    """Read settings from the environment.

    Called per request so a rotated GITHUB_TOKEN is picked up without a restart.
    """
    # Configure via FRONTEND_ORIGIN; supports comma-separated list.
    origins_env = os.getenv("FRONTEND_ORIGIN", "").strip()
    if origins_env:
        allow_origins = [o.strip() for o in origins_env.split(",") if o.strip()]
    else:
        allow_origins = ["*"]

    return Settings(
        github_token=os.getenv("GITHUB_TOKEN") or None,
        github_timeout=_int_env("GITHUB_TIMEOUT", 10),
        cache_max_age=_int_env("CHART_CACHE_MAX_AGE", 86400),
        chart_credit=os.getenv("CHART_CREDIT") or None,
        allow_origins=allow_origins,
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
