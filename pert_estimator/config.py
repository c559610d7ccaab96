# pert_estimator/config.py

"""Settings loaded from environment variables (+ optional .env).

Every variable is optional; defaults reproduce the stock app.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load .env once
load_dotenv(override=False)

ENV_PREFIX = "PERT"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    # ---- UI ----
    app_title: str
    default_estimate_name: str
    default_ceil_numbers: bool

    # ---- Share links ----
    share_param: str
    public_url: str

    # ---- Logging ----
    log_level: str
    log_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_title=_env(_k("APP_TITLE"), "Estimate Calculator"),
            default_estimate_name=_env(_k("DEFAULT_ESTIMATE_NAME"), "New estimate"),
            default_ceil_numbers=_env_bool(_k("DEFAULT_CEIL_NUMBERS"), True),
            share_param=_env(_k("SHARE_PARAM"), "code"),
            public_url=_env(_k("PUBLIC_URL"), "http://localhost:8501").rstrip("/"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            log_dir=_env_path(_k("LOG_DIR"), Path(".local/pert")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
