"""Process settings, read once from the environment.

Every value can be overridden with a ``SHOPCORE_*`` environment variable;
``load_settings()`` is called by the composition root and the result is
passed down explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from shopcore.domain.service.stock_ledger import DEFAULT_MAX_RETRIES

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_ENVIRONMENTS = ("development", "production")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """An environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    environment: str = "development"
    log_level: str = "INFO"
    ledger_max_retries: int = DEFAULT_MAX_RETRIES
    default_country: str = "Bhutan"
    uploads_base_url: str | None = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uploads_dir(self) -> Path:
        return self.data_dir / "uploads"

    @property
    def proof_base_url(self) -> str:
        return self.uploads_base_url or self.uploads_dir.as_uri()


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    environment = env.get("SHOPCORE_ENV", "development").lower()
    if environment not in _ENVIRONMENTS:
        raise ConfigError(
            f"SHOPCORE_ENV must be one of {', '.join(_ENVIRONMENTS)}, got {environment!r}"
        )

    log_level = env.get("SHOPCORE_LOG_LEVEL", "INFO").upper()
    if env.get("SHOPCORE_DEBUG", "").lower() in ("1", "true", "yes"):
        log_level = "DEBUG"
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level {log_level!r}")

    raw_retries = env.get("SHOPCORE_LEDGER_MAX_RETRIES", str(DEFAULT_MAX_RETRIES))
    try:
        retries = int(raw_retries)
    except ValueError:
        raise ConfigError(
            f"SHOPCORE_LEDGER_MAX_RETRIES must be an integer, got {raw_retries!r}"
        ) from None
    if retries < 1:
        raise ConfigError("SHOPCORE_LEDGER_MAX_RETRIES must be at least 1")

    return Settings(
        data_dir=Path(env.get("SHOPCORE_DATA_DIR", _DEFAULT_DATA_DIR)),
        environment=environment,
        log_level=log_level,
        ledger_max_retries=retries,
        default_country=env.get("SHOPCORE_DEFAULT_COUNTRY", "Bhutan"),
        uploads_base_url=env.get("SHOPCORE_UPLOADS_BASE_URL") or None,
    )
