# config.py
"""Environment configuration, validated once before the app serves requests."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SUPABASE = "supabase"
SQL = "sql"
STORE_BACKENDS = (SUPABASE, SQL)

DEFAULT_TABLE = "productos"
DEFAULT_CORS_ORIGINS = "http://localhost:8888,http://localhost:5173"


class ConfigurationError(RuntimeError):
    """Raised when the environment cannot produce a usable configuration."""


@dataclass(frozen=True)
class Settings:
    store_backend: str = SUPABASE
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    database_url: Optional[str] = None
    table: str = DEFAULT_TABLE
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ()


def _required(environ: Mapping[str, str], backend: str) -> Tuple[str, ...]:
    if backend == SUPABASE:
        names = ("SUPABASE_URL", "SUPABASE_KEY")
    else:
        names = ("DATABASE_URL",)
    return tuple(name for name in names if not environ.get(name, "").strip())


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the process environment (or an explicit mapping).

    Reads a local .env file first when using the real environment. Raises
    ConfigurationError naming every missing variable, so a misconfigured
    function fails at startup instead of on its first request.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    backend = environ.get("PRODUCTOS_STORE", SUPABASE).strip().lower() or SUPABASE
    if backend not in STORE_BACKENDS:
        raise ConfigurationError(
            f"PRODUCTOS_STORE must be one of {', '.join(STORE_BACKENDS)}, got '{backend}'"
        )

    missing = _required(environ, backend)
    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s) for the '{backend}' store: "
            f"{', '.join(missing)}. Set them in your .env file or environment."
        )

    log_level = environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"LOG_LEVEL '{log_level}' is not a valid logging level")

    origins = environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)

    settings = Settings(
        store_backend=backend,
        supabase_url=environ.get("SUPABASE_URL", "").strip() or None,
        supabase_key=environ.get("SUPABASE_KEY", "").strip() or None,
        database_url=environ.get("DATABASE_URL", "").strip() or None,
        table=environ.get("PRODUCTOS_TABLE", DEFAULT_TABLE).strip() or DEFAULT_TABLE,
        log_level=log_level,
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )
    logger.debug(f"Loaded settings for '{backend}' store, table '{settings.table}'")
    return settings


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the function process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
