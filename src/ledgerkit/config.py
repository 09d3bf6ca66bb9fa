"""Environment-based configuration for ledgerkit.

Every setting can come from the environment; the CLI exposes the same values
as options with ``envvar`` so flags override the environment.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_COMPANY = "default"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_database_path() -> str:
    """Return ~/.ledgerkit/ledgerkit.db."""
    return str(Path.home() / ".ledgerkit" / "ledgerkit.db")


@dataclass(frozen=True)
class Settings:
    """Resolved ledgerkit settings."""

    database_path: str
    database_url: Optional[str] = None
    company_id: str = DEFAULT_COMPANY
    log_level: str = "WARNING"
    busy_timeout: float = 30.0


def load_settings(environ: Optional[dict] = None) -> Settings:
    """Load settings from environment variables.

    Recognized variables: LEDGERKIT_DB_PATH, LEDGERKIT_DB_URL,
    LEDGERKIT_COMPANY, LEDGERKIT_LOG_LEVEL, LEDGERKIT_BUSY_TIMEOUT.
    """
    env = os.environ if environ is None else environ
    timeout_raw = env.get("LEDGERKIT_BUSY_TIMEOUT", "30")
    try:
        busy_timeout = float(timeout_raw)
    except ValueError:
        raise ValueError(f"LEDGERKIT_BUSY_TIMEOUT must be a number, got '{timeout_raw}'")

    return Settings(
        database_path=env.get("LEDGERKIT_DB_PATH") or default_database_path(),
        database_url=env.get("LEDGERKIT_DB_URL") or None,
        company_id=env.get("LEDGERKIT_COMPANY") or DEFAULT_COMPANY,
        log_level=(env.get("LEDGERKIT_LOG_LEVEL") or "WARNING").upper(),
        busy_timeout=busy_timeout,
    )


def configure_logging(level: str) -> None:
    """Configure root logging for command-line use."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")
    logging.basicConfig(level=numeric, format=DEFAULT_LOG_FORMAT)
    logging.getLogger("ledgerkit").setLevel(numeric)
