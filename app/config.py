"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ACCEPTED_UPLOAD_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        XLSX_CONTENT_TYPE,
        "application/octet-stream",
        "application/zip",
    }
)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# Later files do not override earlier ones or the process environment.
TICKET_ENV_FILES: tuple[str, ...] = (".env", ".env.local")


def load_env_files() -> None:
    """
    Seed ticket service settings from KEY=VALUE files at the project root.
    """

    project_root = Path(__file__).resolve().parents[1]
    for env_path in (project_root / name for name in TICKET_ENV_FILES):
        if not env_path.is_file():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.removeprefix("export ").split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_optional_positive_int_env(name: str) -> int | None:
    """
    Read an optional positive integer; unset or invalid values mean no limit.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    try:
        value = int(raw_value)
    except ValueError:
        return None
    return value if value > 0 else None


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def get_log_level() -> str:
    """
    Return the configured root log level name.
    """

    _load_env_once()
    return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"


@dataclass(frozen=True)
class TicketIngestionSettings:
    """
    Runtime settings for ticket workbook ingestion.
    """

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_defect_notes: int | None = None
    log_row_defects: bool = True
    sla_target_percent: float = 80.0
    accepted_content_types: frozenset[str] = ACCEPTED_UPLOAD_CONTENT_TYPES
    allowed_extension: str = ".xlsx"


@dataclass(frozen=True)
class TicketQuerySettings:
    """
    Paging bounds for parsed-row queries.
    """

    default_page_size: int = 50
    max_page_size: int = 1000


@lru_cache(maxsize=1)
def get_ticket_ingestion_settings() -> TicketIngestionSettings:
    """
    Return cached ticket ingestion settings from environment variables.
    """

    return TicketIngestionSettings(
        max_upload_bytes=max(1, _get_int_env("TICKET_UPLOAD_MAX_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
        max_defect_notes=_get_optional_positive_int_env("TICKET_INGEST_MAX_DEFECT_NOTES"),
        log_row_defects=_get_bool_env("TICKET_INGEST_LOG_ROW_DEFECTS", True),
        sla_target_percent=min(100.0, max(0.0, _get_float_env("TICKET_SLA_TARGET_PERCENT", 80.0))),
    )


@lru_cache(maxsize=1)
def get_ticket_query_settings() -> TicketQuerySettings:
    """
    Return cached paging settings from environment variables.
    """

    max_page_size = max(1, _get_int_env("TICKET_ROWS_MAX_PAGE_SIZE", 1000))
    default_page_size = _get_int_env("TICKET_ROWS_DEFAULT_PAGE_SIZE", 50)
    return TicketQuerySettings(
        default_page_size=min(max_page_size, max(1, default_page_size)),
        max_page_size=max_page_size,
    )
