"""
defect_insights/config.py

Application-level configuration helpers.

Settings are read from the process environment, after loading simple
``KEY=VALUE`` pairs from ``.env`` and ``.env.local`` at the project root.
Real environment variables always win over file values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_TEST_DATA_KEYWORDS: tuple[str, ...] = (
    "test data",
    "order release id",
    "shipment id",
    "invoice id",
    "otm-",
)


PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_FILENAMES: tuple[str, ...] = (".env", ".env.local")


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = (part.strip() for part in line.split("=", 1))
    if not key:
        return None
    return key, value.strip("\"'")


def load_env_files(root: Path = PROJECT_ROOT) -> None:
    """
    Export ``DEFECT_*`` / ``ATTENTION_*`` / ``LOG_LEVEL`` overrides from
    the checkout's env files.

    *root* is the directory that holds the ``defect_insights`` package.
    Later files in :data:`ENV_FILENAMES` do not replace keys already set,
    and neither file replaces a variable the process already has.
    """

    for env_path in (root / name for name in ENV_FILENAMES):
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
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


def _get_str_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list; blank items are dropped.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    items = tuple(item.strip().lower() for item in raw_value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class IngestionSettings:
    """
    Runtime settings for defect CSV ingestion.
    """

    max_validation_errors: int = 500
    log_validation_errors: bool = True
    max_upload_bytes: int = 10 * 1024 * 1024


@dataclass(frozen=True)
class AttentionSettings:
    """
    Heuristics used by the attention classifier.
    """

    test_data_keywords: tuple[str, ...] = DEFAULT_TEST_DATA_KEYWORDS
    min_identifier_digits: int = 7


@lru_cache(maxsize=1)
def get_ingestion_settings() -> IngestionSettings:
    """
    Return cached ingestion settings.
    """

    defaults = IngestionSettings()
    return IngestionSettings(
        max_validation_errors=max(
            1, _get_int_env("DEFECT_MAX_VALIDATION_ERRORS", defaults.max_validation_errors)
        ),
        log_validation_errors=_get_bool_env(
            "DEFECT_LOG_VALIDATION_ERRORS", defaults.log_validation_errors
        ),
        max_upload_bytes=max(
            1, _get_int_env("DEFECT_MAX_UPLOAD_BYTES", defaults.max_upload_bytes)
        ),
    )


@lru_cache(maxsize=1)
def get_attention_settings() -> AttentionSettings:
    """
    Return cached attention classifier settings.
    """

    defaults = AttentionSettings()
    return AttentionSettings(
        test_data_keywords=_get_str_list_env(
            "ATTENTION_TEST_DATA_KEYWORDS", defaults.test_data_keywords
        ),
        min_identifier_digits=max(
            1, _get_int_env("ATTENTION_MIN_ID_DIGITS", defaults.min_identifier_digits)
        ),
    )
