from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest

from defect_insights.config import (
    DEFAULT_TEST_DATA_KEYWORDS,
    get_attention_settings,
    get_ingestion_settings,
    load_env_files,
)


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    get_ingestion_settings.cache_clear()
    get_attention_settings.cache_clear()
    yield
    get_ingestion_settings.cache_clear()
    get_attention_settings.cache_clear()


def test_ingestion_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DEFECT_MAX_VALIDATION_ERRORS",
        "DEFECT_LOG_VALIDATION_ERRORS",
        "DEFECT_MAX_UPLOAD_BYTES",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_ingestion_settings()

    assert settings.max_validation_errors == 500
    assert settings.log_validation_errors is True
    assert settings.max_upload_bytes == 10 * 1024 * 1024


def test_ingestion_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFECT_MAX_VALIDATION_ERRORS", "25")
    monkeypatch.setenv("DEFECT_LOG_VALIDATION_ERRORS", "off")
    monkeypatch.setenv("DEFECT_MAX_UPLOAD_BYTES", "not-a-number")

    settings = get_ingestion_settings()

    assert settings.max_validation_errors == 25
    assert settings.log_validation_errors is False
    assert settings.max_upload_bytes == 10 * 1024 * 1024


def test_non_positive_limits_are_clamped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFECT_MAX_VALIDATION_ERRORS", "0")

    assert get_ingestion_settings().max_validation_errors == 1


def test_attention_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATTENTION_TEST_DATA_KEYWORDS", "Batch ID, ,Lot")
    monkeypatch.setenv("ATTENTION_MIN_ID_DIGITS", "5")

    settings = get_attention_settings()

    assert settings.test_data_keywords == ("batch id", "lot")
    assert settings.min_identifier_digits == 5


def test_attention_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ATTENTION_TEST_DATA_KEYWORDS", raising=False)
    monkeypatch.delenv("ATTENTION_MIN_ID_DIGITS", raising=False)

    settings = get_attention_settings()

    assert settings.test_data_keywords == DEFAULT_TEST_DATA_KEYWORDS
    assert settings.min_identifier_digits == 7


def test_load_env_files_never_overrides_existing_values(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    for name in ("DEFECT_FROM_FILE", "DEFECT_FROM_LOCAL", "DEFECT_FROM_PROCESS"):
        # setenv first so teardown removes whatever the loader exports.
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.setenv("DEFECT_FROM_PROCESS", "process")
    (tmp_path / ".env").write_text(
        "# comment\nDEFECT_FROM_FILE = 'env'\nDEFECT_FROM_PROCESS=file\nnot a pair\n",
        encoding="utf-8",
    )
    (tmp_path / ".env.local").write_text(
        'DEFECT_FROM_FILE=local\nDEFECT_FROM_LOCAL="local"\n',
        encoding="utf-8",
    )

    load_env_files(tmp_path)

    assert os.environ["DEFECT_FROM_FILE"] == "env"
    assert os.environ["DEFECT_FROM_LOCAL"] == "local"
    assert os.environ["DEFECT_FROM_PROCESS"] == "process"
