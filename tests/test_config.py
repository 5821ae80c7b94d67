from __future__ import annotations

from pathlib import Path

import pytest

from native_image.config import Settings, get_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_get_settings_is_cached(fresh_settings) -> None:
    assert get_settings() is get_settings()


def test_settings_read_prefixed_environment(fresh_settings, monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("NATIVE_IMAGE_CACHE_DIR", str(tmp_path))
    monkeypatch.setenv("NATIVE_IMAGE_MAX_WORKERS", "7")
    monkeypatch.setenv("NATIVE_IMAGE_DELETE_OUTPUTS_ON_EXIT", "true")

    settings = get_settings()

    assert settings.cache_dir == tmp_path
    assert settings.max_workers == 7
    assert settings.delete_outputs_on_exit is True


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("NATIVE_IMAGE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NATIVE_IMAGE_MAX_WORKERS", raising=False)
    settings = Settings()
    assert settings.max_workers >= 1
    assert settings.log_level == "INFO"
