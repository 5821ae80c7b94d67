from __future__ import annotations

import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки из переменных окружения `NATIVE_IMAGE_*` или файла .env."""

    model_config = SettingsConfigDict(
        env_prefix="NATIVE_IMAGE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    cache_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        description="Каталог для выходных файлов (им владеет вызывающая сторона).",
    )
    max_workers: int = Field(4, ge=1, description="Размер пула фоновых потоков.")
    delete_outputs_on_exit: bool = Field(
        False, description="Удалять выходные файлы при завершении процесса (best-effort)."
    )
    log_level: str = Field("INFO")


@lru_cache()
def get_settings() -> Settings:
    """Кэшированный экземпляр Settings: окружение разбирается один раз."""

    return Settings()
