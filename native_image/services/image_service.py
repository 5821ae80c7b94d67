"""Чтение изображений с диска: проба размеров и декодирование с прореживанием.

Принципы:
- SRP: класс отвечает только за загрузку и базовое извлечение свойств.
- OCP: новые источники (стрим, URL) можно добавить отдельными методами.
- LSP/ISP: возвращает `PixelBuffer` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from native_image.errors import DecodeError, ImageNotFoundError
from native_image.logger import get_logger
from native_image.models.image_model import JPEG_FORMAT, ImageBounds, PixelBuffer

logger = get_logger(__name__)


def ensure_exists(file_path: str | Path) -> Path:
    """Проверяет, что путь указывает на существующий файл.

    Raises:
        ImageNotFoundError: если путь не существует или не указывает на файл.
    """
    path = Path(file_path)
    if not path.exists() or not path.is_file():
        raise ImageNotFoundError(f"Файл не найден: {path}", path)
    return path


class ImageService:
    def probe_bounds(self, file_path: str | Path) -> ImageBounds:
        """Читает размеры изображения только из заголовка.

        `Image.open` ленив: пиксельные данные не загружаются, пока не вызван `load()`.

        Raises:
            ImageNotFoundError: если файл не найден.
            DecodeError: если файл не распознан как изображение.
        """
        path = ensure_exists(file_path)
        try:
            with Image.open(path) as pil_image:
                width, height = pil_image.size
        except UnidentifiedImageError as exc:
            raise DecodeError(f"Файл не является изображением: {path}", path) from exc
        except Image.DecompressionBombError as exc:
            raise DecodeError(f"Изображение слишком большое: {path}", path) from exc
        except (OSError, ValueError) as exc:
            raise DecodeError(f"Не удалось прочитать заголовок: {path}", path) from exc
        return ImageBounds(width=width, height=height)

    def decode(self, file_path: str | Path, sample_size: int = 1) -> PixelBuffer:
        """Декодирует изображение с линейным разрешением 1/`sample_size`.

        Для JPEG прореживание выполняет сам декодер (DCT scaling через `draft`),
        остаток добирается `Image.reduce`. Для прочих форматов используется только `reduce`.

        Args:
            file_path: Путь до файла изображения.
            sample_size: Степень двойки >= 1.

        Returns:
            `PixelBuffer` с загруженными пикселями.

        Raises:
            ImageNotFoundError: если файл не найден.
            DecodeError: если файл повреждён или формат не поддерживается.
        """
        if sample_size < 1 or sample_size & (sample_size - 1):
            raise ValueError(f"sample_size должен быть степенью двойки >= 1: {sample_size}")

        path = ensure_exists(file_path)
        try:
            with Image.open(path) as opened:
                width, height = opened.size
                if sample_size > 1 and opened.format == JPEG_FORMAT:
                    opened.draft(
                        opened.mode,
                        (max(1, width // sample_size), max(1, height // sample_size)),
                    )
                opened.load()
                pil_image = opened.copy()
        except UnidentifiedImageError as exc:
            raise DecodeError(f"Файл не является изображением: {path}", path) from exc
        except Image.DecompressionBombError as exc:
            raise DecodeError(f"Изображение слишком большое: {path}", path) from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Не удалось декодировать: {path}", path) from exc

        # сколько уже прорежено декодером
        drafted = max(1, round(width / pil_image.width)) if pil_image.width else 1
        remaining = sample_size // drafted
        if remaining > 1:
            # усреднять индексы палитры нельзя
            if pil_image.mode == "P":
                pil_image = pil_image.convert("RGBA")
            elif pil_image.mode == "1":
                pil_image = pil_image.convert("L")
            pil_image = pil_image.reduce(remaining)

        logger.debug(
            "Decoded %s: %dx%d -> %dx%d (sample size %d)",
            path.name, width, height, pil_image.width, pil_image.height, sample_size,
        )
        return PixelBuffer.from_image(pil_image)
