"""Свойства изображения без полного декодирования: размеры и ориентация."""
from __future__ import annotations

from pathlib import Path

from native_image.models.image_model import ImageProperties
from native_image.services.exif_service import ExifService
from native_image.services.image_service import ImageService


class PropertyService:
    def __init__(self, image_service: ImageService | None = None, exif_service: ExifService | None = None) -> None:
        self._image_service = image_service or ImageService()
        self._exif_service = exif_service or ExifService()

    def inspect(self, file_path: str | Path) -> ImageProperties:
        """Размеры из заголовка и ориентация из EXIF.

        Ошибка чтения EXIF не поднимается: ориентация становится `ORIENTATION_UNDEFINED`.

        Raises:
            ImageNotFoundError: если файл не найден.
            DecodeError: если файл не распознан как изображение.
        """
        bounds = self._image_service.probe_bounds(file_path)
        return ImageProperties(
            width=bounds.width,
            height=bounds.height,
            orientation=self._exif_service.read_orientation(file_path),
        )
