"""Перенос EXIF-метаданных из исходного файла в выходной JPEG.

Принципы:
- SRP: только чтение/запись тегов, пиксели не трогаются (`piexif.insert`
  переписывает сегмент APP1 уже закодированного файла).
- Перенос best-effort: ошибки логируются и не влияют на результат операции.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional, Tuple

import piexif

from native_image.logger import get_logger
from native_image.models.image_model import ORIENTATION_UNDEFINED

logger = get_logger(__name__)


class ExifTag(NamedTuple):
    name: str
    ifd: str
    tag: int


# Порядок совпадает с порядком копирования
EXIF_ATTRIBUTES: Tuple[ExifTag, ...] = (
    ExifTag("FNumber", "Exif", piexif.ExifIFD.FNumber),
    ExifTag("ExposureTime", "Exif", piexif.ExifIFD.ExposureTime),
    ExifTag("ISOSpeedRatings", "Exif", piexif.ExifIFD.ISOSpeedRatings),
    ExifTag("GPSAltitude", "GPS", piexif.GPSIFD.GPSAltitude),
    ExifTag("GPSAltitudeRef", "GPS", piexif.GPSIFD.GPSAltitudeRef),
    ExifTag("FocalLength", "Exif", piexif.ExifIFD.FocalLength),
    ExifTag("GPSDateStamp", "GPS", piexif.GPSIFD.GPSDateStamp),
    ExifTag("WhiteBalance", "Exif", piexif.ExifIFD.WhiteBalance),
    ExifTag("GPSProcessingMethod", "GPS", piexif.GPSIFD.GPSProcessingMethod),
    ExifTag("GPSTimeStamp", "GPS", piexif.GPSIFD.GPSTimeStamp),
    ExifTag("DateTime", "0th", piexif.ImageIFD.DateTime),
    ExifTag("Flash", "Exif", piexif.ExifIFD.Flash),
    ExifTag("GPSLatitude", "GPS", piexif.GPSIFD.GPSLatitude),
    ExifTag("GPSLatitudeRef", "GPS", piexif.GPSIFD.GPSLatitudeRef),
    ExifTag("GPSLongitude", "GPS", piexif.GPSIFD.GPSLongitude),
    ExifTag("GPSLongitudeRef", "GPS", piexif.GPSIFD.GPSLongitudeRef),
    ExifTag("Make", "0th", piexif.ImageIFD.Make),
    ExifTag("Model", "0th", piexif.ImageIFD.Model),
    ExifTag("Orientation", "0th", piexif.ImageIFD.Orientation),
)


def get_attribute(exif: Dict[str, Any], attribute: ExifTag) -> Optional[Any]:
    return (exif.get(attribute.ifd) or {}).get(attribute.tag)


class ExifService:
    def copy_metadata(self, source_path: str | Path, dest_path: str | Path) -> bool:
        """Копирует теги из `EXIF_ATTRIBUTES`, присутствующие в исходнике.

        Отсутствующие в исходнике теги на выходе не трогаются; прочие теги
        выходного файла сохраняются.

        Returns:
            True, если метаданные записаны; False, если перенос не удался (ошибка залогирована).
        """
        try:
            old_exif = piexif.load(str(source_path))
            new_exif = piexif.load(str(dest_path))

            copied = 0
            for attribute in EXIF_ATTRIBUTES:
                value = get_attribute(old_exif, attribute)
                if value is not None:
                    new_exif.setdefault(attribute.ifd, {})[attribute.tag] = value
                    copied += 1

            piexif.insert(piexif.dump(new_exif), str(dest_path))
        except piexif.InvalidImageDataError as exc:
            # не JPEG/TIFF (PNG, GIF, ...): переносить нечего
            logger.debug("Exif not supported for %s: %s", source_path, exc)
            return False
        except Exception:
            logger.exception("Error preserving Exif data on selected image: %s", source_path)
            return False

        logger.debug("Copied %d EXIF tags from %s to %s", copied, source_path, dest_path)
        return True

    def read_orientation(self, file_path: str | Path) -> int:
        """Значение тега Orientation или `ORIENTATION_UNDEFINED`, если его нет или EXIF не читается."""
        try:
            exif = piexif.load(str(file_path))
        except Exception as exc:
            # EXIF could not be read from the file; ignore
            logger.debug("No readable EXIF in %s: %s", file_path, exc)
            return ORIENTATION_UNDEFINED

        value = (exif.get("0th") or {}).get(piexif.ImageIFD.Orientation)
        if isinstance(value, int):
            return value
        return ORIENTATION_UNDEFINED
