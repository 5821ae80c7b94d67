"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from PIL import Image

JPEG_FORMAT = "JPEG"

# EXIF Orientation "undefined"
ORIENTATION_UNDEFINED = 0


@dataclass(frozen=True)
class ImageBounds:
    """Размеры исходного изображения, полученные без полного декодирования."""
    width: int
    height: int


@dataclass(frozen=True)
class PixelBuffer:
    """Неизменяемая обёртка над декодированными пикселями.

    Fields:
        pil_image: Изображение PIL (владелец пиксельных данных).
        width: Ширина, px.
        height: Высота, px.
        pixel_format: Раскладка пикселей, например "RGBA_8888" или "RGB_565".
    """
    pil_image: Image.Image
    width: int
    height: int
    pixel_format: str

    @classmethod
    def from_image(cls, image: Image.Image, pixel_format: str | None = None) -> "PixelBuffer":
        width, height = image.size
        return cls(
            pil_image=image,
            width=width,
            height=height,
            pixel_format=pixel_format or image.mode,
        )


@dataclass(frozen=True)
class EncodedImage:
    """Закодированное изображение: байты, формат и качество сжатия."""
    data: bytes
    width: int
    height: int
    quality: int
    format: str = JPEG_FORMAT


@dataclass(frozen=True)
class ImageProperties:
    width: int
    height: int
    orientation: int = ORIENTATION_UNDEFINED

    def as_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height, "orientation": self.orientation}
