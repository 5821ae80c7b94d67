"""Кодирование пикселей в JPEG."""
from __future__ import annotations

import io

from PIL import Image

from native_image.errors import EncodeError
from native_image.models.image_model import JPEG_FORMAT, EncodedImage, PixelBuffer

# качество без потерь для обрезки
CROP_QUALITY = 100


class JpegEncoder:
    def encode(self, buffer: PixelBuffer, quality: int) -> EncodedImage:
        """Сериализует буфер в JPEG.

        Args:
            buffer: Пиксели для кодирования.
            quality: Качество 0..100.

        Raises:
            EncodeError: пустой буфер, недопустимое качество или ошибка кодировщика.
        """
        if not 0 <= quality <= 100:
            raise EncodeError(f"Недопустимое качество JPEG: {quality}")
        if buffer.width <= 0 or buffer.height <= 0:
            raise EncodeError(f"Пустой буфер: {buffer.width}x{buffer.height}")

        img = buffer.pil_image
        # JPEG без альфа-канала и палитры
        if img.mode not in ("RGB", "L", "CMYK"):
            img = img.convert("RGB")

        output = io.BytesIO()
        try:
            img.save(output, format=JPEG_FORMAT, quality=quality)
        except (OSError, ValueError) as exc:
            raise EncodeError(f"Ошибка кодирования JPEG: {exc}") from exc

        return EncodedImage(
            data=output.getvalue(),
            width=img.width,
            height=img.height,
            quality=quality,
        )
