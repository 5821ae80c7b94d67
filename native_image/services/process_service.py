from __future__ import annotations

import numpy as np
from PIL import Image

from native_image.errors import BoundsError, TransformError
from native_image.models.image_model import PixelBuffer

RGB_565 = "RGB_565"


class ProcessService:
    # ---------- Вспомогательные функции ----------
    def _image_to_rgb_np(self, image: Image.Image) -> np.ndarray:
        """
        Возвращает numpy-массив uint8 формы (H, W, 3).
        """
        rgb = image if image.mode == "RGB" else image.convert("RGB")
        return np.asarray(rgb, dtype=np.uint8)

    def _pack_565(self, arr: np.ndarray) -> np.ndarray:
        """
        Сужает каналы до 5-6-5 бит и упаковывает в uint16 (R старшие биты).
        """
        r = (arr[..., 0].astype(np.uint16) >> 3) << 11
        g = (arr[..., 1].astype(np.uint16) >> 2) << 5
        b = arr[..., 2].astype(np.uint16) >> 3
        return r | g | b

    def _unpack_565(self, packed: np.ndarray) -> np.ndarray:
        """
        Обратно в 8 бит на канал: старшие биты повторяются в младших,
        чтобы 31/63 переходили в 255, а 0 оставался 0.
        """
        r5 = (packed >> 11) & 0x1F
        g6 = (packed >> 5) & 0x3F
        b5 = packed & 0x1F
        out = np.empty(packed.shape + (3,), dtype=np.uint8)
        out[..., 0] = (r5 << 3) | (r5 >> 2)
        out[..., 1] = (g6 << 2) | (g6 >> 4)
        out[..., 2] = (b5 << 3) | (b5 >> 2)
        return out

    # ---------- 1) Масштабирование ----------
    def scale_to(self, buffer: PixelBuffer, target_width: int, target_height: int) -> PixelBuffer:
        """
        Точное масштабирование до целевых размеров со сглаживанием (bilinear).
        Прореживание при декодировании лишь приближение, поэтому шаг нужен всегда.
        """
        if target_width <= 0 or target_height <= 0:
            raise TransformError(f"Некорректные целевые размеры: {target_width}x{target_height}")
        if (buffer.width, buffer.height) == (target_width, target_height):
            return PixelBuffer.from_image(buffer.pil_image.copy(), buffer.pixel_format)
        scaled = buffer.pil_image.resize((target_width, target_height), Image.Resampling.BILINEAR)
        return PixelBuffer.from_image(scaled, buffer.pixel_format)

    # ---------- 2) Нормализация формата ----------
    def normalize_format(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Приводит пиксели к RGB 5-6-5 (потеря глубины цвета ради размера).
        Применяется только при сжатии, не при обрезке.
        JPEG-кодировщик принимает 8 бит на канал, поэтому результат хранится
        как RGB, но каждый пиксель уже представим в 16 битах.
        """
        arr = self._image_to_rgb_np(buffer.pil_image)
        out = self._unpack_565(self._pack_565(arr))
        return PixelBuffer.from_image(Image.fromarray(out), RGB_565)

    # ---------- 3) Обрезка ----------
    def crop(self, buffer: PixelBuffer, origin_x: int, origin_y: int, width: int, height: int) -> PixelBuffer:
        """
        Вырезает прямоугольник без ресемплинга.
        Прямоугольник обязан целиком лежать внутри исходника; ничего не обрезается «по краю».
        """
        if (
            origin_x < 0
            or origin_y < 0
            or width <= 0
            or height <= 0
            or origin_x + width > buffer.width
            or origin_y + height > buffer.height
        ):
            raise BoundsError(
                f"Прямоугольник {width}x{height}+{origin_x}+{origin_y} "
                f"выходит за пределы {buffer.width}x{buffer.height}",
            )
        cropped = buffer.pil_image.crop((origin_x, origin_y, origin_x + width, origin_y + height))
        return PixelBuffer.from_image(cropped, buffer.pixel_format)
