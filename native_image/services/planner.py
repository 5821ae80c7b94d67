"""Расчёт итоговых размеров и коэффициента прореживания при декодировании."""
from __future__ import annotations

from typing import Tuple

from native_image.models.image_model import ImageBounds
from native_image.models.requests import ResizeRequest


def resolve_target(bounds: ImageBounds, request: ResizeRequest) -> Tuple[int, int]:
    """Итоговые ширина и высота.

    Незаданная (или нулевая) сторона считается как процент от той же стороны
    исходника, независимо от другой. Если задана только одна сторона,
    пропорции не сохраняются: так себя ведёт исходный API, оставляем как есть.
    """
    target_width = request.target_width or bounds.width * request.percentage // 100
    target_height = request.target_height or bounds.height * request.percentage // 100
    return target_width, target_height


def calculate_sample_size(bounds: ImageBounds, target_width: int, target_height: int) -> int:
    """Наибольшая степень двойки, при которой обе стороны остаются больше целевых."""
    sample_size = 1

    if bounds.height > target_height or bounds.width > target_width:
        half_height = bounds.height // 2
        half_width = bounds.width // 2

        while half_height // sample_size > target_height and half_width // sample_size > target_width:
            sample_size *= 2

    return sample_size


def plan(bounds: ImageBounds, request: ResizeRequest) -> Tuple[int, int, int]:
    """Returns (target_width, target_height, sample_size)."""
    target_width, target_height = resolve_target(bounds, request)
    return target_width, target_height, calculate_sample_size(bounds, target_width, target_height)
