"""Запросы операций: сжатие, обрезка, чтение свойств.

Принципы:
- SRP: только разбор и проверка входных параметров.
- Ключи `from_arguments` совпадают с ключами канала вызова методов
  (`file`, `percentage`, `targetWidth`, ...).
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional


def _required(arguments: Mapping[str, Any], key: str) -> Any:
    value = arguments.get(key)
    if value is None:
        raise ValueError(f"Отсутствует обязательный аргумент: {key}")
    return value


def _check_dimension(name: str, value: Optional[int]) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{name} не может быть отрицательным: {value}")


def _optional_int(arguments: Mapping[str, Any], key: str) -> Optional[int]:
    value = arguments.get(key)
    return None if value is None else int(value)


@dataclass(frozen=True)
class ResizeRequest:
    """Параметры изменения размера.

    Нулевое или отсутствующее измерение выводится из процента от
    соответствующей стороны исходника (по каждой оси независимо).
    """
    percentage: int
    target_width: Optional[int] = None
    target_height: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 < self.percentage <= 100:
            raise ValueError(f"percentage должен быть в (0, 100], получено {self.percentage}")
        _check_dimension("targetWidth", self.target_width)
        _check_dimension("targetHeight", self.target_height)


@dataclass(frozen=True)
class CompressRequest:
    path: Path
    percentage: int
    quality: int
    target_width: Optional[int] = None
    target_height: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))
        if not 0 <= self.quality <= 100:
            raise ValueError(f"quality должен быть в [0, 100], получено {self.quality}")
        if not 0 < self.percentage <= 100:
            raise ValueError(f"percentage должен быть в (0, 100], получено {self.percentage}")
        _check_dimension("targetWidth", self.target_width)
        _check_dimension("targetHeight", self.target_height)

    @property
    def resize(self) -> ResizeRequest:
        return ResizeRequest(
            percentage=self.percentage,
            target_width=self.target_width,
            target_height=self.target_height,
        )

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "CompressRequest":
        return cls(
            path=Path(_required(arguments, "file")),
            percentage=int(_required(arguments, "percentage")),
            quality=int(_required(arguments, "quality")),
            target_width=_optional_int(arguments, "targetWidth"),
            target_height=_optional_int(arguments, "targetHeight"),
        )


@dataclass(frozen=True)
class CropRequest:
    path: Path
    origin_x: int
    origin_y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "CropRequest":
        return cls(
            path=Path(_required(arguments, "file")),
            origin_x=int(_required(arguments, "originX")),
            origin_y=int(_required(arguments, "originY")),
            width=int(_required(arguments, "width")),
            height=int(_required(arguments, "height")),
        )


@dataclass(frozen=True)
class InspectRequest:
    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "InspectRequest":
        return cls(path=Path(_required(arguments, "file")))
