"""Результат операции: путь к выходному файлу / свойства, либо типизированная ошибка."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from native_image.errors import ErrorKind, NativeImageError
from native_image.models.image_model import ImageProperties

ResultValue = Union[str, ImageProperties]


@dataclass(frozen=True)
class OperationResult:
    """Ровно один из вариантов: успех (`value`) или ошибка (`error_kind`, `code`, `path`)."""
    value: Optional[ResultValue] = None
    error_kind: Optional[ErrorKind] = None
    code: Optional[str] = None
    path: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @property
    def output_path(self) -> Optional[str]:
        return self.value if isinstance(self.value, str) else None

    @property
    def properties(self) -> Optional[ImageProperties]:
        return self.value if isinstance(self.value, ImageProperties) else None

    @classmethod
    def success(cls, value: ResultValue) -> "OperationResult":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, code: str, path: Optional[str] = None) -> "OperationResult":
        return cls(error_kind=kind, code=code, path=path)

    @classmethod
    def from_error(cls, error: NativeImageError) -> "OperationResult":
        return cls.failure(error.kind, error.code, error.path)

    def as_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {"ok": False, "error": self.error_kind.value, "code": self.code, "path": self.path}
        value = self.value.as_dict() if isinstance(self.value, ImageProperties) else self.value
        return {"ok": True, "value": value}
