"""Типизированные ошибки конвейера обработки.

Каждая ошибка несёт вид (`ErrorKind`), исходный путь и стабильный код,
который отдаётся вызывающей стороне вместо трассировки.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    DECODE_ERROR = "decode_error"
    TRANSFORM_ERROR = "transform_error"
    BOUNDS_ERROR = "bounds_error"
    ENCODE_ERROR = "encode_error"
    IO_ERROR = "io_error"
    NOT_IMPLEMENTED = "not_implemented"
    INVALID_ARGUMENT = "invalid_argument"


class NativeImageError(Exception):
    kind: ErrorKind = ErrorKind.IO_ERROR
    code: str = "something went wrong"

    def __init__(self, message: str | None = None, path: str | Path | None = None) -> None:
        self.path = None if path is None else str(path)
        super().__init__(message or self.code)


class ImageNotFoundError(NativeImageError):
    kind = ErrorKind.NOT_FOUND
    code = "file does not exist"


class DecodeError(NativeImageError):
    kind = ErrorKind.DECODE_ERROR
    code = "file is not a supported image"


class TransformError(NativeImageError):
    kind = ErrorKind.TRANSFORM_ERROR
    code = "invalid target dimensions"


class BoundsError(NativeImageError):
    kind = ErrorKind.BOUNDS_ERROR
    code = "bounds are outside of the dimensions of the source image"


class EncodeError(NativeImageError):
    kind = ErrorKind.ENCODE_ERROR
    code = "image could not be encoded"


class OutputWriteError(NativeImageError):
    kind = ErrorKind.IO_ERROR
    code = "something went wrong"
