from __future__ import annotations

import struct
import zlib
from pathlib import Path
from typing import Callable, Optional, Tuple

import piexif
import pytest
from PIL import Image

from native_image.config import Settings
from native_image.controllers.app_controller import ImageController


def sample_exif() -> dict:
    return {
        "0th": {
            piexif.ImageIFD.Make: b"Canon",
            piexif.ImageIFD.Model: b"EOS 5D",
            piexif.ImageIFD.Orientation: 6,
            piexif.ImageIFD.DateTime: b"2024:05:01 12:30:00",
            piexif.ImageIFD.Software: b"firmware 1.0",
        },
        "Exif": {
            piexif.ExifIFD.FNumber: (28, 10),
            piexif.ExifIFD.ExposureTime: (1, 125),
            piexif.ExifIFD.ISOSpeedRatings: 200,
            piexif.ExifIFD.FocalLength: (50, 1),
            piexif.ExifIFD.Flash: 16,
            piexif.ExifIFD.WhiteBalance: 0,
        },
        "GPS": {
            piexif.GPSIFD.GPSLatitudeRef: b"N",
            piexif.GPSIFD.GPSLatitude: ((55, 1), (45, 1), (0, 1)),
            piexif.GPSIFD.GPSLongitudeRef: b"E",
            piexif.GPSIFD.GPSLongitude: ((37, 1), (37, 1), (0, 1)),
            piexif.GPSIFD.GPSAltitudeRef: 0,
            piexif.GPSIFD.GPSAltitude: (150, 1),
            piexif.GPSIFD.GPSDateStamp: b"2024:05:01",
            piexif.GPSIFD.GPSTimeStamp: ((12, 1), (30, 1), (0, 1)),
        },
    }


@pytest.fixture
def exif_dict() -> dict:
    return sample_exif()


ImageFactory = Callable[..., Path]


@pytest.fixture
def make_image(tmp_path: Path) -> ImageFactory:
    """Пишет изображение на диск и возвращает путь."""

    def _make(
        name: str,
        size: Tuple[int, int] = (200, 100),
        fmt: str = "JPEG",
        color: Tuple[int, ...] = (30, 120, 200),
        mode: str = "RGB",
        exif: Optional[dict] = None,
    ) -> Path:
        path = tmp_path / name
        img = Image.new(mode, size, color=color)
        save_kwargs = {}
        if exif is not None:
            save_kwargs["exif"] = piexif.dump(exif)
        img.save(path, format=fmt, **save_kwargs)
        return path

    return _make



def _png_chunk(tag: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", zlib.crc32(tag + data) & 0xFFFFFFFF)


@pytest.fixture
def oversized_png(tmp_path: Path) -> Path:
    """PNG 20000x10000 только с заголовком: Pillow отвергает его как decompression bomb."""
    header = struct.pack(">IIBBBBB", 20000, 10000, 8, 2, 0, 0, 0)
    path = tmp_path / "huge.png"
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", b"")
        + _png_chunk(b"IEND", b"")
    )
    return path


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def settings(cache_dir: Path) -> Settings:
    return Settings(cache_dir=cache_dir, max_workers=2)


@pytest.fixture
def controller(settings: Settings):
    with ImageController(settings=settings) as ctrl:
        yield ctrl
