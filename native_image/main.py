"""Точка входа: командная строка поверх `ImageController`."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from native_image.config import Settings, get_settings
from native_image.controllers.app_controller import ImageController
from native_image.logger import setup_logging
from native_image.models.requests import CompressRequest, CropRequest, InspectRequest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="native-image", description="Compress, crop and inspect images.")
    parser.add_argument("--cache-dir", type=Path, default=None, help="Output directory (default: from settings).")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    compress = sub.add_parser("compress", help="Resize and re-encode as JPEG.")
    compress.add_argument("file")
    compress.add_argument("--percentage", type=int, default=70)
    compress.add_argument("--quality", type=int, default=70)
    compress.add_argument("--target-width", type=int, default=None)
    compress.add_argument("--target-height", type=int, default=None)

    inspect = sub.add_parser("inspect", help="Print width, height and EXIF orientation.")
    inspect.add_argument("file")

    crop = sub.add_parser("crop", help="Crop a rectangle and re-encode as JPEG.")
    crop.add_argument("file")
    crop.add_argument("--origin-x", type=int, required=True)
    crop.add_argument("--origin-y", type=int, required=True)
    crop.add_argument("--width", type=int, required=True)
    crop.add_argument("--height", type=int, required=True)

    sub.add_parser("version", help="Print the platform version.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Разбирает аргументы, выполняет операцию и печатает результат в JSON."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings: Settings = get_settings()
    if args.cache_dir is not None:
        settings = settings.model_copy(update={"cache_dir": args.cache_dir})
    setup_logging(args.log_level)

    try:
        if args.command == "compress":
            request = CompressRequest(
                path=Path(args.file),
                percentage=args.percentage,
                quality=args.quality,
                target_width=args.target_width,
                target_height=args.target_height,
            )
        elif args.command == "crop":
            request = CropRequest(
                path=Path(args.file),
                origin_x=args.origin_x,
                origin_y=args.origin_y,
                width=args.width,
                height=args.height,
            )
        elif args.command == "inspect":
            request = InspectRequest(path=Path(args.file))
        else:
            request = None
    except ValueError as exc:
        parser.error(str(exc))

    with ImageController(settings=settings) as controller:
        if args.command == "compress":
            future = controller.compress(request)
        elif args.command == "crop":
            future = controller.crop(request)
        elif args.command == "inspect":
            future = controller.inspect(request)
        else:
            future = controller.handle("getPlatformVersion")
        result = future.result()

    print(json.dumps(result.as_dict()))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
