"""Контроллер: оркестрация сервисов для операций сжатия, обрезки и чтения свойств.

SOLID:
- SRP: класс управляет последовательностью шагов и доставкой результата
  (без логики обработки изображений).
- DIP: зависит от сервисов как от ролей; конкретные реализации подставляются полями.
Clean Code:
- Синхронные `run_*` поднимают типизированные ошибки; асинхронные обёртки
  превращают их в `OperationResult` и доставляют ровно один результат.
"""
from __future__ import annotations

import platform
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from native_image.config import Settings, get_settings
from native_image.errors import ErrorKind, NativeImageError, OutputWriteError
from native_image.logger import get_logger
from native_image.models.image_model import ImageProperties
from native_image.models.requests import CompressRequest, CropRequest, InspectRequest
from native_image.models.results import OperationResult
from native_image.services import planner
from native_image.services.encoder import CROP_QUALITY, JpegEncoder
from native_image.services.exif_service import ExifService
from native_image.services.image_service import ImageService, ensure_exists
from native_image.services.output_service import COMPRESSED_SUFFIX, CROPPED_SUFFIX, OutputService
from native_image.services.process_service import ProcessService
from native_image.services.property_service import PropertyService

logger = get_logger(__name__)

ResultCallback = Callable[[OperationResult], None]


@dataclass
class ImageController:
    """Связывает запросы с прикладной логикой.

    Ответственности:
    - Проверка наличия файла до постановки задачи в пул.
    - Конвейер: проба -> план -> декодирование -> масштаб/обрезка -> JPEG -> файл -> EXIF.
    - Доставка результата через `Future` (и необязательный callback).
    """
    settings: Settings = field(default_factory=get_settings)

    _image_service: ImageService = field(default_factory=ImageService)
    _process_service: ProcessService = field(default_factory=ProcessService)
    _encoder: JpegEncoder = field(default_factory=JpegEncoder)
    _exif_service: ExifService = field(default_factory=ExifService)
    _output_service: OutputService = field(default_factory=OutputService)
    _executor: Optional[ThreadPoolExecutor] = None

    def __post_init__(self) -> None:
        self._property_service = PropertyService(self._image_service, self._exif_service)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.settings.max_workers,
                thread_name_prefix="native-image",
            )

    def __enter__(self) -> "ImageController":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    # ---- Synchronous pipelines ----
    def run_compress(self, request: CompressRequest) -> str:
        bounds = self._image_service.probe_bounds(request.path)
        target_width, target_height, sample_size = planner.plan(bounds, request.resize)

        buffer = self._image_service.decode(request.path, sample_size)
        buffer = self._process_service.scale_to(buffer, target_width, target_height)
        # RGB 565 перед сжатием
        buffer = self._process_service.normalize_format(buffer)
        encoded = self._encoder.encode(buffer, request.quality)

        output_path = self._output_service.write_output(
            encoded,
            request.path,
            COMPRESSED_SUFFIX,
            self.settings.cache_dir,
            delete_on_exit=self.settings.delete_outputs_on_exit,
        )
        self._exif_service.copy_metadata(request.path, output_path)

        logger.info(
            "Compressed %s: %dx%d -> %dx%d (quality %d, sample size %d)",
            request.path, bounds.width, bounds.height, target_width, target_height,
            request.quality, sample_size,
        )
        return output_path

    def run_crop(self, request: CropRequest) -> str:
        buffer = self._image_service.decode(request.path)
        buffer = self._process_service.crop(
            buffer, request.origin_x, request.origin_y, request.width, request.height
        )
        encoded = self._encoder.encode(buffer, CROP_QUALITY)

        output_path = self._output_service.write_output(
            encoded,
            request.path,
            CROPPED_SUFFIX,
            self.settings.cache_dir,
            delete_on_exit=self.settings.delete_outputs_on_exit,
        )
        self._exif_service.copy_metadata(request.path, output_path)
        return output_path

    def run_inspect(self, request: InspectRequest) -> ImageProperties:
        return self._property_service.inspect(request.path)

    # ---- Asynchronous dispatch ----
    def compress(self, request: CompressRequest, callback: Optional[ResultCallback] = None) -> "Future[OperationResult]":
        return self._submit(self.run_compress, request, callback)

    def crop(self, request: CropRequest, callback: Optional[ResultCallback] = None) -> "Future[OperationResult]":
        return self._submit(self.run_crop, request, callback)

    def inspect(self, request: InspectRequest, callback: Optional[ResultCallback] = None) -> "Future[OperationResult]":
        return self._submit(self.run_inspect, request, callback)

    def handle(self, method: str, arguments: Optional[Mapping[str, Any]] = None) -> "Future[OperationResult]":
        """Диспетчер в стиле канала методов: имя метода + словарь аргументов."""
        arguments = arguments or {}
        operations = {
            "compressImage": (CompressRequest, self.compress),
            "getImageProperties": (InspectRequest, self.inspect),
            "cropImage": (CropRequest, self.crop),
        }
        if method in operations:
            request_type, operation = operations[method]
            try:
                request = request_type.from_arguments(arguments)
            except (TypeError, ValueError) as exc:
                logger.warning("Invalid arguments for %s: %s", method, exc)
                return _completed(
                    OperationResult.failure(ErrorKind.INVALID_ARGUMENT, str(exc), _as_text(arguments.get("file")))
                )
            return operation(request)
        if method == "getPlatformVersion":
            return _completed(OperationResult.success(f"{platform.system()} {platform.release()}"))
        return _completed(OperationResult.failure(ErrorKind.NOT_IMPLEMENTED, f"method {method!r} is not implemented"))

    # ---- Helpers ----
    def _submit(self, operation: Callable[[Any], Any], request: Any, callback: Optional[ResultCallback]) -> "Future[OperationResult]":
        try:
            ensure_exists(request.path)
        except NativeImageError as exc:
            future = _completed(OperationResult.failure(exc.kind, exc.code, str(request.path)))
        else:
            future = self._executor.submit(self._run, operation, request)

        if callback is not None:
            future.add_done_callback(lambda done: callback(_result_of(done, request)))
        return future

    def _run(self, operation: Callable[[Any], Any], request: Any) -> OperationResult:
        try:
            value = operation(request)
        except NativeImageError as exc:
            logger.warning("%s failed for %s: %s", operation.__name__, request.path, exc)
            return OperationResult.failure(exc.kind, exc.code, str(request.path))
        return OperationResult.success(value)


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _result_of(future: "Future[OperationResult]", request: Any) -> OperationResult:
    """Результат для callback: исключение в задаче превращается в ошибку IO_ERROR."""
    exc = future.exception()
    if exc is None:
        return future.result()
    logger.error("Unexpected failure for %s", request.path, exc_info=exc)
    return OperationResult.failure(ErrorKind.IO_ERROR, OutputWriteError.code, str(request.path))


def _completed(result: OperationResult) -> "Future[OperationResult]":
    future: "Future[OperationResult]" = Future()
    future.set_result(result)
    return future
