"""Запись выходных файлов во временный каталог вызывающей стороны."""
from __future__ import annotations

import atexit
import contextlib
import os
import tempfile
from pathlib import Path

from native_image.errors import OutputWriteError
from native_image.logger import get_logger
from native_image.models.image_model import EncodedImage

logger = get_logger(__name__)

COMPRESSED_SUFFIX = "_compressed"
CROPPED_SUFFIX = "_cropped"
OUTPUT_EXTENSION = ".jpg"


def filename_without_extension(path: str | Path) -> str:
    """Имя без последнего расширения; имена вида ".hidden" не трогаем."""
    name = Path(path).name
    dot = name.rfind(".")
    return name[:dot] if dot > 0 else name


def _remove_quietly(path: str) -> None:
    with contextlib.suppress(OSError):
        os.remove(path)


class OutputService:
    def create_output_path(self, source: str | Path, suffix: str, cache_dir: str | Path) -> str:
        """Создаёт пустой файл `<имя><suffix><уникальная часть>.jpg` в `cache_dir`.

        Raises:
            OutputWriteError: каталог недоступен.
        """
        prefix = filename_without_extension(source) + suffix
        try:
            fd, output_path = tempfile.mkstemp(prefix=prefix, suffix=OUTPUT_EXTENSION, dir=cache_dir)
            os.close(fd)
        except OSError as exc:
            raise OutputWriteError(f"Не удалось создать файл в {cache_dir}: {exc}", source) from exc
        return output_path

    def write_output(
        self,
        encoded: EncodedImage,
        source: str | Path,
        suffix: str,
        cache_dir: str | Path,
        delete_on_exit: bool = False,
    ) -> str:
        """Пишет байты в новый файл из `create_output_path`.

        Returns:
            Путь к записанному файлу.

        Raises:
            OutputWriteError: каталог недоступен или запись не удалась.
        """
        output_path = self.create_output_path(source, suffix, cache_dir)

        try:
            with open(output_path, "wb") as fh:
                fh.write(encoded.data)
        except OSError as exc:
            _remove_quietly(output_path)
            raise OutputWriteError(f"Не удалось записать {output_path}: {exc}", source) from exc

        if delete_on_exit:
            atexit.register(_remove_quietly, output_path)

        logger.debug("Wrote %d bytes to %s", len(encoded.data), output_path)
        return output_path
