"""Чтение изображений с диска в растр RGBA и запись растра обратно.

Принципы:
- SRP: класс отвечает только за декодирование и кодирование файлов.
- Без состояния между вызовами; побочные эффекты только чтение/запись одного файла.
- Запись атомарна: временный файл в целевом каталоге и `os.replace` после успеха.
"""
from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from rotator.errors import DecodeError, EncodeError
from rotator.models.image_model import Raster

logger = logging.getLogger(__name__)

# Форматы Pillow, не умеющие хранить альфа-канал
_NO_ALPHA_FORMATS = frozenset({"JPEG", "MPO", "PPM", "PCX", "EPS"})


class ImageService:
    def decode(self, file_path: str | Path) -> Raster:
        """Загружает изображение с диска и возвращает нормализованный растр RGBA.

        Формат определяется по содержимому файла, а не по расширению.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `Raster` с пикселями в режиме RGBA.

        Raises:
            DecodeError: путь не читается, формат не распознан или данные повреждены.
        """
        path = Path(file_path)
        try:
            with Image.open(path) as img:
                rgba = img.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise DecodeError(f"Файл не является изображением: {path}", path) from exc
        except Image.DecompressionBombError as exc:
            raise DecodeError(f"Изображение слишком велико: {path}", path) from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Не удалось прочитать {path}: {exc}", path) from exc

        width, height = rgba.size
        pixels = np.asarray(rgba, dtype=np.uint8).reshape(height, width, 4)
        logger.debug("Decoded %s (%dx%d)", path.name, width, height)
        return Raster(width=width, height=height, pixels=pixels)

    def encode(self, raster: Raster, file_path: str | Path) -> None:
        """Записывает растр в файл; формат задаётся расширением пути.

        Raises:
            EncodeError: расширение не поддерживается на запись, каталог недоступен
                или запись прервана. Частично записанный файл не остаётся.
        """
        path = Path(file_path)
        fmt = self.format_for(path)
        if fmt is None:
            raise EncodeError(f"Формат для записи не поддерживается: {path.suffix or '<нет расширения>'}", path)

        image = Image.fromarray(np.ascontiguousarray(raster.pixels))
        if fmt in _NO_ALPHA_FORMATS:
            image = image.convert("RGB")

        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".rotator-", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "wb") as fh:
                image.save(fh, format=fmt)
            # mkstemp creates 0600 files; follow the directory's mode instead
            os.chmod(tmp_name, stat.S_IMODE(os.stat(path.parent).st_mode) & 0o666)
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Не удалось записать {path}: {exc}", path) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
        logger.debug("Encoded %s as %s", path.name, fmt)

    @staticmethod
    def format_for(path: Path) -> Optional[str]:
        """Имя формата Pillow для расширения пути или None, если запись невозможна."""
        Image.init()
        fmt = Image.registered_extensions().get(path.suffix.lower())
        if fmt is None or fmt not in Image.SAVE:
            return None
        return fmt


_default_service = ImageService()


def decode(file_path: str | Path) -> Raster:
    return _default_service.decode(file_path)


def encode(raster: Raster, file_path: str | Path) -> None:
    _default_service.encode(raster, file_path)
