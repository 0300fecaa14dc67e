"""Сохранение атласа в PNG.

Файл сначала пишется во временный файл рядом с целевым и затем
переименовывается, поэтому частично записанный PNG не остаётся на диске.
"""
from __future__ import annotations

import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Optional

from PIL import Image

from pngmerge.errors import DirectoryCreateError, EncodeError

logger = logging.getLogger(__name__)


class OutputService:
    def ensure_dir(self, directory: str | Path) -> Path:
        """Создаёт каталог рекурсивно, если его нет.

        Raises:
            DirectoryCreateError: если каталог создать не удалось.
        """
        path = Path(directory)
        if path.is_dir():
            return path
        if path.exists():
            raise DirectoryCreateError(path, reason="путь существует и не является каталогом")
        logger.info("creating directory: %s", path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateError(path, exc.errno, exc.strerror or "") from exc
        return path

    def build_path(self, directory: str | Path, timestamp_ms: Optional[int] = None) -> Path:
        """`{directory}/{unix_epoch_millis}.png`; совпадение имён перезаписывает файл."""
        if timestamp_ms is None:
            timestamp_ms = time.time_ns() // 1_000_000
        return Path(directory) / f"{timestamp_ms}.png"

    def write_png(self, image: Image.Image, path: str | Path) -> Path:
        """Кодирует изображение в PNG и атомарно кладёт его по пути `path`.

        Raises:
            EncodeError: если кодирование или запись не удались.
        """
        target = Path(path)
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".", suffix=".png.tmp", dir=target.parent)
        except OSError as exc:
            raise EncodeError(target, str(exc)) from exc
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh:
                image.save(fh, format="PNG")
            # mkstemp creates 0600, the saved file follows the umask like a plain save
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, target)
        except (OSError, ValueError) as exc:
            tmp_path.unlink(missing_ok=True)
            raise EncodeError(target, str(exc)) from exc
        logger.info("saved %s (%dx%d)", target, image.width, image.height)
        return target

    def save(self, image: Image.Image, directory: str | Path, timestamp_ms: Optional[int] = None) -> Path:
        """Создаёт каталог при необходимости и сохраняет изображение под именем-меткой времени."""
        out_dir = self.ensure_dir(directory)
        return self.write_png(image, self.build_path(out_dir, timestamp_ms))


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask
