"""Ошибки склейки изображений."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class MergeError(RuntimeError):
    """Базовая ошибка: атлас не получен, файл не записан."""


class EmptyInputError(MergeError):
    """Raised when there are no source images to merge."""

    def __init__(self, message: str = "Нет исходных изображений для склейки") -> None:
        super().__init__(message)


class DirectoryCreateError(MergeError):
    """Raised when the output directory cannot be created."""

    def __init__(self, path: Path, errno: Optional[int] = None, reason: str = "") -> None:
        self.path = Path(path)
        self.errno = errno
        detail = f", код ошибки: {errno}" if errno is not None else ""
        if reason:
            detail += f" ({reason})"
        super().__init__(f"Не удалось создать каталог: {self.path}{detail}")


class EncodeError(MergeError):
    """Raised when the PNG cannot be encoded or written."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = Path(path)
        suffix = f": {reason}" if reason else ""
        super().__init__(f"Не удалось сохранить PNG {self.path}{suffix}")
