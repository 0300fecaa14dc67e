"""Сбор исходных изображений с диска или из готовой последовательности.

Принципы:
- SRP: класс отвечает только за загрузку и отбор изображений.
- OCP: новые источники (сцена, архив) подключаются через `from_images`.
- Порядок результата стабилен: порядок аргументов, внутри каталога по имени файла.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from PIL import Image, UnidentifiedImageError

from pngmerge.models.atlas_model import SourceImage

logger = logging.getLogger(__name__)

NO_IMAGES_WARNING = "Не найдено ни одного изображения, склейка невозможна"


class SourceService:
    def load_image(self, file_path: str | Path) -> SourceImage:
        """Загружает изображение с диска и переводит его в RGBA.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `SourceImage` с именем файла без расширения.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ValueError: если файл не распознан как изображение или повреждён.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as opened:
                pil_image = opened.convert("RGBA")
        except (UnidentifiedImageError, OSError) as exc:
            raise ValueError(f"Файл не является изображением: {path}") from exc

        return SourceImage.from_image(path.stem, pil_image, path)

    def collect(self, paths: Iterable[str | Path]) -> List[SourceImage]:
        """Собирает изображения из файлов и каталогов в порядке перечисления.

        Каталог раскрывается на один уровень, файлы сортируются по имени.
        Файлы, которые не являются изображениями, пропускаются.
        """
        images: List[SourceImage] = []
        for candidate in self.expand(paths):
            try:
                image = self.load_image(candidate)
            except ValueError:
                logger.debug("skipping non-image file %s", candidate)
                continue
            logger.info("merging image: %s", image.name)
            images.append(image)
        return images

    def from_images(self, pairs: Iterable[Tuple[str, Image.Image]]) -> List[SourceImage]:
        """Оборачивает готовую последовательность `(имя, изображение)` без изменения порядка."""
        images: List[SourceImage] = []
        for name, pil_image in pairs:
            if pil_image is None:
                continue
            logger.info("merging image: %s", name)
            images.append(SourceImage.from_image(name, pil_image))
        return images

    def warnings(self, paths: Iterable[str | Path]) -> List[str]:
        """Предупреждения для UI; пустой набор источников не считается ошибкой."""
        count = 0
        for candidate in self.expand(paths):
            if self._is_image(candidate):
                count += 1
        if count == 0:
            return [NO_IMAGES_WARNING]
        return []

    def expand(self, paths: Iterable[str | Path]) -> List[Path]:
        """Раскрывает каталоги в отсортированный список файлов, остальные пути оставляет как есть."""
        files: List[Path] = []
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                files.extend(sorted((p for p in path.iterdir() if p.is_file()), key=lambda p: p.name))
            else:
                files.append(path)
        return files

    # ---------- Вспомогательные функции ----------
    def _is_image(self, path: Path) -> bool:
        if not path.is_file():
            return False
        try:
            with Image.open(path) as opened:
                opened.verify()
        except (UnidentifiedImageError, OSError, SyntaxError):
            return False
        return True
