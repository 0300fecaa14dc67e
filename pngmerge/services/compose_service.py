"""Склейка набора изображений в один атлас.

Принципы:
- SRP: только расчёт размеров ячеек, выравнивание и конкатенация.
- Исходные изображения не изменяются; пиксели копируются без смешивания и
  без масштабирования.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple, Union

import numpy as np
from PIL import Image

from pngmerge.errors import EmptyInputError
from pngmerge.models.atlas_model import Alignment, Atlas, AtlasConfig, Axis, SourceImage

logger = logging.getLogger(__name__)

ImageInput = Union[SourceImage, Image.Image]


class ComposeService:
    def __init__(self) -> None:
        self._last_cell_size: Optional[Tuple[int, int]] = None

    @property
    def last_cell_size(self) -> Optional[Tuple[int, int]]:
        """Размер ячейки последнего успешного запуска (только для диагностики)."""
        return self._last_cell_size

    def compose(self, images: Iterable[ImageInput], config: AtlasConfig = AtlasConfig()) -> Atlas:
        """Склеивает изображения вдоль выбранной оси.

        Args:
            images: Упорядоченная последовательность `SourceImage` или `PIL.Image.Image`.
            config: Ось, выравнивание и минимальный размер ячейки.

        Returns:
            `Atlas` размером `(cell_w * n, cell_h)` для горизонтали или
            `(cell_w, cell_h * n)` для вертикали.

        Raises:
            EmptyInputError: если последовательность пуста.
        """
        sources = [_as_source(img, i) for i, img in enumerate(images)]
        if not sources:
            raise EmptyInputError()

        cell_w, cell_h = self.cell_size(sources, config)
        logger.debug("cell size %dx%d for %d image(s), axis=%s", cell_w, cell_h, len(sources), config.axis.value)
        cells = [self._cell_array(src, cell_w, cell_h, config.alignment) for src in sources]

        # Horizontal: cells side by side (numpy axis 1), vertical: stacked rows (axis 0)
        np_axis = 1 if config.axis is Axis.HORIZONTAL else 0
        out = np.concatenate(cells, axis=np_axis)

        self._last_cell_size = (cell_w, cell_h)
        return Atlas(
            image=_to_image(out),
            cell_width=cell_w,
            cell_height=cell_h,
            count=len(sources),
            axis=config.axis,
            names=tuple(src.name for src in sources),
        )

    def cell_size(self, images: Iterable[ImageInput], config: AtlasConfig = AtlasConfig()) -> Tuple[int, int]:
        """Единый размер ячейки: максимум по всем изображениям, не меньше минимума из конфигурации.

        Читает только размеры, пиксели не трогает.
        """
        cell_w, cell_h = config.width_floor, config.height_floor
        for img in images:
            w, h = _dims(img)
            cell_w = max(cell_w, w)
            cell_h = max(cell_h, h)
        return cell_w, cell_h

    def cell_offset(self, width: int, height: int, cell_w: int, cell_h: int, alignment: Alignment) -> Tuple[int, int]:
        """Смещение изображения внутри ячейки.

        По горизонтали изображение всегда центрируется; выравнивание влияет
        только на вертикальное смещение (для обеих осей склейки).
        """
        x = (cell_w - width) // 2
        if alignment is Alignment.START:
            y = 0
        elif alignment is Alignment.END:
            y = cell_h - height
        else:
            y = (cell_h - height) // 2
        return x, y

    # ---------- Вспомогательные функции ----------
    def _cell_array(self, src: SourceImage, cell_w: int, cell_h: int, alignment: Alignment) -> np.ndarray:
        if src.width > cell_w or src.height > cell_h:
            raise ValueError(
                f"Изображение {src.name!r} {src.width}x{src.height} больше ячейки {cell_w}x{cell_h}"
            )
        cell = np.zeros((cell_h, cell_w, 4), dtype=np.uint8)
        if src.width == 0 or src.height == 0:
            return cell
        x, y = self.cell_offset(src.width, src.height, cell_w, cell_h, Alignment.parse(alignment))
        pixels = np.asarray(src.pil_image, dtype=np.uint8).reshape(src.height, src.width, 4)
        # прямое копирование, без альфа-смешивания
        cell[y:y + src.height, x:x + src.width] = pixels
        return cell


def _as_source(image: ImageInput, index: int) -> SourceImage:
    if isinstance(image, SourceImage):
        if image.pil_image.mode != "RGBA":
            return SourceImage.from_image(image.name, image.pil_image, image.path)
        return image
    return SourceImage.from_image(f"image_{index}", image)


def _dims(image: ImageInput) -> Tuple[int, int]:
    if isinstance(image, SourceImage):
        return image.width, image.height
    return image.size


def _to_image(arr: np.ndarray) -> Image.Image:
    h, w = arr.shape[:2]
    if w == 0 or h == 0:
        return Image.new("RGBA", (w, h), (0, 0, 0, 0))
    return Image.fromarray(np.ascontiguousarray(arr))
