"""Модели данных для склейки изображений.

Принципы:
- SRP: только структура данных и простая валидация, без логики склейки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image


class Axis(str, Enum):
    """Направление склейки."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Alignment(IntEnum):
    """Положение изображения внутри ячейки по вертикали.

    Числовые коды: 0 по центру,
    1 по верхнему краю, 2 по нижнему краю.
    """
    CENTER = 0
    START = 1
    END = 2

    @classmethod
    def parse(cls, value: Union["Alignment", int, str]) -> "Alignment":
        """Принимает enum, числовой код или имя ("center", "START")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key.isdigit():
                return cls(int(key))
            try:
                return cls[key]
            except KeyError as exc:
                raise ValueError(f"Неизвестное выравнивание: {value!r}") from exc
        return cls(int(value))


@dataclass(frozen=True)
class AtlasConfig:
    """Параметры одного запуска склейки.

    Fields:
        axis: Направление склейки.
        alignment: Вертикальное положение изображения в ячейке.
        width_floor: Минимальная ширина ячейки, px.
        height_floor: Минимальная высота ячейки, px.
    """
    axis: Axis = Axis.HORIZONTAL
    alignment: Alignment = Alignment.CENTER
    width_floor: int = 0
    height_floor: int = 0

    def __post_init__(self) -> None:
        # allow plain codes and numeric strings from UI/config
        try:
            object.__setattr__(self, "width_floor", int(self.width_floor))
            object.__setattr__(self, "height_floor", int(self.height_floor))
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"Некорректный минимальный размер ячейки: {self.width_floor!r}x{self.height_floor!r}"
            ) from exc
        if self.width_floor < 0 or self.height_floor < 0:
            raise ValueError(
                f"Минимальный размер ячейки не может быть отрицательным: "
                f"{self.width_floor}x{self.height_floor}"
            )
        object.__setattr__(self, "axis", Axis(self.axis))
        object.__setattr__(self, "alignment", Alignment.parse(self.alignment))


@dataclass(frozen=True)
class SourceImage:
    """Исходное изображение для склейки.

    Fields:
        name: Имя источника (обычно имя файла без расширения).
        pil_image: Изображение PIL в режиме RGBA.
        width: Ширина, px.
        height: Высота, px.
        path: Путь к файлу, если изображение загружено с диска.
    """
    name: str
    pil_image: Image.Image
    width: int
    height: int
    path: Optional[Path] = None

    @classmethod
    def from_image(cls, name: str, image: Image.Image, path: Optional[Path] = None) -> "SourceImage":
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        return cls(name=name, pil_image=rgba, width=width, height=height, path=path)


@dataclass(frozen=True)
class Atlas:
    """Результат склейки: итоговое изображение и параметры сетки."""
    image: Image.Image
    cell_width: int
    cell_height: int
    count: int
    axis: Axis
    names: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def cell_origin(self, index: int) -> Tuple[int, int]:
        """Левый верхний угол ячейки `index` в итоговом изображении."""
        if not 0 <= index < self.count:
            raise IndexError(f"Ячейка {index} вне диапазона 0..{self.count - 1}")
        if self.axis is Axis.HORIZONTAL:
            return self.cell_width * index, 0
        return 0, self.cell_height * index

    def cell_index_at(self, x: int, y: int) -> Optional[int]:
        """Номер ячейки, в которую попадает пиксель атласа, или None вне атласа."""
        w, h = self.size
        if not (0 <= x < w and 0 <= y < h):
            return None
        if self.axis is Axis.HORIZONTAL:
            return x // self.cell_width
        return y // self.cell_height
