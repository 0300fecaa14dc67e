"""Боковая панель: список источников, параметры склейки, результат, курсор.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import customtkinter as ctk

from pngmerge.models.atlas_model import Alignment, Atlas, AtlasConfig, Axis

AXIS_LABELS = {"Горизонтально": Axis.HORIZONTAL, "Вертикально": Axis.VERTICAL}
ALIGNMENT_LABELS = {
    "По центру": Alignment.CENTER,
    "По верхнему краю": Alignment.START,
    "По нижнему краю": Alignment.END,
}


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: источники, параметры, результат, курсор."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=300, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_add_files: Optional[Callable[[], None]] = None
        self.on_add_folder: Optional[Callable[[], None]] = None
        self.on_clear_sources: Optional[Callable[[], None]] = None
        self.on_choose_output_dir: Optional[Callable[[], None]] = None
        self.on_merge: Optional[Callable[[], None]] = None

        # Источники
        self._src_title = ctk.CTkLabel(self, text="Источники", font=ctk.CTkFont(size=16, weight="bold"))
        self._src_title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        src_buttons = ctk.CTkFrame(self, fg_color="transparent")
        src_buttons.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="ew")
        src_buttons.grid_columnconfigure((0, 1, 2), weight=1)
        self._add_files_btn = ctk.CTkButton(src_buttons, text="Файлы…", width=80, command=self._emit(lambda: self.on_add_files))
        self._add_folder_btn = ctk.CTkButton(src_buttons, text="Папка…", width=80, command=self._emit(lambda: self.on_add_folder))
        self._clear_btn = ctk.CTkButton(src_buttons, text="Очистить", width=80, command=self._emit(lambda: self.on_clear_sources))
        self._add_files_btn.grid(row=0, column=0, padx=(0, 4), sticky="ew")
        self._add_folder_btn.grid(row=0, column=1, padx=4, sticky="ew")
        self._clear_btn.grid(row=0, column=2, padx=(4, 0), sticky="ew")

        self._sources_box = ctk.CTkTextbox(self, height=140, wrap="none")
        self._sources_box.grid(row=2, column=0, padx=8, pady=(0, 4), sticky="nsew")
        self._sources_box.configure(state="disabled")
        self.grid_rowconfigure(2, weight=1)

        # Предупреждения (пустой список источников и т.п.)
        self._warning_val = ctk.StringVar(value="")
        self._warning_label = ctk.CTkLabel(
            self, textvariable=self._warning_val, wraplength=270, anchor="w", justify="left",
            text_color=("#8a5300", "#ffcc80"),
        )
        self._warning_label.grid(row=3, column=0, padx=8, pady=(0, 8), sticky="ew")

        # Параметры
        self._cfg_title = ctk.CTkLabel(self, text="Параметры", font=ctk.CTkFont(size=16, weight="bold"))
        self._cfg_title.grid(row=4, column=0, padx=8, pady=(8, 4), sticky="w")

        self._axis_buttons = ctk.CTkSegmentedButton(self, values=list(AXIS_LABELS))
        self._axis_buttons.set("Горизонтально")
        self._axis_buttons.grid(row=5, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._align_label = ctk.CTkLabel(self, text="Выравнивание по вертикали:")
        self._align_label.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="w")
        self._align_menu = ctk.CTkOptionMenu(self, values=list(ALIGNMENT_LABELS))
        self._align_menu.set("По центру")
        self._align_menu.grid(row=7, column=0, padx=8, pady=(0, 6), sticky="ew")

        floors = ctk.CTkFrame(self, fg_color="transparent")
        floors.grid(row=8, column=0, padx=8, pady=(0, 6), sticky="ew")
        floors.grid_columnconfigure((1, 3), weight=1)
        self._width_floor_val = ctk.StringVar(value="0")
        self._height_floor_val = ctk.StringVar(value="0")
        ctk.CTkLabel(floors, text="Мин. ширина").grid(row=0, column=0, padx=(0, 4), sticky="w")
        ctk.CTkEntry(floors, textvariable=self._width_floor_val, width=56).grid(row=0, column=1, sticky="ew")
        ctk.CTkLabel(floors, text="высота").grid(row=0, column=2, padx=(8, 4), sticky="w")
        ctk.CTkEntry(floors, textvariable=self._height_floor_val, width=56).grid(row=0, column=3, sticky="ew")

        # Каталог для результата
        out_row = ctk.CTkFrame(self, fg_color="transparent")
        out_row.grid(row=9, column=0, padx=8, pady=(0, 8), sticky="ew")
        out_row.grid_columnconfigure(0, weight=1)
        self._output_dir_val = ctk.StringVar(value="")
        ctk.CTkEntry(out_row, textvariable=self._output_dir_val).grid(row=0, column=0, sticky="ew")
        ctk.CTkButton(out_row, text="…", width=32, command=self._emit(lambda: self.on_choose_output_dir)).grid(
            row=0, column=1, padx=(4, 0)
        )

        self._merge_btn = ctk.CTkButton(self, text="Собрать", command=self._emit(lambda: self.on_merge))
        self._merge_btn.grid(row=10, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Результат
        self._info_title = ctk.CTkLabel(self, text="Результат", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=11, column=0, padx=8, pady=(8, 4), sticky="w")
        self._cell_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._path_val = ctk.StringVar(value="—")
        ctk.CTkLabel(self, textvariable=self._cell_val, anchor="w").grid(row=12, column=0, padx=8, sticky="ew")
        ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w").grid(row=13, column=0, padx=8, sticky="ew")
        ctk.CTkLabel(self, textvariable=self._path_val, wraplength=270, anchor="w", justify="left").grid(
            row=14, column=0, padx=8, pady=(0, 8), sticky="ew"
        )

        # Курсор
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=15, column=0, padx=8, pady=(8, 4), sticky="w")
        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w").grid(row=16, column=0, padx=8, sticky="ew")
        ctk.CTkLabel(self, textvariable=self._cursor_rgba_val, anchor="w").grid(
            row=17, column=0, padx=8, pady=(0, 2), sticky="ew"
        )
        self._cursor_cell_val = ctk.StringVar(value="—")
        ctk.CTkLabel(self, textvariable=self._cursor_cell_val, wraplength=270, anchor="w", justify="left").grid(
            row=18, column=0, padx=8, pady=(0, 8), sticky="ew"
        )

    # ---- Public API ----
    def set_sources(self, names: Sequence[str]) -> None:
        """Показывает имена источников в порядке склейки."""
        self._sources_box.configure(state="normal")
        self._sources_box.delete("1.0", "end")
        self._sources_box.insert("1.0", "\n".join(f"{i + 1}. {name}" for i, name in enumerate(names)))
        self._sources_box.configure(state="disabled")

    def set_warnings(self, warnings: List[str]) -> None:
        self._warning_val.set("\n".join(warnings))

    def set_output_dir(self, path: str) -> None:
        self._output_dir_val.set(path)

    def get_output_dir(self) -> str:
        return self._output_dir_val.get().strip()

    def get_config(self) -> AtlasConfig:
        """Собирает `AtlasConfig` из элементов управления; некорректные числа считаются нулём."""
        return AtlasConfig(
            axis=AXIS_LABELS.get(self._axis_buttons.get(), Axis.HORIZONTAL),
            alignment=ALIGNMENT_LABELS.get(self._align_menu.get(), Alignment.CENTER),
            width_floor=self._parse_floor(self._width_floor_val.get()),
            height_floor=self._parse_floor(self._height_floor_val.get()),
        )

    def set_result(self, atlas: Optional[Atlas], path: Optional[str]) -> None:
        if atlas is None:
            self._cell_val.set("—")
            self._dims_val.set("—")
            self._path_val.set("—")
            return
        self._cell_val.set(f"Ячейка: {atlas.cell_width}×{atlas.cell_height} px")
        w, h = atlas.size
        self._dims_val.set(f"Атлас: {w}×{h} px, изображений: {atlas.count}")
        self._path_val.set(path or "—")

    def update_cursor_info(
        self,
        x: Optional[int],
        y: Optional[int],
        rgba: Optional[Tuple[int, int, int, int]],
        cell: Optional[str] = None,
    ) -> None:
        self._cursor_cell_val.set(cell or "—")
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgba_val.set("—")
            return
        r, g, b, a = rgba
        self._cursor_xy_val.set(f"X: {x}, Y: {y}")
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}  {_rgba_to_hex(rgba)}")

    # ---- Helpers ----
    def _emit(self, getter: Callable[[], Optional[Callable[[], None]]]) -> Callable[[], None]:
        def handler() -> None:
            callback = getter()
            if callback:
                callback()
        return handler

    @staticmethod
    def _parse_floor(text: str) -> int:
        try:
            return max(0, int(text.strip() or 0))
        except ValueError:
            return 0
