"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: зависит от сервисов как от ролей; склейка целиком делегирована `MergeService`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, TclError
from typing import List, Optional, Tuple

import customtkinter as ctk

from pngmerge.config import default_output_dir
from pngmerge.errors import MergeError
from pngmerge.models.atlas_model import Atlas
from pngmerge.services.merge_service import MergeService
from pngmerge.ui.bottom_bar import BottomBar
from pngmerge.ui.image_viewer import ImageViewer
from pngmerge.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

IMAGE_FILETYPES = (
    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
    ("All files", "*.*"),
)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Ведение упорядоченного списка источников (файлы и папки).
    - Запуск склейки по кнопке и вывод результата/ошибки.
    - Синхронизация масштаба предпросмотра.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _merge_service: MergeService = field(default_factory=MergeService)
    _sources: List[Path] = field(default_factory=list)
    _atlas: Optional[Atlas] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_add_files = self._handle_add_files
        self.sidebar.on_add_folder = self._handle_add_folder
        self.sidebar.on_clear_sources = self._handle_clear_sources
        self.sidebar.on_choose_output_dir = self._handle_choose_output_dir
        self.sidebar.on_merge = self._handle_merge

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit

        self.sidebar.set_output_dir(str(default_output_dir()))
        self._refresh_sources()

    # ---- Handlers ----
    def _handle_add_files(self) -> None:
        try:
            paths = filedialog.askopenfilenames(title="Выберите изображения", filetypes=IMAGE_FILETYPES)
        except TclError:
            return
        if not paths:
            return
        self._sources.extend(Path(p) for p in paths)
        self._refresh_sources()

    def _handle_add_folder(self) -> None:
        try:
            folder = filedialog.askdirectory(title="Выберите папку с изображениями")
        except TclError:
            return
        if not folder:
            return
        self._sources.append(Path(folder))
        self._refresh_sources()

    def _handle_clear_sources(self) -> None:
        self._sources.clear()
        self._refresh_sources()
        self._atlas = None
        self.viewer.set_image(None)
        self.sidebar.set_result(None, None)
        self.bottom.set_status("Готово")

    def _handle_choose_output_dir(self) -> None:
        try:
            folder = filedialog.askdirectory(title="Каталог для результата", mustexist=False)
        except TclError:
            return
        if folder:
            self.sidebar.set_output_dir(folder)

    def _handle_merge(self) -> None:
        config = self.sidebar.get_config()
        output_dir = self.sidebar.get_output_dir() or None
        try:
            result = self._merge_service.run(self._sources, config, output_dir)
        except (MergeError, OSError, ValueError) as exc:
            logger.warning("merge failed: %s", exc)
            self.bottom.set_status(str(exc), is_error=True)
            return

        self._atlas = result.atlas
        self.viewer.set_image(result.atlas.image)
        self.sidebar.set_result(result.atlas, str(result.path))
        self.bottom.set_status(f"Сохранено: {result.path}")
        self._handle_zoom_fit()

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba, self._describe_cell(x, y))

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def _describe_cell(self, x: Optional[int], y: Optional[int]) -> Optional[str]:
        if self._atlas is None or x is None or y is None:
            return None
        index = self._atlas.cell_index_at(x, y)
        if index is None:
            return None
        ox, oy = self._atlas.cell_origin(index)
        return f"Ячейка {index + 1}: {self._atlas.names[index]} ({x - ox}, {y - oy})"

    def _refresh_sources(self) -> None:
        source_service = self._merge_service.source_service
        names: List[str] = []
        for path in source_service.expand(self._sources):
            names.append(path.name)
        self.sidebar.set_sources(names)
        self.sidebar.set_warnings(source_service.warnings(self._sources))
