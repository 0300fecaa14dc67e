"""Виджет предпросмотра атласа: масштаб, перетаскивание, пиксель под курсором.

Принципы:
- SRP: отвечает только за представление готового атласа.
- Сохранённый файл не зависит от масштаба предпросмотра.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

MIN_SCALE, MAX_SCALE = 0.1, 8.0


class ImageViewer(ctk.CTkFrame):
    """Канва с текущим атласом."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._scale_factor: float = 1.0
        self._origin: Tuple[int, int] = (0, 0)

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Tuple[int, int, int, int]]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", lambda _e: self._render_image())
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)

        # Mouse wheel zoom (cross-platform)
        self._canvas.bind("<MouseWheel>", lambda e: self._zoom_by(1.1 if e.delta > 0 else 1.0 / 1.1))
        self._canvas.bind("<Button-4>", lambda _e: self._zoom_by(1.1))        # Linux scroll up
        self._canvas.bind("<Button-5>", lambda _e: self._zoom_by(1.0 / 1.1))  # Linux scroll down

        # Panning: tk canvas scan keeps the view offset itself
        self._canvas.bind("<ButtonPress-1>", lambda e: self._canvas.scan_mark(e.x, e.y))
        self._canvas.bind("<B1-Motion>", lambda e: self._canvas.scan_dragto(e.x, e.y, gain=1))

    # ---- Public API ----
    def set_image(self, image: Optional[Image.Image]) -> None:
        """Показывает атлас (или очищает канву) и подгоняет масштаб под окно."""
        self._image = image if image is None or image.mode == "RGBA" else image.convert("RGBA")
        self.set_zoom_to_fit()

    def set_zoom_to_fit(self) -> None:
        self._scale_factor = self._fit_scale()
        self._render_image()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        """Устанавливает масштаб в процентах (10–800%)."""
        self._scale_factor = max(MIN_SCALE, min(MAX_SCALE, zoom_percent / 100.0))
        self._render_image()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale_factor * 100))

    # ---- Internals ----
    def _render_image(self) -> None:
        self._canvas.delete("all")
        self._canvas.xview_moveto(0)
        self._canvas.yview_moveto(0)
        if self._image is None or self._image.width == 0 or self._image.height == 0:
            return

        scaled_w = max(1, int(self._image.width * self._scale_factor))
        scaled_h = max(1, int(self._image.height * self._scale_factor))
        # nearest keeps pixel edges visible in preview
        resized = self._image.resize((scaled_w, scaled_h), Image.Resampling.NEAREST)

        # centred while it fits, anchored at the corner otherwise
        x = max(0, (self._canvas.winfo_width() - scaled_w) // 2)
        y = max(0, (self._canvas.winfo_height() - scaled_h) // 2)
        self._origin = (x, y)
        self._tk_image = ImageTk.PhotoImage(resized)
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")

    def _fit_scale(self) -> float:
        if self._image is None or self._image.width == 0 or self._image.height == 0:
            return 1.0
        canvas_w = max(1, self._canvas.winfo_width())
        canvas_h = max(1, self._canvas.winfo_height())
        return max(MIN_SCALE, min(MAX_SCALE, canvas_w / self._image.width, canvas_h / self._image.height))

    def _zoom_by(self, factor: float) -> None:
        if self._image is None:
            return
        self._scale_factor = max(MIN_SCALE, min(MAX_SCALE, self._scale_factor * factor))
        self._render_image()
        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._image is None or self.on_cursor_move is None:
            return
        ox, oy = self._origin
        # canvasx/canvasy account for the scan offset
        x = int((self._canvas.canvasx(event.x) - ox) // self._scale_factor)
        y = int((self._canvas.canvasy(event.y) - oy) // self._scale_factor)
        if 0 <= x < self._image.width and 0 <= y < self._image.height:
            self.on_cursor_move(x, y, self._image.getpixel((x, y)))
        else:
            self.on_cursor_move(None, None, None)

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None, None)

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
