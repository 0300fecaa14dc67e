"""Настройки по умолчанию и переменные окружения."""
from __future__ import annotations

import logging
import os
from pathlib import Path

OUTPUT_DIR_ENV = "PNGMERGE_OUTPUT_DIR"
LOG_LEVEL_ENV = "PNGMERGE_LOG_LEVEL"

# <user-data-root>/tool/png/merge
USER_DATA_ROOT = Path.home() / ".pngmerge"
DEFAULT_SUBDIR = ("tool", "png", "merge")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_output_dir() -> Path:
    """Каталог для результатов: из `PNGMERGE_OUTPUT_DIR` либо `~/.pngmerge/tool/png/merge`."""
    override = os.environ.get(OUTPUT_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return USER_DATA_ROOT.joinpath(*DEFAULT_SUBDIR)


def log_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: int | None = None) -> None:
    """Настраивает вывод логов в stderr (вызывается из точки входа)."""
    logging.basicConfig(level=log_level() if level is None else level, format=LOG_FORMAT)
