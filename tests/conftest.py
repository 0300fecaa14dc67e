from __future__ import annotations

from typing import Tuple

import pytest
from PIL import Image

from pngmerge.services.compose_service import ComposeService

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
CLEAR = (0, 0, 0, 0)


def solid(size: Tuple[int, int], color: Tuple[int, int, int, int]) -> Image.Image:
    return Image.new("RGBA", size, color)


def gradient(size: Tuple[int, int], seed: int = 0) -> Image.Image:
    """Изображение с уникальными пикселями, чтобы ловить сдвиги и повторы."""
    w, h = size
    img = Image.new("RGBA", size)
    img.putdata([((x * 7 + seed) % 256, (y * 13 + seed) % 256, (x + y + seed) % 256, 200) for y in range(h) for x in range(w)])
    return img


@pytest.fixture
def composer() -> ComposeService:
    return ComposeService()
