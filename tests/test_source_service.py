from __future__ import annotations

import os

import pytest
from PIL import Image

from conftest import BLUE, RED, solid
from pngmerge.services.source_service import NO_IMAGES_WARNING, SourceService


@pytest.fixture
def service() -> SourceService:
    return SourceService()


def test_load_image_converts_to_rgba(tmp_path, service):
    path = tmp_path / "hero.png"
    solid((3, 4), RED).convert("RGB").save(path)
    src = service.load_image(path)
    assert src.name == "hero"
    assert src.pil_image.mode == "RGBA"
    assert (src.width, src.height) == (3, 4)
    assert src.path == path


def test_load_image_missing_file(tmp_path, service):
    with pytest.raises(FileNotFoundError):
        service.load_image(tmp_path / "nope.png")


def test_load_image_not_an_image(tmp_path, service):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(ValueError):
        service.load_image(path)


def test_collect_directory_sorted_and_filtered(tmp_path, service):
    solid((1, 1), RED).save(tmp_path / "b.png")
    solid((1, 1), BLUE).save(tmp_path / "a.png")
    (tmp_path / "readme.txt").write_text("skip me")
    (tmp_path / "nested").mkdir()
    images = service.collect([tmp_path])
    assert [img.name for img in images] == ["a", "b"]


def test_collect_keeps_argument_order(tmp_path, service):
    for name in ("x", "y", "z"):
        solid((1, 1), RED).save(tmp_path / f"{name}.png")
    paths = [tmp_path / "z.png", tmp_path / "x.png", tmp_path / "y.png"]
    assert [img.name for img in service.collect(paths)] == ["z", "x", "y"]


def test_from_images_skips_missing(service):
    images = service.from_images([("one", solid((1, 1), RED)), ("none", None), ("two", solid((2, 2), BLUE))])
    assert [img.name for img in images] == ["one", "two"]


def test_warnings_when_no_images(tmp_path, service):
    (tmp_path / "readme.txt").write_text("text")
    assert service.warnings([tmp_path]) == [NO_IMAGES_WARNING]
    assert service.warnings([]) == [NO_IMAGES_WARNING]


def test_no_warnings_with_images(tmp_path, service):
    solid((1, 1), RED).save(tmp_path / "a.png")
    assert service.warnings([tmp_path]) == []


def _write_truncated_png(path):
    # noise does not compress, so half the bytes cuts deep into pixel data
    Image.frombytes("RGBA", (64, 64), os.urandom(64 * 64 * 4)).save(path)
    data = path.read_bytes()
    path.write_bytes(data[: len(data) // 2])


def test_collect_skips_truncated_png(tmp_path, service):
    solid((1, 1), RED).save(tmp_path / "a.png")
    _write_truncated_png(tmp_path / "b.png")

    assert [img.name for img in service.collect([tmp_path])] == ["a"]
    assert service.warnings([tmp_path / "b.png"]) == [NO_IMAGES_WARNING]


def test_load_image_truncated_is_value_error(tmp_path, service):
    path = tmp_path / "broken.png"
    _write_truncated_png(path)
    with pytest.raises(ValueError):
        service.load_image(path)
