from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from conftest import BLUE, RED, solid
from pngmerge.config import OUTPUT_DIR_ENV
from pngmerge.errors import DirectoryCreateError, EmptyInputError
from pngmerge.models.atlas_model import Alignment, AtlasConfig, Axis, SourceImage
from pngmerge.services.merge_service import MergeService


def test_run_from_directory(tmp_path):
    src_dir = tmp_path / "src"
    src_dir.mkdir()
    solid((4, 4), RED).save(src_dir / "01_red.png")
    solid((2, 6), BLUE).save(src_dir / "02_blue.png")

    result = MergeService().run([src_dir], AtlasConfig(), tmp_path / "out")

    assert result.path.parent == tmp_path / "out"
    assert result.atlas.names == ("01_red", "02_blue")
    with Image.open(result.path) as saved:
        assert saved.size == (8, 6)
        assert np.array_equal(np.asarray(saved.convert("RGBA")), np.asarray(result.atlas.image))


def test_run_mixes_paths_and_ready_images(tmp_path):
    solid((1, 1), RED).save(tmp_path / "file.png")
    ready = SourceImage.from_image("ready", solid((1, 1), BLUE))
    result = MergeService().run([ready, tmp_path / "file.png"], AtlasConfig(axis=Axis.VERTICAL), tmp_path / "out")
    assert result.atlas.names == ("ready", "file")
    assert result.atlas.image.getpixel((0, 0)) == BLUE
    assert result.atlas.image.getpixel((0, 1)) == RED


def test_run_empty_writes_nothing(tmp_path):
    out = tmp_path / "out"
    with pytest.raises(EmptyInputError):
        MergeService().run([], AtlasConfig(alignment=Alignment.END), out)
    assert not out.exists()


def test_run_directory_error_writes_nothing(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises(DirectoryCreateError):
        MergeService().run([SourceImage.from_image("a", solid((1, 1), RED))], AtlasConfig(), blocker / "out")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["blocker"]


def test_run_uses_default_dir_from_env(tmp_path, monkeypatch):
    target = tmp_path / "env_out"
    monkeypatch.setenv(OUTPUT_DIR_ENV, str(target))
    result = MergeService().run([SourceImage.from_image("a", solid((2, 2), RED))])
    assert result.path.parent == target
    assert result.path.exists()
