from __future__ import annotations

import itertools

import numpy as np
import pytest
from PIL import Image

from conftest import BLUE, CLEAR, RED, gradient, solid
from pngmerge.errors import EmptyInputError
from pngmerge.models.atlas_model import Alignment, AtlasConfig, Axis, SourceImage


@pytest.mark.parametrize("axis", list(Axis))
@pytest.mark.parametrize("alignment", list(Alignment))
def test_empty_input_raises(composer, axis, alignment):
    with pytest.raises(EmptyInputError):
        composer.compose([], AtlasConfig(axis=axis, alignment=alignment))
    assert composer.last_cell_size is None


def test_cell_size_is_max_regardless_of_order(composer):
    sizes = [(10, 20), (30, 5), (8, 8)]
    for order in itertools.permutations(sizes):
        images = [solid(s, RED) for s in order]
        assert composer.cell_size(images) == (30, 20)
        atlas = composer.compose(images)
        assert (atlas.cell_width, atlas.cell_height) == (30, 20)


def test_cell_size_respects_floors(composer):
    images = [solid((4, 4), RED), solid((2, 6), BLUE)]
    assert composer.cell_size(images, AtlasConfig(width_floor=10, height_floor=3)) == (10, 6)


def test_floors_do_not_carry_over_between_runs(composer):
    composer.compose([solid((50, 40), RED)])
    atlas = composer.compose([solid((3, 2), BLUE)])
    assert (atlas.cell_width, atlas.cell_height) == (3, 2)
    assert composer.last_cell_size == (3, 2)


@pytest.mark.parametrize(
    "axis, expected",
    [(Axis.HORIZONTAL, (30 * 3, 20)), (Axis.VERTICAL, (30, 20 * 3))],
)
def test_output_shape(composer, axis, expected):
    images = [solid((10, 20), RED), solid((30, 5), BLUE), solid((8, 8), RED)]
    atlas = composer.compose(images, AtlasConfig(axis=axis))
    assert atlas.size == expected
    assert atlas.image.mode == "RGBA"
    assert atlas.count == 3


def test_horizontal_order_preserved(composer):
    a, b, c = gradient((5, 5), 1), gradient((5, 5), 50), gradient((5, 5), 100)
    out = np.asarray(composer.compose([a, b, c]).image)
    assert np.array_equal(out[:, 0:5], np.asarray(a))
    assert np.array_equal(out[:, 5:10], np.asarray(b))
    assert np.array_equal(out[:, 10:15], np.asarray(c))


def test_vertical_order_preserved(composer):
    a, b = gradient((4, 3), 7), gradient((4, 3), 70)
    atlas = composer.compose([a, b], AtlasConfig(axis=Axis.VERTICAL))
    out = np.asarray(atlas.image)
    assert np.array_equal(out[0:3], np.asarray(a))
    assert np.array_equal(out[3:6], np.asarray(b))
    assert atlas.cell_origin(1) == (0, 3)


@pytest.mark.parametrize(
    "alignment, top",
    [(Alignment.START, 0), (Alignment.END, 7), (Alignment.CENTER, 3)],
)
def test_vertical_alignment(composer, alignment, top):
    # cell 4x10, image 4x3: free rows = 7
    tall = solid((4, 10), BLUE)
    short = gradient((4, 3))
    atlas = composer.compose([tall, short], AtlasConfig(alignment=alignment))
    cell = np.asarray(atlas.image)[:, 4:8]
    assert np.array_equal(cell[top:top + 3], np.asarray(short))
    assert not cell[:top].any()
    assert not cell[top + 3:].any()


def test_horizontal_offset_always_centered(composer):
    for alignment in Alignment:
        assert composer.cell_offset(3, 2, 8, 2, alignment)[0] == 2


def test_pixels_copied_without_blending(composer):
    # semi-transparent pixels must stay untouched, not composited on the background
    src = Image.new("RGBA", (2, 2), (10, 20, 30, 40))
    atlas = composer.compose([src, Image.new("RGBA", (4, 4))], AtlasConfig(alignment=Alignment.START))
    arr = np.asarray(atlas.image)[:, 0:4]
    assert np.array_equal(arr[0:2, 1:3], np.asarray(src))
    assert tuple(arr[3, 0]) == CLEAR


def test_input_images_not_mutated(composer):
    src = gradient((3, 5), 9)
    before = src.tobytes()
    composer.compose([src, solid((6, 6), RED)])
    assert src.tobytes() == before
    assert src.size == (3, 5)


def test_non_rgba_input_is_converted(composer):
    rgb = Image.new("RGB", (2, 2), (1, 2, 3))
    atlas = composer.compose([rgb])
    assert atlas.image.getpixel((0, 0)) == (1, 2, 3, 255)


def test_names_follow_input_order(composer):
    images = [
        SourceImage.from_image("b", solid((1, 1), RED)),
        SourceImage.from_image("a", solid((1, 1), BLUE)),
    ]
    assert composer.compose(images).names == ("b", "a")


def test_zero_sized_images_give_empty_atlas(composer):
    atlas = composer.compose([Image.new("RGBA", (0, 0))] * 2)
    assert atlas.size == (0, 0)


def test_red_blue_scenario(composer):
    red, blue = solid((4, 4), RED), solid((2, 6), BLUE)
    atlas = composer.compose([red, blue], AtlasConfig(axis=Axis.HORIZONTAL, alignment=Alignment.CENTER))
    assert (atlas.cell_width, atlas.cell_height) == (4, 6)
    assert atlas.size == (8, 6)

    img = atlas.image
    # red cell: 1px clear rows top and bottom
    for x in range(4):
        assert img.getpixel((x, 0)) == CLEAR
        assert img.getpixel((x, 5)) == CLEAR
        for y in range(1, 5):
            assert img.getpixel((x, y)) == RED
    # blue cell: full height, 1px clear columns left and right
    for y in range(6):
        assert img.getpixel((4, y)) == CLEAR
        assert img.getpixel((5, y)) == BLUE
        assert img.getpixel((6, y)) == BLUE
        assert img.getpixel((7, y)) == CLEAR
