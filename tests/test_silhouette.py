import numpy as np
import pytest

from conftest import opaque_bbox, square_element
from sticker_library.silhouette import (
    build_mask,
    dilate_exact,
    dilation_steps,
    rasterize_silhouette,
)


def test_dilation_steps_heuristic():
    assert dilation_steps(0) == 200
    assert dilation_steps(15) == 200
    assert dilation_steps(20) == 200
    assert dilation_steps(25) == 250
    assert dilation_steps(80) == 800
    assert dilation_steps(3, min_steps=8, steps_per_px=4) == 12


def test_silhouette_flattens_color():
    element = square_element(x=50, y=50, side=40, color=(200, 120, 30, 255))
    raw = rasterize_silhouette([element], 200)
    assert raw[70, 70].tolist() == [0, 0, 0, 255]
    assert raw[10, 10, 3] == 0


def test_zero_border_keeps_original_shape():
    element = square_element(x=50, y=50, side=40)
    raw = rasterize_silhouette([element], 200)
    mask = build_mask([element], 200, 0)
    assert np.array_equal(mask[:, :, 3], raw[:, :, 3])


def test_square_expands_by_border_width():
    element = square_element(x=70, y=70, side=60)
    mask = build_mask([element], 200, 15)
    x0, y0, x1, y1 = opaque_bbox(mask[:, :, 3])
    assert abs(x0 - 55) <= 2 and abs(y0 - 55) <= 2
    assert abs(x1 - 144) <= 2 and abs(y1 - 144) <= 2
    assert mask[100, 100, 3] == 255
    # Corners round off: the diagonal corner of the bounding square stays clear.
    assert mask[56, 56, 3] < 128


def test_monotonic_coverage():
    element = square_element(x=70, y=70, side=60)
    small = build_mask([element], 200, 5)[:, :, 3]
    large = build_mask([element], 200, 12)[:, :, 3]
    assert not np.any((small > 0) & (large == 0))
    assert not np.any((small == 255) & (large < 255))
    assert (large > 0).sum() > (small > 0).sum()


def test_exact_dilation_matches_sampled_extent():
    element = square_element(x=70, y=70, side=60)
    sampled = build_mask([element], 200, 10)[:, :, 3]
    exact = build_mask([element], 200, 10, method="exact")[:, :, 3]
    assert opaque_bbox(exact) == pytest.approx(opaque_bbox(sampled), abs=2)
    assert ((exact > 127) != (sampled > 127)).sum() < 0.05 * (exact > 127).sum()


def test_exact_dilation_of_empty_canvas():
    empty = np.zeros((20, 20, 4), dtype=np.uint8)
    assert not dilate_exact(empty, 5).any()


def test_invalid_arguments():
    element = square_element(x=10, y=10, side=10)
    with pytest.raises(ValueError):
        build_mask([element], 50, -1)
    with pytest.raises(ValueError):
        build_mask([element], 0, 5)
    with pytest.raises(ValueError):
        build_mask([element], 50, 5, method="polygon")
