import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Ensure the project root is on sys.path for direct pytest runs
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sticker_library.elements import StickerElement  # noqa: E402


def square_element(element_id="sq", x=0, y=0, side=100, color=(255, 0, 0, 255), width=None, height=None):
    width = side if width is None else width
    height = side if height is None else height
    bitmap = Image.new("RGBA", (int(width), int(height)), color)
    return StickerElement(
        id=element_id, type="image", x=x, y=y, width=width, height=height, bitmap=bitmap
    )


def mask_buffer(size, box=None):
    """RGBA buffer whose alpha is 255 inside ``box`` = (x0, y0, x1, y1)."""
    buffer = np.zeros((size, size, 4), dtype=np.uint8)
    if box is not None:
        x0, y0, x1, y1 = box
        buffer[y0:y1, x0:x1, 3] = 255
    return buffer


def opaque_bbox(alpha, threshold=127):
    ys, xs = np.nonzero(alpha > threshold)
    return xs.min(), ys.min(), xs.max(), ys.max()


@pytest.fixture
def make_square():
    return square_element


@pytest.fixture
def make_mask():
    return mask_buffer
