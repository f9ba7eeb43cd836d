import logging

import cv2
import numpy as np
from scipy import ndimage

from sticker_library.buffers import check_buffer

logger = logging.getLogger(__name__)

BACKGROUND_THRESHOLD = 10

# 4-connectivity; diagonal gaps do not connect background regions.
_FOUR_CONNECTED = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=np.uint8)


def reachable_background(alpha, threshold=BACKGROUND_THRESHOLD):
    """
    Marks background pixels (alpha <= threshold) reachable from any canvas
    corner without crossing an opaque pixel.

    Uses OpenCV's iterative 4-connected flood fill seeded at each corner.
    """
    h, w = alpha.shape
    region = (alpha <= threshold).astype(np.uint8)
    for x, y in ((0, 0), (w - 1, 0), (0, h - 1), (w - 1, h - 1)):
        if region[y, x] == 1:
            cv2.floodFill(region, None, (x, y), 2, loDiff=0, upDiff=0, flags=4)
    return region == 2


def count_enclosed_regions(alpha, threshold=BACKGROUND_THRESHOLD):
    """
    Number of 4-connected background pockets not reachable from the border.
    """
    enclosed = (alpha <= threshold) & ~reachable_background(alpha, threshold)
    _, count = ndimage.label(enclosed, structure=_FOUR_CONNECTED)
    return count


def fill_holes(mask, size, threshold=BACKGROUND_THRESHOLD):
    """
    Makes every pixel not reachable from the outside fully opaque.

    Enclosed transparent pockets (letter counters, rings) become solid and
    partially transparent shape pixels are forced to 255. Works in place
    and returns ``mask``.
    """
    check_buffer(mask, size)
    alpha = mask[:, :, 3]
    outside = reachable_background(alpha, threshold)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Filling {count_enclosed_regions(alpha, threshold)} enclosed region(s)")
    alpha[~outside] = 255
    return mask
