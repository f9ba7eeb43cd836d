import logging
import math

import numpy as np
from scipy import ndimage

from sticker_library.buffers import alpha_plane, new_buffer, over, shift_plane, to_uint8
from sticker_library.rasterizer import render_elements

logger = logging.getLogger(__name__)

DEFAULT_MIN_STEPS = 200
DEFAULT_STEPS_PER_PX = 10


def dilation_steps(border_width, min_steps=DEFAULT_MIN_STEPS, steps_per_px=DEFAULT_STEPS_PER_PX):
    """
    Number of angular samples used for a given border width.

    Wider borders trace a longer circle, so they get proportionally more
    samples to keep neighbouring copies overlapping.
    """
    return max(min_steps, int(math.ceil(border_width * steps_per_px)))


def rasterize_silhouette(elements, canvas_size):
    """
    Union of all element footprints: black where opaque, transparent elsewhere.
    """
    buffer = new_buffer(canvas_size)
    return render_elements(buffer, elements, silhouette=True)


def dilate_sampled(silhouette, border_width, steps):
    """
    Approximates disk dilation by compositing ``steps`` copies of the
    silhouette around a circle of radius ``border_width``.
    """
    source = alpha_plane(silhouette)
    accumulator = np.zeros_like(source)
    for i in range(steps):
        angle = (i / steps) * 2 * math.pi
        dx = math.cos(angle) * border_width
        dy = math.sin(angle) * border_width
        accumulator = over(accumulator, shift_plane(source, dx, dy))
    # The untranslated copy keeps the original shape when the border is zero.
    accumulator = over(accumulator, source)

    dilated = np.zeros_like(silhouette)
    dilated[:, :, 3] = to_uint8(accumulator)
    return dilated


def dilate_exact(silhouette, border_width):
    """
    Exact dilation by a disk: every pixel within ``border_width`` of an
    opaque pixel becomes opaque.
    """
    alpha = silhouette[:, :, 3]
    occupied = alpha > 0
    dilated = np.zeros_like(silhouette)
    dilated[:, :, 3] = alpha
    if not occupied.any():
        return dilated

    distance = ndimage.distance_transform_edt(~occupied)
    dilated[distance <= border_width, 3] = 255
    return dilated


def build_mask(
    elements,
    canvas_size,
    border_width,
    *,
    method="sampled",
    min_steps=DEFAULT_MIN_STEPS,
    steps_per_px=DEFAULT_STEPS_PER_PX,
):
    """
    Builds the expanded (possibly gapped) silhouette mask for ``elements``.

    Returns the RGBA accumulator; its alpha channel is the mask.
    """
    if border_width < 0:
        raise ValueError(f"border_width must be non-negative, got {border_width}")
    if canvas_size <= 0:
        raise ValueError(f"canvas_size must be positive, got {canvas_size}")

    silhouette = rasterize_silhouette(elements, canvas_size)
    return dilate_silhouette(
        silhouette,
        border_width,
        method=method,
        min_steps=min_steps,
        steps_per_px=steps_per_px,
    )


def dilate_silhouette(
    silhouette,
    border_width,
    *,
    method="sampled",
    min_steps=DEFAULT_MIN_STEPS,
    steps_per_px=DEFAULT_STEPS_PER_PX,
):
    if method == "exact":
        return dilate_exact(silhouette, border_width)
    if method != "sampled":
        raise ValueError(f"Unknown dilation method: {method!r}")
    steps = dilation_steps(border_width, min_steps, steps_per_px)
    logger.debug(f"Dilating silhouette by {border_width}px with {steps} samples")
    return dilate_sampled(silhouette, border_width, steps)
