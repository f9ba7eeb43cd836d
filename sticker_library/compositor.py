import base64
import io
import logging
import time
from dataclasses import dataclass

import numpy as np
from PIL import Image

from sticker_library.buffers import composite_over, fill_with_mask, new_buffer
from sticker_library.cutline import cut_line_layer
from sticker_library.holes import fill_holes
from sticker_library.rasterizer import render_elements
from sticker_library.shapes import render_cut_shape
from sticker_library.silhouette import dilate_silhouette, rasterize_silhouette
from sticker_library.smoothing import smooth

logger = logging.getLogger(__name__)

LAYERS = ("background", "full")


@dataclass
class SilhouetteStages:
    raw: np.ndarray
    dilated: np.ndarray
    filled: np.ndarray
    smoothed: np.ndarray


def build_silhouette_stages(elements, config):
    """
    Runs rasterize -> dilate -> fill holes -> smooth and keeps every
    intermediate buffer.
    """
    size = config.canvas_size
    started = time.perf_counter()

    raw = rasterize_silhouette(elements, size)
    dilated = dilate_silhouette(
        raw,
        config.border_width,
        method=config.dilation_method,
        min_steps=config.dilation_min_steps,
        steps_per_px=config.dilation_steps_per_px,
    )
    filled = fill_holes(dilated.copy(), size, config.background_threshold)
    smoothed = smooth(
        filled,
        radius=config.smoothing_radius,
        low=config.hysteresis_low,
        high=config.hysteresis_high,
    )

    logger.debug(
        f"Silhouette for {len(elements)} element(s) built in "
        f"{(time.perf_counter() - started) * 1000:.1f} ms"
    )
    return SilhouetteStages(raw=raw, dilated=dilated, filled=filled, smoothed=smoothed)


def build_silhouette_mask(elements, config):
    """Final smoothed silhouette mask (RGBA, alpha carries the mask)."""
    return build_silhouette_stages(elements, config).smoothed


def render_background(elements, config):
    """
    Border fill layer: the professional silhouette for the ``special`` cut
    style, a plain geometric outline otherwise.
    """
    size = config.canvas_size
    buffer = new_buffer(size)

    if config.cut_style != "special":
        return composite_over(buffer, render_cut_shape(config))

    mask = build_silhouette_mask(elements, config)
    composite_over(buffer, fill_with_mask(size, config.border_rgb, mask[:, :, 3]))
    if config.show_cut_line:
        composite_over(
            buffer,
            cut_line_layer(mask, size, config.cut_line_rgb, config.cut_line_offset),
        )
    return buffer


def render_full(elements, config):
    """Background layer with every element drawn on top in list order."""
    buffer = render_background(elements, config)
    return render_elements(buffer, elements, silhouette=False)


def render_layer(elements, config, layer):
    if layer == "background":
        return render_background(elements, config)
    if layer == "full":
        return render_full(elements, config)
    raise ValueError(f"Unknown layer {layer!r}, expected one of {LAYERS}")


def encode_png(buffer):
    out = io.BytesIO()
    Image.fromarray(buffer).save(out, "PNG")
    return out.getvalue()


def get_layer_data(elements, config, layer):
    """
    Renders ``layer`` and returns it as PNG bytes.
    """
    try:
        data = encode_png(render_layer(elements, config, layer))
    except Exception as e:
        logger.error(f"Error rendering {layer} layer: {e}")
        raise
    logger.info(f"Rendered {layer} layer ({len(data)} bytes)")
    return data


def get_layer_data_url(elements, config, layer):
    """Same as ``get_layer_data`` but as a ``data:image/png;base64`` URL."""
    payload = base64.b64encode(get_layer_data(elements, config, layer)).decode("ascii")
    return f"data:image/png;base64,{payload}"
