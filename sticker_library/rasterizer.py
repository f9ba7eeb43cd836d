import logging
import math

import numpy as np
from PIL import Image, ImageDraw

from sticker_library.buffers import composite_over, warp_rgba
from sticker_library.config import parse_hex_color
from sticker_library.elements import ElementKind
from sticker_library.fonts import load_font
from sticker_library.icons import ICON_ANCHOR, icon_fill, render_icon_layer

logger = logging.getLogger(__name__)


def _element_matrix(element, pivot):
    """
    Maps tile pixel coordinates onto the canvas.

    ``pivot`` is the centre of the element box in tile coordinates. It lands
    on the element centre, and the tile is rotated clockwise by
    ``element.rotation`` degrees around it.
    """
    theta = element.rotation * math.pi / 180
    c, s = math.cos(theta), math.sin(theta)
    cx, cy = element.center
    px, py = pivot
    return [
        [c, -s, cx - (c * px - s * py)],
        [s, c, cy - (s * px + c * py)],
    ]


def _image_tile(element, silhouette):
    bitmap = element.bitmap
    size = (max(1, int(round(element.width))), max(1, int(round(element.height))))
    scaled = bitmap.convert("RGBA").resize(size, Image.Resampling.LANCZOS)
    tile = np.array(scaled, dtype=np.uint8)
    if silhouette:
        # Keep alpha, flatten colour to black.
        tile[tile[:, :, 3] > 0, :3] = 0
    # Pivot on the resized bitmap, not the fractional box
    return tile, (tile.shape[1] / 2, tile.shape[0] / 2)


def _text_tile(element, silhouette):
    font_size = element.font_size
    font = load_font(element.font_family, font_size)
    pad = int(math.ceil(font_size))

    text_x = element.text_offset
    run_width = text_x + font.getlength(element.content or "")
    width = int(math.ceil(max(element.width, run_width))) + 2 * pad
    height = int(math.ceil(max(element.height, 1))) + 2 * pad
    middle = pad + element.height / 2

    tile = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    if element.is_social:
        color = icon_fill(element, silhouette)
        icon = render_icon_layer(
            element.is_social,
            color,
            font_size,
            (pad + font_size * ICON_ANCHOR, middle),
            (width, height),
        )
        tile = Image.alpha_composite(tile, icon)

    if element.content:
        text_mask = Image.new("L", (width, height), 0)
        ImageDraw.Draw(text_mask).text(
            (pad + text_x, middle), element.content, fill=255, font=font, anchor="lm"
        )
        rgb = (0, 0, 0) if silhouette else parse_hex_color(element.fill or "#000000")
        text_layer = Image.new("RGBA", (width, height), rgb + (255,))
        text_layer.putalpha(text_mask)
        tile = Image.alpha_composite(tile, text_layer)

    pivot = (pad + element.width / 2, pad + element.height / 2)
    return np.array(tile, dtype=np.uint8), pivot


def rasterize_element(element, size, silhouette=False):
    """
    Draws one element onto a fresh transparent ``size`` x ``size`` layer.

    Returns ``None`` when the element has nothing to draw yet (an image
    whose bitmap is still decoding, or an empty box).
    """
    if element.type == ElementKind.IMAGE:
        if element.bitmap is None:
            logger.debug(f"Skipping image element {element.id}: bitmap not decoded yet")
            return None
        if element.width <= 0 or element.height <= 0:
            return None
        tile, pivot = _image_tile(element, silhouette)
    else:
        if not element.content and not element.is_social:
            return None
        tile, pivot = _text_tile(element, silhouette)

    return warp_rgba(tile, _element_matrix(element, pivot), size)


def render(buffer, element, silhouette=False):
    """
    Composites ``element`` into ``buffer`` in place.

    A missing buffer (no drawing surface) makes this a no-op.
    """
    if buffer is None:
        logger.debug(f"No drawing surface for element {element.id}, nothing rendered")
        return buffer
    layer = rasterize_element(element, buffer.shape[0], silhouette)
    if layer is not None:
        composite_over(buffer, layer)
    return buffer


def render_elements(buffer, elements, silhouette=False):
    """Draws elements in list order; later entries paint over earlier ones."""
    for element in elements:
        render(buffer, element, silhouette)
    return buffer
