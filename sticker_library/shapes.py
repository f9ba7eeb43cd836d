import io
import logging

import cairosvg
import numpy as np
import svgwrite
from PIL import Image

logger = logging.getLogger(__name__)

# Shape dimensions are laid out on a 600px canvas and scaled from there.
REFERENCE_CANVAS = 600
ROUND_RADIUS = 240
SQUARE_HALF = 240
RECT_HALF_WIDTH = 270
RECT_HALF_HEIGHT = 115
CUT_LINE_DASH = "4,2"


def _shape_svg(config):
    size = config.canvas_size
    k = size / REFERENCE_CANVAS
    c = size / 2
    b = config.border_width
    radius = config.corner_radius

    dwg = svgwrite.Drawing(size=(f"{size}px", f"{size}px"), profile="full", debug=False)
    paint = {"fill": config.border_color, "stroke": "none"}
    if config.show_cut_line:
        paint.update(
            stroke=config.cut_line_color,
            stroke_width=1,
            stroke_dasharray=CUT_LINE_DASH,
        )

    if config.cut_style == "round":
        shape = dwg.circle(center=(c, c), r=ROUND_RADIUS * k + b, **paint)
    elif config.cut_style in ("square", "rect"):
        if config.cut_style == "square":
            half_w = half_h = SQUARE_HALF * k + b
        else:
            half_w = RECT_HALF_WIDTH * k + b
            half_h = RECT_HALF_HEIGHT * k + b
        shape = dwg.rect(
            insert=(c - half_w, c - half_h),
            size=(2 * half_w, 2 * half_h),
            rx=radius,
            ry=radius,
            **paint,
        )
    else:
        raise ValueError(f"No geometric outline for cut style {config.cut_style!r}")

    dwg.add(shape)
    return dwg.tostring()


def render_cut_shape(config):
    """
    Rasterizes the plain geometric sticker outline (circle, rounded square
    or rounded rectangle) for the non-silhouette cut styles.
    """
    size = config.canvas_size
    png = cairosvg.svg2png(
        bytestring=_shape_svg(config).encode("utf-8"),
        output_width=size,
        output_height=size,
    )
    logger.debug(f"Rendered {config.cut_style} cut shape on a {size}px canvas")
    return np.array(Image.open(io.BytesIO(png)).convert("RGBA"), dtype=np.uint8)
