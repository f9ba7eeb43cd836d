import logging

from sticker_library.buffers import alpha_plane, check_buffer, fill_with_mask, over, shift_plane, to_uint8

logger = logging.getLogger(__name__)

CUT_LINE_COLOR = (0xFF, 0x14, 0x93)
DEFAULT_OFFSET = 0.8


def extract_cut_line(mask, size, offset=DEFAULT_OFFSET):
    """
    Returns the alpha of a thin band hugging the outside of ``mask``.

    The mask is grown by unit nudges in the four axis directions, then the
    original mask is cut out of the grown copy.
    """
    check_buffer(mask, size)
    original = alpha_plane(mask)

    grown = original.copy()
    for dx, dy in ((-offset, 0), (offset, 0), (0, -offset), (0, offset)):
        grown = over(grown, shift_plane(original, dx, dy))

    band = grown * (1.0 - original)
    return to_uint8(band)


def cut_line_layer(mask, size, color=CUT_LINE_COLOR, offset=DEFAULT_OFFSET):
    """RGBA layer painting the cut-line band in ``color``."""
    band = extract_cut_line(mask, size, offset)
    logger.debug(f"Cut line covers {int((band > 0).sum())} pixel(s)")
    return fill_with_mask(size, color, band)
