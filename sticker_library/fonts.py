import logging
import os
from functools import lru_cache

from PIL import ImageFont

from sticker_library.config import settings

logger = logging.getLogger(__name__)

_FONT_EXTENSIONS = (".ttf", ".otf")


def _candidate_names(family):
    base = family.strip().replace(" ", "")
    for stem in (f"{base}-Bold", f"{base}Bold", base):
        for ext in _FONT_EXTENSIONS:
            yield stem + ext


@lru_cache(maxsize=64)
def load_font(family, size):
    """
    Resolves a bold face for ``family`` at ``size`` pixels.

    Looks in ``settings.fonts_dir`` first, then lets Pillow search the
    system font directories, and finally falls back to Pillow's bundled
    scalable font so glyph outlines are always available.
    """
    size = max(1, int(round(size)))
    for name in _candidate_names(family):
        if settings.fonts_dir:
            path = os.path.join(settings.fonts_dir, name)
            if os.path.exists(path):
                return ImageFont.truetype(path, size)
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    logger.debug(f"Font family {family!r} not found, using Pillow default font")
    return ImageFont.load_default(size=size)
