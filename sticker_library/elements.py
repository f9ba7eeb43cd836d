import base64
import binascii
import io
import logging
from enum import Enum
from typing import Any, Optional

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, field_validator

from sticker_library.config import parse_hex_color, settings
from sticker_library.fonts import load_font

logger = logging.getLogger(__name__)

# Icon footprint ahead of the text, in multiples of the font size.
ICON_TEXT_OFFSET = 1.4
MEASURE_MARGIN = 10


class ElementKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


class SocialIcon(str, Enum):
    INSTAGRAM = "instagram"
    WHATSAPP = "whatsapp"


class StickerElement(BaseModel):
    """
    A positioned, rotated drawable placed on the canvas by the editor.

    ``bitmap`` holds the decoded image for image elements. It stays ``None``
    until decoding has finished; such elements are skipped while rendering.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: str
    type: ElementKind
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0

    content: str = ""
    font_size: float = Field(24, alias="fontSize")
    font_family: str = Field(default_factory=lambda: settings.default_font_family, alias="fontFamily")
    fill: str = "#000000"
    is_social: Optional[SocialIcon] = Field(None, alias="isSocial")
    use_official_color: bool = Field(True, alias="useOfficialColor")
    social_color: Optional[str] = Field(None, alias="socialColor")

    src: Optional[str] = None
    bitmap: Optional[Any] = Field(None, exclude=True)

    @field_validator("fill", "social_color")
    @classmethod
    def _check_color(cls, value):
        if value is not None:
            parse_hex_color(value)
        return value

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    @property
    def text_offset(self):
        """Horizontal start of the text run inside the element box."""
        return self.font_size * ICON_TEXT_OFFSET if self.is_social else 0.0


def decode_image_source(src):
    """
    Decodes a data URL (or bare base64 payload) into an RGBA PIL image.
    """
    payload = src.split(",", 1)[1] if src.startswith("data:") else src
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Image source is not valid base64: {e}") from e
    image = Image.open(io.BytesIO(raw))
    image.load()
    return image.convert("RGBA")


def measure_text(content, font_size, font_family, social=None):
    """
    Returns the (width, height) box the editor assigns to a text element.
    """
    font = load_font(font_family, font_size)
    text_width = font.getlength(content or "")
    icon_padding = font_size * ICON_TEXT_OFFSET if social else 0
    return text_width + icon_padding + MEASURE_MARGIN, font_size * 1.2


def prepare_elements(elements):
    """
    Decodes image payloads and sizes text elements that arrived without a box.

    Images whose payload cannot be decoded keep ``bitmap = None`` and are
    skipped by the rasterizer.
    """
    prepared = []
    for element in elements:
        updates = {}
        if element.type == ElementKind.IMAGE and element.bitmap is None and element.src:
            try:
                updates["bitmap"] = decode_image_source(element.src)
            except (ValueError, OSError) as e:
                logger.warning(f"Could not decode image for element {element.id}: {e}")
        if element.type == ElementKind.TEXT and (element.width <= 0 or element.height <= 0):
            width, height = measure_text(
                element.content, element.font_size, element.font_family, element.is_social
            )
            updates.update(width=width, height=height)
        prepared.append(element.model_copy(update=updates) if updates else element)
    return prepared
