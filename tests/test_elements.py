import base64
import io

import pytest
from PIL import Image
from pydantic import ValidationError

from sticker_library.elements import (
    ElementKind,
    SocialIcon,
    StickerElement,
    decode_image_source,
    measure_text,
    prepare_elements,
)


def _png_data_url(color=(1, 2, 3, 255), size=(4, 3)):
    out = io.BytesIO()
    Image.new("RGBA", size, color).save(out, "PNG")
    return "data:image/png;base64," + base64.b64encode(out.getvalue()).decode("ascii")


def test_element_from_editor_payload():
    element = StickerElement(**{
        "id": "abc",
        "type": "text",
        "x": 10,
        "y": 20,
        "width": 100,
        "height": 30,
        "rotation": 45,
        "content": "Hi",
        "fontSize": 28,
        "fontFamily": "Inter",
        "isSocial": "instagram",
        "useOfficialColor": False,
        "socialColor": "#111111",
    })
    assert element.type == ElementKind.TEXT
    assert element.is_social == SocialIcon.INSTAGRAM
    assert element.center == (60, 35)
    assert element.text_offset == pytest.approx(28 * 1.4)


def test_decode_data_url():
    image = decode_image_source(_png_data_url())
    assert image.mode == "RGBA"
    assert image.size == (4, 3)
    assert image.getpixel((0, 0)) == (1, 2, 3, 255)


def test_decode_bare_base64():
    payload = _png_data_url().split(",", 1)[1]
    assert decode_image_source(payload).size == (4, 3)


def test_decode_rejects_garbage():
    with pytest.raises(ValueError):
        decode_image_source("data:image/png;base64,@@not-base64@@")


def test_measure_text():
    plain_w, plain_h = measure_text("Hello", 24, "Inter")
    social_w, social_h = measure_text("Hello", 24, "Inter", SocialIcon.WHATSAPP)
    assert plain_h == social_h == pytest.approx(24 * 1.2)
    assert social_w - plain_w == pytest.approx(24 * 1.4)
    assert plain_w > 10
    assert measure_text("", 24, "Inter")[0] == 10


@pytest.mark.parametrize("field", ["fill", "socialColor"])
def test_element_colors_must_be_hex(field):
    with pytest.raises(ValidationError):
        StickerElement(**{"id": "t", "type": "text", "content": "Hi", field: "red"})


def test_social_color_is_optional():
    element = StickerElement(id="t", type="text", content="Hi", fill="#abc", socialColor=None)
    assert element.social_color is None
    assert element.fill == "#abc"


def test_prepare_elements_decodes_and_measures():
    elements = prepare_elements([
        StickerElement(id="img", type="image", width=4, height=3, src=_png_data_url()),
        StickerElement(id="bad", type="image", width=4, height=3, src="data:image/png;base64,AAAA"),
        StickerElement(id="txt", type="text", content="Hello", fontSize=30),
        StickerElement(id="boxed", type="text", content="Hello", width=50, height=20),
    ])
    image, bad, text, boxed = elements
    assert image.bitmap.size == (4, 3)
    assert bad.bitmap is None
    assert text.width == pytest.approx(measure_text("Hello", 30, text.font_family)[0])
    assert text.height == pytest.approx(36)
    assert (boxed.width, boxed.height) == (50, 20)
