import pytest
from pydantic import ValidationError

from sticker_library.config import RenderConfig, parse_hex_color, settings


def test_defaults():
    config = RenderConfig()
    assert config.canvas_size == 600
    assert config.cut_style == "special"
    assert config.border_width == 15
    assert config.corner_radius == 20
    assert config.show_cut_line is True
    assert config.dilation_min_steps == 200
    assert (config.hysteresis_low, config.hysteresis_high) == (127, 132)
    assert config.cut_line_rgb == (255, 20, 147)


def test_out_of_range_values_are_clamped():
    assert RenderConfig(border_width=-5).border_width == 0
    assert RenderConfig(border_width=120).border_width == 80
    assert RenderConfig(corner_radius=-1).corner_radius == 0
    assert RenderConfig(corner_radius=400).corner_radius == 150


def test_editor_field_names_are_accepted():
    config = RenderConfig(**{
        "canvasSize": 300,
        "stickerMode": "square",
        "borderColor": "#abc",
        "borderWidth": 30,
        "cornerRadius": 12,
        "showPinkCutLine": False,
    })
    assert config.canvas_size == 300
    assert config.cut_style == "square"
    assert config.border_rgb == (0xAA, 0xBB, 0xCC)
    assert config.show_cut_line is False


def test_config_is_immutable():
    config = RenderConfig()
    with pytest.raises(ValidationError):
        config.border_width = 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"canvas_size": 0},
        {"canvas_size": 100000},
        {"border_width": None},
        {"corner_radius": None},
        {"border_color": "blue"},
        {"cut_style": "star"},
        {"hysteresis_low": 140, "hysteresis_high": 130},
    ],
)
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        RenderConfig(**kwargs)


def test_canvas_size_cap_comes_from_settings():
    assert RenderConfig(canvas_size=settings.max_canvas_size).canvas_size == settings.max_canvas_size
    with pytest.raises(ValidationError):
        RenderConfig(canvas_size=settings.max_canvas_size + 1)


def test_parse_hex_color():
    assert parse_hex_color("#FF1493") == (255, 20, 147)
    assert parse_hex_color("fff") == (255, 255, 255)
    with pytest.raises(ValueError):
        parse_hex_color("#12345")
