import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_BORDER_WIDTH = 80
MAX_CORNER_RADIUS = 150

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Settings(BaseSettings):
    app_name: str = "Sticker Silhouette API"
    log_level: str = "INFO"

    cors_origins: list[str] = [
        "http://localhost:3000",
        "https://sticker.getonnet.dev",
    ]
    default_canvas_size: int = 600
    max_canvas_size: int = 4096
    default_font_family: str = "Inter"
    fonts_dir: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="STICKER_", env_file=".env", env_file_encoding="utf-8"
    )


settings = Settings()


def parse_hex_color(value):
    """
    Converts '#rgb' or '#rrggbb' into an (r, g, b) tuple.
    """
    match = _HEX_COLOR.match(value.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {value!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def _clamp(value, low, high):
    return max(low, min(high, value))


class RenderConfig(BaseModel):
    """
    Immutable per-render configuration.

    Out-of-range border and corner values are clamped here so the image
    pipeline can assume sane inputs.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    canvas_size: int = Field(default_factory=lambda: settings.default_canvas_size, gt=0, alias="canvasSize")
    cut_style: Literal["special", "round", "square", "rect"] = Field("special", alias="stickerMode")
    border_color: str = Field("#ffffff", alias="borderColor")
    border_width: float = Field(15, alias="borderWidth")
    corner_radius: float = Field(20, alias="cornerRadius")
    show_cut_line: bool = Field(True, alias="showPinkCutLine")

    # Tunables. Defaults reproduce the editor's empirical constants.
    dilation_method: Literal["sampled", "exact"] = "sampled"
    dilation_min_steps: int = Field(200, gt=0)
    dilation_steps_per_px: int = Field(10, ge=0)
    smoothing_radius: float = Field(0.8, ge=0)
    hysteresis_low: int = Field(127, ge=0, le=255)
    hysteresis_high: int = Field(132, ge=0, le=255)
    cut_line_offset: float = Field(0.8, ge=0)
    cut_line_color: str = "#FF1493"
    background_threshold: int = Field(10, ge=0, le=255)

    @field_validator("canvas_size")
    @classmethod
    def _check_canvas_size(cls, value):
        if value > settings.max_canvas_size:
            raise ValueError(f"canvas_size must be at most {settings.max_canvas_size}")
        return value

    @field_validator("border_width")
    @classmethod
    def _clamp_border_width(cls, value):
        return _clamp(value, 0, MAX_BORDER_WIDTH)

    @field_validator("corner_radius")
    @classmethod
    def _clamp_corner_radius(cls, value):
        return _clamp(value, 0, MAX_CORNER_RADIUS)

    @field_validator("border_color", "cut_line_color")
    @classmethod
    def _check_color(cls, value):
        parse_hex_color(value)
        return value

    @field_validator("hysteresis_high")
    @classmethod
    def _check_hysteresis(cls, value, info):
        low = info.data.get("hysteresis_low")
        if low is not None and value <= low:
            raise ValueError("hysteresis_high must be greater than hysteresis_low")
        return value

    @property
    def border_rgb(self):
        return parse_hex_color(self.border_color)

    @property
    def cut_line_rgb(self):
        return parse_hex_color(self.cut_line_color)
