from sticker_library.compositor import (
    build_silhouette_mask,
    build_silhouette_stages,
    get_layer_data,
    get_layer_data_url,
    render_layer,
)
from sticker_library.config import RenderConfig, settings
from sticker_library.elements import StickerElement, prepare_elements

__all__ = [
    "RenderConfig",
    "StickerElement",
    "build_silhouette_mask",
    "build_silhouette_stages",
    "get_layer_data",
    "get_layer_data_url",
    "prepare_elements",
    "render_layer",
    "settings",
]
