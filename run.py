import json
import logging
import os
import sys

from PIL import Image

from sticker_library.compositor import get_layer_data
from sticker_library.config import RenderConfig, settings
from sticker_library.elements import ElementKind, StickerElement, prepare_elements

logger = logging.getLogger(__name__)


def load_scene(scene_path):
    """
    Reads a scene file: {"config": {...}, "elements": [...]}.

    Image ``src`` values may be data URLs or paths relative to the scene file.
    """
    with open(scene_path, 'r', encoding='utf-8') as scene_file:
        scene = json.load(scene_file)

    config = RenderConfig(**scene.get("config", {}))
    base_dir = os.path.dirname(os.path.abspath(scene_path))

    elements = []
    for raw in scene.get("elements", []):
        element = StickerElement(**raw)
        if element.type == ElementKind.IMAGE and element.src:
            candidate = os.path.join(base_dir, element.src)
            if os.path.exists(candidate):
                bitmap = Image.open(candidate).convert("RGBA")
                element = element.model_copy(update={"bitmap": bitmap})
        elements.append(element)

    # Data URLs and text boxes are handled the same way as over HTTP
    return config, prepare_elements(elements)


def write_layer(elements, config, layer, output_path):
    with open(output_path, "wb") as out:
        out.write(get_layer_data(elements, config, layer))
    logger.info(f"Saved {layer} layer to {output_path}")


if __name__ == "__main__":
    # Usage:
    # python run.py scene.json background.png full.png
    if len(sys.argv) < 4:
        print("Usage: python run.py <scene_json> <background_png> <full_png>")
        sys.exit(1)

    logging.basicConfig(level=settings.log_level)

    scene_json = sys.argv[1]
    background_png = sys.argv[2]
    full_png = sys.argv[3]

    # Step 1: Load elements and render configuration
    config, elements = load_scene(scene_json)

    # Step 2: Border / silhouette layer
    write_layer(elements, config, "background", background_png)

    # Step 3: Composite with every element on top
    write_layer(elements, config, "full", full_png)

    print("Rendering complete!")
