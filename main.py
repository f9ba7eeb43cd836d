import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from sticker_library.compositor import LAYERS, get_layer_data, get_layer_data_url
from sticker_library.config import RenderConfig, settings
from sticker_library.elements import StickerElement, prepare_elements

# Set up logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

# Setup CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RenderRequest(BaseModel):
    config: RenderConfig = Field(default_factory=RenderConfig)
    elements: List[StickerElement] = []


@app.get("/render-sticker/")
async def render_sticker_info():
    return JSONResponse(content={
        "message": "This endpoint renders sticker background and full layers.",
        "usage": "Send a POST request with a JSON body holding 'config' and 'elements'. "
                 "POST to /render-sticker/{layer} for a single PNG layer.",
        "layers": list(LAYERS),
    })


@app.post("/render-sticker/")
def render_sticker_endpoint(request: RenderRequest):
    elements = prepare_elements(request.elements)
    try:
        layers = {layer: get_layer_data_url(elements, request.config, layer) for layer in LAYERS}
    except Exception as e:
        logger.error(f"Error rendering sticker: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Rendered sticker with {len(elements)} element(s)")
    return JSONResponse(content=layers)


@app.post("/render-sticker/{layer}")
def render_layer_endpoint(layer: str, request: RenderRequest):
    if layer not in LAYERS:
        raise HTTPException(status_code=404, detail=f"Unknown layer: {layer}")

    elements = prepare_elements(request.elements)
    try:
        data = get_layer_data(elements, request.config, layer)
    except Exception as e:
        logger.error(f"Error rendering {layer} layer: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

    return Response(content=data, media_type="image/png")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
