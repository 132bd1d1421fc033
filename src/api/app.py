"""FastAPI application serving the menu analysis UI and API.

Routes:
- GET  /             single-page UI (upload, preferences, results)
- POST /api/analyze  multipart upload -> recommendations or a user-facing error
- GET  /health       configuration status
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError

from src.api.page import INDEX_HTML
from src.api.presentation import AnalyzeResponse, ErrorResponse, build_cards
from src.media.image_encoder import detect_mime_type, validate_image_size
from src.models.models import Preferences
from src.services.errors import EncodingError, MenuAnalysisError, MissingImageError
from src.services.gemini_client import list_available_models
from src.services.menu_analyzer import MenuAnalyzer, get_default_analyzer
from src.utils.config import config
from src.utils.logger import logger


def _error_response(error: MenuAnalysisError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=ErrorResponse(error=error.message).model_dump())


async def _read_upload(image: Optional[UploadFile]) -> tuple[bytes, str]:
    """Read an uploaded menu image and resolve its MIME type.

    Raises:
        MissingImageError: No file was uploaded or it is empty.
        EncodingError: The file is not an image, too large, or unreadable.
    """
    if image is None or not image.filename:
        raise MissingImageError()

    try:
        image_bytes = await image.read()
    except Exception as e:
        raise EncodingError() from e
    if not image_bytes:
        raise MissingImageError()

    if not validate_image_size(image_bytes, config.MAX_IMAGE_SIZE_MB):
        raise EncodingError(f"Image too large. Maximum size is {config.MAX_IMAGE_SIZE_MB}MB")

    mime_type = image.content_type or ""
    if not mime_type.startswith("image/"):
        mime_type = detect_mime_type(image_bytes, fallback="")
    if not mime_type:
        raise EncodingError("Please upload an image file (JPEG, PNG, WEBP...).")

    return image_bytes, mime_type


def create_app(analyzer: Optional[MenuAnalyzer] = None, list_models_on_startup: Optional[bool] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        analyzer: Analyzer used by /api/analyze. Defaults to the process-wide one.
        list_models_on_startup: Log available models at startup. Defaults to config.
    """
    if list_models_on_startup is None:
        list_models_on_startup = config.LIST_MODELS_ON_STARTUP

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting Menu Advisor (model: {config.GEMINI_MODEL})")
        if not config.has_api_key:
            logger.warning("⚠️ API Key is missing! Please add GEMINI_API_KEY to your .env file")
        if list_models_on_startup:
            await list_available_models(
                config.GEMINI_API_KEY,
                config.MODELS_ENDPOINT,
                timeout_s=config.MODELS_REQUEST_TIMEOUT_S,
            )
        yield
        logger.info("Menu Advisor shutting down")

    app = FastAPI(
        title="Menu Advisor",
        description="Upload a menu photo and get AI-picked dishes for your preferences",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.analyzer = analyzer or get_default_analyzer()

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(INDEX_HTML)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "model": config.GEMINI_MODEL, "api_key_configured": config.has_api_key}

    @app.post("/api/analyze", response_model=AnalyzeResponse, responses={400: {"model": ErrorResponse}})
    async def analyze(
        request: Request,
        image: Optional[UploadFile] = File(None),
        dietary: str = Form(""),
        budget: str = Form(""),
        mood: str = Form(""),
    ):
        try:
            preferences = Preferences(dietary=dietary, budget=budget, mood=mood)
        except ValidationError as e:
            logger.warning(f"Rejected preferences: {e.error_count()} validation error(s)")
            return JSONResponse(status_code=422, content={"error": "Preferences are too long. Please shorten them."})

        try:
            image_bytes, mime_type = await _read_upload(image)
            result = await request.app.state.analyzer.analyze_menu(image_bytes, mime_type, preferences)
        except MenuAnalysisError as e:
            return _error_response(e)

        response = AnalyzeResponse(result=result, cards=build_cards(result))
        return JSONResponse(content=response.model_dump(by_alias=True))

    return app
