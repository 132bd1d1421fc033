"""Gemini transport for menu analysis.

Wraps the google-genai SDK for the single multimodal request made per
analysis, and translates SDK failures into a TransportError carrying a
TransportStatus so callers can classify failures without reading messages.

Also provides list_available_models(), the best-effort diagnostic lookup
issued once at startup.
"""

import asyncio
import base64
from enum import Enum
from typing import Optional

import aiohttp
import httpx
from google import genai
from google.genai import errors, types

from src.models.models import EncodedImage
from src.utils.logger import logger


class TransportStatus(str, Enum):
    """Kind of failure reported by the Gemini transport."""

    AUTH = "auth"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    OTHER = "other"


class TransportError(Exception):
    """Failure of the outbound Gemini call, with a structured status."""

    def __init__(self, status: TransportStatus, message: str, code: Optional[int] = None) -> None:
        self.status = status
        self.code = code
        self.message = message
        super().__init__(message)


# API status strings reported by Google APIs alongside the HTTP code
_AUTH_STATUSES = ("UNAUTHENTICATED", "PERMISSION_DENIED")
_RATE_LIMIT_STATUSES = ("RESOURCE_EXHAUSTED",)


def classify_api_error(error: errors.APIError) -> TransportStatus:
    """Map a google-genai APIError to a TransportStatus.

    Uses the HTTP code and API status. The one exception is an invalid key,
    which Gemini reports as 400 INVALID_ARGUMENT with reason API_KEY_INVALID
    in the error details.
    """
    code = getattr(error, "code", None)
    status = (getattr(error, "status", None) or "").upper()

    if code in (401, 403) or status in _AUTH_STATUSES:
        return TransportStatus.AUTH
    if code == 429 or status in _RATE_LIMIT_STATUSES:
        return TransportStatus.RATE_LIMITED
    if code == 400 and "API_KEY_INVALID" in str(getattr(error, "details", "")):
        return TransportStatus.AUTH
    if code is not None and code >= 500:
        return TransportStatus.UNAVAILABLE
    return TransportStatus.OTHER


class GeminiClient:
    """Issues one generate_content call per request, never retries."""

    def __init__(self, api_key: str, model: str, temperature: Optional[float] = None) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if not self.api_key:
            raise TransportError(TransportStatus.AUTH, "API key is missing")
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _generation_config(self) -> Optional[types.GenerateContentConfig]:
        if self.temperature is None:
            return None
        return types.GenerateContentConfig(temperature=self.temperature)

    async def generate(self, prompt: str, image: EncodedImage) -> str:
        """Send the prompt and inline image as a two-part request.

        Args:
            prompt: Instruction text.
            image: Base64 image payload with its MIME type.

        Returns:
            Raw response text (may still be wrapped in markdown fences).

        Raises:
            TransportError: If the call fails or the response carries no text.
        """
        client = self._get_client()
        image_part = types.Part.from_bytes(data=base64.b64decode(image.data), mime_type=image.mime_type)

        try:
            # Sync SDK call runs in a worker thread to keep the event loop free
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.model,
                contents=[prompt, image_part],
                config=self._generation_config(),
            )
        except errors.APIError as e:
            status = classify_api_error(e)
            logger.warning(f"Gemini API error ({e.code} {e.status}): classified as {status.value}")
            raise TransportError(status, getattr(e, "message", None) or str(e), code=e.code) from e
        except (httpx.TransportError, OSError) as e:
            raise TransportError(TransportStatus.UNAVAILABLE, str(e)) from e

        text = response.text
        if not text:
            raise TransportError(TransportStatus.OTHER, "Gemini returned an empty response")
        return text


async def safe_execute_async(coro, operation_name: str, log_level: str = "warning", default_return=None):
    """Await a best-effort operation, logging and swallowing any failure.

    Args:
        coro: Awaitable to execute.
        operation_name: Description for logging.
        log_level: Logging level used on failure ("debug", "warning", "error").
        default_return: Value returned when the operation fails.
    """
    try:
        return await coro
    except Exception as e:
        getattr(logger, log_level, logger.warning)(f"{operation_name}: {e}")
        return default_return


async def _fetch_models(api_key: str, endpoint: str, timeout_s: int) -> list[dict]:
    async with aiohttp.ClientSession() as session:
        async with session.get(
            endpoint,
            params={"key": api_key},
            timeout=aiohttp.ClientTimeout(total=timeout_s),
        ) as response:
            data = await response.json(content_type=None)
            return data.get("models") or []


async def list_available_models(api_key: str, endpoint: str, timeout_s: int = 10) -> Optional[list[dict]]:
    """Log the models visible to this API key (diagnostics only).

    Returns:
        The list of model descriptors, or None if the lookup failed.
        Failures are logged and never raised.
    """
    models = await safe_execute_async(
        _fetch_models(api_key, endpoint, timeout_s),
        "Error listing models",
        log_level="error",
        default_return=None,
    )
    if models is not None:
        logger.info(f"📋 Available models: {[m.get('name') for m in models]}")
    return models
