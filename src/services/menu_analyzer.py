"""Menu analysis: image + preferences in, dish recommendations out.

Pipeline (strictly linear, one request in flight):
1. Reject a missing image before any network activity
2. Wait on the rate limiter
3. Encode the image as base64 (optionally recompressing it first)
4. Build the prompt from the preferences
5. Send prompt + image to Gemini in a single call (no retries)
6. Strip markdown code fences the model sometimes adds
7. Parse the cleaned text into an AnalysisResult

Every failure is classified at this boundary and re-raised as one
MenuAnalysisError subclass with a user-facing message.
"""

import json
import re
import time
from typing import Optional

from pydantic import ValidationError

from src.media.image_encoder import compress_image, encode_image
from src.models.models import AnalysisResult, Preferences
from src.prompts.prompts import build_prompt
from src.services.errors import (
    AuthError,
    MenuAnalysisError,
    MissingImageError,
    ParseError,
    RateLimitExceededError,
    UnknownError,
)
from src.services.gemini_client import GeminiClient, TransportError, TransportStatus
from src.utils.config import config
from src.utils.logger import logger
from src.utils.rate_limiter import RateLimiter

_FENCE_PATTERN = re.compile(r"```(?:json)?\n?")


def strip_code_fences(response_text: str) -> str:
    """Remove ``` and ```json markers (and the newline after them), then trim."""
    return _FENCE_PATTERN.sub("", response_text).strip()


def parse_analysis_result(cleaned_text: str) -> AnalysisResult:
    """Parse fence-free response text into an AnalysisResult.

    No fallback extraction: the text must be a JSON object with a
    recommendations list in the Recommendation shape.

    Raises:
        ParseError: If the text is not valid JSON or does not match the shape.
    """
    try:
        parsed = json.loads(cleaned_text)
    except json.JSONDecodeError as e:
        logger.warning(f"Response is not valid JSON: {e}")
        raise ParseError() from e

    try:
        return AnalysisResult.model_validate(parsed)
    except ValidationError as e:
        logger.warning(f"Response JSON does not match the recommendation schema: {e.error_count()} error(s)")
        raise ParseError() from e


def classify_transport_error(error: TransportError) -> MenuAnalysisError:
    if error.status == TransportStatus.AUTH:
        return AuthError()
    if error.status == TransportStatus.RATE_LIMITED:
        return RateLimitExceededError()
    return UnknownError(error.message)


class MenuAnalyzer:
    """Runs menu analyses against Gemini behind a rate limiter."""

    def __init__(
        self,
        client: GeminiClient,
        rate_limiter: Optional[RateLimiter] = None,
        compress: bool = False,
        compress_max_width: int = 1024,
    ) -> None:
        self.client = client
        self.rate_limiter = rate_limiter or RateLimiter()
        self.compress = compress
        self.compress_max_width = compress_max_width

    async def analyze_menu(
        self,
        image_bytes: Optional[bytes],
        mime_type: str,
        preferences: Optional[Preferences] = None,
    ) -> AnalysisResult:
        """Recommend dishes from a menu photo.

        Args:
            image_bytes: Raw menu image bytes. Empty or None is rejected.
            mime_type: MIME type declared for the image.
            preferences: Dining preferences; defaults to all fields unspecified.

        Returns:
            AnalysisResult in the model's order, unmodified.

        Raises:
            MissingImageError: No image was provided (no network call is made).
            EncodingError: The image could not be read or encoded.
            AuthError: Gemini rejected the API key.
            RateLimitExceededError: Gemini reported throttling or quota exhaustion.
            ParseError: The reply is not valid JSON after fence stripping.
            UnknownError: Any other failure, with the underlying message.
        """
        if not image_bytes:
            raise MissingImageError()

        preferences = preferences or Preferences()
        started = time.perf_counter()

        try:
            await self.rate_limiter.acquire()

            logger.info("🔍 Starting menu analysis...")
            logger.info(f"Image: {mime_type}, {len(image_bytes)} bytes")
            logger.debug(f"Preferences: {preferences.model_dump()}")

            if self.compress:
                image_bytes, mime_type = compress_image(image_bytes, max_width=self.compress_max_width)
            encoded = encode_image(image_bytes, mime_type)
            prompt = build_prompt(preferences)

            logger.info(f"🤖 Sending request to Gemini ({self.client.model})...")
            response_text = await self.client.generate(prompt, encoded)
            logger.debug(f"Raw response: {response_text}")

            cleaned_text = strip_code_fences(response_text)
            result = parse_analysis_result(cleaned_text)

        except MenuAnalysisError as e:
            logger.error(f"❌ Menu analysis failed: {e.message}")
            raise
        except TransportError as e:
            classified = classify_transport_error(e)
            logger.error(f"❌ Menu analysis failed: {classified.message}")
            raise classified from e
        except Exception as e:
            logger.error(f"❌ Unexpected error in menu analysis: {e}", exc_info=True)
            raise UnknownError(str(e)) from e

        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"Parsed {len(result.recommendations)} recommendation(s) in {duration_ms}ms",
            extra={"duration_ms": duration_ms},
        )
        return result


_default_analyzer: Optional[MenuAnalyzer] = None


def get_default_analyzer() -> MenuAnalyzer:
    """Process-wide analyzer built from configuration on first use."""
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = MenuAnalyzer(
            client=GeminiClient(
                api_key=config.GEMINI_API_KEY,
                model=config.GEMINI_MODEL,
                temperature=config.TEMPERATURE,
            ),
            rate_limiter=RateLimiter(min_interval_ms=config.MIN_REQUEST_INTERVAL_MS),
            compress=config.COMPRESS_IMG,
            compress_max_width=config.COMPRESS_IMG_MAX_WIDTH,
        )
    return _default_analyzer


async def analyze_menu(
    image_bytes: Optional[bytes],
    mime_type: str,
    preferences: Optional[Preferences] = None,
) -> AnalysisResult:
    """Analyze a menu with the default analyzer. See MenuAnalyzer.analyze_menu."""
    return await get_default_analyzer().analyze_menu(image_bytes, mime_type, preferences)
