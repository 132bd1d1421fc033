"""Menu image encoding for Gemini multimodal requests.

Core Functions:
- encode_image(): Pair base64-encoded bytes with their MIME type
- read_image_file(): Read an image from disk in one awaitable step
- detect_mime_type(): Sniff the MIME type from magic bytes
- compress_image(): Optional JPEG re-encoding of oversized images
- to_data_uri(): Render an encoded image as a data: URI for previews
"""

import asyncio
import base64
from io import BytesIO
from pathlib import Path
from typing import Union

import filetype
from PIL import Image, UnidentifiedImageError

from src.models.models import EncodedImage
from src.services.errors import EncodingError
from src.utils.logger import logger

DEFAULT_MIME_TYPE = "image/jpeg"


def _read_all(image_source) -> bytes:
    """Return the full byte content of bytes-like input or a readable stream."""
    if isinstance(image_source, (bytes, bytearray, memoryview)):
        return bytes(image_source)

    if hasattr(image_source, "read"):
        try:
            data = image_source.read()
        except Exception as e:
            raise EncodingError() from e
        if isinstance(data, (bytes, bytearray)):
            return bytes(data)

    raise EncodingError()


def encode_image(image_source: Union[bytes, bytearray, memoryview], mime_type: str) -> EncodedImage:
    """Encode raw image bytes as base64 for an inline request part.

    Args:
        image_source: Raw image bytes, or a binary stream that is read to completion.
        mime_type: MIME type declared for the image. Passed through unchanged.

    Returns:
        EncodedImage with base64 data and the original MIME type.

    Raises:
        EncodingError: If the input is not bytes-like or the stream cannot be read.
    """
    image_bytes = _read_all(image_source)
    encoded = base64.b64encode(image_bytes).decode("ascii")
    logger.debug(f"Image converted to base64, size: {len(encoded)}")
    return EncodedImage(data=encoded, mime_type=mime_type)


async def read_image_file(path: Union[str, Path]) -> bytes:
    """Read an image file completely without blocking the event loop.

    Raises:
        EncodingError: If the file is missing or cannot be read.
    """
    try:
        return await asyncio.to_thread(Path(path).read_bytes)
    except OSError as e:
        logger.warning(f"Failed to read image file {path}: {e}")
        raise EncodingError() from e


def detect_mime_type(image_bytes: bytes, fallback: str = DEFAULT_MIME_TYPE) -> str:
    """Detect the image MIME type from magic bytes, not from the file name.

    Returns the fallback when the bytes are not a recognised image format.
    """
    kind = filetype.guess(image_bytes) if image_bytes else None
    if kind is None or not kind.mime.startswith("image/"):
        return fallback
    return kind.mime


def compress_image(image_bytes: bytes, max_width: int = 1024) -> tuple[bytes, str]:
    """Re-encode an image as a progressive JPEG, downscaling wide images.

    Args:
        image_bytes: Raw image bytes.
        max_width: Maximum output width in pixels. Aspect ratio is preserved.

    Returns:
        Tuple of (jpeg_bytes, "image/jpeg").

    Raises:
        EncodingError: If Pillow cannot decode the image.
    """
    try:
        img = Image.open(BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise EncodingError() from e

    # JPEG has no alpha channel, flatten onto white
    if img.mode in ("RGBA", "LA", "P"):
        img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        img = background
    elif img.mode != "RGB":
        img = img.convert("RGB")

    if img.width > max_width:
        ratio = max_width / img.width
        img = img.resize((max_width, max(1, int(img.height * ratio))), Image.Resampling.LANCZOS)

    output = BytesIO()
    img.save(output, format="JPEG", quality=85, optimize=True, progressive=True)
    compressed = output.getvalue()

    logger.debug(f"Image compressed: {len(image_bytes) / 1024:.1f}KB → {len(compressed) / 1024:.1f}KB")
    return compressed, "image/jpeg"


def to_data_uri(encoded: EncodedImage) -> str:
    return f"data:{encoded.mime_type};base64,{encoded.data}"


def validate_image_size(image_bytes: bytes, max_size_mb: int) -> bool:
    """Check raw byte length against the configured upload limit."""
    size_mb = len(image_bytes) / (1024 * 1024)
    if size_mb > max_size_mb:
        logger.warning(f"Image size {size_mb:.2f}MB exceeds limit of {max_size_mb}MB")
        return False
    return True

