import base64
import binascii
import re
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from cinefeel.core.exceptions import InvalidImagePayloadError

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]*)*),(?P<data>.*)$", re.DOTALL)


def encode_data_uri(image_bytes: bytes, mime_type: str = "image/jpeg") -> str:
    """Embeds raw image bytes in a self-describing data URI."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def detect_image_mime(image_bytes: bytes) -> str:
    """
    Opens the bytes with Pillow and returns the image's MIME type.
    Raises InvalidImagePayloadError when the bytes are not a readable image.
    """
    if not image_bytes:
        raise InvalidImagePayloadError("Image payload is empty.")
    try:
        with Image.open(BytesIO(image_bytes)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise InvalidImagePayloadError(f"Payload is not a valid image: {e}") from e

    mime_type = Image.MIME.get(image_format or "")
    if not mime_type:
        raise InvalidImagePayloadError(f"Unsupported image format: {image_format}")
    return mime_type


def decode_data_uri(payload: Optional[str]) -> Tuple[str, bytes]:
    """
    Decodes a data URI (or a bare base64 string) into (mime_type, image_bytes).
    The MIME type is taken from the decoded image itself, not from the header.
    """
    if not payload or not payload.strip():
        raise InvalidImagePayloadError("Image payload is empty.")

    payload = payload.strip()
    match = DATA_URI_PATTERN.match(payload)
    if match:
        if ";base64" not in match.group("params"):
            raise InvalidImagePayloadError("Only base64 encoded data URIs are supported.")
        data = match.group("data")
    else:
        data = payload

    try:
        image_bytes = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImagePayloadError(f"Payload is not valid base64: {e}") from e

    return detect_image_mime(image_bytes), image_bytes
