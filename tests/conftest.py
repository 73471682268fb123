"""Shared fixtures: small real images and fake Gemini responses."""
from io import BytesIO
from unittest.mock import Mock

import pytest
from PIL import Image

from cinefeel.utils.image import encode_data_uri


def _image_bytes(image_format: str) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (1, 1), (0, 0, 0)).save(buffer, image_format)
    return buffer.getvalue()


@pytest.fixture
def black_pixel_jpeg():
    """1x1 black pixel JPEG."""
    return _image_bytes("JPEG")


@pytest.fixture
def black_pixel_png():
    return _image_bytes("PNG")


@pytest.fixture
def black_pixel_data_uri(black_pixel_jpeg):
    return encode_data_uri(black_pixel_jpeg, "image/jpeg")


@pytest.fixture
def gemini_response():
    """Factory for a Gemini response whose .text is the given string."""
    def _make(text):
        response = Mock()
        response.text = text
        return response
    return _make
