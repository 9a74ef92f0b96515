"""Image acquisition — decode files, bytes, and data URLs into RasterImage."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import os
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from shapescan.models.image import InvalidImageError, RasterImage

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = "data:"


def decode_image_bytes(raw: bytes) -> RasterImage:
    """Decode PNG/JPEG/GIF/BMP bytes into an RGBA RasterImage."""
    try:
        with Image.open(io.BytesIO(raw)) as img:
            pixels = np.array(img.convert("RGBA"))
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise InvalidImageError(f"cannot decode image: {e}") from e
    except Image.DecompressionBombError as e:
        raise InvalidImageError(f"image too large: {e}") from e
    image = RasterImage.from_array(pixels)
    logger.info("Decoded image %dx%d (%d bytes)", image.width, image.height, len(raw))
    return image


def decode_data_url(text: str) -> bytes:
    """Extract the payload of a ``data:...;base64,`` URL or a bare base64 string."""
    payload = text.strip()
    if payload.startswith(_DATA_URL_PREFIX):
        header, sep, payload = payload.partition(",")
        if not sep or ";base64" not in header:
            raise InvalidImageError("only base64-encoded data URLs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError(f"invalid base64 image payload: {e}") from e


def load_image(source: str | bytes | Path) -> RasterImage:
    """Load an image from a path, encoded bytes, a data URL, or a bare base64 string."""
    if isinstance(source, (bytes, bytearray)):
        return decode_image_bytes(bytes(source))
    if isinstance(source, Path):
        return _load_path(source)
    if source.startswith(_DATA_URL_PREFIX):
        return decode_image_bytes(decode_data_url(source))
    if len(source) < 4096 and os.path.isfile(source):
        return _load_path(Path(source))
    return decode_image_bytes(decode_data_url(source))


def _load_path(path: Path) -> RasterImage:
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise InvalidImageError(f"cannot read {path}: {e}") from e
    return decode_image_bytes(raw)


def encode_png(image: RasterImage) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(image.as_array()).save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(image: RasterImage) -> str:
    """PNG data URL for an image, the form the HTTP API accepts."""
    return "data:image/png;base64," + base64.b64encode(encode_png(image)).decode("ascii")
