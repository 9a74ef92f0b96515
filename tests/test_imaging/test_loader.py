"""Tests for image decoding."""

import base64

import numpy as np
import pytest
from PIL import Image

from shapescan.imaging.loader import decode_data_url, decode_image_bytes, encode_png, load_image, to_data_url
from shapescan.models.image import InvalidImageError
from tests.conftest import png_declaring_size


def test_png_round_trip_preserves_pixels(square_image):
    decoded = decode_image_bytes(encode_png(square_image))
    assert (decoded.width, decoded.height) == (100, 100)
    assert decoded.data == square_image.data


def test_data_url_and_bare_base64(square_image):
    url = to_data_url(square_image)
    assert url.startswith("data:image/png;base64,")
    assert load_image(url).data == square_image.data

    bare = url.partition(",")[2]
    assert load_image(bare).data == square_image.data


def test_load_from_path_converts_to_rgba(tmp_path):
    Image.fromarray(np.zeros((4, 6, 3), dtype=np.uint8)).save(tmp_path / "tiny.png")
    image = load_image(str(tmp_path / "tiny.png"))
    assert (image.width, image.height) == (6, 4)
    assert image.as_array()[0, 0].tolist() == [0, 0, 0, 255]
    assert load_image(tmp_path / "tiny.png").data == image.data


def test_undecodable_bytes():
    with pytest.raises(InvalidImageError):
        decode_image_bytes(b"definitely not an image")


def test_invalid_base64():
    with pytest.raises(InvalidImageError):
        decode_data_url("data:image/png;base64,@@@")


def test_non_base64_data_url():
    with pytest.raises(InvalidImageError):
        decode_data_url("data:text/plain,hello")


def test_missing_path_falls_through_to_base64_error():
    with pytest.raises(InvalidImageError):
        load_image("no/such/file.png")


def test_valid_base64_of_garbage():
    with pytest.raises(InvalidImageError):
        load_image(base64.b64encode(b"garbage").decode("ascii"))


def test_oversized_image_is_rejected():
    with pytest.raises(InvalidImageError, match="too large"):
        decode_image_bytes(png_declaring_size(30000, 30000))
