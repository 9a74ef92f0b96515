"""RasterImage — the caller-owned RGBA input buffer."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

CHANNELS = 4


class InvalidImageError(ValueError):
    """Raised when an image buffer is structurally unusable (size mismatch, undecodable)."""


@dataclass(frozen=True)
class RasterImage:
    """Immutable RGBA pixel buffer, row-major, top-left origin, 4 bytes per pixel."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.width, int) or not isinstance(self.height, int):
            raise InvalidImageError("width and height must be integers")
        if self.width <= 0 or self.height <= 0:
            raise InvalidImageError(f"image dimensions must be positive, got {self.width}x{self.height}")
        if isinstance(self.data, (bytearray, memoryview)):
            object.__setattr__(self, "data", bytes(self.data))
        if not isinstance(self.data, bytes):
            raise InvalidImageError("pixel data must be bytes")
        expected = self.width * self.height * CHANNELS
        if len(self.data) != expected:
            raise InvalidImageError(
                f"buffer length {len(self.data)} does not match "
                f"{self.width}x{self.height}x{CHANNELS} = {expected}"
            )

    def as_array(self) -> NDArray[np.uint8]:
        """Read-only (height, width, 4) view of the buffer."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)

    @classmethod
    def from_array(cls, pixels: NDArray[np.uint8]) -> RasterImage:
        """Build from an (H, W, 4), (H, W, 3) or (H, W) uint8 array."""
        arr = np.asarray(pixels)
        if arr.dtype != np.uint8:
            raise InvalidImageError(f"expected uint8 pixels, got {arr.dtype}")
        if arr.ndim == 2:
            arr = np.stack([arr, arr, arr], axis=-1)
        if arr.ndim != 3 or arr.shape[2] not in (3, CHANNELS):
            raise InvalidImageError(f"unsupported pixel array shape {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=-1)
        height, width = arr.shape[:2]
        return cls(width=int(width), height=int(height), data=np.ascontiguousarray(arr).tobytes())
