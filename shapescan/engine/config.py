"""Pipeline configuration — detector thresholds, all tunable per call."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from shapescan.config import Settings

CONTOUR_MODES = ("trace", "angle")


@dataclass(frozen=True)
class PipelineConfig:
    """Thresholds for edge extraction, region filtering, simplification and classification."""

    # Sobel magnitude a pixel must exceed to count as an edge (nominal 50-120)
    edge_threshold: float = 50.0

    # Regions with this many pixels or fewer are discarded as speckle
    min_region_size: int = 10

    # Circularity above which a low-vertex region is a circle. Deliberately above
    # the nominal 0.6-0.75 band: an axis-aligned square traces to π/4 ≈ 0.785,
    # so any cutoff inside the band would call traced squares circles.
    # baseline() keeps 0.6 for angle-ordered contours.
    circularity_threshold: float = 0.8

    # RDP epsilon = factor × region pixel count
    rdp_epsilon_factor: float = 0.03

    # "trace": Moore boundary trace; "angle": centroid angle sort of every region pixel
    contour_mode: str = "trace"

    # Report "square" instead of "rectangle" when |aspect - 1| < square_tolerance
    distinguish_squares: bool = False
    square_tolerance: float = 0.1

    def __post_init__(self) -> None:
        if self.edge_threshold < 0:
            raise ValueError(f"edge_threshold must be >= 0, got {self.edge_threshold}")
        if self.min_region_size < 0:
            raise ValueError(f"min_region_size must be >= 0, got {self.min_region_size}")
        if not 0.0 <= self.circularity_threshold:
            raise ValueError(f"circularity_threshold must be >= 0, got {self.circularity_threshold}")
        if self.rdp_epsilon_factor < 0:
            raise ValueError(f"rdp_epsilon_factor must be >= 0, got {self.rdp_epsilon_factor}")
        if self.contour_mode not in CONTOUR_MODES:
            raise ValueError(f"contour_mode must be one of {CONTOUR_MODES}, got {self.contour_mode!r}")
        if self.square_tolerance < 0:
            raise ValueError(f"square_tolerance must be >= 0, got {self.square_tolerance}")

    @classmethod
    def baseline(cls) -> PipelineConfig:
        """Angle-sort contours, pixel-count area, circularity cutoff 0.6, RDP factor 0.02."""
        return cls(
            edge_threshold=50.0,
            min_region_size=10,
            circularity_threshold=0.6,
            rdp_epsilon_factor=0.02,
            contour_mode="angle",
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> PipelineConfig:
        return cls(
            edge_threshold=settings.edge_threshold,
            min_region_size=settings.min_region_size,
            circularity_threshold=settings.circularity_threshold,
            rdp_epsilon_factor=settings.rdp_epsilon_factor,
            contour_mode=settings.contour_mode,
            distinguish_squares=settings.distinguish_squares,
            square_tolerance=settings.square_tolerance,
        )

    def with_overrides(self, **overrides: Any) -> PipelineConfig:
        """Copy with the given non-None fields replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
