"""Sample rasterizer: strokes → fixed-size black/white image.

Pipeline:
    1. Bounding box over every point of every non-degenerate stroke, with
       max_x / max_y pushed out by BBOX_EPSILON (1.0 surface units) so the
       far-edge point lands inside the last pixel, not on the edge.
    2. Normalize into [0, 1) per axis, scale by the raster size and
       truncate to pixel indices; indices are clamped to the image.
    3. Walk every segment in *surface* space with one step per unit of
       travel, so the output is gap-free whatever the raster resolution.

The drawing fills the whole canvas on both axes independently (aspect
ratio is not preserved), which is what a fixed-size gesture classifier
expects.

Invariants:
    - Strokes with < 2 points take no part in the bounding box or drawing
    - Output is (H, W) uint8, freshly allocated, nothing of the input kept
    - Total: empty or fully degenerate samples give an all-background image,
      and so do bounding boxes whose span overflows the float range
    - Segments longer than MAX_SEGMENT_STEPS surface units are sampled at
      MAX_SEGMENT_STEPS evenly spaced points

Usage:
    from gesture_dataset.raster import Rasterizer, RasterSize

    image = Rasterizer().rasterize(collector.take_sample(), RasterSize(32, 32))
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

from gesture_dataset.capture.collector import Point, Sample, Stroke

logger = logging.getLogger(__name__)

BBOX_EPSILON = 1.0
"""Expansion applied to max_x / max_y before normalizing."""

FOREGROUND = 255
BACKGROUND = 0

MAX_SEGMENT_STEPS = 1 << 20
"""Per-segment step ceiling; raised to 2 samples per pixel for wider rasters."""


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RasterSize:
    """Output image dimensions in pixels.

    Parameters
    ----------
    width, height : int
        Both must be integers >= 1.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")

    @classmethod
    def of(cls, value: RasterSizeLike) -> RasterSize:
        """Coerce a ``RasterSize`` or a ``(width, height)`` pair."""
        if isinstance(value, RasterSize):
            return value
        width, height = value
        return cls(int(width), int(height))

    @property
    def shape(self) -> Tuple[int, int]:
        """numpy shape ``(height, width)``."""
        return (self.height, self.width)


RasterSizeLike = Union[RasterSize, Tuple[int, int]]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned box in surface coordinates, max edges already expanded."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def span_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def span_y(self) -> float:
        return self.max_y - self.min_y

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y))

    def contains(self, point: Point) -> bool:
        """Half-open containment ``[min, max)`` on both axes."""
        return self.min_x <= point.x < self.max_x and self.min_y <= point.y < self.max_y

    def normalize(self, xs: np.ndarray, ys: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Map surface coordinates into [0, 1) per axis.

        An axis whose span is not a positive finite number normalizes to 0.
        """
        return (
            _normalize_axis(np.asarray(xs, dtype=np.float64), self.min_x, self.span_x),
            _normalize_axis(np.asarray(ys, dtype=np.float64), self.min_y, self.span_y),
        )

    def to_pixels(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
        size: RasterSize
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Surface coordinates → clamped integer pixel indices ``(px, py)``."""
        nx, ny = self.normalize(xs, ys)
        px = np.clip(np.floor(nx * size.width), 0, size.width - 1).astype(np.intp)
        py = np.clip(np.floor(ny * size.height), 0, size.height - 1).astype(np.intp)
        return px, py


def _normalize_axis(values: np.ndarray, lo: float, span: float) -> np.ndarray:
    if not math.isfinite(span) or span <= 0.0:
        return np.zeros_like(values)
    return (values - lo) / span


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------


def is_degenerate(stroke: Sequence[Point]) -> bool:
    """A stroke with fewer than 2 points draws nothing."""
    return len(stroke) < 2


def drawable_strokes(sample: Sample) -> Tuple[Stroke, ...]:
    """The non-degenerate strokes of ``sample``, in order."""
    return tuple(stroke for stroke in sample if not is_degenerate(stroke))


def sample_bbox(sample: Sample, epsilon: float = BBOX_EPSILON) -> BoundingBox | None:
    """Bounding box of all non-degenerate strokes, or None if there are none.

    Parameters
    ----------
    sample : Sample
        Strokes to measure
    epsilon : float
        Added to max_x and max_y, default BBOX_EPSILON

    Returns
    -------
    BoundingBox | None
        Expanded box; None when no stroke has >= 2 points
    """
    strokes = drawable_strokes(sample)
    if not strokes:
        return None

    xs = np.fromiter((p.x for s in strokes for p in s), dtype=np.float64)
    ys = np.fromiter((p.y for s in strokes for p in s), dtype=np.float64)
    return BoundingBox(
        min_x=float(xs.min()),
        min_y=float(ys.min()),
        max_x=float(xs.max()) + epsilon,
        max_y=float(ys.max()) + epsilon,
    )


def segment_steps(a: Point, b: Point, limit: int | None = None) -> int:
    """Samples needed along ``a → b``: one per unit of surface travel.

    Returns 0 when the travel overflows to infinity, and at most ``limit``
    when one is given.
    """
    extent = max(abs(b.x - a.x), abs(b.y - a.y))
    if not math.isfinite(extent):
        return 0
    steps = math.ceil(extent)
    if limit is not None:
        steps = min(steps, limit)
    return steps


def trace_segment(a: Point, b: Point, limit: int | None = None) -> Tuple[np.ndarray, np.ndarray]:
    """Surface points at fractions ``step / steps`` for ``step`` in ``[0, steps)``.

    The end point ``b`` is excluded; it starts the next segment.  A
    zero-length (or overflowing) segment yields ``a`` alone.
    """
    steps = segment_steps(a, b, limit)
    if steps == 0:
        return np.array([a.x]), np.array([a.y])
    t = np.arange(steps, dtype=np.float64) / steps
    return a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t


def trace_stroke(stroke: Stroke, limit: int | None = None) -> Tuple[np.ndarray, np.ndarray]:
    """All surface points plotted for one non-degenerate stroke.

    Every segment is traced, then the stroke's final point is appended so
    the run ends where the pen was lifted.
    """
    xs, ys = [], []
    for a, b in zip(stroke[:-1], stroke[1:]):
        seg_x, seg_y = trace_segment(a, b, limit)
        xs.append(seg_x)
        ys.append(seg_y)
    xs.append(np.array([stroke[-1].x]))
    ys.append(np.array([stroke[-1].y]))
    return np.concatenate(xs), np.concatenate(ys)


# ---------------------------------------------------------------------------
# Rasterizer
# ---------------------------------------------------------------------------


class Rasterizer:
    """Draws samples into fresh single-channel images.

    Attributes
    ----------
    foreground : int
        Stroke pixel value, default 255 (white)
    background : int
        Untouched pixel value, default 0 (black)
    epsilon : float
        Bounding-box expansion, default BBOX_EPSILON
    """

    def __init__(
        self,
        foreground: int = FOREGROUND,
        background: int = BACKGROUND,
        epsilon: float = BBOX_EPSILON
    ):
        for name, value in (("foreground", foreground), ("background", background)):
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255], got {value}")
        if foreground == background:
            raise ValueError(f"foreground and background must differ, both are {foreground}")
        if not epsilon > 0.0:
            raise ValueError(f"epsilon must be > 0, got {epsilon}")

        self.foreground = int(foreground)
        self.background = int(background)
        self.epsilon = float(epsilon)

    def blank(self, raster_size: RasterSizeLike) -> np.ndarray:
        """All-background image of the given size."""
        size = RasterSize.of(raster_size)
        return np.full(size.shape, self.background, dtype=np.uint8)

    def rasterize(self, sample: Sample, raster_size: RasterSizeLike) -> np.ndarray:
        """Rasterize ``sample`` so its bounding box fills the whole image.

        Parameters
        ----------
        sample : Sample
            Strokes in surface coordinates; degenerate strokes are skipped
        raster_size : RasterSize | (width, height)
            Output dimensions

        Returns
        -------
        np.ndarray
            (height, width) uint8 image; all background when the sample
            has no non-degenerate stroke
        """
        size = RasterSize.of(raster_size)
        image = self.blank(size)

        bbox = sample_bbox(sample, self.epsilon)
        if bbox is None:
            logger.debug(f"Sample has no drawable stroke; returning blank {size.width}x{size.height}")
            return image
        if not bbox.is_finite():
            logger.warning(f"Non-finite bounding box {bbox}; returning blank {size.width}x{size.height}")
            return image
        if not (math.isfinite(bbox.span_x) and math.isfinite(bbox.span_y)):
            logger.warning(f"Bounding box {bbox} spans past float range; returning blank {size.width}x{size.height}")
            return image

        limit = max(MAX_SEGMENT_STEPS, 2 * max(size.width, size.height))
        for stroke in drawable_strokes(sample):
            xs, ys = trace_stroke(stroke, limit)
            px, py = bbox.to_pixels(xs, ys, size)
            image[py, px] = self.foreground

        return image


def rasterize(sample: Sample, raster_size: RasterSizeLike) -> np.ndarray:
    """Rasterize with the default white-on-black palette."""
    return Rasterizer().rasterize(sample, raster_size)
