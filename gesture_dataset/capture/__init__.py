"""Pointer input capture: points, strokes and the per-sample collector."""

from gesture_dataset.capture.collector import (
    Point,
    PointLike,
    Sample,
    Stroke,
    StrokeCollector,
    make_sample,
)

__all__ = [
    "Point",
    "PointLike",
    "Sample",
    "Stroke",
    "StrokeCollector",
    "make_sample",
]
