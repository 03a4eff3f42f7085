"""Stroke-to-raster conversion.

Modules:
    - rasterizer: bounding box, normalization and line stepping into (H, W) uint8 images
"""

from gesture_dataset.raster.rasterizer import (
    BACKGROUND,
    BBOX_EPSILON,
    FOREGROUND,
    MAX_SEGMENT_STEPS,
    BoundingBox,
    Rasterizer,
    RasterSize,
    drawable_strokes,
    is_degenerate,
    rasterize,
    sample_bbox,
    segment_steps,
    trace_segment,
    trace_stroke,
)

__all__ = [
    "BACKGROUND",
    "BBOX_EPSILON",
    "FOREGROUND",
    "MAX_SEGMENT_STEPS",
    "BoundingBox",
    "Rasterizer",
    "RasterSize",
    "drawable_strokes",
    "is_degenerate",
    "rasterize",
    "sample_bbox",
    "segment_steps",
    "trace_segment",
    "trace_stroke",
]
