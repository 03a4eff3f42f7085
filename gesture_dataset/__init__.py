"""Gesture Dataset Creator: freehand strokes to labeled raster samples.

This package captures pen strokes drawn on a bounded surface, groups them
into one labeled sample, and rasterizes the sample into a fixed-size
black/white image normalized to fill the target canvas.

Architecture layers (strict one-way dependency):
    scripts/ → gesture_dataset/dataset/ → gesture_dataset/{capture,raster}/ → gesture_dataset/utils/

Key invariants:
    - Points are drawing-surface coordinates (screen transform is the caller's job)
    - Strokes with fewer than 2 points never reach the bounding box or line drawing
    - Images are (H, W) uint8, background 0, foreground 255
    - YAML-only configs, validated with pydantic
"""

__version__ = "0.3.0"
