"""Sample serialization and stroke statistics.

Provides:
    - Bidirectional conversion: sample_to_yaml_dict() ↔ sample_from_yaml_dict()
    - File helpers: save_sample_yaml() / load_sample_yaml()
    - Quick stats for logging: count_points(), polyline_length()

YAML format (sample.v1 schema):
    schema: sample.v1
    label: circle            # optional
    raster: {width, height}  # optional
    strokes:
      - [[x, y], [x, y], ...]

Degenerate strokes are written verbatim; filtering them is the
rasterizer's business.
"""

import math
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from gesture_dataset.capture.collector import Sample, Stroke, make_sample


def sample_to_yaml_dict(
    sample: Sample,
    label: Optional[str] = None,
    raster_size: Optional[Tuple[int, int]] = None
) -> Dict[str, Any]:
    """Convert a sample to a YAML-compatible dict (sample.v1 schema).

    Parameters
    ----------
    sample : Sample
        Strokes to serialize
    label : str, optional
        Gesture label
    raster_size : (width, height), optional
        Preferred output size

    Returns
    -------
    Dict[str, Any]
        Plain dict of lists and floats
    """
    d: Dict[str, Any] = {'schema': 'sample.v1'}
    if label is not None:
        d['label'] = label
    if raster_size is not None:
        width, height = raster_size
        d['raster'] = {'width': int(width), 'height': int(height)}
    d['strokes'] = [[[float(p.x), float(p.y)] for p in stroke] for stroke in sample]
    return d


def sample_from_yaml_dict(d: Dict[str, Any]) -> Sample:
    """Convert a sample.v1 dict back into an immutable sample.

    Raises
    ------
    ValueError
        If the dict does not match the sample.v1 schema
    """
    from . import validators

    try:
        parsed = validators.SampleFileV1(**d)
    except Exception as e:
        raise ValueError(f"Invalid sample dict: {e}") from e
    return make_sample(parsed.strokes)


def save_sample_yaml(
    sample: Sample,
    path: Union[str, Path],
    label: Optional[str] = None,
    raster_size: Optional[Tuple[int, int]] = None
) -> None:
    """Write a sample to YAML atomically."""
    from . import fs

    fs.atomic_yaml_dump(sample_to_yaml_dict(sample, label, raster_size), path)


def load_sample_yaml(path: Union[str, Path]) -> Sample:
    """Read a sample.v1 YAML file (label and raster are ignored)."""
    from . import validators

    return make_sample(validators.load_sample_file(path).strokes)


def count_points(sample: Sample) -> int:
    return sum(len(stroke) for stroke in sample)


def polyline_length(stroke: Stroke) -> float:
    """Euclidean length of a stroke in surface units (0 for < 2 points)."""
    return sum(
        math.hypot(b.x - a.x, b.y - a.y)
        for a, b in zip(stroke[:-1], stroke[1:])
    )
