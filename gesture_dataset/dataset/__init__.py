"""Labeled dataset recording on top of capture and raster.

Modules:
    - labels: label registry and DatasetError
    - writer: <root>/<label>/<counter>.png output
    - session: collector + labels + raster size + save
"""

from gesture_dataset.dataset.labels import DatasetError, GestureLabels, normalize_label
from gesture_dataset.dataset.session import DatasetSession
from gesture_dataset.dataset.writer import SampleWriter

__all__ = [
    "DatasetError",
    "DatasetSession",
    "GestureLabels",
    "SampleWriter",
    "normalize_label",
]
