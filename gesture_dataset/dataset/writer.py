"""Sample writer: one PNG per saved sample under ``<root>/<label>/``.

Files are named by a single running counter shared by all labels
(``00000.png``, ``00001.png``, ...).  There is no index beyond that
counter: restarting with the same ``start_index`` overwrites.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np

from gesture_dataset.utils import fs

logger = logging.getLogger(__name__)


class SampleWriter:
    """Writes rasterized samples and advances the running counter.

    Parameters
    ----------
    root : str | Path
        Directory holding one sub-directory per label
    start_index : int
        First counter value, default 0
    suffix : str
        Image extension, default ".png"
    """

    def __init__(self, root: Union[str, Path], start_index: int = 0, suffix: str = ".png") -> None:
        if start_index < 0:
            raise ValueError(f"start_index must be >= 0, got {start_index}")
        self.root = Path(root)
        self.suffix = suffix
        self._counter = start_index

    @property
    def counter(self) -> int:
        """Index the next written sample will get."""
        return self._counter

    def path_for(self, label: str, index: int) -> Path:
        return self.root / label / f"{index:05d}{self.suffix}"

    def write(self, image: np.ndarray, label: str) -> Path:
        """Save ``image`` for ``label`` and return its path.

        The counter only advances once the file is in place.

        Raises
        ------
        RuntimeError
            If the image cannot be written
        """
        path = self.path_for(label, self._counter)
        fs.atomic_save_image(image, path)
        self._counter += 1
        logger.debug(f"Wrote {path}")
        return path
