"""Dataset session: the state behind one gesture-recording window.

A session owns, as separate explicitly-passed values:
    - a StrokeCollector for the sample being drawn
    - the GestureLabels registry and current label
    - the RasterSize chosen for the next save
    - a Rasterizer and a SampleWriter

The UI layer forwards pointer events to the session and calls
:meth:`DatasetSession.save`; nothing here touches widgets.

Usage:
    from gesture_dataset.dataset import DatasetSession
    from gesture_dataset.utils import validators

    session = DatasetSession.from_config(validators.load_session_config(path))
    session.labels.add("Circle")
    for pos in drag:
        session.pointer_moved(pos)
    session.pointer_released()
    session.save()   # → outputs/gestures/circle/00000.png
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np

from gesture_dataset.capture.collector import PointLike, Sample, StrokeCollector
from gesture_dataset.dataset.labels import DatasetError, GestureLabels
from gesture_dataset.dataset.writer import SampleWriter
from gesture_dataset.raster.rasterizer import Rasterizer, RasterSize, drawable_strokes
from gesture_dataset.utils import logging_config, strokes as stroke_utils
from gesture_dataset.utils.validators import SessionConfigV1

logger = logging.getLogger(__name__)


class DatasetSession:
    """Drawing → labeled raster sample, one save at a time.

    Parameters
    ----------
    writer : SampleWriter
        Destination for saved images
    raster_size : RasterSize
        Size of the next saved image
    labels : GestureLabels, optional
        Label registry; empty if None
    rasterizer : Rasterizer, optional
        Default white-on-black rasterizer if None
    skip_empty : bool
        When True, saving a sample without any drawable stroke writes
        nothing and returns None.  Default False writes a blank image.
    """

    def __init__(
        self,
        writer: SampleWriter,
        raster_size: RasterSize = RasterSize(32, 32),
        labels: GestureLabels | None = None,
        rasterizer: Rasterizer | None = None,
        skip_empty: bool = False,
    ) -> None:
        self.collector = StrokeCollector()
        self.writer = writer
        self.raster_size = raster_size
        self.labels = labels if labels is not None else GestureLabels()
        self.rasterizer = rasterizer if rasterizer is not None else Rasterizer()
        self.skip_empty = skip_empty

    @classmethod
    def from_config(
        cls,
        cfg: SessionConfigV1,
        output_root: Union[str, Path, None] = None,
    ) -> DatasetSession:
        """Build a session from a validated config (``output_root`` overrides)."""
        session = cls(
            writer=SampleWriter(output_root or cfg.output_root, start_index=cfg.start_index),
            raster_size=RasterSize(cfg.raster.width, cfg.raster.height),
            labels=GestureLabels(cfg.labels),
            rasterizer=Rasterizer(foreground=cfg.foreground, background=cfg.background),
            skip_empty=cfg.skip_empty,
        )
        logger.info(
            f"Session ready: root={session.writer.root}, "
            f"raster={cfg.raster.width}×{cfg.raster.height}, labels={list(session.labels)}"
        )
        return session

    # ------------------------------------------------------------------
    # Pointer forwarding
    # ------------------------------------------------------------------

    def pointer_moved(self, point: PointLike) -> bool:
        """Pointer pressed and moving; returns True if a redraw is needed."""
        return self.collector.begin_or_continue(point)

    def pointer_released(self) -> None:
        self.collector.end_stroke()

    def clear(self) -> None:
        """Discard the current drawing ("Clear Painting")."""
        self.collector.clear()

    def strokes(self) -> Sample:
        """Everything drawn so far, for on-screen feedback."""
        return self.collector.snapshot()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_raster_size(self, width: int, height: int) -> RasterSize:
        """Change the size used by the next save (ValueError if < 1)."""
        self.raster_size = RasterSize(width, height)
        return self.raster_size

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def render(self) -> np.ndarray:
        """Rasterize the current drawing without consuming it."""
        return self.rasterizer.rasterize(self.collector.snapshot(), self.raster_size)

    def save(self) -> Path | None:
        """Rasterize the current sample, write it under the current label, clear.

        Returns
        -------
        Path | None
            Written image path; None when ``skip_empty`` dropped an empty sample

        Raises
        ------
        DatasetError
            If no label is selected (the drawing is kept)
        RuntimeError
            If the image cannot be written (the drawing is kept)
        """
        label = self.labels.current
        if label is None:
            raise DatasetError("Select or add a gesture label before saving")

        sample = self.collector.snapshot()
        if self.skip_empty and not drawable_strokes(sample):
            logger.warning(f"Nothing to save for '{label}': no stroke has 2 or more points")
            self.collector.clear()
            return None

        image = self.rasterizer.rasterize(sample, self.raster_size)
        logging_config.push_context(label=label, sample=self.writer.counter)
        try:
            path = self.writer.write(image, label)
            ink = sum(stroke_utils.polyline_length(stroke) for stroke in sample)
            logger.info(
                f"Saved {len(drawable_strokes(sample))} stroke(s), "
                f"{stroke_utils.count_points(sample)} point(s), "
                f"{ink:.1f} units of ink → {path}"
            )
        finally:
            logging_config.pop_context(keys=["label", "sample"])

        self.collector.clear()
        return path
