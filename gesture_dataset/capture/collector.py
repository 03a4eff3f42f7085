"""Stroke capture: pointer drags → ordered strokes of one sample.

A *stroke* is the path traced during one continuous drag.  A *sample* is
every stroke drawn for one gesture instance.  The collector is a two-state
accumulator:

    idle      open stroke empty      --begin_or_continue-->  dragging
    dragging  open stroke non-empty  --end_stroke-------->   idle

The open stroke is tracked by an explicit index rather than by "whatever
is last in the list"; there is always exactly one open stroke, so a fresh
or cleared collector snapshots as ``((),)``.

Points are surface-local coordinates.  Mapping screen pixels onto the
drawing surface is the caller's job.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Point:
    """Surface-local 2D coordinate.

    Parameters
    ----------
    x, y : float
        Continuous drawing-surface coordinates (not screen pixels).
    """

    x: float
    y: float

    @classmethod
    def of(cls, value: PointLike) -> Point:
        """Coerce a ``Point`` or any ``(x, y)`` pair into a ``Point``."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(float(x), float(y))

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


PointLike = Union[Point, Tuple[float, float]]

Stroke = Tuple[Point, ...]
"""One continuous drag; insertion order is the drawing order."""

Sample = Tuple[Stroke, ...]
"""All strokes of one gesture drawing, rasterized together."""


def make_sample(strokes: Iterable[Iterable[PointLike]]) -> Sample:
    """Build an immutable sample from nested ``(x, y)`` sequences."""
    return tuple(tuple(Point.of(p) for p in stroke) for stroke in strokes)


class StrokeCollector:
    """Accumulates pointer-drag input into the strokes of the current sample.

    Driven from a single event loop: call :meth:`begin_or_continue` on
    every tick while the pointer is pressed, :meth:`end_stroke` when it is
    released, and :meth:`take_sample` (or :meth:`snapshot` +
    :meth:`clear`) when the sample is saved.  None of the operations fail.
    """

    def __init__(self) -> None:
        self._strokes: list[list[Point]] = []
        self._open_index: int = 0
        self.clear()

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def begin_or_continue(self, point: PointLike) -> bool:
        """Extend the open stroke with ``point``.

        Returns
        -------
        bool
            True if the point was appended (the caller should redraw).
            Repeating the open stroke's last point, or passing a
            non-finite coordinate, appends nothing.
        """
        point = Point.of(point)
        if not point.is_finite():
            logger.debug(f"Dropping non-finite point {point}")
            return False

        open_stroke = self._strokes[self._open_index]
        if open_stroke and open_stroke[-1] == point:
            return False

        open_stroke.append(point)
        return True

    def end_stroke(self) -> None:
        """Seal the open stroke and open a new empty one.

        No-op while idle, so repeated release events never add empty
        strokes.
        """
        if not self._strokes[self._open_index]:
            return
        self._strokes.append([])
        self._open_index = len(self._strokes) - 1

    def clear(self) -> None:
        """Discard the whole sample; leaves a single empty open stroke."""
        self._strokes = [[]]
        self._open_index = 0

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def snapshot(self) -> Sample:
        """Immutable copy of every stroke, the open and degenerate ones included."""
        return tuple(tuple(stroke) for stroke in self._strokes)

    def take_sample(self) -> Sample:
        """Hand the current sample off by value and reset the collector."""
        sample = self.snapshot()
        self.clear()
        return sample

    @property
    def is_drawing(self) -> bool:
        """True while the open stroke has points (the "dragging" state)."""
        return bool(self._strokes[self._open_index])

    @property
    def stroke_count(self) -> int:
        """Number of strokes including the open one."""
        return len(self._strokes)

    @property
    def open_index(self) -> int:
        return self._open_index

    def __len__(self) -> int:
        return self.stroke_count

    def __repr__(self) -> str:
        points = sum(len(s) for s in self._strokes)
        return f"StrokeCollector(strokes={self.stroke_count}, points={points}, drawing={self.is_drawing})"
