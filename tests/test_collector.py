"""Tests for the stroke collector.

Validates the idle/dragging state machine, duplicate suppression, stroke
sealing and the read-only snapshot.

Run:
    pytest tests/test_collector.py -v
"""

from __future__ import annotations

import math

import pytest

from gesture_dataset.capture import Point, StrokeCollector, make_sample


@pytest.fixture
def collector() -> StrokeCollector:
    return StrokeCollector()


# ---------------------------------------------------------------------------
# Point
# ---------------------------------------------------------------------------


class TestPoint:
    def test_of_tuple(self) -> None:
        p = Point.of((1, 2))
        assert p == Point(1.0, 2.0)
        assert isinstance(p.x, float)

    def test_of_point_is_identity(self) -> None:
        p = Point(3.0, 4.0)
        assert Point.of(p) is p

    def test_immutable(self) -> None:
        p = Point(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 5.0  # type: ignore[misc]

    def test_is_finite(self) -> None:
        assert Point(0.0, 0.0).is_finite()
        assert not Point(math.nan, 0.0).is_finite()
        assert not Point(0.0, math.inf).is_finite()


# ---------------------------------------------------------------------------
# Initial state and clear
# ---------------------------------------------------------------------------


class TestInitialState:
    def test_fresh_collector_has_one_empty_stroke(self, collector) -> None:
        assert collector.snapshot() == ((),)
        assert collector.stroke_count == 1
        assert collector.open_index == 0
        assert not collector.is_drawing

    def test_clear_then_snapshot(self, collector) -> None:
        collector.begin_or_continue((1.0, 1.0))
        collector.begin_or_continue((2.0, 2.0))
        collector.end_stroke()
        collector.begin_or_continue((3.0, 3.0))

        collector.clear()

        assert collector.snapshot() == ((),)
        assert collector.open_index == 0
        assert len(collector) == 1


# ---------------------------------------------------------------------------
# begin_or_continue
# ---------------------------------------------------------------------------


class TestBeginOrContinue:
    def test_first_point_starts_drawing(self, collector) -> None:
        assert collector.begin_or_continue((1.0, 2.0)) is True
        assert collector.is_drawing
        assert collector.snapshot() == ((Point(1.0, 2.0),),)

    def test_identical_point_appended_once(self, collector) -> None:
        assert collector.begin_or_continue((1.0, 1.0)) is True
        assert collector.begin_or_continue((1.0, 1.0)) is False
        assert collector.snapshot() == ((Point(1.0, 1.0),),)

    def test_only_consecutive_duplicates_dropped(self, collector) -> None:
        for p in [(1.0, 1.0), (2.0, 2.0), (1.0, 1.0)]:
            assert collector.begin_or_continue(p) is True
        assert len(collector.snapshot()[0]) == 3

    def test_new_stroke_may_repeat_previous_end(self, collector) -> None:
        collector.begin_or_continue((1.0, 1.0))
        collector.begin_or_continue((2.0, 2.0))
        collector.end_stroke()
        assert collector.begin_or_continue((2.0, 2.0)) is True
        assert collector.snapshot()[1] == (Point(2.0, 2.0),)

    @pytest.mark.parametrize("bad", [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 1.0)])
    def test_non_finite_rejected(self, collector, bad) -> None:
        assert collector.begin_or_continue(bad) is False
        assert collector.snapshot() == ((),)
        assert not collector.is_drawing


# ---------------------------------------------------------------------------
# end_stroke
# ---------------------------------------------------------------------------


class TestEndStroke:
    def test_seals_and_opens_new_stroke(self, collector) -> None:
        collector.begin_or_continue((0.0, 0.0))
        collector.begin_or_continue((1.0, 0.0))
        collector.end_stroke()

        assert collector.stroke_count == 2
        assert collector.open_index == 1
        assert not collector.is_drawing
        assert collector.snapshot() == ((Point(0.0, 0.0), Point(1.0, 0.0)), ())

    def test_second_end_is_noop(self, collector) -> None:
        collector.begin_or_continue((0.0, 0.0))
        collector.end_stroke()
        count = collector.stroke_count
        collector.end_stroke()
        assert collector.stroke_count == count

    def test_end_while_idle_is_noop(self, collector) -> None:
        collector.end_stroke()
        collector.end_stroke()
        assert collector.snapshot() == ((),)

    def test_single_point_stroke_is_kept(self, collector) -> None:
        collector.begin_or_continue((5.0, 5.0))
        collector.end_stroke()
        assert collector.snapshot() == ((Point(5.0, 5.0),), ())

    def test_multi_stroke_order(self, collector) -> None:
        strokes = [
            [(0.0, 0.0), (1.0, 1.0)],
            [(5.0, 0.0), (5.0, 3.0), (6.0, 3.0)],
        ]
        for stroke in strokes:
            for p in stroke:
                collector.begin_or_continue(p)
            collector.end_stroke()

        assert collector.snapshot() == make_sample(strokes) + ((),)


# ---------------------------------------------------------------------------
# snapshot / take_sample
# ---------------------------------------------------------------------------


class TestSnapshot:
    def test_snapshot_is_detached(self, collector) -> None:
        collector.begin_or_continue((0.0, 0.0))
        before = collector.snapshot()
        collector.begin_or_continue((1.0, 0.0))
        collector.end_stroke()
        assert before == ((Point(0.0, 0.0),),)

    def test_snapshot_is_immutable(self, collector) -> None:
        collector.begin_or_continue((0.0, 0.0))
        snap = collector.snapshot()
        assert isinstance(snap, tuple)
        assert isinstance(snap[0], tuple)

    def test_take_sample_hands_off_and_clears(self, collector) -> None:
        collector.begin_or_continue((0.0, 0.0))
        collector.begin_or_continue((3.0, 4.0))
        collector.end_stroke()

        sample = collector.take_sample()

        assert sample == ((Point(0.0, 0.0), Point(3.0, 4.0)), ())
        assert collector.snapshot() == ((),)

    def test_repr(self, collector) -> None:
        collector.begin_or_continue((0.0, 0.0))
        assert "points=1" in repr(collector)
        assert "drawing=True" in repr(collector)
