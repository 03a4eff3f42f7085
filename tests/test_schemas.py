"""Test YAML schema validation and config loading.

Tests for gesture_dataset.utils.validators:
    - Load the shipped session config
    - Defaults: 32×32, white strokes on black
    - Reject invalid files with messages naming the file
    - Bounds checks (raster >= 1, palette 0..255 and distinct)
    - Event records require the fields of their type

Run:
    pytest tests/test_schemas.py -v
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gesture_dataset.utils import fs, validators


@pytest.fixture(scope="module")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# SESSION CONFIG
# ============================================================================

def test_load_shipped_session_config(project_root):
    cfg = validators.load_session_config(project_root / "configs/session_v1.yaml")
    assert cfg.schema_version == "session.v1"
    assert (cfg.raster.width, cfg.raster.height) == (32, 32)
    assert cfg.skip_empty is False


def test_session_defaults():
    cfg = validators.SessionConfigV1()
    assert (cfg.raster.width, cfg.raster.height) == (32, 32)
    assert cfg.foreground == 255 and cfg.background == 0
    assert cfg.labels == []
    assert cfg.start_index == 0


@pytest.mark.parametrize("overrides", [
    {"raster": {"width": 0, "height": 32}},
    {"raster": {"width": 32, "height": -4}},
    {"start_index": -1},
    {"foreground": 300},
    {"foreground": 10, "background": 10},
    {"labels": ["ok", " "]},
    {"labels": ["a/b"]},
    {"labels": [".."]},
    {"labels": ["."]},
    {"schema": "session.v2"},
])
def test_session_rejects_invalid(overrides):
    with pytest.raises(ValidationError):
        validators.SessionConfigV1(**overrides)


def test_load_session_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        validators.load_session_config(tmp_path / "nope.yaml")


def test_load_session_config_error_names_file(tmp_path):
    path = tmp_path / "bad.yaml"
    fs.atomic_yaml_dump({"schema": "session.v1", "raster": {"width": 0, "height": 1}}, path)
    with pytest.raises(ValueError, match="bad.yaml"):
        validators.load_session_config(path)


def test_load_session_config_not_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    fs.atomic_yaml_dump([1, 2, 3], path)
    with pytest.raises(ValueError, match="mapping"):
        validators.load_session_config(path)


# ============================================================================
# SAMPLE FILE
# ============================================================================

def test_sample_file_parses_strokes(tmp_path):
    path = tmp_path / "sample.yaml"
    fs.atomic_yaml_dump({
        "schema": "sample.v1",
        "label": "circle",
        "raster": {"width": 28, "height": 28},
        "strokes": [[[0, 0], [1.5, 2]], [[3, 3]], []],
    }, path)

    sample_file = validators.load_sample_file(path)

    assert sample_file.label == "circle"
    assert sample_file.raster.width == 28
    assert sample_file.strokes == [[(0.0, 0.0), (1.5, 2.0)], [(3.0, 3.0)], []]


def test_sample_file_rejects_bad_point():
    with pytest.raises(ValidationError):
        validators.SampleFileV1(strokes=[[[0.0, 1.0, 2.0]]])


def test_sample_file_requires_strokes():
    with pytest.raises(ValidationError):
        validators.SampleFileV1()


# ============================================================================
# EVENTS FILE
# ============================================================================

def test_events_parse():
    log = validators.PointerEventsV1(events=[
        {"type": "label", "label": "circle"},
        {"type": "move", "x": 1, "y": 2},
        {"type": "release"},
        {"type": "size", "width": 8, "height": 8},
        {"type": "save"},
    ])
    assert [e.type for e in log.events] == ["label", "move", "release", "size", "save"]
    assert log.events[1].x == 1.0


@pytest.mark.parametrize("event", [
    {"type": "move", "x": 1.0},
    {"type": "label"},
    {"type": "size", "width": 8},
    {"type": "size", "width": 0, "height": 8},
    {"type": "jump"},
])
def test_events_reject_incomplete(event):
    with pytest.raises(ValidationError):
        validators.PointerEvent(**event)
