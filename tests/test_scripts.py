"""Test the command-line entry points.

Tests for scripts/render_sample.py and scripts/replay_session.py, called
through their main(argv) functions:
    - render: size precedence (flags > file > 32×32), inverted palette, errors
    - replay: labeled output tree, running counter, error exit codes

Run:
    pytest tests/test_scripts.py -v
"""

import numpy as np
import pytest

from gesture_dataset.capture import make_sample
from gesture_dataset.utils import fs, logging_config, strokes
from scripts import render_sample, replay_session


@pytest.fixture(autouse=True)
def reset_context():
    yield
    logging_config.pop_context()


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "line.yaml"
    strokes.save_sample_yaml(
        make_sample([[(0.0, 0.0), (10.0, 0.0)], [(50.0, 50.0)]]),
        path,
        label="line",
        raster_size=(10, 10),
    )
    return path


@pytest.fixture
def session_config(tmp_path):
    path = tmp_path / "session.yaml"
    fs.atomic_yaml_dump({
        "schema": "session.v1",
        "raster": {"width": 4, "height": 4},
        "output_root": str(tmp_path / "dataset"),
        "labels": ["diagonal"],
    }, path)
    return path


# ============================================================================
# render_sample.py
# ============================================================================

def test_render_uses_file_raster(tmp_path, sample_file):
    out = tmp_path / "out" / "line.png"
    assert render_sample.main(["--sample_file", str(sample_file), "--output", str(out)]) == 0

    image = fs.load_image(out)
    assert image.shape == (10, 10)
    assert np.all(image[0] == 255)
    assert np.all(image[1:] == 0)


def test_render_flags_override_file(tmp_path, sample_file):
    out = tmp_path / "wide.png"
    argv = ["--sample_file", str(sample_file), "--output", str(out), "--width", "5", "--height", "3"]
    assert render_sample.main(argv) == 0
    assert fs.load_image(out).shape == (3, 5)


def test_render_default_size_and_invert(tmp_path):
    path = tmp_path / "bare.yaml"
    fs.atomic_yaml_dump({"schema": "sample.v1", "strokes": [[[0, 0], [1, 1]]]}, path)
    out = tmp_path / "bare.png"

    assert render_sample.main(["--sample_file", str(path), "--output", str(out), "--invert"]) == 0

    image = fs.load_image(out)
    assert image.shape == (32, 32)
    assert image[0, 0] == 0
    assert image[31, 0] == 255


def test_render_missing_file(tmp_path):
    argv = ["--sample_file", str(tmp_path / "nope.yaml"), "--output", str(tmp_path / "x.png")]
    assert render_sample.main(argv) == 1


def test_render_bad_size(tmp_path, sample_file):
    argv = ["--sample_file", str(sample_file), "--output", str(tmp_path / "x.png"), "--width", "0"]
    assert render_sample.main(argv) == 1
    assert not (tmp_path / "x.png").exists()


# ============================================================================
# replay_session.py
# ============================================================================

def write_events(path, events):
    fs.atomic_yaml_dump({"schema": "events.v1", "events": events}, path)
    return path


def test_replay_writes_labeled_samples(tmp_path, session_config):
    events = write_events(tmp_path / "events.yaml", [
        {"type": "label", "label": "Diagonal"},
        {"type": "move", "x": 1.0, "y": 1.0},
        {"type": "move", "x": 1.0, "y": 1.0},
        {"type": "move", "x": 5.0, "y": 5.0},
        {"type": "release"},
        {"type": "save"},
        {"type": "label", "label": "dash"},
        {"type": "size", "width": 10, "height": 2},
        {"type": "move", "x": 0.0, "y": 0.0},
        {"type": "move", "x": 10.0, "y": 0.0},
        {"type": "release"},
        {"type": "save"},
    ])

    assert replay_session.main(["--events", str(events), "--config", str(session_config)]) == 0

    diagonal = fs.load_image(tmp_path / "dataset" / "diagonal" / "00000.png")
    np.testing.assert_array_equal(diagonal, np.eye(4, dtype=np.uint8) * 255)

    dash = fs.load_image(tmp_path / "dataset" / "dash" / "00001.png")
    assert dash.shape == (2, 10)
    assert np.all(dash[0] == 255)


def test_replay_output_root_override(tmp_path, session_config):
    events = write_events(tmp_path / "events.yaml", [
        {"type": "label", "label": "diagonal"},
        {"type": "clear"},
        {"type": "save"},
    ])
    argv = [
        "--events", str(events),
        "--config", str(session_config),
        "--output_root", str(tmp_path / "other"),
    ]
    assert replay_session.main(argv) == 0
    assert (tmp_path / "other" / "diagonal" / "00000.png").exists()


def test_replay_save_without_label_fails(tmp_path, session_config):
    events = write_events(tmp_path / "events.yaml", [
        {"type": "move", "x": 0.0, "y": 0.0},
        {"type": "move", "x": 1.0, "y": 0.0},
        {"type": "save"},
    ])
    assert replay_session.main(["--events", str(events), "--config", str(session_config)]) == 1
    assert not (tmp_path / "dataset").exists()


def test_replay_invalid_events(tmp_path, session_config):
    events = write_events(tmp_path / "events.yaml", [{"type": "move", "x": 1.0}])
    assert replay_session.main(["--events", str(events), "--config", str(session_config)]) == 1


def test_replay_with_log_file(tmp_path, session_config):
    events = write_events(tmp_path / "events.yaml", [{"type": "label", "label": "diagonal"}])
    log_file = tmp_path / "logs" / "replay.log"
    argv = ["--events", str(events), "--config", str(session_config), "--log_file", str(log_file)]
    assert replay_session.main(argv) == 0
    assert "Wrote 0 sample(s)" in log_file.read_text()
