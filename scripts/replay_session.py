#!/usr/bin/env python3
"""Replay recorded pointer events into a labeled gesture dataset.

Drives a DatasetSession from an events.v1 YAML log exactly as the drawing
window would: pointer moves extend the open stroke, releases seal it,
``save`` rasterizes and files the sample under the current label.

Usage:
    python scripts/replay_session.py --events recordings/circles.yaml

    python scripts/replay_session.py --events recordings/circles.yaml \
        --config configs/session_v1.yaml --output_root outputs/run_02

Events file:
    schema: events.v1
    events:
      - {type: label, label: circle}
      - {type: size, width: 28, height: 28}
      - {type: move, x: 0.10, y: 0.20}
      - {type: release}
      - {type: save}
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gesture_dataset.dataset import DatasetError, DatasetSession
from gesture_dataset.utils import logging_config, validators

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "session_v1.yaml"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Replay pointer events into a labeled raster dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--events', type=str, required=True, help='events.v1 YAML file')
    parser.add_argument(
        '--config',
        type=str,
        default=str(DEFAULT_CONFIG),
        help=f'session.v1 YAML file, default: {DEFAULT_CONFIG.name}'
    )
    parser.add_argument(
        '--output_root',
        type=str,
        default=None,
        help='Override output_root from the config'
    )
    parser.add_argument('--log_file', type=str, default=None, help='Also log to this file')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose logging')
    return parser.parse_args(argv)


def replay(session: DatasetSession, events: List[validators.PointerEvent]) -> List[Path]:
    """Apply events in order; return the paths of written samples.

    Raises
    ------
    DatasetError
        On a save without a label or a selection of an unknown label
    """
    written = []
    for event in events:
        if event.type == "move":
            session.pointer_moved((event.x, event.y))
        elif event.type == "release":
            session.pointer_released()
        elif event.type == "clear":
            session.clear()
        elif event.type == "label":
            session.labels.add(event.label)
        elif event.type == "size":
            session.set_raster_size(event.width, event.height)
        elif event.type == "save":
            path = session.save()
            if path is not None:
                written.append(path)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = parse_args(argv)

    logging_config.setup_logging(
        log_level="DEBUG" if args.verbose else "INFO",
        log_file=args.log_file,
        context={"app": "replay"}
    )
    logger = logging.getLogger(__name__)

    try:
        cfg = validators.load_session_config(args.config)
        log = validators.load_pointer_events(args.events)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    session = DatasetSession.from_config(cfg, output_root=args.output_root)
    logger.info(f"Replaying {len(log.events)} event(s) from {args.events}")

    try:
        written = replay(session, log.events)
    except (DatasetError, RuntimeError) as e:
        logger.error(f"Replay stopped: {e}")
        return 1

    if session.collector.is_drawing or session.collector.stroke_count > 1:
        logger.warning("Event log ended with an unsaved drawing; it was discarded")

    logger.info(f"Wrote {len(written)} sample(s) under {session.writer.root}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
