"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Config validation (validators)
    - Atomic image / YAML I/O (fs)
    - Sample serialization (strokes)
    - Unified logging (logging_config)

Only ``strokes`` reaches upward, and only for the capture value types.

Convenience imports:
    from gesture_dataset.utils import fs, validators
    from gesture_dataset.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import logging_config
from . import strokes
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    'fs',
    'logging_config',
    'strokes',
    'validators',
    'setup_logging',
    'get_logger',
    'push_context',
]
