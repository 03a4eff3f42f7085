"""Unified logging configuration for the CLIs and the dataset session.

Provides consistent logging across render_sample.py and replay_session.py:
    - Console and file handlers (file handler optionally rotated)
    - JSON line output for machine ingestion
    - Contextual fields (app, label, sample index) attached to every record
    - Python warnings routed into logging
    - Uncaught exception logging

Public API:
    setup_logging(log_level="INFO", log_file=None, context={"app": "replay"})
    get_logger(name)
    push_context(label="circle", sample=12)
    pop_context(keys=["sample"])
    install_excepthook()

Format examples:
    Human: 2026-10-19T09:12:44.120Z | INFO     | app=replay label=circle | Saved sample
    JSON: {"t":"2026-10-19T09:12:44.120000+00:00","lvl":"INFO","label":"circle","msg":"..."}

Context lives in a contextvar, so nested sessions in one process don't leak fields.
Idempotent: repeated setup_logging() calls replace handlers instead of stacking them.
"""

import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('gesture_logging_context', default={})

# Handlers installed by the last setup_logging() call
_installed: list = []

_LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
_RESET = '\033[0m'


class ContextFormatter(logging.Formatter):
    """Formatter that prefixes records with the current context fields.

    Two modes: ``"human"`` (pipe-separated, optional ANSI color) and
    ``"json"`` (one object per line).
    """

    def __init__(
        self,
        fmt_mode: str = "human",
        use_color: bool = True,
        tz: str = "UTC"
    ):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.tz = tz

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})
        if self.tz == "UTC":
            ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        else:
            ts = datetime.fromtimestamp(record.created)

        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(self, record: logging.LogRecord, ts: datetime, context: dict) -> str:
        payload = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'pid': os.getpid(),
            'msg': record.getMessage(),
        }
        payload.update(context)
        if record.exc_info:
            payload['exc'] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)

    def _format_human(self, record: logging.LogRecord, ts: datetime, context: dict) -> str:
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        parts = [ts_str, '|', level, '|']
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()) + ' |')
        parts.append(record.getMessage())

        line = ' '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None
) -> List[logging.Handler]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Log file path; None disables file logging
    json : bool
        Write the file (and only the file) as JSON lines, default False
    color : bool
        ANSI colors on the console when attached to a TTY, default True
    to_stderr : bool
        Log to stderr, default True
    rotate : dict, optional
        File rotation:
        - {"mode": "size", "max_bytes": 5_000_000, "backup_count": 3}
        - {"mode": "time", "when": "D", "interval": 1, "backup_count": 7}
    tz : str
        "UTC" (default) or "local"
    capture_warnings : bool
        Route Python warnings into logging, default True
    quiet_libs : list[str], optional
        Loggers to raise to WARNING (e.g. ["PIL"])
    context : dict, optional
        Initial context fields (e.g. {"app": "replay"})

    Returns
    -------
    list[logging.Handler]
        Handlers installed on the root logger

    Examples
    --------
    >>> setup_logging(log_level="DEBUG", context={"app": "render"})
    """
    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()

    root.setLevel(getattr(logging, log_level.upper()))

    handlers: List[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", color, tz))
        handlers.append(console)
    if log_file:
        handlers.append(_create_file_handler(log_file, rotate, json, tz))

    for handler in handlers:
        root.addHandler(handler)
    _installed.extend(handlers)

    if context:
        push_context(**context)

    for lib in quiet_libs or []:
        logging.getLogger(lib).setLevel(logging.WARNING)

    if capture_warnings:
        logging.captureWarnings(True)
        logging.getLogger('py.warnings').setLevel(logging.WARNING)

    return handlers


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
    tz: str
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if rotate:
        mode = rotate.get('mode', 'size')
        if mode == 'size':
            handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=rotate.get('max_bytes', 5_000_000),
                backupCount=rotate.get('backup_count', 3)
            )
        elif mode == 'time':
            handler = logging.handlers.TimedRotatingFileHandler(
                log_path,
                when=rotate.get('when', 'D'),
                interval=rotate.get('interval', 1),
                backupCount=rotate.get('backup_count', 7)
            )
        else:
            raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")
    else:
        handler = logging.FileHandler(log_path)

    handler.setFormatter(ContextFormatter("json" if json_format else "human", use_color=False, tz=tz))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get logger by name (typically ``__name__``)."""
    return logging.getLogger(name)


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(app="replay")
    >>> push_context(label="circle")
    >>> logger.info("Saved")  # → "... | app=replay label=circle | Saved"
    """
    _context_var.set({**_context_var.get({}), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; all of them when ``keys`` is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)


def get_context() -> Dict[str, Any]:
    """Return a copy of the current context fields."""
    return dict(_context_var.get({}))


def install_excepthook() -> None:
    """Log uncaught exceptions (except Ctrl+C) at CRITICAL before exit."""
    def log_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logging.getLogger(__name__).critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = log_exception


def shutdown() -> None:
    """Flush and close all handlers; call at the end of a CLI main()."""
    logging.shutdown()
