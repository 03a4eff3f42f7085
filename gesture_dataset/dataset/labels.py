"""Gesture label registry: the class names samples are filed under."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class DatasetError(Exception):
    """Raised when the dataset session is used in an invalid state."""

    pass


def normalize_label(text: str) -> str:
    """Strip whitespace and lowercase ASCII letters (non-ASCII kept as typed).

    Raises
    ------
    DatasetError
        If nothing is left, the label contains a path separator, or it is
        "." or ".."
    """
    label = "".join(c.lower() if c.isascii() else c for c in text.strip())
    if not label:
        raise DatasetError("Gesture label must not be empty")
    if "/" in label or "\\" in label:
        raise DatasetError(f"Gesture label {label!r} must not contain path separators")
    if label in (".", ".."):
        raise DatasetError(f"Gesture label {label!r} is not a usable directory name")
    return label


class GestureLabels:
    """Ordered set of known labels plus the currently selected one."""

    def __init__(self, labels: Iterable[str] = ()) -> None:
        self._labels: list[str] = []
        self._current: str | None = None
        for label in labels:
            self.add(label, select=False)

    def add(self, text: str, select: bool = True) -> str:
        """Register a label (normalized) and optionally make it current.

        Adding a label that is already known is not an error; it is just
        selected.

        Returns
        -------
        str
            The normalized label
        """
        label = normalize_label(text)
        if label not in self._labels:
            self._labels.append(label)
            logger.info(f"Added gesture label '{label}'")
        if select:
            self._current = label
        return label

    def select(self, label: str) -> str:
        """Make a known label current.

        Raises
        ------
        DatasetError
            If the label was never added
        """
        label = normalize_label(label)
        if label not in self._labels:
            raise DatasetError(f"Unknown gesture label '{label}'; known: {self._labels}")
        self._current = label
        return label

    @property
    def current(self) -> str | None:
        return self._current

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self._labels)

    def __contains__(self, label: object) -> bool:
        return label in self._labels

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)
