"""YAML schema validation and config loading.

Centralized pydantic validation for every YAML file the tools read:
    - Session schema (session.v1): raster size, output root, labels, counter start
    - Sample schema (sample.v1): one gesture's strokes as lists of [x, y]
    - Events schema (events.v1): recorded pointer events for headless replay

Loaders fail fast with the offending file named in the message.

Units:
    - Stroke coordinates: drawing-surface units (floats)
    - Raster size: pixels (ints >= 1)
    - Pixel values: [0, 255]

Usage:
    from gesture_dataset.utils import validators

    cfg = validators.load_session_config("configs/session_v1.yaml")
    sample_file = validators.load_sample_file("circle_00012.yaml")
"""

from pathlib import Path
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# SHARED
# ============================================================================

class RasterConfig(BaseModel):
    """Output raster size in pixels (32×32 unless configured)."""
    width: int = Field(32, ge=1, description="Image width (px)")
    height: int = Field(32, ge=1, description="Image height (px)")


def _check_schema(value: str, expected: str) -> str:
    if value != expected:
        raise ValueError(f"Expected schema '{expected}', got '{value}'")
    return value


# ============================================================================
# SESSION SCHEMA V1
# ============================================================================

class SessionConfigV1(BaseModel):
    """Dataset session settings (session.v1 schema)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("session.v1", alias="schema", description="Schema version")
    raster: RasterConfig = Field(default_factory=RasterConfig)
    output_root: str = Field("outputs/gestures", description="Root of the per-label directories")
    labels: List[str] = Field(default_factory=list, description="Labels known at startup")
    start_index: int = Field(0, ge=0, description="First value of the running sample counter")
    skip_empty: bool = Field(False, description="Skip saves with no drawable stroke")
    foreground: int = Field(255, ge=0, le=255, description="Stroke pixel value")
    background: int = Field(0, ge=0, le=255, description="Background pixel value")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        return _check_schema(v, "session.v1")

    @field_validator('labels')
    @classmethod
    def validate_labels(cls, v: List[str]) -> List[str]:
        for label in v:
            if not label.strip():
                raise ValueError("Labels must be non-empty strings")
            if any(sep in label for sep in ('/', '\\')):
                raise ValueError(f"Label {label!r} must not contain path separators")
            if label.strip() in (".", ".."):
                raise ValueError(f"Label {label!r} is not a usable directory name")
        return v

    @model_validator(mode='after')
    def validate_palette(self) -> 'SessionConfigV1':
        if self.foreground == self.background:
            raise ValueError(
                f"foreground and background must differ, both are {self.foreground}"
            )
        return self


# ============================================================================
# SAMPLE SCHEMA V1
# ============================================================================

class SampleFileV1(BaseModel):
    """One gesture sample on disk (sample.v1 schema).

    Strokes with fewer than 2 points are accepted and kept; they are
    skipped at rasterization time, not at load time.
    """
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("sample.v1", alias="schema", description="Schema version")
    label: Optional[str] = Field(None, description="Gesture label")
    raster: Optional[RasterConfig] = Field(None, description="Preferred output size")
    strokes: List[List[Tuple[float, float]]] = Field(..., description="Strokes as [[x, y], ...]")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        return _check_schema(v, "sample.v1")


# ============================================================================
# EVENTS SCHEMA V1
# ============================================================================

EventType = Literal["move", "release", "clear", "save", "label", "size"]


class PointerEvent(BaseModel):
    """One recorded UI event.

    move: x, y      label: label      size: width, height
    release, clear, save: no fields
    """
    type: EventType
    x: Optional[float] = None
    y: Optional[float] = None
    label: Optional[str] = None
    width: Optional[int] = Field(None, ge=1)
    height: Optional[int] = Field(None, ge=1)

    @model_validator(mode='after')
    def validate_fields_for_type(self) -> 'PointerEvent':
        required = {
            'move': ('x', 'y'),
            'label': ('label',),
            'size': ('width', 'height'),
        }.get(self.type, ())
        missing = [name for name in required if getattr(self, name) is None]
        if missing:
            raise ValueError(f"'{self.type}' event is missing {', '.join(missing)}")
        return self


class PointerEventsV1(BaseModel):
    """Recorded event log (events.v1 schema)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("events.v1", alias="schema", description="Schema version")
    events: List[PointerEvent] = Field(..., description="Events in arrival order")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        return _check_schema(v, "events.v1")


# ============================================================================
# LOADERS
# ============================================================================

def _load_validated(path: Union[str, Path], model: type, what: str):
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{what} not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"{what} at {path} must be a YAML mapping, got {type(data).__name__}")
    try:
        return model(**data)
    except Exception as e:
        raise ValueError(f"{what} validation failed at {path}: {e}") from e


def load_session_config(path: Union[str, Path]) -> SessionConfigV1:
    """Load and validate a session config from YAML.

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (message names the file)
    """
    return _load_validated(path, SessionConfigV1, "Session config")


def load_sample_file(path: Union[str, Path]) -> SampleFileV1:
    """Load and validate a sample.v1 YAML file."""
    return _load_validated(path, SampleFileV1, "Sample file")


def load_pointer_events(path: Union[str, Path]) -> PointerEventsV1:
    """Load and validate an events.v1 YAML file."""
    return _load_validated(path, PointerEventsV1, "Events file")
