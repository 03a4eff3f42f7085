"""Atomic filesystem operations for sample images and YAML files.

Provides:
    - Atomic writes: tmp file → fsync → rename (no half-written samples)
    - Image save from (H, W) uint8 rasters via PIL
    - YAML load/save (PyYAML safe_load / safe_dump)
    - Directory creation with exist_ok semantics

A crash during a save never leaves a truncated PNG in a label directory:
the image is written next to its target and renamed into place.

Usage:
    from gesture_dataset.utils import fs
    fs.atomic_save_image(image, root / "circle" / "00012.png")
    fs.atomic_yaml_dump(sample_dict, root / "circle" / "00012.yaml")
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml
from PIL import Image


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory (and parents) if missing; return it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(
    path: Union[str, Path],
    data: bytes,
    tmp_suffix: str = ".tmp"
) -> None:
    """Write bytes to file atomically (tmp → fsync → rename).

    Parameters
    ----------
    path : Union[str, Path]
        Target file path
    data : bytes
        Data to write
    tmp_suffix : str
        Temporary file suffix, default ".tmp"

    Raises
    ------
    RuntimeError
        If the write or rename fails; the tmp file is removed first
    """
    path = Path(path)
    tmp_path = path.with_suffix(path.suffix + tmp_suffix)

    try:
        ensure_dir(path.parent)
        with open(tmp_path, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_save_image(
    img: np.ndarray,
    path: Union[str, Path],
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Save a raster image atomically.

    Parameters
    ----------
    img : np.ndarray
        (H, W) or (H, W, 3) image. uint8 is written as-is; bool is mapped
        to {0, 255}; float is assumed to be in [0, 1].
    path : Union[str, Path]
        Target file path (extension selects the format)
    pil_kwargs : Optional[Dict[str, Any]]
        Extra kwargs for ``PIL.Image.save`` (e.g. optimize=True)

    Raises
    ------
    ValueError
        If the array is not 2-D or (H, W, 1|3)
    RuntimeError
        If encoding or the rename fails
    """
    path = Path(path)
    pil_kwargs = pil_kwargs or {}
    img = np.asarray(img)

    if img.dtype == np.bool_:
        img = img.astype(np.uint8) * 255
    elif np.issubdtype(img.dtype, np.floating):
        img = (np.clip(img, 0.0, 1.0) * 255.0).round().astype(np.uint8)
    elif img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)

    if img.ndim == 3 and img.shape[2] == 1:
        img = img.squeeze(2)
    if img.ndim not in (2, 3) or (img.ndim == 3 and img.shape[2] != 3):
        raise ValueError(f"Expected (H, W) or (H, W, 3) image, got shape {img.shape}")

    pil_img = Image.fromarray(img)

    # Keep the real extension last so PIL picks the format from it
    tmp_path = path.with_name(path.stem + ".tmp" + path.suffix)
    try:
        ensure_dir(path.parent)
        pil_img.save(tmp_path, **pil_kwargs)
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to save image {path} atomically: {e}") from e


def load_image(path: Union[str, Path]) -> np.ndarray:
    """Load an image as a numpy array (grayscale images come back (H, W))."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    with Image.open(path) as pil_img:
        return np.array(pil_img)


def atomic_yaml_dump(obj: Any, path: Union[str, Path]) -> None:
    """Save object as YAML atomically (safe_dump, insertion order kept)."""
    yaml_str = yaml.safe_dump(
        obj,
        default_flow_style=None,
        sort_keys=False,
        allow_unicode=True
    )
    atomic_write_bytes(path, yaml_str.encode('utf-8'))


def load_yaml(path: Union[str, Path]) -> Any:
    """Load YAML file safely.

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
