"""Persistence of rendered pixel buffers and ASCII grids."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import PIL.Image

from .ascii_art import format_ascii
from .renderer import to_image


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def image_format_for(path: Path) -> str:
    """Pillow format name for ``path``, PNG when it has no suffix."""

    ext = path.suffix.lstrip(".")
    name = _pil_format_name(ext or "png")
    PIL.Image.init()
    if name not in PIL.Image.SAVE:
        raise ValueError(f"Unsupported image format '{ext}' for {str(path)!r}.")
    return name


def write_image(buffer: np.ndarray, output_path: Path) -> Path:
    """Write ``buffer`` to ``output_path`` in the format given by its suffix."""

    output_path = Path(output_path)
    pil_format = image_format_for(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    to_image(buffer).save(str(output_path), format=pil_format)
    return output_path


def write_ascii(grid: Sequence[str], output_path: Path) -> Path:
    """Write ``grid`` to ``output_path``, one line per row."""

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(format_ascii(grid), encoding="utf-8")
    return output_path
