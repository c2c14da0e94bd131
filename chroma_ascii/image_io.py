from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image, ImageOps

from .core_types import U8Image

"""
Image I/O helpers: load any Pillow-readable image as RGBA uint8, write text
and PNG exports.
"""

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif"}


def load_image_rgba(path: Path) -> U8Image:
    """Open with Pillow, honour EXIF orientation, return an (H, W, 4) uint8 array."""
    with Image.open(path) as im0:
        im = ImageOps.exif_transpose(im0)
        arr = np.array(im.convert("RGBA"), dtype=np.uint8)
    return arr


def save_text(path: Path, text: str) -> Path:
    path.write_text(text + "\n", encoding="utf-8")
    return path


def save_png(path: Path, image: Image.Image) -> Path:
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    image.save(path, format="PNG")
    return path


def output_paths(src: Path, outdir: Path | None) -> Tuple[Path, Path]:
    """(<stem>_ascii.txt, <stem>_ascii.png) next to src or inside outdir."""
    folder = outdir or src.parent
    return folder / f"{src.stem}_ascii.txt", folder / f"{src.stem}_ascii.png"


__all__ = [
    "IMAGE_EXTS",
    "load_image_rgba",
    "save_text",
    "save_png",
    "output_paths",
]
