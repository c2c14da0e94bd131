# chroma_ascii/utils.py
from __future__ import annotations

"""
Shared utilities for chroma_ascii.

Time formatting, palette usage counts, and tidy console logging used by the
pipeline and the CLI.
"""

import sys
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

from .core_types import RGBTuple, rgb_to_hex


# Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# Palette usage


def palette_usage_report(
    color_indices: Sequence[int], palette: Sequence[RGBTuple]
) -> List[Tuple[str, int]]:
    """
    Count how many cells use each palette entry.

    Returns a list of (hex, count) for used entries, sorted by count descending
    and then by palette index.
    """
    if len(color_indices) == 0:
        return []
    counts = np.bincount(np.asarray(color_indices, dtype=np.int64), minlength=len(palette))
    order = sorted(
        (i for i in range(len(palette)) if counts[i] > 0), key=lambda i: (-int(counts[i]), i)
    )
    return [(rgb_to_hex(palette[i]), int(counts[i])) for i in order]


# Pretty logging


def _display_value(value: Any) -> str:
    """on/off for bools, 1,234 for ints, trimmed decimals for floats."""
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """Format (name, value) pairs as 'Name: value' blocks separated by sep."""
    return sep.join(f"{name}{eq}{_display_value(value)}" for name, value in pairs)


def print_config_line(section: str, pairs: Iterable[Tuple[str, Any]]) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [dither] Algorithm: atkinson  Charset: braille  Density: 80  Invert: off
    """
    log(f"[{section}] {key_value_pairs_to_string(pairs)}")


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "palette_usage_report",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
