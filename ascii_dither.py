#!/usr/bin/env python3
"""
ascii_dither.py
Turn images into dithered, palette-coloured character art.

Usage:
  python ascii_dither.py INPUT [--outdir DIR] [--algorithm NAME] [--charset NAME]
                         [--palette-mode MODE] [--palette HEX ...] [--palette-file PATH]
                         [--preset NAME] [--density N] [--aspect F] [--font-size F]
                         [--font-family NAME] [--invert] [--bg HEX] [--fg HEX]
                         [--no-png] [--print] [--jobs N] [--debug]

Algorithms:
  floyd-steinberg : classic error diffusion (default).
  atkinson        : diffuses 3/4 of the error, lighter and crisper.
  sierra          : two-row diffusion, smoothest gradients.
  bayer           : 4x4 ordered threshold, no diffusion.

Output:
  <stem>_ascii.txt with the glyph rows, and <stem>_ascii.png with the glyphs
  drawn in their palette colours (skip with --no-png). Outputs go next to
  INPUT unless --outdir is given. A folder INPUT processes every image in it.
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from concurrent.futures import ProcessPoolExecutor
from contextlib import redirect_stdout
from pathlib import Path
from typing import List, Optional, Sequence

from chroma_ascii.charsets import CHARACTER_SETS
from chroma_ascii.core_types import (
    DENSITY_MAX,
    DENSITY_MIN,
    DEFAULT_SETTINGS,
    DitherSettings,
    RGBTuple,
    hex_to_rgb,
)
from chroma_ascii.dither import ALGORITHM_TABLE
from chroma_ascii.image_io import (
    IMAGE_EXTS,
    load_image_rgba,
    output_paths,
    save_png,
    save_text,
)
from chroma_ascii.mode import PALETTE_MODES, apply_preset, effective_settings
from chroma_ascii.palette_data import PRESETS, load_palette_file
from chroma_ascii.pipeline import process_image
from chroma_ascii.render import display_colors, render_to_image
from chroma_ascii.utils import (
    debug_log,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    palette_usage_report,
    print_banner,
    print_config_line,
    warn,
)

# CLI args & small helpers


def _hex_colour(text: str) -> RGBTuple:
    try:
        return hex_to_rgb(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        algorithm / charset / palette_mode / preset: names
        palette: list of RGB tuples from --palette
        palette_file: optional Path
        density, aspect, font_size, font_family, invert: settings
        bg, fg: optional RGB display colours
        no_png, print_text: output switches
        jobs: parallel file workers
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="ascii_dither",
        description="Dither image(s) into palette-coloured character art.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--algorithm",
        choices=list(ALGORITHM_TABLE),
        default=DEFAULT_SETTINGS.algorithm,
        help="Dithering algorithm.",
    )
    parser.add_argument(
        "--charset",
        choices=list(CHARACTER_SETS),
        default=DEFAULT_SETTINGS.character_set,
        help="Glyph ramp.",
    )
    parser.add_argument(
        "--palette-mode",
        choices=list(PALETTE_MODES),
        default=None,
        help='Palette depth. Defaults to "custom" when --palette/--palette-file is given, else 1-bit.',
    )
    parser.add_argument(
        "--palette",
        nargs="+",
        type=_hex_colour,
        default=[],
        metavar="HEX",
        help="Custom palette colours, e.g. --palette 000 f00 '#ffffff'",
    )
    parser.add_argument(
        "--palette-file",
        type=Path,
        default=None,
        help="Custom palette from a .gpl or hex list file",
    )
    parser.add_argument(
        "--preset",
        choices=list(PRESETS),
        default=None,
        help="Preset bundle; overrides algorithm, charset and palette.",
    )
    parser.add_argument(
        "--density",
        type=int,
        default=DEFAULT_SETTINGS.density,
        help=f"Characters per row ({DENSITY_MIN}-{DENSITY_MAX}).",
    )
    parser.add_argument(
        "--aspect",
        type=float,
        default=DEFAULT_SETTINGS.aspect_ratio,
        help="Glyph width/height ratio used for row count (0.3-1.0).",
    )
    parser.add_argument(
        "--font-size",
        type=float,
        default=DEFAULT_SETTINGS.font_size,
        help="Glyph height in pixels for the PNG.",
    )
    parser.add_argument(
        "--font-family",
        default=DEFAULT_SETTINGS.font_family,
        help='TrueType font name or path for the PNG ("monospace" picks a system mono font).',
    )
    parser.add_argument(
        "--invert", action="store_true", help="Dense glyphs for light areas"
    )
    parser.add_argument(
        "--bg", type=_hex_colour, default=None, help="PNG background colour (hex)"
    )
    parser.add_argument(
        "--fg",
        type=_hex_colour,
        default=None,
        help="Single glyph colour for the PNG (hex); default colours per cell",
    )
    parser.add_argument("--no-png", action="store_true", help="Only write the .txt")
    parser.add_argument(
        "--print",
        dest="print_text",
        action="store_true",
        help="Also print the glyph rows to stdout",
    )
    parser.add_argument(
        "--jobs", type=int, default=1, help="Files processed in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> DitherSettings:
    """Build DitherSettings from parsed args. A preset is applied last so it wins."""
    custom: List[RGBTuple] = list(args.palette)
    if args.palette_file is not None:
        custom.extend(load_palette_file(args.palette_file))
    palette_mode = args.palette_mode or ("custom" if custom else "1-bit")

    settings = DitherSettings(
        algorithm=args.algorithm,
        character_set=args.charset,
        palette_mode=palette_mode,
        density=args.density,
        aspect_ratio=args.aspect,
        font_size=args.font_size,
        font_family=args.font_family,
        invert=bool(args.invert),
        custom_palette=tuple(custom),
    )
    if args.preset:
        settings = apply_preset(settings, args.preset)
    return settings


# Per-file processing


def _process_single_image(
    src_path: Path,
    outdir: Optional[Path],
    settings: DitherSettings,
    args: argparse.Namespace,
) -> None:
    """
    Process a single image path end-to-end:
      load -> dither -> write .txt -> render + write .png -> report.
    """
    t_start = time.perf_counter()
    txt_path, png_path = output_paths(src_path, outdir)

    print_banner(src_path.name)

    rgba = load_image_rgba(src_path)
    if args.debug:
        debug_log(f"Loaded {rgba.shape[1]}x{rgba.shape[0]}")

    result = process_image(rgba, settings, debug=args.debug)
    save_text(txt_path, result.text)

    if not args.no_png:
        bg, fg = display_colors(settings)
        if args.bg is not None:
            bg = args.bg
        if args.fg is not None:
            fg = args.fg
        image = render_to_image(result, settings, bg, fg)
        save_png(png_path, image)
        log(f"Wrote {txt_path.name}, {png_path.name} | png={image.width}x{image.height}")
    else:
        log(f"Wrote {txt_path.name}")

    log(
        key_value_pairs_to_string(
            [
                ("Grid", f"{result.cols}x{result.rows}"),
                ("Palette", len(result.palette)),
                ("Dither", f"{result.processing_time:.1f}ms"),
            ]
        )
    )
    log("Colours used:")
    for hex_code, count in palette_usage_report(result.color_indices, result.palette):
        log(f"  {hex_code}: {count:,}")

    if args.print_text:
        print(result.text, flush=True)

    log(f"Total time {format_seconds_compact(time.perf_counter() - t_start)}")


def _process_one_captured(
    path: Path,
    outdir: Optional[Path],
    settings: DitherSettings,
    args: argparse.Namespace,
) -> tuple[str, bool]:
    """
    Process a single file with stdout capture.

    Runs in a worker process under --jobs, where redirect_stdout only swaps
    that process's own stdout. Returns (captured output, ok).
    """
    buf = io.StringIO()
    ok = True
    with redirect_stdout(buf):
        try:
            _process_single_image(path, outdir, settings, args)
        except (OSError, ValueError) as exc:
            ok = False
            print(f"[error] {path.name}: {exc}", flush=True)
    return buf.getvalue(), ok


def _collect_images(src: Path, debug: bool) -> List[Path]:
    all_entries = list(src.iterdir())
    files = [
        p
        for p in all_entries
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.stem.endswith("_ascii")
    ]
    files.sort(key=lambda p: p.name.lower())
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [("Folder entries", len(all_entries)), ("Images", len(files))]
            )
        )
    return files


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering. Returns the process exit code.
    """
    args = parse_cli_args(argv)

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2
    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    try:
        settings = settings_from_args(args)
    except OSError as exc:
        error(f"cannot read palette file: {exc}")
        return 2
    if args.palette_file is not None and not settings.custom_palette:
        warn(f"no colours found in {args.palette_file}; using black/white")

    eff = effective_settings(settings)
    print_config_line(
        "dither",
        [
            ("Algorithm", eff.algorithm),
            ("Charset", eff.character_set),
            ("Palette", eff.palette_mode),
            ("Preset", eff.preset or "-"),
            ("Density", eff.density),
            ("Aspect", eff.aspect_ratio),
            ("Invert", eff.invert),
        ],
    )

    files = _collect_images(src, args.debug) if src.is_dir() else [src]
    if not files:
        warn(f"no images in {src}")
        return 0

    jobs = max(1, int(args.jobs))
    failures = 0
    if jobs == 1:
        for p in files:
            try:
                _process_single_image(p, args.outdir, settings, args)
            except (OSError, ValueError) as exc:
                failures += 1
                error(f"{p.name}: {exc}")
    else:
        with ProcessPoolExecutor(max_workers=jobs) as ex:
            futures = [
                ex.submit(_process_one_captured, p, args.outdir, settings, args)
                for p in files
            ]
            blocks = [f.result() for f in futures]
        print("".join(text for text, _ok in blocks), end="", flush=True)
        failures = sum(1 for _text, ok in blocks if not ok)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
