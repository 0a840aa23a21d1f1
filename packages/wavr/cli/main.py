"""Command-line interface for wavr.

Reads an audio file (or stdin), draws its waveform using the given flags, and
writes a PNG image to a file (or stdout). Flags override values from an
optional JSON/YAML config file.
"""

from __future__ import annotations

import argparse
import io
import logging
from pathlib import Path
import sys
from typing import BinaryIO

from pydantic import ValidationError
from rich.console import Console

from wavr.core.audio.compute import compute_values
from wavr.core.audio.reducers import REDUCERS
from wavr.core.config.loader import load_waveform_config
from wavr.core.config.models import WaveformConfig
from wavr.core.errors import DecodeError, OptionsError
from wavr.core.render.colors import COLOR_FUNCTIONS
from wavr.core.render.renderer import render
from wavr.core.utils.logging import configure_logging

console = Console(stderr=True)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DECODE_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="wavr",
        description="wavr - render audio waveforms as PNG images",
    )
    p.add_argument("input", nargs="?", default="-", help="Audio file to read (default: stdin)")
    p.add_argument("-o", "--output", default="-", help="PNG file to write (default: stdout)")
    p.add_argument("--config", help="Path to a JSON or YAML config file")

    p.add_argument("--bg", help="Background color of the waveform image (default: #FFFFFF)")
    p.add_argument("--fg", help="Foreground color of the waveform image (default: #000000)")
    p.add_argument("--alt", help="Alternate color of the waveform image")
    p.add_argument(
        "--fn",
        choices=COLOR_FUNCTIONS,
        help="Function used to color the waveform (default: solid)",
    )
    p.add_argument("--checker-size", type=int, help="Tile size for the checker function")

    p.add_argument(
        "--resolution",
        type=int,
        help="Number of times audio is read and drawn per second of audio (default: 1)",
    )
    p.add_argument("-x", dest="scale_x", type=int, help="Scaling factor for image X-axis")
    p.add_argument("-y", dest="scale_y", type=int, help="Scaling factor for image Y-axis")
    p.add_argument(
        "--sharpness",
        type=int,
        help="Sharpening factor used to add curvature to a scaled image (default: 1)",
    )
    p.add_argument(
        "--clipping",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Scale the waveform down when clipping thresholds are reached (default: on)",
    )

    p.add_argument("--reducer", choices=sorted(REDUCERS), help="Sample reducer (default: rms)")
    p.add_argument("--decoder", choices=["soundfile", "librosa"], help="Audio decoder backend")

    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )
    p.add_argument("--structured-logs", action="store_true", help="Emit logs as JSON lines")

    return p


def resolve_config(args: argparse.Namespace) -> WaveformConfig:
    """Merge command-line flags over the config file (or defaults).

    Clipping compensation is enabled unless a config file or ``--no-clipping``
    says otherwise.
    """
    base = load_waveform_config(args.config)
    data = base.model_dump()

    overrides = {
        "resolution": args.resolution,
        "scale_x": args.scale_x,
        "scale_y": args.scale_y,
        "sharpness": args.sharpness,
        "reducer": args.reducer,
        "decoder": args.decoder,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})

    if args.clipping is not None:
        data["scale_clipping"] = args.clipping
    elif args.config is None:
        data["scale_clipping"] = True

    color_overrides = {
        "background": args.bg,
        "foreground": args.fg,
        "alternate": args.alt,
        "function": args.fn,
        "checker_size": args.checker_size,
    }
    data["colors"].update({k: v for k, v in color_overrides.items() if v is not None})

    if args.log_level is not None:
        data["logging"]["level"] = args.log_level
    if args.structured_logs:
        data["logging"]["structured"] = True

    return WaveformConfig.model_validate(data)


def _open_input(name: str) -> str | BinaryIO:
    if name == "-":
        # libsndfile needs a seekable stream
        return io.BytesIO(sys.stdin.buffer.read())
    return name


def run(args: argparse.Namespace) -> int:
    """Generate one waveform image.

    Returns:
        Exit code (0 success, 1 decode error, 2 configuration error)
    """
    try:
        config = resolve_config(args)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Invalid configuration: {e}[/red]")
        return EXIT_CONFIG_ERROR

    configure_logging(
        level=config.logging.level,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )

    source = _open_input(args.input)
    if isinstance(source, str) and not Path(source).exists():
        console.print(f"[red]ERROR: Audio file not found: {source}[/red]")
        return EXIT_CONFIG_ERROR

    try:
        values = compute_values(source, config.to_compute_options(), decoder=config.decoder)
        img = render(values, config.to_image_options())
    except DecodeError as e:
        logger.error(f"Unable to decode audio: {e}")
        console.print(f"[red]ERROR: {e}[/red]")
        return EXIT_DECODE_ERROR
    except OptionsError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return EXIT_CONFIG_ERROR

    if args.output == "-":
        img.save(sys.stdout.buffer, "PNG")
        sys.stdout.buffer.flush()
    else:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        img.save(str(output_path), "PNG")
        console.print(f"[green]✅ Waveform written:[/green] {output_path} ({img.width}x{img.height})")

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
