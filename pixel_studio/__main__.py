"""Command line entry point: ``python -m pixel_studio``."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import SETTINGS, StudioSettings, configure_logging
from .errors import PixelStudioError
from .infrastructure.assets import OverlayAssets
from .infrastructure.storage import decode, encode
from .processing.pipeline import TRANSFORMS, apply_chain

log = logging.getLogger("pixel-studio")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixel-studio",
        description="Apply pixel transforms to images, or serve them over HTTP.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    apply_p = sub.add_parser("apply", help="Transform INPUT and write the result to OUTPUT")
    apply_p.add_argument("input", help="Image to read")
    apply_p.add_argument("output", help="Where to write the result")
    apply_p.add_argument(
        "transforms",
        nargs="+",
        metavar="TRANSFORM",
        help="One or more of: " + ", ".join(TRANSFORMS),
    )
    apply_p.add_argument("--value", type=float, help="Parameter for hue/saturation/lightness")
    apply_p.add_argument("--format", default=None, help="Output format (default: OUTPUT_FORMAT)")
    apply_p.add_argument("--halo", default=None, help="Halo overlay for the vignette filter")
    apply_p.add_argument("--grain", default=None, help="Grain overlay for the vignette filter")
    apply_p.add_argument(
        "--no-fit",
        action="store_true",
        help="Require overlays to already match the image size",
    )

    serve_p = sub.add_parser("serve", help="Run the HTTP service")
    serve_p.add_argument("--host", default="0.0.0.0")
    serve_p.add_argument("--port", type=int, default=None)

    sub.add_parser("list", help="List available transforms")
    return parser


def run_apply(args: argparse.Namespace, settings: StudioSettings) -> None:
    settings = replace(
        settings,
        halo_path=args.halo or settings.halo_path,
        grain_path=args.grain or settings.grain_path,
        fit_overlays=settings.fit_overlays and not args.no_fit,
    )
    img = decode(args.input)
    result = apply_chain(
        args.transforms,
        img,
        value=args.value,
        overlays=OverlayAssets.from_settings(settings),
    )
    encode(result, args.format or settings.output_format, args.output)
    log.info("Wrote %s (%dx%d)", args.output, result.width, result.height)


def run_serve(args: argparse.Namespace, settings: StudioSettings) -> None:
    from .app import create_app

    app = create_app(settings)
    app.run(host=args.host, port=args.port or settings.port, debug=False)


def main(argv: Optional[List[str]] = None, settings: StudioSettings = SETTINGS) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings)

    if args.command == "list":
        for spec in TRANSFORMS.values():
            print(f"{spec.name:<12} {spec.description}")
        return 0
    if args.command == "serve":
        run_serve(args, settings)
        return 0

    try:
        run_apply(args, settings)
    except (PixelStudioError, ValueError) as exc:
        print(f"pixel-studio: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
