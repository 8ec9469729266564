from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .classifier import classify
from .config import NetworkConfig, OverlapPolicy
from .io import load_network_config
from .render import render_json, render_text


def _existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"File not found: {value}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="han-carlson", add_help=True)
    parser.add_argument(
        "width",
        nargs="?",
        type=int,
        default=None,
        help="Operand width in bits (default: 8, or the config file's width)",
    )
    parser.add_argument(
        "--overlap",
        choices=[p.value for p in OverlapPolicy],
        default=None,
        help="Emit every matching cell per bit (all) or only the highest-priority one (priority)",
    )
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    parser.add_argument("--no-header", action="store_true", help="Omit the banner and legend lines from text output")
    parser.add_argument("--config", type=_existing_path, default=None, help="Path to network config (json|yaml)")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write output to this path (default: stdout)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log classification details to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_network_config(args.config) if args.config is not None else NetworkConfig()
        width = args.width if args.width is not None else config.width
        overlap = OverlapPolicy(args.overlap) if args.overlap is not None else config.overlap
        network = classify(width, overlap=overlap)
    except (ValueError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    text = render_json(network) if args.format == "json" else render_text(network, header=not args.no_header)
    if args.output is None:
        print(text)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main())
