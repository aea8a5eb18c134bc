from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .codec import read_tga
from .compare import compare_files, format_report
from .pipeline import DATA_PATH, DEFAULT_REGISTRY, Pipeline, RunSettings, run_pipeline

BASE_DIR_ENV_VAR = "TGACOMP_BASE_DIR"
EXPECTED_PREFIX = "EXAMPLE_"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="tgacomp: blend, split, flip and tile uncompressed 24-bit TGA images."
    )
    parser.add_argument("pipeline", nargs="?", help="Pipeline JSON file (default: the bundled pipeline)")
    parser.add_argument(
        "--base-dir",
        help=f"Directory pipeline paths are relative to (default: ${BASE_DIR_ENV_VAR} or the current directory)",
    )
    parser.add_argument("--preview-dir", metavar="DIR", help="Also save a PNG preview of every output here")
    parser.add_argument(
        "--compare-dir",
        metavar="DIR",
        help=f"After running, compare each output against DIR/{EXPECTED_PREFIX}<name>.tga",
    )
    parser.add_argument("--compare", nargs=2, metavar=("ACTUAL", "EXPECTED"), help="Compare two TGA files and exit")
    parser.add_argument("--info", metavar="PATH", help="Print the header of a TGA file and exit")
    parser.add_argument("--list-operations", action="store_true", help="List pipeline operations and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each step")
    return parser.parse_args(argv)


def resolve_base_dir(args: argparse.Namespace) -> str:
    if args.base_dir:
        return args.base_dir
    return os.environ.get(BASE_DIR_ENV_VAR, ".")


def list_operations() -> int:
    for name in DEFAULT_REGISTRY.names:
        print(name)
    return 0


def show_info(path: str) -> int:
    image = read_tga(path)
    header = image.header
    print(f"id length: {header.id_length}")
    print(f"color map type: {header.color_map_type}")
    print(f"image type: {header.image_type}")
    print(f"origin: {header.x_origin},{header.y_origin}")
    print(f"size: {header.width}x{header.height}")
    print(f"pixel depth: {header.pixel_depth}")
    print(f"descriptor: {header.descriptor:#04x}")
    print(f"pixels: {len(image.pixels)}")
    return 0


def compare_two(actual: str, expected: str) -> int:
    report = compare_files(actual, expected)
    for line in format_report(report):
        print(line)
    return 0 if report.matches else 1


def run(args: argparse.Namespace) -> int:
    pipeline = Pipeline.load(args.pipeline) if args.pipeline else Pipeline.load(DATA_PATH)
    settings = RunSettings(base_dir=resolve_base_dir(args), preview_dir=args.preview_dir)
    results = run_pipeline(pipeline, settings)
    status = 0
    for result in results:
        if not result.output_path:
            continue
        print(f"{result.step.name}: {result.output_path}")
        if not args.compare_dir:
            continue
        expected = os.path.join(args.compare_dir, EXPECTED_PREFIX + os.path.basename(result.output_path))
        if not os.path.isfile(expected):
            continue
        report = compare_files(result.output_path, expected)
        if not report.matches:
            status = 1
            for line in format_report(report):
                print(f"  {line}")
    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.list_operations:
        return list_operations()
    try:
        if args.info:
            return show_info(args.info)
        if args.compare:
            return compare_two(*args.compare)
        return run(args)
    except Exception as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
