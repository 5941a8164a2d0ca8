#!/usr/bin/env python3
"""JI vs EDO diagram generator.

Draws just-intonation intervals (grouped by prime limit) and the steps of
several equal divisions of the octave on a shared logarithmic pitch axis.
Output as SVG, HTML page, JSON shape list, or PNG preview.

Usage:
  edolines                                  # default table, 12 16 19 22 31
  edolines --edo 12 19 31 -o cmp.svg        # pick the EDOs
  edolines --primes 3 5 --format png        # 5-limit only, PNG preview
  edolines --table my_ratios.json --dedupe  # custom table, no repeats
  edolines --list --edo 12 31               # print intervals vs EDO steps
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Mapping, Sequence, TextIO

from edolines.config import DOC_WIDTH, EDO_BLOCK_HEIGHT, FONT_SIZE, Frame
from edolines.diagram import render, shapes_to_json
from edolines.errors import DiagramError
from edolines.intervals import (EDO_VALUES, IntervalGroup, complexity_key,
                                default_table, load_table, prime_limit,
                                select_primes)
from edolines.mapping import nearest_edo_step
from edolines.svg import to_html, to_svg

FORMATS = ("svg", "html", "png", "json")
ORDERS = ("table", "pitch", "complexity")


# ── Interval listing ──────────────────────────────────────────────────

def format_listing(table: Mapping[int, IntervalGroup], edos: Sequence[int],
                   out: TextIO, order: str = "table") -> None:
    """One line per interval: ratio, cents, limit, nearest step per EDO.

    Within each group intervals keep table order, or are sorted by pitch
    or by harmonic complexity.
    """
    header = f"{'ratio':>7}  {'cents':>7}  {'lim':>3}"
    for edo in edos:
        header += f"  {edo:>4}-EDO    "
    out.write(header + "  name\n")
    for prime, group in table.items():
        out.write(f"; {prime}-limit ({len(group.intervals)} intervals)\n")
        intervals = list(group.intervals)
        if order == "pitch":
            intervals.sort(key=lambda iv: iv.ratio)
        elif order == "complexity":
            intervals.sort(key=complexity_key)
        for interval in intervals:
            ratio = f"{interval.numerator}/{interval.denominator}"
            limit = prime_limit(interval.numerator, interval.denominator)
            line = f"{ratio:>7}  {interval.cents:7.1f}  {limit:>3}"
            for edo in edos:
                step, error = nearest_edo_step(interval.numerator,
                                               interval.denominator, edo)
                line += f"  {step:>3}\\{edo:<3}{error:+6.1f}"
            out.write(f"{line}  {interval.name or ''}\n")


# ── CLI ───────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edolines",
        description=(
            "JI vs EDO diagram generator.\n"
            "Places just-intonation ratios and equal-division steps on\n"
            "one logarithmic octave."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  %(prog)s                                default diagram as SVG\n"
            "  %(prog)s --edo 12 19 31 -o cmp.svg      chosen EDOs\n"
            "  %(prog)s --format html                  page with #svgContainer\n"
            "  %(prog)s --primes 3 5 --format png      5-limit PNG preview\n"
            "  %(prog)s --list --edo 12 31             text table, no drawing\n"
            "  %(prog)s --list --sort complexity        simplest ratios first\n"
        ),
    )
    parser.add_argument(
        "-o", "--output", metavar="FILE",
        help="Output file (default: edolines.<format>; '-' for stdout)",
    )
    parser.add_argument(
        "--format", choices=FORMATS, default="svg", dest="output_format",
        help="Output format (default: svg)",
    )
    parser.add_argument(
        "--edo", type=int, nargs="*", default=list(EDO_VALUES), metavar="N",
        help=f"EDO systems to draw, in order (default: "
             f"{' '.join(map(str, EDO_VALUES))})",
    )
    parser.add_argument(
        "--primes", type=int, nargs="+", metavar="P",
        help="Prime-limit groups to draw, in order (default: all in table order)",
    )
    parser.add_argument(
        "--table", metavar="FILE",
        help="JSON interval table replacing the built-in one",
    )
    parser.add_argument(
        "--dedupe", action="store_true",
        help="Skip ratios already drawn by an earlier group",
    )
    parser.add_argument(
        "--width", type=float, default=DOC_WIDTH,
        help=f"Document width in px; height keeps 13:8 (default {DOC_WIDTH})",
    )
    parser.add_argument(
        "--font-size", type=float, default=FONT_SIZE,
        help=f"Label font size in px (default {FONT_SIZE})",
    )
    parser.add_argument(
        "--edo-height", type=float, default=EDO_BLOCK_HEIGHT,
        help=f"Height of each EDO row in px (default {EDO_BLOCK_HEIGHT})",
    )
    parser.add_argument(
        "--list", action="store_true", dest="list_only",
        help="Print the interval table with nearest EDO steps instead of drawing",
    )
    parser.add_argument(
        "--sort", choices=ORDERS, default="table", dest="order",
        help="Interval order within each group for --list (default: table)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        table = load_table(args.table) if args.table else default_table()
    except FileNotFoundError:
        print(f"Error: interval table not found: {args.table}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.primes:
        try:
            table = select_primes(table, args.primes)
        except (KeyError, ValueError) as e:
            print(f"Error: {e.args[0]}", file=sys.stderr)
            sys.exit(1)

    if args.list_only:
        try:
            format_listing(table, args.edo, sys.stdout, args.order)
        except DiagramError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        return

    frame = Frame.for_width(args.width, font_size=args.font_size,
                            edo_block_height=args.edo_height)
    try:
        shapes = render(table, args.edo, frame, dedupe=args.dedupe)
    except DiagramError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output = args.output or f"edolines.{args.output_format}"

    if args.output_format == "png":
        if output == "-":
            print("Error: PNG output needs a file name", file=sys.stderr)
            sys.exit(1)
        # imported late so the other formats work without a display stack
        from edolines.preview import save_preview
        save_preview(shapes, output, frame)
        print(f"Saved {output}")
        return

    if args.output_format == "svg":
        text = to_svg(shapes, frame)
    elif args.output_format == "html":
        text = to_html(shapes, frame)
    else:
        text = json.dumps({"width": frame.doc_width, "height": frame.doc_height,
                           "shapes": shapes_to_json(shapes)}, indent=2)

    if output == "-":
        sys.stdout.write(text + "\n")
    else:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(f"Saved {output}")


if __name__ == "__main__":
    main()
