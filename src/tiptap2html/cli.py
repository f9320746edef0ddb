"""Command-line interface for tiptap2html.

Usage::

    tiptap2html input.json                     # writes input.html
    tiptap2html input.json -o output.html      # explicit output path
    tiptap2html input.json --offset-headings 1 # h1 -> h2, ...
    tiptap2html input.json --tree              # print the nested node tree
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tiptap2html import __version__
from tiptap2html.config import ConversionOptions
from tiptap2html.converter import Converter
from tiptap2html.exceptions import Tiptap2HtmlError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiptap2html",
        description="Convert Tiptap JSON documents to HTML.",
    )
    parser.add_argument(
        "input",
        help="Path to the Tiptap JSON file to convert.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output HTML file path. Defaults to <input>.html.",
    )
    parser.add_argument(
        "--offset-headings",
        type=int,
        default=ConversionOptions.offset_headings,
        help="Shift heading levels by this amount (default: %(default)s).",
    )
    parser.add_argument(
        "--allow-html",
        action="store_true",
        default=ConversionOptions.allow_html,
        help="Emit HTML contained in text nodes without escaping it.",
    )
    parser.add_argument(
        "--inline",
        action="store_true",
        help="Render without block wrappers, joining blocks with <br>.",
    )
    parser.add_argument(
        "--smartypants",
        action="store_true",
        default=ConversionOptions.smartypants,
        help="Apply smart quotes, dashes and ellipses.",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the mark-nested node tree as JSON instead of HTML.",
    )
    parser.add_argument(
        "-e", "--encoding",
        default="utf-8",
        help="Input file encoding (default: %(default)s).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress information.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        return 1

    options = ConversionOptions(
        offset_headings=args.offset_headings,
        allow_html=args.allow_html,
        inline=args.inline,
        smartypants=args.smartypants,
    )
    converter = Converter(options)

    if args.tree:
        try:
            tree = converter.build_tree(input_path.read_text(encoding=args.encoding))
        except Tiptap2HtmlError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(json.dumps(tree.to_dict(), indent=2, ensure_ascii=False))
        return 0

    # Determine output path
    if args.output:
        output_path = Path(args.output)
    else:
        output_path = input_path.with_suffix(".html")

    if args.verbose:
        print(f"Input:  {input_path}")
        print(f"Output: {output_path}")

    try:
        converter.convert_file(input_path, output_path, encoding=args.encoding)
    except (Tiptap2HtmlError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Done. {output_path.stat().st_size} bytes written.")
    else:
        print(f"Converted: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
