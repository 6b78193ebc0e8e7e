#!/usr/bin/env python3
"""CLI tool for inspecting semantic token dumps."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .classify import ranges_by_name
from .config import HighlightOptions
from .dump import language_id_for_path, load_absolute_tokens, ranges_to_json, read_token_dump
from .semantic_tokens import decode_semantic_tokens, encode_semantic_tokens
from .source import FileSource, SourceUnavailable

logger = logging.getLogger(__name__)


def _print_ranges(groups: dict, as_json: bool) -> None:
    """Render `ranges` command output."""
    if as_json:
        print(json.dumps(ranges_to_json(groups), indent=2))
        return

    if not groups:
        print("No identifiers to highlight.")
        return
    for name in sorted(groups):
        ranges = ", ".join(str(r) for r in groups[name])
        print(f"{name}: {ranges}")


def _print_tokens(tokens: list, as_json: bool) -> None:
    """Render `decode` command output."""
    if as_json:
        payload = {
            "tokens": [
                {
                    "range": [t.range.line, t.range.start_char, t.range.end_char],
                    "text": t.text,
                    "type": t.token_type,
                    "modifiers": sorted(t.modifiers),
                }
                for t in tokens
            ]
        }
        print(json.dumps(payload, indent=2))
        return

    for t in tokens:
        mods = f" [{', '.join(sorted(t.modifiers))}]" if t.modifiers else ""
        print(f"{t.range} {t.token_type} {t.text!r}{mods}")


def _add_flag_pair(parser: argparse.ArgumentParser, name: str, help_text: str) -> None:
    parser.add_argument(
        f"--{name}",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=f"{help_text} (default from environment)",
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Group LSP semantic tokens by identifier name for consistent highlighting"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Ranges command
    ranges_parser = subparsers.add_parser("ranges", help="Group identifier ranges by name")
    ranges_parser.add_argument("tokens", help="Path to semantic token dump (JSON)")
    ranges_parser.add_argument("source", help="Path to the source file the tokens describe")
    _add_flag_pair(ranges_parser, "globals", "Highlight global and very short names")
    _add_flag_pair(ranges_parser, "classes", "Highlight class names")
    ranges_parser.add_argument(
        "--language",
        help="Language ID override (otherwise taken from the dump or the file extension)",
    )
    ranges_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Decode command
    decode_parser = subparsers.add_parser("decode", help="List decoded tokens")
    decode_parser.add_argument("tokens", help="Path to semantic token dump (JSON)")
    decode_parser.add_argument("source", help="Path to the source file the tokens describe")
    decode_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Encode command
    encode_parser = subparsers.add_parser(
        "encode", help="Encode absolute tokens into a semantic token data array"
    )
    encode_parser.add_argument("tokens", help="Path to absolute token list (JSON)")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "ranges":
            dump = read_token_dump(args.tokens, language_id_for_path(args.source))
            options = HighlightOptions.from_env().override(
                highlight_globals=args.globals,
                highlight_classes=args.classes,
            )
            groups = ranges_by_name(
                dump.data,
                dump.legend,
                FileSource(args.source),
                highlight_globals=options.highlight_globals,
                highlight_classes=options.highlight_classes,
                language_id=args.language or dump.language_id,
            )
            _print_ranges(groups, as_json=args.json)

        elif args.command == "decode":
            dump = read_token_dump(args.tokens)
            tokens = list(decode_semantic_tokens(dump.data, dump.legend, FileSource(args.source)))
            _print_tokens(tokens, as_json=args.json)

        elif args.command == "encode":
            legend, tokens = load_absolute_tokens(json.loads(Path(args.tokens).read_text()))
            print(json.dumps({"data": encode_semantic_tokens(tokens, legend)}))

        else:
            parser.print_help()

    except SourceUnavailable as exc:
        logger.warning("Source unavailable: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except (OSError, IndexError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Rejected %s input: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
