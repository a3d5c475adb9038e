"""Command line interface: parse, export, detect and list builders."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from blockport.common.utils.logger import logger
from blockport.common.utils.config import get_config


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _emit(payload: Any, output: str | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text, encoding="utf-8")
        logger.info("Output written to %s", output)
    else:
        print(text)


def _parse_action(args: argparse.Namespace) -> int:
    from blockport.blocks import count_blocks, parse_blocks
    from blockport.common.models import ParseOptions

    options = ParseOptions(
        max_depth=args.max_depth or get_config().max_depth,
        block_types=args.block_types,
        skip_empty=args.skip_empty,
    )
    blocks = parse_blocks(_read(args.file), options)
    logger.info("Parsed %d blocks (%d including nested)", len(blocks), count_blocks(blocks))
    _emit([block.model_dump() for block in blocks], args.output)
    return 0


def _load_snapshot(path: str) -> list:
    from blockport.blocks.models import ElementSnapshot
    from blockport.common.errors import InvalidInputError

    payload = json.loads(_read(path))
    if not isinstance(payload, list):
        raise InvalidInputError(f"{path} must hold a JSON array of element snapshots")
    return [ElementSnapshot.model_validate(item) for item in payload]


def _export_action(args: argparse.Namespace) -> int:
    from pydantic import ValidationError

    from blockport.blocks import has_block_markup, parse_blocks
    from blockport.common.errors import BlockportError
    from blockport.dispatcher import dispatcher

    builders = [name.strip() for name in args.builder.split(",") if name.strip()]
    blocks = None
    snapshot = None

    try:
        if args.url:
            from blockport.blocks.core import capture_page

            capture = capture_page(args.url)
            if has_block_markup(capture.html):
                blocks = parse_blocks(capture.html)
            else:
                snapshot = capture.elements
        elif args.snapshot:
            snapshot = _load_snapshot(args.snapshot)
        else:
            html = _read(args.file)
            if not has_block_markup(html):
                detected = dispatcher.detect_builder_from_markup(html)
                logger.error("No block markup found in %s (looks like: %s)", args.file, detected or "unknown")
                return 1
            blocks = parse_blocks(html)
    except (BlockportError, ValidationError, json.JSONDecodeError, OSError) as e:
        logger.error(f"Could not load input: {e}")
        return 1

    results = dispatcher.export_to_multiple(builders, blocks=blocks, snapshot=snapshot)
    _emit({name: result.model_dump(mode="json") for name, result in results.items()}, args.output)
    return 0 if all(result.success for result in results.values()) else 1


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(description="blockport CLI")
    subparsers = parser.add_subparsers(dest="action", help="Action to perform")

    parse_parser = subparsers.add_parser("parse", help="Parse block markup into a JSON block tree")
    parse_parser.add_argument("--file", required=True, type=str, help="HTML file with block markup ('-' for stdin)")
    parse_parser.add_argument("--max-depth", type=int, default=None, help="Maximum nesting depth to recognize")
    parse_parser.add_argument("--block-types", type=str, default=None, help="Comma separated allow-list")
    parse_parser.add_argument("--skip-empty", action="store_true", help="Drop empty leaf blocks")
    parse_parser.add_argument("--output", type=str, default=None, help="Write JSON here instead of stdout")

    export_parser = subparsers.add_parser("export", help="Convert content to one or more builders")
    export_parser.add_argument("--builder", required=True, type=str, help="Builder name(s), comma separated")
    source = export_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", type=str, help="HTML file with block markup ('-' for stdin)")
    source.add_argument("--snapshot", type=str, help="JSON file with element snapshots")
    source.add_argument("--url", type=str, help="Capture a live page with a headless browser")
    export_parser.add_argument("--output", type=str, default=None, help="Write JSON here instead of stdout")

    detect_parser = subparsers.add_parser("detect", help="Detect which builder produced some HTML")
    detect_parser.add_argument("--file", required=True, type=str, help="HTML file ('-' for stdin)")

    subparsers.add_parser("builders", help="List available builders")
    subparsers.add_parser("config", help="Print configuration")

    args = parser.parse_args(argv)

    match args.action:
        case "parse":
            return _parse_action(args)

        case "export":
            return _export_action(args)

        case "detect":
            from blockport.dispatcher import detect_builder_from_markup

            detected = detect_builder_from_markup(_read(args.file))
            print(detected or "unknown")
            return 0 if detected else 1

        case "builders":
            from blockport.dispatcher import get_available_builders, get_builder_info

            for name in get_available_builders():
                info = get_builder_info(name)
                if info is not None:
                    print(f"{name:<16}{info.output_format.value:<11}{info.description}")
            return 0

        case "config":
            logger.info("Configuration:\n")
            for key, value in sorted(get_config().model_dump().items()):
                print(f"{key}={value}")
            return 0

        case _:
            parser.print_help()
            return 2


if __name__ == "__main__":
    sys.exit(main())
