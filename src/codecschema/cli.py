"""
Write the JSON schema of a codec to a file.

Usage:
    codecschema mypackage.models:User -o schemas/user.schema.json
"""

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Optional

from .codecs import Tag
from .generate import to_json_schema

logger = logging.getLogger(__name__)


def load_codec(target: str) -> Any:
    """
    Import the codec named by ``module:attribute``.

    Dotted attributes are followed, e.g. ``pkg.models:Schemas.user``.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"target must look like 'module:attribute', got {target!r}")

    obj = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)

    if not isinstance(getattr(obj, "tag", None), Tag):
        raise TypeError(f"{target} is not a codec")
    return obj


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="codecschema",
        description="Generate a JSON schema document from a codec.",
    )
    parser.add_argument("target", help="codec to convert, as 'module:attribute'")
    parser.add_argument(
        "-o",
        "--output",
        dest="output",
        default=None,
        help="Output JSON file path (default: stdout)",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    parser.add_argument("--sort-keys", action="store_true", help="Sort object keys in the output")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging to stderr.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        codec = load_codec(args.target)
    except (ImportError, AttributeError, ValueError, TypeError) as exc:
        logger.error("Cannot load %s: %s", args.target, exc)
        return 1

    text = json.dumps(to_json_schema(codec), indent=args.indent, sort_keys=args.sort_keys)

    if args.output is None:
        sys.stdout.write(text + "\n")
        return 0

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text + "\n", encoding="utf-8")
    logger.info("Wrote schema for %s to %s", args.target, output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
