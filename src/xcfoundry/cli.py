"""Command line interface for the xcfoundry header utilities."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import ValidationError

from .classifier import HeaderClassifier
from .config import ClassifierConfig
from .core.errors import XCFoundryError
from .manifest.schema import HeaderDeclaration
from .paths import ResolutionContext
from .umbrella import UmbrellaHeaderParser


def _parse_key_value_pairs(pairs: Iterable[str]) -> dict[str, str]:
    variables: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(
                f"invalid key/value pair '{pair}'. Expected KEY=VALUE syntax."
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise argparse.ArgumentTypeError("keys must not be empty")
        variables[key] = value
    return variables


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Utilities for generating native project headers")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    headers_parser = subparsers.add_parser(
        "headers", help="classify the headers declared by a target"
    )
    headers_parser.add_argument("declaration", type=Path, help="JSON file holding the header declaration")
    headers_parser.add_argument("-t", "--target", required=True, help="Name of the target being classified")
    headers_parser.add_argument("--product-name", help="Override the product name derived from the target")
    headers_parser.add_argument(
        "--manifest-dir",
        type=Path,
        help="Directory relative paths are resolved against (defaults to the declaration's directory)",
    )
    headers_parser.add_argument("--root", type=Path, help="Project root used by '//' paths")
    headers_parser.add_argument(
        "-D",
        "--define",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Path variables available as $(KEY)",
    )
    headers_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the classification to this path instead of stdout",
    )

    umbrella_parser = subparsers.add_parser(
        "umbrella", help="list the header names imported by an umbrella header"
    )
    umbrella_parser.add_argument("umbrella", type=Path, help="Path to the umbrella header")
    umbrella_parser.add_argument("--product-name", help="Product name accepted as an import prefix")

    return parser


def _write(text: str, output: Path | None) -> None:
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def _handle_headers(args: argparse.Namespace) -> int:
    declaration_path = args.declaration.expanduser().resolve()
    declaration = HeaderDeclaration.model_validate_json(declaration_path.read_text(encoding="utf-8"))
    manifest_dir = (args.manifest_dir or declaration_path.parent).expanduser().resolve()
    context = ResolutionContext(
        manifest_directory=manifest_dir,
        root_directory=args.root.expanduser().resolve() if args.root else None,
        variables=_parse_key_value_pairs(args.define),
    )
    config = ClassifierConfig.from_target_name(args.target, product_name=args.product_name)
    classified = HeaderClassifier(config=config).classify(declaration, context, target=args.target)
    _write(json.dumps(classified.to_dict(), indent=2) + "\n", args.output)
    return 0


def _handle_umbrella(args: argparse.Namespace) -> int:
    parser = UmbrellaHeaderParser(product_name=args.product_name)
    names = parser.extract_public_imports(args.umbrella.expanduser().resolve())
    for name in sorted(names):
        sys.stdout.write(f"{name}\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "headers":
            return _handle_headers(args)
        if args.command == "umbrella":
            return _handle_umbrella(args)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except (XCFoundryError, ValidationError, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
