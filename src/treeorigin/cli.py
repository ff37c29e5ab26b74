"""treeorigin CLI: convert and check origin files."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional


def _write_output(content: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")


def main():
    """Main CLI entry point for treeorigin commands."""
    try:
        treeorigin_version = get_version("treeorigin")
    except PackageNotFoundError:
        treeorigin_version = "dev"

    parser = argparse.ArgumentParser(
        prog="treeorigin",
        description="treeorigin: Lossless conversion between origin files and compose configs"
    )
    parser.add_argument("--version", action="version", version=f"treeorigin {treeorigin_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # to-config command
    to_config_parser = subparsers.add_parser(
        "to-config",
        help="Decode an origin file into a compose config (JSON)",
        parents=[parent_parser]
    )
    to_config_parser.add_argument(
        "origin_path",
        type=Path,
        help="Path to origin file"
    )
    to_config_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON here instead of stdout"
    )

    # to-origin command
    to_origin_parser = subparsers.add_parser(
        "to-origin",
        help="Encode a compose config (JSON) as an origin file",
        parents=[parent_parser]
    )
    to_origin_parser.add_argument(
        "config_path",
        type=Path,
        help="Path to compose config JSON"
    )
    to_origin_parser.add_argument(
        "--local-assembly",
        action="store_true",
        help="Deployment may require local package assembly (writes baserefspec)"
    )
    to_origin_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write origin here instead of stdout"
    )

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check that an origin file round-trips without loss",
        parents=[parent_parser]
    )
    check_parser.add_argument(
        "origin_path",
        type=Path,
        help="Path to origin file"
    )
    check_parser.add_argument(
        "--local-assembly",
        dest="local_assembly",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Encoder flag (default: inferred from the origin)"
    )
    check_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for check.json report"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    from .kernel.errors import OriginError

    try:
        if args.command == "to-config":
            from .api import config_to_json, parse_origin

            config = parse_origin(args.origin_path.resolve())
            _write_output(config_to_json(config), args.output)
        elif args.command == "to-origin":
            from .api import load_config, render_origin
            from .kernel.encode import config_to_origin
            from ._internal.io import write_keyfile

            config = load_config(args.config_path.resolve())
            if args.output is None:
                _write_output(render_origin(config, args.local_assembly), None)
            else:
                write_keyfile(config_to_origin(config, args.local_assembly), args.output.resolve())
        elif args.command == "check":
            from .api import check_origin
            from ._internal.canonical_json import canonical_dumps

            result = check_origin(args.origin_path.resolve(), args.local_assembly)
            if args.output_dir is not None:
                output_dir = args.output_dir.resolve()
                output_dir.mkdir(parents=True, exist_ok=True)
                report_out = output_dir / "check.json"
                report_out.write_text(canonical_dumps(result.model_dump()) + "\n", encoding="utf-8")
                if not args.quiet:
                    print(f"  Report: {report_out}")
            if not args.quiet:
                status = "OK" if result.ok else "FAILED"
                print(f"[{status}] Round trip check complete")
                print(f"  Status: {status}")
                print(f"  Issues: {len(result.issues)}")
                for issue in result.issues:
                    print(f"  - {issue.code}: {issue.message}")
            if not result.ok:
                sys.exit(1)
        else:
            parser.print_help()
            sys.exit(1)
    except (OriginError, ValueError, OSError) as e:
        # ValueError covers pydantic validation and malformed JSON
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
