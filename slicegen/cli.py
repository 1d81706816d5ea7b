"""Command line entry point for the module scaffolder.

Usage::

    slicegen candidate
    slicegen job-role --root ./backend --force
    python -m slicegen candidate
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from slicegen.config import ScaffoldConfig
from slicegen.scaffolder import CompositionError, ModuleGenerator, UsageError
from slicegen.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

USAGE = "Usage: slicegen <name>"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slicegen",
        description="Generate a CRUD feature module and register it in the composition root",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  slicegen candidate\n"
            "  slicegen job-role --root ./backend\n"
            "  slicegen skills --force --verbose\n"
        ),
    )
    parser.add_argument(
        "name",
        nargs="?",
        help="Feature name, e.g. 'candidate' or 'job-role'",
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Host project root (default: $SLICEGEN_PROJECT_ROOT or .)",
    )
    parser.add_argument(
        "--source-dir",
        default=None,
        help="Package holding feature modules (default: app)",
    )
    parser.add_argument(
        "--composition",
        default=None,
        help="Composition root file inside the source dir (default: app_module.py)",
    )
    parser.add_argument(
        "--registry",
        default=None,
        help="Name of the module registry list (default: MODULES)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        default=None,
        help="Overwrite previously generated files",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print a summary of written and skipped files",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``slicegen`` and ``python -m slicegen``."""
    args = build_parser().parse_args(argv)

    # Validate before touching the file system.
    if not args.name:
        print_error(USAGE)
        sys.exit(1)

    config = ScaffoldConfig.from_env(
        project_root=Path(args.root) if args.root else None,
        source_dir=args.source_dir,
        composition_file=args.composition,
        registry_name=args.registry,
        force=args.force,
    )
    if config.force:
        print_warning("Overwriting existing generated files (--force)")

    try:
        result = ModuleGenerator(config).generate(args.name)
    except UsageError as exc:
        print_error(f"Error: {exc}")
        print_error(USAGE)
        sys.exit(1)
    except CompositionError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if args.verbose:
        summary = {path: "written" for path in result.written}
        summary.update({path: "skipped (exists)" for path in result.skipped})
        summary[f"{config.source_dir}/{config.composition_file}"] = (
            "updated" if result.registered else "unchanged"
        )
        print_summary_table(summary, title=f"{result.feature.type_name}Module")
        console.print()

    print_success(f"Module '{result.feature.normalized_name}' generated.")


if __name__ == "__main__":
    main()
