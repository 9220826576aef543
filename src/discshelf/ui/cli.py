# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING
from uuid import UUID

from discshelf.app import (
    import_discogs_collection,
    import_progress,
    import_releases,
    seed_lookup_tables,
    update_upc_values,
    validate_lookup_data,
)
from discshelf.config import configure_logging
from discshelf.domain.reconciliation import ImportAbortedError

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return parsed


def _non_negative_int(value: str) -> int:
    parsed = int(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return parsed


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid UUID: {value}") from exc


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import and reconcile the discshelf catalog")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_cmd = subparsers.add_parser("import", help="Import the release dataset")
    import_cmd.add_argument(
        "--batch-size",
        type=_positive_int,
        help="Import only this many records (default: everything, in chunks)",
    )
    import_cmd.add_argument(
        "--skip",
        type=_non_negative_int,
        default=0,
        help="Records to skip before a --batch-size import (default: %(default)s)",
    )

    subparsers.add_parser("import-upc", help="Refresh UPC values of imported releases")
    subparsers.add_parser("progress", help="Show dataset size versus imported releases")
    subparsers.add_parser("validate", help="Check that required lookup tables have data")
    subparsers.add_parser("seed", help="Seed empty lookup tables from the dataset directory")

    discogs = subparsers.add_parser("discogs-import", help="Import a Discogs collection")
    discogs.add_argument(
        "--username",
        type=str,
        help="Discogs username (defaults to DISCOGS_USERNAME)",
    )
    discogs.add_argument(
        "--owner-id",
        type=_parse_uuid,
        help="Owner id to attach to imported releases and new lookups",
    )
    discogs.add_argument(
        "--max-releases",
        type=_positive_int,
        help="Stop after this many releases",
    )

    return parser.parse_args(list(argv))


def _run(parsed_args: argparse.Namespace) -> int:
    match parsed_args.command:
        case "import":
            imported = import_releases(batch_size=parsed_args.batch_size, skip=parsed_args.skip)
            print(f"Imported {imported} releases")
        case "import-upc":
            print(f"Updated UPC values for {update_upc_values()} releases")
        case "progress":
            progress = import_progress()
            print(
                f"{progress.imported_records}/{progress.total_records} releases imported "
                f"({progress.percentage:.1f}%)"
            )
            for error in progress.errors:
                print(f"Error: {error}", file=sys.stderr)
            return 1 if progress.errors else 0
        case "validate":
            validation = validate_lookup_data()
            if validation.is_valid:
                print("Lookup data is valid")
                return 0
            for error in validation.errors:
                print(f"Error: {error}", file=sys.stderr)
            return 1
        case "seed":
            for kind, count in seed_lookup_tables().items():
                print(f"{kind}: {count} rows seeded")
        case "discogs-import":
            result = import_discogs_collection(
                username=parsed_args.username,
                owner_id=parsed_args.owner_id,
                max_releases=parsed_args.max_releases,
            )
            print(
                f"Discogs import: {result.imported} imported, {result.skipped} skipped, "
                f"{result.failed} failed (of {result.total})"
            )
            for error in result.errors:
                print(f"Error: {error}", file=sys.stderr)
            return 0 if result.success else 1
        case _:
            raise ValueError(f"Unsupported command: {parsed_args.command}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=parsed_args.log_level)

    try:
        exit_code = _run(parsed_args)
    except ImportAbortedError as exc:
        print(f"Import aborted after {exc.imported} releases: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)
    sys.exit(exit_code)
