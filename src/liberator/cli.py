"""CLI entrypoint for the Voyager liberator."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable

import pymarc
from pydantic import BaseModel

from liberator.api.liberator import Liberator
from liberator.config.loader import load_config
from liberator.marc.record import Record
from liberator.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_NOT_FOUND = 1


def _to_jsonable(value: Any) -> Any:
    """Recursively convert engine results to JSON-serializable data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, Record):
        return value.as_dict()
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def render_json(value: Any) -> str:
    return json.dumps(_to_jsonable(value), indent=2, ensure_ascii=False)


def render_marcxml(value: Any) -> str:
    records = value if isinstance(value, list) else [value]
    return "\n".join(pymarc.record_to_xml(r.to_pymarc()).decode("utf-8") for r in records)


def _emit(value: Any, output_format: str = "json") -> int:
    """Print a result; absent results go to stderr with a non-zero exit code."""
    if value is None or value == {} or value == []:
        print("Not found", file=sys.stderr)
        return EXIT_NOT_FOUND
    if output_format == "xml":
        print(render_marcxml(value))
    else:
        print(render_json(value))
    return 0


def _liberator(args: argparse.Namespace) -> Liberator:
    config = load_config(Path(args.config) if args.config else None)
    configure_logging(args.log_level or config["logging"]["level"])
    return Liberator.from_config(config=config)


def cmd_bib(args: argparse.Namespace) -> int:
    """Print a bib record, holdings merged in unless --no-holdings."""
    liberator = _liberator(args)
    record = liberator.get_bib_record(
        args.bib_id,
        holdings=not args.no_holdings,
        holdings_in_bib=not args.separate_holdings,
    )
    return _emit(record, args.format)


def cmd_holding(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_holding_record(args.mfhd_id), args.format)


def cmd_holdings(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_holding_records(args.bib_id), args.format)


def cmd_availability(args: argparse.Namespace) -> int:
    """Availability for bibs; --full gives every holding of a single bib."""
    if args.full and len(args.bib_ids) != 1:
        logger.error("--full takes exactly one bib id")
        return 2
    availability = _liberator(args).get_availability(args.bib_ids, full=args.full)
    if not args.full and not any(availability.values()):
        availability = {}
    return _emit(availability)


def cmd_mfhd_availability(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_full_mfhd_availability(args.mfhd_id))


def cmd_items(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_items_for_bib(args.bib_id))


def cmd_holding_items(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_items_for_holding(args.mfhd_id))


def cmd_item(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_item(args.item_id))


def cmd_current_issues(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_current_issues(args.mfhd_id))


def cmd_order_status(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_order_status(args.bib_id))


def cmd_statuses(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_item_statuses())


def cmd_locations(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_locations())


def cmd_patron(args: argparse.Namespace) -> int:
    return _emit(_liberator(args).get_patron_info(args.patron_id))


def _add_command(
    subparsers: Any,
    name: str,
    func: Callable[[argparse.Namespace], int],
    help_text: str,
    *id_args: str,
) -> argparse.ArgumentParser:
    command_parser = subparsers.add_parser(name, help=help_text)
    for id_arg in id_args:
        command_parser.add_argument(id_arg, type=int)
    command_parser.set_defaults(func=func)
    return command_parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="liberator",
        description="Read bibliographic records and circulation availability from Voyager",
    )
    parser.add_argument("--config", help="Path to liberator.config.yaml")
    parser.add_argument("--log-level", help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, func, help_text, id_arg in (
        ("bib", cmd_bib, "Print a bib record", "bib_id"),
        ("holding", cmd_holding, "Print a holding record", "mfhd_id"),
        ("holdings", cmd_holdings, "Print the holding records of a bib", "bib_id"),
    ):
        record_parser = _add_command(subparsers, name, func, help_text, id_arg)
        record_parser.add_argument("--format", choices=["json", "xml"], default="json")
        if name == "bib":
            record_parser.add_argument("--no-holdings", action="store_true", help="Bib record only")
            record_parser.add_argument(
                "--separate-holdings",
                action="store_true",
                help="Print holdings after the bib instead of merging them",
            )

    availability_parser = subparsers.add_parser("availability", help="Availability for bib ids")
    availability_parser.add_argument("bib_ids", type=int, nargs="+")
    availability_parser.add_argument("--full", action="store_true", help="All holdings of a single bib")
    availability_parser.set_defaults(func=cmd_availability)

    _add_command(subparsers, "mfhd-availability", cmd_mfhd_availability, "Item-level availability for a holding", "mfhd_id")
    _add_command(subparsers, "items", cmd_items, "Items of a bib grouped by location", "bib_id")
    _add_command(subparsers, "holding-items", cmd_holding_items, "Items of a holding", "mfhd_id")
    _add_command(subparsers, "item", cmd_item, "A single item", "item_id")
    _add_command(subparsers, "current-issues", cmd_current_issues, "Received serial issues for a holding", "mfhd_id")
    _add_command(subparsers, "order-status", cmd_order_status, "On-order status of a bib", "bib_id")
    _add_command(subparsers, "statuses", cmd_statuses, "Item status code table")
    _add_command(subparsers, "locations", cmd_locations, "All Voyager locations")

    patron_parser = subparsers.add_parser("patron", help="Patron by barcode, university id or net id")
    patron_parser.add_argument("patron_id")
    patron_parser.set_defaults(func=cmd_patron)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except Exception as e:
        logger.error("Error running command '%s': %s", args.command, e, exc_info=True)
        raise


if __name__ == "__main__":
    sys.exit(main())
