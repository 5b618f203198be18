import argparse
import logging
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import config
from services import input_parser, report, size_policy
from services.request_processor import process_inventory_requests


def build_parser():
    parser = argparse.ArgumentParser(
        description=(
            "Fill inventories from a request file and print the processing log, "
            "item list and storage summary."
        )
    )
    parser.add_argument("items_filename", help="Item list file ('<id> <name>' per line).")
    parser.add_argument(
        "inventories_filename",
        help="Inventory request file ('# <capacity>' and '- <id> <quantity>' lines).",
    )
    parser.add_argument(
        "--size-policy",
        choices=config.SIZE_POLICY_CHOICES,
        default=config.SIZE_POLICY,
        help=f"How stack size is computed (default: {config.SIZE_POLICY}).",
    )
    parser.add_argument(
        "--weights",
        type=str,
        default=str(config.WEIGHTS_PATH or ""),
        help="CSV or Excel table of item_id,weight used by the weighted size policy.",
    )
    parser.add_argument(
        "--xlsx",
        type=str,
        default="",
        help="Optional path to also write the report as an Excel workbook.",
    )
    parser.add_argument(
        "--log-unresolved",
        action="store_true",
        default=config.LOG_UNRESOLVED,
        help="Log requests for unknown item ids instead of dropping them silently.",
    )
    return parser


def run(args):
    try:
        catalog = input_parser.read_from_file(args.items_filename, input_parser.read_items)
        lines = input_parser.read_from_file(
            args.inventories_filename, input_parser.read_inventory_lines
        )
        policy = size_policy.resolve_size_policy(args.size_policy, args.weights or None)
    except OSError as exc:
        raise SystemExit(f"Unable to read input: {exc}")
    except ValueError as exc:
        raise SystemExit(f"Invalid input: {exc}")

    results = process_inventory_requests(
        lines,
        catalog,
        size_policy=policy,
        log_unresolved=args.log_unresolved,
    )
    print(report.render_report(results, catalog), end="")

    if args.xlsx:
        workbook = report.build_report_workbook(results, catalog)
        try:
            workbook.save(args.xlsx)
        except OSError as exc:
            raise SystemExit(f"Unable to write Excel report: {exc}")
        print(f"\nWrote Excel report: {args.xlsx}")
    return results


def main(argv=None):
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    run(args)


if __name__ == "__main__":
    main()
