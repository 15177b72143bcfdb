import argparse
from pathlib import Path
from typing import List, Optional

from ..catalog.ranking import sort_batteries
from ..config.rules import DEFAULT_SORT_DIRECTION, DEFAULT_SORT_KEY, SORT_DIRECTIONS, SORT_KEYS
from ..config.settings import BATTERIES_SEED_FILE, BRANDS_SEED_FILE, DB_FILE
from ..scan.job import run_scan_job
from ..storage.repository import (
    get_all_batteries,
    get_all_brands,
    get_batteries_by_brand_slug,
    get_battery_by_slug,
    get_brand_by_slug,
)
from ..storage.seed import seed_database
from ..utils.console import echo
from ..utils.logging import get_logger, set_console_level, verbosity_level
from .display import format_battery_detail, format_battery_table, format_brand, format_brand_list

logger = get_logger(__name__)


def cmd_seed(args) -> int:
    result = seed_database(
        db_path=args.db,
        brands_file=args.brands,
        batteries_file=args.batteries,
    )
    echo(f"Seeded {result.brands} brands and {result.batteries} batteries into {args.db}")
    return 0


def cmd_scan(args) -> int:
    return run_scan_job(db_path=args.db)


def cmd_list(args) -> int:
    batteries = sort_batteries(get_all_batteries(args.db), args.sort, args.direction)
    echo(format_battery_table(batteries))
    return 0


def cmd_show(args) -> int:
    battery = get_battery_by_slug(args.slug, args.db)
    if battery is None:
        logger.error("No battery with slug %r", args.slug)
        return 1
    echo(format_battery_detail(battery))
    return 0


def cmd_brand(args) -> int:
    brand = get_brand_by_slug(args.slug, args.db)
    if brand is None:
        logger.error("No brand with slug %r", args.slug)
        return 1
    echo(format_brand(brand, get_batteries_by_brand_slug(args.slug, args.db)))
    return 0


def cmd_brands(args) -> int:
    echo(format_brand_list(get_all_brands(args.db)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="battcat",
        description="Residential battery catalog: seed, browse and scan for new products.",
    )
    parser.add_argument("--db", type=Path, default=DB_FILE, help="SQLite catalog path")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Show debug logs on stderr")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    sub = parser.add_subparsers(dest="command", required=True)

    p_seed = sub.add_parser("seed", help="Drop and reload the catalog from the seed CSV files")
    p_seed.add_argument("--brands", type=Path, default=BRANDS_SEED_FILE)
    p_seed.add_argument("--batteries", type=Path, default=BATTERIES_SEED_FILE)
    p_seed.set_defaults(func=cmd_seed)

    p_scan = sub.add_parser("scan", help="Scan news feeds for untracked battery launches")
    p_scan.set_defaults(func=cmd_scan)

    p_list = sub.add_parser("list", help="List batteries")
    p_list.add_argument("--sort", choices=SORT_KEYS, default=DEFAULT_SORT_KEY)
    p_list.add_argument("--direction", choices=SORT_DIRECTIONS, default=DEFAULT_SORT_DIRECTION)
    p_list.set_defaults(func=cmd_list)

    p_show = sub.add_parser("show", help="Show one battery")
    p_show.add_argument("slug")
    p_show.set_defaults(func=cmd_show)

    p_brand = sub.add_parser("brand", help="Show one brand and its batteries")
    p_brand.add_argument("slug")
    p_brand.set_defaults(func=cmd_brand)

    p_brands = sub.add_parser("brands", help="List brands")
    p_brands.set_defaults(func=cmd_brands)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_console_level(verbosity_level(args.verbose, args.quiet))
    return args.func(args)
