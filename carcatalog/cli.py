#!/usr/bin/env python3
"""
carcatalog CLI — query the vehicle dataset from a terminal, or start the API server.

USAGE:
  python -m carcatalog.cli status                               # Load and print the load report
  python -m carcatalog.cli search --make Toyota --min-hp 200    # Filtered search
  python -m carcatalog.cli search --query coupe --sort-by horsepower --order desc
  python -m carcatalog.cli analytics                            # Dataset-wide totals
  python -m carcatalog.cli top acceleration --limit 5           # Quickest 0-100 km/h
  python -m carcatalog.cli decades                              # Per-decade rollup
  python -m carcatalog.cli make Ford                            # Per-make statistics
  python -m carcatalog.cli random --count 3                     # Random sample

  python -m carcatalog.cli serve --port 8000                    # Start API server
"""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

from carcatalog.analytics import cars_by_decade, get_analytics, make_statistics, top_cars
from carcatalog.analytics.common import sanitize_for_json
from carcatalog.config import DATASET_PATH, DEFAULT_PAGE_LIMIT, SORT_FIELDS, TOP_CRITERIA, configure_logging
from carcatalog.data.loader import DatasetLoadError
from carcatalog.data.schemas import SearchFilters, SortField, SortOrder, VehicleRecord
from carcatalog.data.store import DatasetStore


def _load_store(args) -> DatasetStore:
    """Load the dataset or exit with the load error."""
    store = DatasetStore(Path(args.dataset))
    try:
        asyncio.run(store.load())
    except DatasetLoadError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        sys.exit(1)
    return store


def _fmt(value, suffix: str = "") -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        value = f"{value:g}"
    return f"{value}{suffix}"


def _print_cars(cars: list[VehicleRecord]) -> None:
    print(f"\n{'ID':<10}{'MAKE':<16}{'MODEL':<22}{'YEARS':<12}{'BODY':<16}{'HP':>6}{'KM/H':>7}{'0-100':>7}")
    for car in cars:
        years = f"{_fmt(car.year_from)}-{_fmt(car.year_to)}"
        print(
            f"{_fmt(car.id)[:9]:<10}{car.make[:15]:<16}{car.model[:21]:<22}{years:<12}"
            f"{_fmt(car.body_type)[:15]:<16}{_fmt(car.engine.horsepower):>6}"
            f"{_fmt(car.performance.max_speed):>7}{_fmt(car.performance.acceleration_0_100):>7}"
        )
    print()


def _print_json(data) -> None:
    print(json.dumps(sanitize_for_json(data), indent=2, default=str))


def cmd_status(args):
    """Load the dataset and print the load report."""
    store = _load_store(args)
    report = store.report
    print("\n" + "=" * 70)
    print("  CARCATALOG — DATASET STATUS")
    print("=" * 70)
    print(f"  Source:   {report.source}")
    print(f"  Rows:     {report.rows_read:,} read → {report.records_loaded:,} cars")
    if report.skipped_total:
        for reason, count in sorted(report.skipped.items()):
            print(f"  Skipped:  {count:,} ({reason})")
    if report.duplicate_ids:
        print(f"  Duplicate ids: {report.duplicate_ids:,}")
    print(f"  Elapsed:  {report.elapsed_seconds:.2f}s")
    print("=" * 70 + "\n")


def cmd_search(args):
    """Filtered, sorted, paginated search."""
    store = _load_store(args)
    filters = SearchFilters(
        query=args.query,
        make=args.make,
        model=args.model,
        year_from=args.year_from,
        year_to=args.year_to,
        body_type=args.body_type,
        engine_type=args.engine_type,
        min_horsepower=args.min_hp,
        max_horsepower=args.max_hp,
        country=args.country,
        drive_wheels=args.drive_wheels,
        sort_by=SortField(args.sort_by) if args.sort_by else None,
        sort_order=SortOrder(args.order),
        page=args.page,
        limit=args.limit,
    )
    result = store.search(filters)
    p = result.pagination
    _print_cars(result.data)
    print(f"  Page {p.page}/{p.pages}  |  {p.total:,} matches\n")


def cmd_analytics(args):
    store = _load_store(args)
    data = get_analytics(store)
    if args.json:
        _print_json(data)
        return
    yr = data["year_range"]
    print(f"\n  Cars:        {data['total_cars']:,}")
    print(f"  Makes:       {data['total_makes']:,}")
    print(f"  Countries:   {data['total_countries']:,}")
    print(f"  Body types:  {data['total_body_types']:,}")
    print(f"  Years:       {_fmt(yr['from'])} to {_fmt(yr['to'])}")
    print(f"  Average hp:  {_fmt(data['average_horsepower'])}\n")


def cmd_top(args):
    store = _load_store(args)
    _print_cars(top_cars(store, args.criteria, args.limit))


def cmd_decades(args):
    store = _load_store(args)
    data = cars_by_decade(store)
    if args.json:
        _print_json(data)
        return
    print(f"\n{'DECADE':<8}{'CARS':>8}{'MAKES':>7}{'AVG HP':>8}{'AVG KM/H':>10}")
    for d in data:
        print(f"{d['decade']:<8}{d['count']:>8,}{d['makes']:>7}{_fmt(d['avg_horsepower']):>8}{_fmt(d['avg_max_speed']):>10}")
    print()


def cmd_make(args):
    store = _load_store(args)
    stats = make_statistics(store, args.make)
    if stats is None:
        print(f"  No data found for make: '{args.make}'")
        sys.exit(1)
    _print_json(stats)


def cmd_random(args):
    store = _load_store(args)
    _print_cars(store.random_cars(args.count))


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting carcatalog API on port {args.port}...")
    if args.reload:
        # The reloader re-imports the app in a child process, which reads config from env
        os.environ["CARCATALOG_DATASET"] = str(args.dataset)
        uvicorn.run("carcatalog.main:app", host="0.0.0.0", port=args.port, reload=True,
                    timeout_keep_alive=65)
        return
    from carcatalog.main import create_app
    app = create_app(DatasetStore(Path(args.dataset)))
    uvicorn.run(app, host="0.0.0.0", port=args.port, timeout_keep_alive=65)


def main():
    parser = argparse.ArgumentParser(
        description="carcatalog — vehicle specification dataset queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--dataset", default=str(DATASET_PATH), help="Dataset CSV path")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    status_parser = subparsers.add_parser("status", help="Load the dataset and print the load report")
    status_parser.set_defaults(func=cmd_status)

    search_parser = subparsers.add_parser("search", help="Search cars")
    search_parser.add_argument("--query", help="Free text: make, model, series, body type")
    search_parser.add_argument("--make")
    search_parser.add_argument("--model")
    search_parser.add_argument("--year-from", type=int)
    search_parser.add_argument("--year-to", type=int)
    search_parser.add_argument("--body-type")
    search_parser.add_argument("--engine-type")
    search_parser.add_argument("--min-hp", type=float)
    search_parser.add_argument("--max-hp", type=float)
    search_parser.add_argument("--country")
    search_parser.add_argument("--drive-wheels")
    search_parser.add_argument("--sort-by", choices=SORT_FIELDS)
    search_parser.add_argument("--order", choices=["asc", "desc"], default="asc")
    search_parser.add_argument("--page", type=int, default=1)
    search_parser.add_argument("--limit", type=int, default=DEFAULT_PAGE_LIMIT)
    search_parser.set_defaults(func=cmd_search)

    analytics_parser = subparsers.add_parser("analytics", help="Dataset-wide totals")
    analytics_parser.add_argument("--json", action="store_true", help="Print raw JSON")
    analytics_parser.set_defaults(func=cmd_analytics)

    top_parser = subparsers.add_parser("top", help="Top cars by a metric")
    top_parser.add_argument("criteria", choices=TOP_CRITERIA)
    top_parser.add_argument("--limit", type=int, default=10)
    top_parser.set_defaults(func=cmd_top)

    decades_parser = subparsers.add_parser("decades", help="Per-decade rollup")
    decades_parser.add_argument("--json", action="store_true", help="Print raw JSON")
    decades_parser.set_defaults(func=cmd_decades)

    make_parser = subparsers.add_parser("make", help="Statistics for one make")
    make_parser.add_argument("make")
    make_parser.set_defaults(func=cmd_make)

    random_parser = subparsers.add_parser("random", help="Random sample of cars")
    random_parser.add_argument("--count", type=int, default=5)
    random_parser.set_defaults(func=cmd_random)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        return

    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
