#!/usr/bin/env python3
"""Dump the contents of a carsales data file.

Loads a collection from disk and prints every manufacturer, its cars,
and the collection-wide averages. Optional filters run the same
searches the library exposes.

Usage
-----
::

    python scripts/dump_collection.py cars.dat

Options::

    --json               Output as machine-readable JSON
    --min-age N          Only list cars at least N years old
    --max-age N          Only list cars at most N years old (-1 = no limit)
    --min-price N        Only list cars priced at least N
    --max-price N        Only list cars priced at most N
    --no-validate        Accept files that break the capacity limits

The data file defaults to ``CARSALES_DATA_FILE`` (or ``cars.dat``).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from carsales import NO_MAX_AGE, Car, CarSalesConfig, CarsCollection  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_car(car: Car) -> str:
    return f"  {car.manufacturer:<16} price={car.price:>8}  age={car.age:>3}  km={car.kilometers:>10.1f}"


def _select_cars(collection: CarsCollection, args: argparse.Namespace) -> tuple[Car, ...]:
    cars = collection.get_all_cars()
    if args.min_age is not None or args.max_age != NO_MAX_AGE:
        matches = set(collection.search_by_age(args.min_age or 0, args.max_age))
        cars = tuple(car for car in cars if car in matches)
    if args.min_price is not None or args.max_price is not None:
        min_price = args.min_price if args.min_price is not None else 0
        max_price = args.max_price if args.max_price is not None else sys.maxsize
        matches = set(collection.search(min_price, max_price, float("-inf"), float("inf")))
        cars = tuple(car for car in cars if car in matches)
    return cars


# ── main ─────────────────────────────────────────────────────


def main() -> int:
    config = CarSalesConfig.from_env()

    parser = argparse.ArgumentParser(description="Dump a carsales data file")
    parser.add_argument("path", nargs="?", default=config.data_file, help="Data file to load")
    parser.add_argument("--json", dest="json_mode", action="store_true", help="Output JSON")
    parser.add_argument("--min-age", type=int, default=None, help="Minimum car age in years")
    parser.add_argument("--max-age", type=int, default=NO_MAX_AGE, help="Maximum car age in years")
    parser.add_argument("--min-price", type=int, default=None, help="Minimum price")
    parser.add_argument("--max-price", type=int, default=None, help="Maximum price")
    parser.add_argument("--no-validate", action="store_true", help="Skip capacity validation on load")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    if args.no_validate:
        config = CarSalesConfig.from_env(validate_on_load=False)

    collection = CarsCollection(config=config)
    collection.load_cars(args.path)
    cars = _select_cars(collection, args)

    result: dict[str, Any] = {
        "path": args.path,
        "manufacturers": [
            {"name": m.name, "cars": m.car_count()} for m in collection.get_all_manufacturers()
        ],
        "cars": [car.model_dump() for car in cars],
        "cars_count": collection.cars_count(),
        "average_age": collection.get_average_age(),
        "average_distance": collection.get_average_distance(),
        "average_price": collection.get_average_price(),
    }

    if args.json_mode:
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0

    out: list[str] = []
    out.append(_section(f"carsales dump  {args.path}"))
    for entry in result["manufacturers"]:
        out.append(f"  {entry['name']:<16} {entry['cars']:>3} cars")
    out.append(_section(f"CARS ({len(cars)} of {collection.cars_count()})"))
    out.extend(_format_car(car) for car in cars)
    out.append(_section("AVERAGES"))
    out.append(f"  age       : {result['average_age']:.2f} years")
    out.append(f"  distance  : {result['average_distance']:.1f} km")
    out.append(f"  price     : {result['average_price']:.2f}")
    print("\n".join(out))
    return 0


if __name__ == "__main__":
    sys.exit(main())
