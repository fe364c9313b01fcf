#!/usr/bin/env python3
"""
Print the mock dashboard data generated for a UTC day.

Useful for checking what the dashboard will render on a given date, or for
capturing a regression snapshot:

    python scripts/dump_mock_data.py --date 2024-01-15 --kind recommendations
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import orjson

BACKEND_DIR = Path(__file__).resolve().parent.parent

sys.path.append(str(BACKEND_DIR))

from app.services.mock_recommendations import generate_mock_recommendations  # type: ignore  # noqa: E402
from app.services.mock_timelines import generate_mock_timelines  # type: ignore  # noqa: E402
from app.services.seed import InvalidDateError, create_random, get_daily_seed, utc_day  # type: ignore  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump deterministic mock recommendations and timelines as JSON.")
    parser.add_argument("--date", help="UTC day to generate for, ISO format (default: today).")
    parser.add_argument("--seed", type=int, help="Fixed seed; bypasses date-derived seeding.")
    parser.add_argument(
        "--kind",
        choices=("recommendations", "timelines", "all"),
        default="all",
        help="Which dataset to print (default: all).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    try:
        day = utc_day(args.date)
    except InvalidDateError as exc:
        raise SystemExit(str(exc)) from exc

    output = {"date": day.isoformat(), "seed": args.seed if args.seed is not None else get_daily_seed(day)}
    if args.kind in ("recommendations", "all"):
        recommendations = generate_mock_recommendations(day, rng=create_random(day, args.seed))
        output["recommendations"] = [rec.model_dump(by_alias=True) for rec in recommendations]
    if args.kind in ("timelines", "all"):
        blocks = generate_mock_timelines(day, rng=create_random(day, args.seed))
        output["blocks"] = [block.model_dump(by_alias=True) for block in blocks]

    sys.stdout.write(orjson.dumps(output, option=orjson.OPT_INDENT_2).decode())
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
