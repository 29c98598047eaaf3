#!/usr/bin/env python
from __future__ import annotations

import argparse
import csv
import sys
from decimal import Decimal
from typing import Iterator, TextIO

from taxcompare.core.money import round_cents
from taxcompare.core.scenarios import ComparisonResult, ScenarioOptions, TaxEngine, build_engine

D = Decimal

FIELDS = ("income", "personal_tax", "corporate_tax", "personal_net", "corporate_net", "advantage")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare personal and corporate tax across an income range")
    parser.add_argument("--start", type=int, default=50_000, help="First gross income")
    parser.add_argument("--stop", type=int, default=500_000, help="Last gross income (inclusive)")
    parser.add_argument("--step", type=int, default=10_000, help="Income increment")
    parser.add_argument("--expenses", type=int, default=100_000, help="Personal expense draw")
    parser.add_argument("--no-ei", dest="include_ei", action="store_false", help="Exclude EI premiums")
    parser.add_argument("--self-employed", action="store_true", help="Self-employed personal scenario")
    parser.add_argument("--jurisdiction", default=None, help="Tax table code")
    parser.add_argument("--output", default=None, help="CSV file to write (default: stdout)")
    args = parser.parse_args(argv)
    if args.step <= 0:
        parser.error("--step must be positive")
    return args


def sweep(
    engine: TaxEngine,
    start: int,
    stop: int,
    step: int,
    expenses: D,
    options: ScenarioOptions,
) -> Iterator[ComparisonResult]:
    for income in range(start, stop + 1, step):
        yield engine.compare(D(income), expenses, options)


def first_break_even(results: list[ComparisonResult]) -> D | None:
    for result in results:
        if result.favours_incorporation:
            return result.personal.gross_income
    return None


def write_rows(results: list[ComparisonResult], stream: TextIO) -> None:
    writer = csv.DictWriter(stream, fieldnames=FIELDS)
    writer.writeheader()
    for result in results:
        writer.writerow(
            {
                "income": round_cents(result.personal.gross_income),
                "personal_tax": round_cents(result.personal.total_tax),
                "corporate_tax": round_cents(result.corporate.total_tax),
                "personal_net": round_cents(result.personal.net_income),
                "corporate_net": round_cents(result.corporate.net_income),
                "advantage": "" if result.advantage is None else round_cents(result.advantage),
            }
        )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    engine = build_engine(args.jurisdiction)
    options = ScenarioOptions(include_insurance=args.include_ei, self_employed=args.self_employed)
    results = list(sweep(engine, args.start, args.stop, args.step, D(args.expenses), options))
    if args.output:
        with open(args.output, "w", newline="", encoding="utf-8") as handle:
            write_rows(results, handle)
    else:
        write_rows(results, sys.stdout)
    crossover = first_break_even(results)
    if crossover is None:
        print("Incorporation is not advantageous anywhere in this range", file=sys.stderr)
    else:
        print(f"Incorporation becomes advantageous at {round_cents(crossover)}", file=sys.stderr)


if __name__ == "__main__":
    main()
