import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Literal

if __package__ in (None, ""):
    sys.path.append(str(Path(__file__).resolve().parent.parent))

from fastapi import FastAPI, HTTPException, Query, Request
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taxcompare import __version__
from taxcompare.config import Settings, get_settings
from taxcompare.core.jurisdiction import UnknownJurisdictionError, list_jurisdictions
from taxcompare.core.models import ComparisonRequest, ComparisonResponse
from taxcompare.core.money import format_currency
from taxcompare.core.scenarios import (
    ComparisonResult,
    ScenarioOptions,
    ScenarioResult,
    TaxEngine,
    build_engine,
)
from taxcompare.lifespan import build_application_lifespan
from taxcompare.ui import router as ui_module
from taxcompare.ui.fields import parse_currency_input
from taxcompare.ui.formatting import describe_advantage, render_breakdown

logger = logging.getLogger("tax_compare")

app = FastAPI(
    title="Tax Compare",
    description="Personal income vs. small-business corporation tax comparison.",
    version=__version__,
    lifespan=build_application_lifespan("compare"),
)

app.include_router(ui_module.router)


def _request_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if isinstance(settings, Settings):
        return settings
    return get_settings()


def _engine_for(request: Request, code: str | None, settings: Settings) -> TaxEngine:
    engine = getattr(request.app.state, "engine", None)
    if code is None and isinstance(engine, TaxEngine):
        return engine
    try:
        return build_engine(code or settings.jurisdiction)
    except UnknownJurisdictionError as exc:
        logger.warning("Rejected comparison for unknown jurisdiction %s", code)
        raise HTTPException(status_code=400, detail=f"Unsupported jurisdiction {code}") from exc


def _run_comparison(request: Request, payload: ComparisonRequest) -> ComparisonResponse:
    settings = _request_settings(request)
    engine = _engine_for(request, payload.jurisdiction, settings)
    expenses = payload.expenses if payload.expenses is not None else settings.default_expense_draw
    options = payload.options()
    result = engine.compare(payload.income, expenses, options)
    return ComparisonResponse.build(result, engine.jurisdiction, expenses, options)


@app.get("/health")
def health(request: Request):
    settings = _request_settings(request)
    return {
        "ok": True,
        "jurisdiction": settings.jurisdiction,
        "jurisdictions": list_jurisdictions(),
        "build": {
            "version": settings.build_version,
            "sha": settings.build_sha,
        },
    }


@app.get("/compare", response_model=ComparisonResponse)
def compare_query(
    request: Request,
    income: str = Query("", description="Gross income; currency formatting is ignored"),
    expenses: str = Query("", description="Personal expense draw; blank uses the configured default"),
    include_ei: bool = True,
    self_employed: bool = False,
    jurisdiction: str | None = None,
):
    payload = ComparisonRequest(
        income=income,
        expenses=expenses,
        include_ei=include_ei,
        self_employed=self_employed,
        jurisdiction=jurisdiction,
    )
    return _run_comparison(request, payload)


@app.post("/compare", response_model=ComparisonResponse)
def compare_body(request: Request, payload: ComparisonRequest):
    return _run_comparison(request, payload)


ColorPreference = Literal["auto", "always", "never"]


def _resolve_color_preference(pref: ColorPreference) -> ColorPreference:
    if pref == "auto" and os.getenv("NO_COLOR"):
        return "never"
    return pref


def _get_console(pref: ColorPreference) -> Console:
    resolved = _resolve_color_preference(pref)
    if resolved == "never":
        return Console(no_color=True, highlight=False)
    return Console(force_terminal=resolved == "always" or None)


def _summary_table(result: ComparisonResult, provincial_label: str) -> Table:
    personal = result.personal
    corporate = result.corporate
    table = Table(title="Tax comparison", expand=False)
    table.add_column("")
    table.add_column("Personal", justify="right")
    table.add_column("Corporate", justify="right")
    table.add_row("Gross income", format_currency(personal.gross_income), format_currency(corporate.gross_income))
    table.add_row("Corporate tax", "-", format_currency(corporate.corporate_tax))
    table.add_row("Salary to owner", "-", format_currency(corporate.salary))
    table.add_row("Federal tax", format_currency(personal.federal_tax), format_currency(corporate.federal_tax))
    table.add_row(
        f"{provincial_label} tax",
        format_currency(personal.provincial_tax),
        format_currency(corporate.provincial_tax),
    )
    table.add_row(
        "CPP contributions",
        format_currency(personal.contributions.total),
        format_currency(corporate.contributions.total),
    )
    table.add_row("EI premiums", format_currency(personal.insurance), format_currency(corporate.insurance))
    table.add_row("Retained in corporation", "-", format_currency(corporate.retained_earnings))
    table.add_section()
    table.add_row("Total tax", format_currency(personal.total_tax), format_currency(corporate.total_tax))
    table.add_row("Net to owner", format_currency(personal.net_income), format_currency(corporate.net_income))
    table.add_row("Effective rate", f"{personal.effective_rate}%", f"{corporate.effective_rate}%")
    return table


def _breakdown_table(title: str, scenario: ScenarioResult, provincial_label: str) -> Table:
    table = Table(title=title, expand=False, show_header=False)
    table.add_column("Line")
    table.add_column("Tax", justify="right")
    table.add_row("[bold]Federal[/bold]", "")
    for left, right in render_breakdown(scenario.federal_breakdown):
        table.add_row(left, right)
    table.add_section()
    table.add_row(f"[bold]{provincial_label}[/bold]", "")
    for left, right in render_breakdown(scenario.provincial_breakdown):
        table.add_row(left, right)
    return table


def print_comparison(console: Console, result: ComparisonResult, engine: TaxEngine, details: bool = False) -> None:
    label = engine.jurisdiction.provincial_label
    console.print(_summary_table(result, label))
    if details:
        console.print(_breakdown_table("Personal income breakdown", result.personal, label))
        console.print(_breakdown_table("Corporate salary breakdown", result.corporate, label))
    advantage = describe_advantage(result)
    style = {"corporate": "green", "personal": "yellow"}.get(advantage.kind, "dim")
    body = advantage.headline if not advantage.detail else f"{advantage.headline}\n{advantage.detail}"
    console.print(Panel(body, border_style=style))


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tax-compare",
        description="Compare personal and small-business corporation tax for one income.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="compare",
        choices=["compare", "serve"],
        help="Action to perform.",
    )
    parser.add_argument("--income", default="", help="Gross income, e.g. 200000 or '$200,000'.")
    parser.add_argument(
        "--expenses",
        default="",
        help="Personal expense draw paid as salary (default from DEFAULT_EXPENSE_DRAW).",
    )
    parser.add_argument("--no-ei", dest="include_ei", action="store_false", help="Exclude EI premiums.")
    parser.add_argument("--self-employed", action="store_true", help="Use self-employed CPP and credit rules.")
    parser.add_argument("--jurisdiction", default=None, help="Tax table code (default from TAX_JURISDICTION).")
    parser.add_argument("--details", action="store_true", help="Print the bracket and credit breakdowns.")
    parser.add_argument("--json", action="store_true", help="Print the comparison as JSON.")
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output preference (default: auto).",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const="never",
        help="Alias for --color never.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for serve.")
    parser.add_argument("--port", type=int, default=8000, help="Port for serve.")
    return parser.parse_args(argv)


def _serve(host: str, port: int) -> None:
    import uvicorn

    uvicorn.run(app, host=host, port=port)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    if args.command == "serve":
        _serve(args.host, args.port)
        return

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s - %(message)s")
    console = _get_console(args.color)
    try:
        engine = build_engine(args.jurisdiction or settings.jurisdiction)
    except UnknownJurisdictionError as exc:
        raise SystemExit(f"Unknown jurisdiction {args.jurisdiction}; choose from {list_jurisdictions()}") from exc

    income = parse_currency_input(args.income)
    expenses = parse_currency_input(args.expenses, default=settings.default_expense_draw)
    options = ScenarioOptions(include_insurance=args.include_ei, self_employed=args.self_employed)
    result = engine.compare(income, expenses, options)

    if args.json:
        response = ComparisonResponse.build(result, engine.jurisdiction, expenses, options)
        print(json.dumps(response.model_dump(), indent=2))
        return
    print_comparison(console, result, engine, details=args.details)


if __name__ == "__main__":
    main()
