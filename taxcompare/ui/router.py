from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from taxcompare.config import Settings, get_settings
from taxcompare.core.money import format_currency
from taxcompare.core.scenarios import ComparisonResult, ScenarioOptions, ScenarioResult, TaxEngine, build_engine
from taxcompare.ui.fields import FIELD_METADATA, format_input_currency, parse_bool, parse_currency_input
from taxcompare.ui.formatting import describe_advantage, describe_options, render_breakdown

router = APIRouter(prefix="/ui", tags=["ui"])

UI_ROOT = Path(__file__).resolve().parent
TEMPLATES = Jinja2Templates(directory=str(UI_ROOT / "templates"))


def _resolve_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if isinstance(settings, Settings):
        return settings
    return get_settings()


def _resolve_engine(request: Request, settings: Settings) -> TaxEngine:
    engine = getattr(request.app.state, "engine", None)
    if isinstance(engine, TaxEngine):
        return engine
    return build_engine(settings.jurisdiction)


def _flag(value: str | None, submitted: bool, default: bool) -> bool:
    if not submitted:
        return default
    if value is None:
        return False
    try:
        return parse_bool(value)
    except ValueError:
        return False


def _scenario_rows(result: ScenarioResult) -> dict[str, str]:
    return {
        "gross": format_currency(result.gross_income),
        "federal": format_currency(result.federal_tax),
        "provincial": format_currency(result.provincial_tax),
        "cpp": format_currency(result.contributions.total),
        "ei": format_currency(result.insurance),
        "total": format_currency(result.total_tax),
        "net": format_currency(result.net_income),
        "effective": f"{result.effective_rate}%",
    }


def _comparison_context(result: ComparisonResult) -> dict[str, Any]:
    personal = result.personal
    corporate = result.corporate
    corporate_rows = _scenario_rows(corporate)
    corporate_rows.update(
        {
            "corporate_tax": format_currency(corporate.corporate_tax),
            "after_tax": format_currency(corporate.after_tax_corporate_income),
            "salary": format_currency(corporate.salary),
            "salary_tax": format_currency(corporate.salary_tax),
            "retained": format_currency(corporate.retained_earnings),
        }
    )
    return {
        "personal": _scenario_rows(personal),
        "corporate": corporate_rows,
        "personal_federal_lines": render_breakdown(personal.federal_breakdown),
        "personal_provincial_lines": render_breakdown(personal.provincial_breakdown),
        "corporate_lines": render_breakdown(corporate.corporate_breakdown),
        "salary_federal_lines": render_breakdown(corporate.federal_breakdown),
        "salary_provincial_lines": render_breakdown(corporate.provincial_breakdown),
        "advantage": describe_advantage(result),
    }


@router.get("/", response_class=HTMLResponse)
def comparison_page(
    request: Request,
    income: str | None = Query(None),
    expenses: str | None = Query(None),
    include_ei: str | None = Query(None),
    self_employed: str | None = Query(None),
    submitted: str | None = Query(None),
) -> HTMLResponse:
    settings = _resolve_settings(request)
    engine = _resolve_engine(request, settings)
    was_submitted = submitted is not None

    gross = parse_currency_input(income)
    draw = parse_currency_input(expenses, default=settings.default_expense_draw)
    options = ScenarioOptions(
        include_insurance=_flag(include_ei, was_submitted, default=True),
        self_employed=_flag(self_employed, was_submitted, default=False),
    )
    result = engine.compare(gross, draw, options)

    context: dict[str, Any] = {
        "jurisdiction": engine.jurisdiction,
        "fields": FIELD_METADATA,
        "income_value": format_input_currency(income),
        "expenses_value": format_input_currency(expenses),
        "default_expenses": format_currency(settings.default_expense_draw),
        "options": options,
        "captions": describe_options(options.include_insurance, options.self_employed, engine.jurisdiction),
    }
    context.update(_comparison_context(result))
    return TEMPLATES.TemplateResponse(request, "compare.html", context)
