from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from taxcompare.core.brackets import LineItem
from taxcompare.core.contributions import ContributionResult
from taxcompare.core.jurisdiction import Jurisdiction
from taxcompare.core.money import round_cents
from taxcompare.core.scenarios import ComparisonResult, CorporateResult, ScenarioOptions, ScenarioResult
from taxcompare.ui.fields import parse_currency_input


def _cents(value: Decimal) -> float:
    return float(round_cents(value))


class ComparisonRequest(BaseModel):
    income: Decimal = Field(
        Decimal("0"),
        ge=0,
        description="Gross professional or business income",
        validation_alias=AliasChoices("income", "gross_income", "grossIncome"),
    )
    expenses: Decimal | None = Field(
        None,
        ge=0,
        description="Personal expense draw paid as salary in the corporate scenario",
        validation_alias=AliasChoices("expenses", "personal_expenses", "personalExpenses", "expense_draw"),
    )
    include_ei: bool = Field(
        True,
        description="Include EI premiums",
        validation_alias=AliasChoices("include_ei", "includeEi", "include_insurance"),
    )
    self_employed: bool = Field(
        False,
        description="Unincorporated self-employed CPP and credit rules",
        validation_alias=AliasChoices("self_employed", "selfEmployed"),
    )
    jurisdiction: str | None = Field(None, description="Tax table code, defaults to the configured one")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("income", mode="before")
    @classmethod
    def _parse_income_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_currency_input(value)
        return value

    @field_validator("expenses", mode="before")
    @classmethod
    def _parse_expenses_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_currency_input(value, default=None)  # type: ignore[arg-type]
        return value

    def options(self) -> ScenarioOptions:
        return ScenarioOptions(include_insurance=self.include_ei, self_employed=self.self_employed)


class LineItemModel(BaseModel):
    label: str
    amount: float
    tax: float
    rate: float | None = None
    is_credit: bool = False

    @classmethod
    def from_item(cls, item: LineItem) -> "LineItemModel":
        return cls(
            label=item.label,
            amount=_cents(item.amount),
            tax=_cents(item.tax),
            rate=float(item.rate) if item.rate is not None else None,
            is_credit=item.is_credit,
        )


def _lines(items: Iterable[LineItem]) -> list[LineItemModel]:
    return [LineItemModel.from_item(item) for item in items]


class ContributionModel(BaseModel):
    base_tier: float
    second_tier: float
    total: float

    @classmethod
    def from_result(cls, result: ContributionResult) -> "ContributionModel":
        return cls(
            base_tier=_cents(result.base_tier),
            second_tier=_cents(result.second_tier),
            total=_cents(result.total),
        )


class ScenarioModel(BaseModel):
    gross_income: float
    taxable_income: float
    federal_tax: float
    provincial_tax: float
    cpp: ContributionModel
    ei: float
    total_tax: float
    net_income: float
    effective_rate: str
    federal_breakdown: list[LineItemModel]
    provincial_breakdown: list[LineItemModel]

    @classmethod
    def _fields_from(cls, result: ScenarioResult) -> dict[str, Any]:
        return {
            "gross_income": _cents(result.gross_income),
            "taxable_income": _cents(result.taxable_income),
            "federal_tax": _cents(result.federal_tax),
            "provincial_tax": _cents(result.provincial_tax),
            "cpp": ContributionModel.from_result(result.contributions),
            "ei": _cents(result.insurance),
            "total_tax": _cents(result.total_tax),
            "net_income": _cents(result.net_income),
            "effective_rate": result.effective_rate,
            "federal_breakdown": _lines(result.federal_breakdown),
            "provincial_breakdown": _lines(result.provincial_breakdown),
        }

    @classmethod
    def from_result(cls, result: ScenarioResult) -> "ScenarioModel":
        return cls(**cls._fields_from(result))


class CorporateModel(ScenarioModel):
    corporate_tax: float
    after_tax_corporate_income: float
    salary: float
    salary_tax: float
    retained_earnings: float
    corporate_breakdown: list[LineItemModel]

    @classmethod
    def from_result(cls, result: CorporateResult) -> "CorporateModel":  # type: ignore[override]
        return cls(
            **cls._fields_from(result),
            corporate_tax=_cents(result.corporate_tax),
            after_tax_corporate_income=_cents(result.after_tax_corporate_income),
            salary=_cents(result.salary),
            salary_tax=_cents(result.salary_tax),
            retained_earnings=_cents(result.retained_earnings),
            corporate_breakdown=_lines(result.corporate_breakdown),
        )


class AdvantageModel(BaseModel):
    amount: float | None
    share_of_income: float | None
    favours: str


class ComparisonResponse(BaseModel):
    jurisdiction: str
    province: str
    tax_year: int
    inputs: dict[str, Any]
    personal: ScenarioModel
    corporate: CorporateModel
    advantage: AdvantageModel

    @classmethod
    def build(
        cls,
        result: ComparisonResult,
        jurisdiction: Jurisdiction,
        expenses: Decimal,
        options: ScenarioOptions,
    ) -> "ComparisonResponse":
        if result.advantage is None:
            favours = "none"
        elif result.favours_incorporation:
            favours = "corporate"
        else:
            favours = "personal"
        share = result.advantage_share
        return cls(
            jurisdiction=jurisdiction.code,
            province=jurisdiction.name,
            tax_year=jurisdiction.tax_year,
            inputs={
                "income": _cents(result.personal.gross_income),
                "expenses": _cents(expenses),
                "include_ei": options.include_insurance,
                "self_employed": options.self_employed,
            },
            personal=ScenarioModel.from_result(result.personal),
            corporate=CorporateModel.from_result(result.corporate),
            advantage=AdvantageModel(
                amount=_cents(result.advantage) if result.advantage is not None else None,
                share_of_income=float(round(share, 1)) if share is not None else None,
                favours=favours,
            ),
        )


__all__ = [
    "AdvantageModel",
    "ComparisonRequest",
    "ComparisonResponse",
    "ContributionModel",
    "CorporateModel",
    "LineItemModel",
    "ScenarioModel",
]
