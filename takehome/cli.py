"""Typer CLI interface for takehome."""

import json
import logging
from decimal import Decimal
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from takehome.engines.orchestrator import TaxCalculator
from takehome.exceptions import TaxComputationError
from takehome.models.enums import FilingStatus, StudentLoanPlan
from takehome.models.params import (
    FILING_STATUS_ALIASES,
    CreditInput,
    DeductionInput,
    JurisdictionKey,
    JurisdictionOptions,
    TaxCalculationParams,
)
from takehome.models.results import ScenarioVariant
from takehome.reports.tax_summary import ScenarioComparisonGenerator, TaxSummaryGenerator
from takehome.settings import EngineSettings

app = typer.Typer(
    name="takehome",
    help="takehome: income tax and take-home pay across jurisdictions.",
)

class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that serializes Decimal as string."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


def _dec(value: float | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value))


def _parse_filing_status(filing_status: str) -> FilingStatus:
    key = filing_status.upper()
    if key in FILING_STATUS_ALIASES:
        return FILING_STATUS_ALIASES[key]
    try:
        return FilingStatus(key)
    except ValueError:
        valid = ", ".join(FILING_STATUS_ALIASES)
        typer.echo(f"Error: Invalid filing status '{filing_status}'. Valid: {valid}", err=True)
        raise typer.Exit(1)


def _parse_student_loan_plan(plan: str | None) -> StudentLoanPlan | None:
    if plan is None or plan.strip().lower() == "none":
        return None
    try:
        return StudentLoanPlan(plan.strip().lower())
    except ValueError:
        valid = ", ".join(p.value for p in StudentLoanPlan)
        typer.echo(f"Error: Invalid student loan plan '{plan}'. Valid: {valid}", err=True)
        raise typer.Exit(1)


def _parse_variant(raw: str) -> ScenarioVariant:
    """Parse ``NAME:field=value[,field=value]``."""
    name, sep, assignments = raw.partition(":")
    if not sep or not name.strip():
        typer.echo(f"Error: Invalid variant '{raw}'. Use NAME:field=value", err=True)
        raise typer.Exit(1)
    overrides: dict[str, str] = {}
    for assignment in filter(None, (a.strip() for a in assignments.split(","))):
        field, eq, value = assignment.partition("=")
        if not eq or not field.strip():
            typer.echo(f"Error: Invalid override '{assignment}' in variant '{name}'", err=True)
            raise typer.Exit(1)
        overrides[field.strip()] = value.strip()
    return ScenarioVariant(name=name.strip(), overrides=overrides)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _build_params(
    gross: float,
    country: str,
    state: str | None,
    regime: str | None,
    filing_status: str,
    year: int,
    dependents: int,
    itemized: float | None,
    standard_deduction: float | None,
    retirement: float,
    hsa: float,
    student_loan_interest: float,
    health_insurance: float,
    other_deduction: float,
    earned_income_credit: float,
    child_credit: float | None,
    education_credit: float,
    other_credit: float,
    church_member: bool = False,
    student_loan_plan: str | None = None,
    private_health: bool = True,
) -> TaxCalculationParams:
    return TaxCalculationParams(
        gross_income=Decimal(str(gross)),
        jurisdiction=JurisdictionKey(country_code=country, state_code=state),
        regime=regime,
        filing_status=_parse_filing_status(filing_status),
        year=year,
        dependents=dependents,
        deductions=DeductionInput(
            standard_deduction_override=_dec(standard_deduction),
            itemized_total=_dec(itemized),
            retirement_contributions=Decimal(str(retirement)),
            hsa_contributions=Decimal(str(hsa)),
            student_loan_interest=Decimal(str(student_loan_interest)),
            health_insurance_premiums=Decimal(str(health_insurance)),
            other_above_the_line=Decimal(str(other_deduction)),
        ),
        credits=CreditInput(
            earned_income_credit=Decimal(str(earned_income_credit)),
            child_credit=_dec(child_credit),
            education_credit=Decimal(str(education_credit)),
            other_credits=Decimal(str(other_credit)),
        ),
        options=JurisdictionOptions(
            is_church_member=church_member,
            student_loan_plan=_parse_student_loan_plan(student_loan_plan),
            has_private_health=private_health,
        ),
    )


def _calculator(generic_rate: float | None) -> TaxCalculator:
    settings = EngineSettings()
    if generic_rate is not None:
        settings = EngineSettings(generic_rate=Decimal(str(generic_rate)))
    return TaxCalculator(settings=settings)


# Shared options
COUNTRY = typer.Option("US", "--country", "-c", help="ISO country code or name (US, GB, India...)")
STATE = typer.Option(None, "--state", help="State or province code (CA, NY, ON...)")
REGIME = typer.Option(None, "--regime", "-r", help="Tax regime, where the country offers one")
FILING_STATUS = typer.Option(
    "SINGLE", "--filing-status", "-s", help="Filing status: SINGLE, MFJ, MFS, HOH"
)
YEAR = typer.Option(2025, "--year", "-y", help="Tax year")
DEPENDENTS = typer.Option(0, "--dependents", "-d", help="Number of dependents")
ITEMIZED = typer.Option(None, "--itemized", help="Total itemized deductions")
STANDARD = typer.Option(None, "--standard-deduction", help="Override the standard deduction")
RETIREMENT = typer.Option(0.0, "--retirement", help="Pre-tax retirement contributions")
HSA = typer.Option(0.0, "--hsa", help="HSA contributions")
STUDENT_LOAN = typer.Option(0.0, "--student-loan-interest", help="Student loan interest paid")
HEALTH = typer.Option(0.0, "--health-insurance", help="Health insurance premiums paid")
OTHER_DEDUCTION = typer.Option(0.0, "--other-deduction", help="Other above-the-line deductions")
EIC = typer.Option(0.0, "--earned-income-credit", help="Earned income credit")
CHILD = typer.Option(None, "--child-credit", help="Override the computed child credit")
EDUCATION = typer.Option(0.0, "--education-credit", help="Education credit")
OTHER_CREDIT = typer.Option(0.0, "--other-credit", help="Other credits")
CHURCH_MEMBER = typer.Option(False, "--church-member", help="Germany: pay church tax")
LOAN_PLAN = typer.Option(
    None, "--student-loan-plan", help="United Kingdom: plan1, plan2, plan4 or plan5"
)
PRIVATE_HEALTH = typer.Option(
    True,
    "--private-health/--no-private-health",
    help="Australia: hospital cover, which avoids the Medicare levy surcharge",
)
GENERIC_RATE = typer.Option(
    None, "--generic-rate", help="Flat rate for jurisdictions without tax tables"
)
JSON_OUTPUT = typer.Option(False, "--json", help="Output as JSON")
VERBOSE = typer.Option(False, "--verbose", "-v", help="Log engine decisions to stderr")


@app.command()
def calculate(
    gross: float = typer.Argument(..., help="Annual gross income, in local currency"),
    country: str = COUNTRY,
    state: str | None = STATE,
    regime: str | None = REGIME,
    filing_status: str = FILING_STATUS,
    year: int = YEAR,
    dependents: int = DEPENDENTS,
    itemized: float | None = ITEMIZED,
    standard_deduction: float | None = STANDARD,
    retirement: float = RETIREMENT,
    hsa: float = HSA,
    student_loan_interest: float = STUDENT_LOAN,
    health_insurance: float = HEALTH,
    other_deduction: float = OTHER_DEDUCTION,
    earned_income_credit: float = EIC,
    child_credit: float | None = CHILD,
    education_credit: float = EDUCATION,
    other_credit: float = OTHER_CREDIT,
    church_member: bool = CHURCH_MEMBER,
    student_loan_plan: str | None = LOAN_PLAN,
    private_health: bool = PRIVATE_HEALTH,
    generic_rate: float | None = GENERIC_RATE,
    json_output: bool = JSON_OUTPUT,
    verbose: bool = VERBOSE,
) -> None:
    """Calculate tax and take-home pay for one salary."""
    _configure_logging(verbose)
    params = _build_params(
        gross, country, state, regime, filing_status, year, dependents,
        itemized, standard_deduction, retirement, hsa, student_loan_interest,
        health_insurance, other_deduction, earned_income_credit, child_credit,
        education_credit, other_credit, church_member, student_loan_plan, private_health,
    )
    try:
        result = _calculator(generic_rate).calculate_tax(params)
    except TaxComputationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(result.model_dump(), cls=_DecimalEncoder, indent=2))
        return
    typer.echo(TaxSummaryGenerator().render(result))


@app.command()
def compare(
    gross: float = typer.Argument(..., help="Annual gross income of the base scenario"),
    variant: list[str] = typer.Option(
        ...,
        "--variant",
        help="What-if scenario as NAME:field=value[,field=value]. Repeatable.",
    ),
    country: str = COUNTRY,
    state: str | None = STATE,
    regime: str | None = REGIME,
    filing_status: str = FILING_STATUS,
    year: int = YEAR,
    dependents: int = DEPENDENTS,
    itemized: float | None = ITEMIZED,
    standard_deduction: float | None = STANDARD,
    retirement: float = RETIREMENT,
    hsa: float = HSA,
    student_loan_interest: float = STUDENT_LOAN,
    health_insurance: float = HEALTH,
    other_deduction: float = OTHER_DEDUCTION,
    earned_income_credit: float = EIC,
    child_credit: float | None = CHILD,
    education_credit: float = EDUCATION,
    other_credit: float = OTHER_CREDIT,
    church_member: bool = CHURCH_MEMBER,
    student_loan_plan: str | None = LOAN_PLAN,
    private_health: bool = PRIVATE_HEALTH,
    generic_rate: float | None = GENERIC_RATE,
    json_output: bool = JSON_OUTPUT,
    verbose: bool = VERBOSE,
) -> None:
    """Compare what-if scenarios against a base calculation.

    Example: takehome compare 90000 --variant max401k:deductions.retirement_contributions=23500
    """
    _configure_logging(verbose)
    params = _build_params(
        gross, country, state, regime, filing_status, year, dependents,
        itemized, standard_deduction, retirement, hsa, student_loan_interest,
        health_insurance, other_deduction, earned_income_credit, child_credit,
        education_credit, other_credit, church_member, student_loan_plan, private_health,
    )
    variants = [_parse_variant(v) for v in variant]
    try:
        comparison = _calculator(generic_rate).compare_scenarios(params, variants)
    except TaxComputationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(comparison.model_dump(), cls=_DecimalEncoder, indent=2))
        return
    typer.echo(ScenarioComparisonGenerator().render(comparison))


@app.command()
def jurisdictions() -> None:
    """List jurisdictions with tax tables."""
    calculator = TaxCalculator()
    table = Table(title="Supported jurisdictions")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Currency")
    table.add_column("Regimes")
    table.add_column("Data years")
    table.add_column("Estimate")
    for _, strategy in calculator.registry.items():
        latest = strategy.latest
        table.add_row(
            strategy.key,
            strategy.name,
            strategy.currency,
            ", ".join(strategy.regimes),
            ", ".join(str(y) for y in strategy.years),
            "yes" if latest.estimate_notes else "",
        )
    Console().print(table)


if __name__ == "__main__":
    app()
