"""Plain-text tax result and scenario comparison reports."""

from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from takehome.models.results import ScenarioComparison, TaxCalculationResult

TEMPLATE_DIR = Path(__file__).parent / "templates"


def money(value: Decimal) -> str:
    return f"{value:,.2f}"


def signed_money(value: Decimal) -> str:
    return f"{value:+,.2f}"


def percent(value: Decimal) -> str:
    return f"{value * 100:.2f}%"


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["money"] = money
    env.filters["signed_money"] = signed_money
    env.filters["percent"] = percent
    return env


class TaxSummaryGenerator:
    """Generates a human-readable breakdown of one calculation."""

    def __init__(self) -> None:
        self.env = _environment()

    def render(self, result: TaxCalculationResult) -> str:
        template = self.env.get_template("tax_summary.txt")
        return template.render(result=result)


class ScenarioComparisonGenerator:
    """Generates a side-by-side report of what-if scenarios."""

    def __init__(self) -> None:
        self.env = _environment()

    def render(self, comparison: ScenarioComparison) -> str:
        template = self.env.get_template("scenario_comparison.txt")
        return template.render(comparison=comparison, best=comparison.best())
