"""Progressive bracket arithmetic.

The only place in the package that walks a bracket table. Strategies,
tiered payroll contributions and the fallback strategy all route through
``calculate_bracket_tax``.
"""

from collections.abc import Sequence
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from takehome.exceptions import InvalidBracketTableError
from takehome.models.brackets import BracketLineItem, TaxBracket

ZERO = Decimal("0")
ONE = Decimal("1")


class BracketTaxResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: Decimal = ZERO
    line_items: list[BracketLineItem] = Field(default_factory=list)


def validate_bracket_table(table: Sequence[TaxBracket], table_name: str = "table") -> None:
    """Raise InvalidBracketTableError unless the table is well formed.

    A valid table starts at zero, is sorted and contiguous, has a rate in
    [0, 1] for every bracket, and ends with the only unbounded bracket.
    """
    if not table:
        raise InvalidBracketTableError(table_name, "table is empty")
    if table[0].lower_bound != ZERO:
        raise InvalidBracketTableError(
            table_name, f"first bracket starts at {table[0].lower_bound}, expected 0"
        )
    for i, bracket in enumerate(table):
        if not (ZERO <= bracket.rate <= ONE):
            raise InvalidBracketTableError(
                table_name, f"bracket {i} has rate {bracket.rate} outside [0, 1]"
            )
        is_last = i == len(table) - 1
        if bracket.upper_bound is None:
            if not is_last:
                raise InvalidBracketTableError(
                    table_name, f"bracket {i} is unbounded but is not the last bracket"
                )
            continue
        if is_last:
            raise InvalidBracketTableError(table_name, "last bracket must be unbounded")
        if bracket.upper_bound <= bracket.lower_bound:
            raise InvalidBracketTableError(
                table_name,
                f"bracket {i} is empty or inverted "
                f"({bracket.lower_bound} to {bracket.upper_bound})",
            )
        following = table[i + 1].lower_bound
        if following < bracket.upper_bound:
            raise InvalidBracketTableError(
                table_name, f"brackets {i} and {i + 1} overlap or are unsorted"
            )
        if following > bracket.upper_bound:
            raise InvalidBracketTableError(
                table_name, f"gap between brackets {i} and {i + 1}"
            )


def calculate_bracket_tax(
    income: Decimal,
    table: Sequence[TaxBracket],
    table_name: str = "income_tax",
) -> BracketTaxResult:
    """Apply progressive brackets to an income.

    Emits one line item per bracket whose lower bound is below the income.
    Income sitting exactly on a boundary is taxed entirely by the brackets
    below it.
    """
    if income < ZERO:
        raise ValueError(f"Bracket income must be non-negative, got {income}")
    validate_bracket_table(table, table_name)

    total = ZERO
    line_items: list[BracketLineItem] = []
    for bracket in table:
        if bracket.lower_bound >= income:
            break
        top = income if bracket.upper_bound is None else min(income, bracket.upper_bound)
        amount = max(top - bracket.lower_bound, ZERO)
        tax = amount * bracket.rate
        total += tax
        line_items.append(
            BracketLineItem(
                table=table_name,
                lower_bound=bracket.lower_bound,
                upper_bound=bracket.upper_bound,
                rate=bracket.rate,
                amount_taxed=amount,
                tax=tax,
            )
        )
    return BracketTaxResult(total=total, line_items=line_items)


def marginal_rate(income: Decimal, table: Sequence[TaxBracket]) -> Decimal:
    """Rate applied to the next unit of income."""
    if income < ZERO:
        raise ValueError(f"Bracket income must be non-negative, got {income}")
    for bracket in table:
        if bracket.contains(income):
            return bracket.rate
    return table[-1].rate
