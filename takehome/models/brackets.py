"""Progressive bracket models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class TaxBracket(BaseModel):
    """One income band taxed at a single marginal rate.

    Bounds are half-open: ``[lower_bound, upper_bound)``. ``upper_bound`` of
    ``None`` is unbounded and only valid on the last bracket of a table.
    """

    model_config = ConfigDict(frozen=True)

    lower_bound: Decimal
    upper_bound: Decimal | None = None
    rate: Decimal

    def contains(self, amount: Decimal) -> bool:
        if amount < self.lower_bound:
            return False
        return self.upper_bound is None or amount < self.upper_bound


class BracketLineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    table: str
    lower_bound: Decimal
    upper_bound: Decimal | None
    rate: Decimal
    amount_taxed: Decimal
    tax: Decimal


def brackets_from_thresholds(
    thresholds: list[tuple[Decimal | None, Decimal]],
) -> list[TaxBracket]:
    """Build a contiguous table from ``(upper_bound, rate)`` tuples.

    The first bracket starts at zero; each later bracket starts where the
    previous one ends.
    """
    table: list[TaxBracket] = []
    lower = Decimal("0")
    for upper_bound, rate in thresholds:
        table.append(TaxBracket(lower_bound=lower, upper_bound=upper_bound, rate=rate))
        if upper_bound is not None:
            lower = upper_bound
    return table
