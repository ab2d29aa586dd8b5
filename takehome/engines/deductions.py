"""Deduction resolution.

Policy: ``total = max(standard, itemized) + sum(above_the_line)``. The
above-the-line items are adjustments to income and are added whether or not
the taxpayer itemizes.
"""

from decimal import Decimal

from takehome.engines.bracket_calculator import ZERO
from takehome.models.params import DeductionInput
from takehome.models.results import DeductionBreakdown, NamedAmount


def _non_negative(value: Decimal | None) -> Decimal:
    if value is None or value < ZERO:
        return ZERO
    return value


class DeductionResolver:
    """Combines standard, itemized and above-the-line deductions."""

    def resolve(
        self,
        deductions: DeductionInput,
        standard_deduction: Decimal,
        *,
        caps: dict[str, Decimal] | None = None,
        itemizing_allowed: bool = True,
        above_the_line_allowed: bool = True,
    ) -> DeductionBreakdown:
        caps = caps or {}
        notes: list[str] = []
        items: list[NamedAmount] = []

        standard = standard_deduction
        if deductions.standard_deduction_override is not None:
            standard = _non_negative(deductions.standard_deduction_override)

        itemized = _non_negative(deductions.itemized_total)
        if itemized > ZERO and not itemizing_allowed:
            notes.append("Itemized deductions are not available here; ignored")
            itemized = ZERO

        itemized_used = itemized > standard
        base = itemized if itemized_used else standard
        if base > ZERO:
            name = "itemized_deductions" if itemized_used else "standard_deduction"
            items.append(NamedAmount(name=name, amount=base))

        adjustments = ZERO
        for name, raw in deductions.above_the_line().items():
            amount = _non_negative(raw)
            if amount == ZERO:
                continue
            if not above_the_line_allowed:
                notes.append(f"{name} is not deductible under this regime; ignored")
                continue
            cap = caps.get(name)
            if cap is not None and amount > cap:
                notes.append(f"{name} capped at {cap:,.2f} (claimed {amount:,.2f})")
                amount = cap
            items.append(NamedAmount(name=name, amount=amount))
            adjustments += amount

        return DeductionBreakdown(
            total=base + adjustments,
            standard=standard,
            itemized_used=itemized_used,
            adjustments=adjustments,
            itemized=items,
            notes=notes,
        )
