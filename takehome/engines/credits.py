"""Credit resolution.

Jurisdiction credit rules are evaluated against an income basis and their
phase-out; caller-supplied credits are added as given. Non-refundable
credits are applied in order and capped at the income tax still owed.
Refundable credits are never capped.
"""

from collections.abc import Sequence
from decimal import Decimal

from takehome.engines.bracket_calculator import ZERO
from takehome.models.enums import PhaseOutKind
from takehome.models.params import CreditInput
from takehome.models.results import CreditBreakdown, NamedAmount
from takehome.models.rules import CreditRule, PhaseOut


def apply_phase_out(
    amount: Decimal,
    phase_out: PhaseOut,
    income: Decimal,
    income_tax: Decimal,
    relief_load: Decimal = Decimal("1"),
) -> Decimal:
    """Credit remaining after an income-based phase-out.

    ``relief_load`` is the total owed per unit of income tax once surtaxes
    on tax (a cess) are added; marginal relief leaves that total, not the
    bare income tax, equal to the income above the cutoff.
    """
    if income <= phase_out.start:
        return amount
    excess = income - phase_out.start

    if phase_out.kind == PhaseOutKind.CUTOFF:
        if phase_out.marginal_relief:
            # Tax above the cutoff may not exceed the income above it.
            return min(amount, max(income_tax - excess / relief_load, ZERO))
        return ZERO

    if phase_out.rate is not None:
        return max(amount - excess * phase_out.rate, ZERO)
    if phase_out.end is None or income >= phase_out.end:
        return ZERO
    span = phase_out.end - phase_out.start
    return amount * (phase_out.end - income) / span


class CreditResolver:
    """Combines jurisdiction credit rules with caller-supplied credits."""

    def resolve(
        self,
        credits: CreditInput,
        rules: Sequence[CreditRule],
        *,
        dependents: int,
        income: Decimal,
        income_tax: Decimal,
        refundable_inputs: frozenset[str] = frozenset(),
        relief_load: Decimal = Decimal("1"),
    ) -> CreditBreakdown:
        notes: list[str] = []
        is_estimate = False
        # (name, amount, refundable)
        candidates: list[tuple[str, Decimal, bool]] = []

        for rule in rules:
            if rule.per_dependent > ZERO and credits.child_credit is not None:
                continue
            amount = rule.amount + rule.per_dependent * dependents
            if amount <= ZERO:
                continue
            if rule.phase_out is not None:
                amount = apply_phase_out(
                    amount, rule.phase_out, income, income_tax, relief_load
                )
            if amount <= ZERO:
                continue
            candidates.append((rule.name, amount, rule.refundable))
            if rule.simplified_note:
                notes.append(rule.simplified_note)
                is_estimate = True

        caller_credits = {
            "earned_income_credit": credits.earned_income_credit,
            "child_credit": credits.child_credit or ZERO,
            "education_credit": credits.education_credit,
            "other_credits": credits.other_credits,
        }
        for name, amount in caller_credits.items():
            if amount > ZERO:
                candidates.append((name, amount, name in refundable_inputs))

        remaining = max(income_tax, ZERO)
        items: list[NamedAmount] = []
        total = ZERO
        refundable_total = ZERO
        for name, amount, refundable in candidates:
            if refundable:
                refundable_total += amount
            else:
                allowed = min(amount, remaining)
                if allowed < amount:
                    notes.append(
                        f"{name} limited to {allowed:,.2f} of remaining tax "
                        f"(claimed {amount:,.2f})"
                    )
                amount = allowed
                remaining -= amount
            if amount > ZERO:
                items.append(NamedAmount(name=name, amount=amount))
                total += amount

        return CreditBreakdown(
            total=total,
            refundable_total=refundable_total,
            itemized=items,
            notes=notes,
            is_estimate=is_estimate,
        )
