import logging

from macrs_calculator.depreciation.rate_tables import (
    MACRS_RATES,
    RateTable,
    resolve_method,
    resolve_rates,
)
from macrs_calculator.models.schemas import (
    CalculationInput,
    DepreciationScheduleEntry,
    ScheduleSummary,
)

logger = logging.getLogger(__name__)


def compute_schedule(
    calc_input: CalculationInput, rate_table: RateTable = MACRS_RATES
) -> list[DepreciationScheduleEntry]:
    """Compute the year-by-year MACRS depreciation schedule.

    The depreciable basis is the asset basis prorated by business use.
    Accumulated depreciation is capped at ``depreciable_basis - salvage``;
    the year that crosses the cap is reduced by exactly the overshoot and
    the schedule ends there. No rounding is applied.

    Args:
        calc_input: Basis, business use, salvage, recovery period and method.
        rate_table: Period -> method -> annual rates. Defaults to the IRS tables.

    Returns:
        Entries in year order starting at 1, or an empty list when no rate
        sequence exists for the period/method (the caller reports that as an
        invalid combination).
    """
    period = calc_input.recovery_period
    method = calc_input.method

    rates = resolve_rates(period, method, rate_table)
    if not rates:
        logger.info("No rates for recovery period %r, method %r", period, method)
        return []

    applied = resolve_method(period, method, rate_table)
    if applied != method:
        logger.debug(
            "Method %r not defined for period %r, using %r", method, period, applied
        )

    depreciable_basis = calc_input.depreciable_basis
    salvage = calc_input.salvage_value
    max_depreciation = depreciable_basis - salvage

    schedule = []
    accumulated = 0.0

    for year, rate in enumerate(rates, start=1):
        expense = depreciable_basis * rate
        accumulated += expense

        if accumulated > max_depreciation:
            excess = accumulated - max_depreciation
            expense -= excess
            accumulated = max_depreciation

        book_value = max(salvage, depreciable_basis - accumulated)

        schedule.append(
            DepreciationScheduleEntry(
                year=year,
                rate=rate * 100,
                depreciation=expense,
                accumulated=accumulated,
                book_value=book_value,
            )
        )

        if accumulated >= max_depreciation:
            break

    return schedule


def summarize_schedule(
    calc_input: CalculationInput, schedule: list[DepreciationScheduleEntry]
) -> ScheduleSummary:
    """Summary block shown beneath the schedule table."""
    depreciable_basis = calc_input.depreciable_basis
    total = schedule[-1].accumulated if schedule else 0.0
    final_book = schedule[-1].book_value if schedule else depreciable_basis

    return ScheduleSummary(
        original_cost=calc_input.basis,
        depreciable_basis=depreciable_basis,
        salvage_value=calc_input.salvage_value,
        total_depreciation=total,
        final_book_value=final_book,
        years=len(schedule),
    )
