import pandas as pd

from macrs_calculator.depreciation.engine import compute_schedule, summarize_schedule
from macrs_calculator.depreciation.rate_tables import (
    MACRS_RATES,
    RateTable,
    resolve_method,
)
from macrs_calculator.i18n.formatting import format_currency, format_percent
from macrs_calculator.i18n.messages import resolve_locale, translate
from macrs_calculator.models.schemas import (
    CalculationInput,
    FormattedScheduleRow,
    FormattedSummary,
    ScheduleReport,
)

SCHEDULE_COLUMNS = ["year", "rate", "depreciation", "accumulated", "book_value"]


class InvalidCombinationError(ValueError):
    """No rate sequence exists for the requested period and method."""

    def __init__(self, recovery_period: str, method: str, locale: str | None = None):
        self.recovery_period = recovery_period
        self.method = method
        super().__init__(translate("errors.invalid_combination", locale))


def build_report(
    calc_input: CalculationInput,
    locale: str | None = None,
    rate_table: RateTable = MACRS_RATES,
) -> ScheduleReport:
    """Run the engine and package the schedule for display in ``locale``.

    Raises:
        InvalidCombinationError: If the engine produced an empty schedule.
    """
    locale = resolve_locale(locale)
    schedule = compute_schedule(calc_input, rate_table)
    if not schedule:
        raise InvalidCombinationError(
            calc_input.recovery_period, calc_input.method, locale
        )

    applied = resolve_method(calc_input.recovery_period, calc_input.method, rate_table)
    summary = summarize_schedule(calc_input, schedule)

    rows = [
        FormattedScheduleRow(
            year=entry.year,
            rate=format_percent(entry.rate, locale),
            depreciation=format_currency(entry.depreciation, locale),
            accumulated=format_currency(entry.accumulated, locale),
            book_value=format_currency(entry.book_value, locale),
        )
        for entry in schedule
    ]

    return ScheduleReport(
        locale=locale,
        inputs=calc_input,
        requested_method=calc_input.method,
        applied_method=applied,
        fallback_applied=applied != calc_input.method,
        entries=schedule,
        summary=summary,
        formatted_rows=rows,
        formatted_summary=FormattedSummary(
            original_cost=format_currency(summary.original_cost, locale),
            depreciable_basis=format_currency(summary.depreciable_basis, locale),
            salvage_value=format_currency(summary.salvage_value, locale),
            total_depreciation=format_currency(summary.total_depreciation, locale),
        ),
    )


def fallback_note(report: ScheduleReport) -> str | None:
    """Localized notice that SL rates replaced the requested method."""
    if not report.fallback_applied:
        return None
    return translate(
        "notes.fallback",
        report.locale,
        requested=report.requested_method,
        applied=report.applied_method,
        period=report.inputs.recovery_period,
    )


def schedule_dataframe(report: ScheduleReport, localized: bool = False) -> pd.DataFrame:
    """Schedule entries as a DataFrame.

    With ``localized=True`` the formatted strings are used and the columns
    carry the translated table headers.
    """
    if not localized:
        return pd.DataFrame(
            [entry.model_dump() for entry in report.entries], columns=SCHEDULE_COLUMNS
        )

    df = pd.DataFrame(
        [row.model_dump() for row in report.formatted_rows], columns=SCHEDULE_COLUMNS
    )
    headers = {
        col: translate(f"table.{col}", report.locale) for col in SCHEDULE_COLUMNS
    }
    return df.rename(columns=headers)
