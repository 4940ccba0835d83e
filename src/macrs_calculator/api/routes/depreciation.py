from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel

from macrs_calculator.api.dependencies import get_app_settings, get_locale
from macrs_calculator.config.settings import Settings
from macrs_calculator.depreciation.inputs import (
    InvalidInputError,
    parse_calculation_input,
)
from macrs_calculator.models.schemas import ScheduleReport
from macrs_calculator.presentation import (
    InvalidCombinationError,
    build_report,
    schedule_dataframe,
)

router = APIRouter(prefix="/depreciation", tags=["depreciation"])


class ScheduleRequest(BaseModel):
    """Raw calculator form. Numbers may arrive as strings."""

    basis: float | str | None = None
    business_use_percent: float | str | None = None
    salvage_value: float | str | None = None
    recovery_period: float | str | None = None
    method: str | None = None
    convention: str | None = None
    placed_in_service: date | str | None = None


def _report_or_error(raw: dict, locale: str, settings: Settings) -> ScheduleReport:
    try:
        calc_input = parse_calculation_input(raw, settings)
        return build_report(calc_input, locale)
    except InvalidInputError as e:
        raise HTTPException(
            422, {"message": e.localized(locale), "field": e.field}
        ) from e
    except InvalidCombinationError as e:
        raise HTTPException(400, str(e)) from e


@router.post("/schedule", response_model=ScheduleReport)
def create_schedule(
    body: ScheduleRequest,
    locale: str = Depends(get_locale),
    settings: Settings = Depends(get_app_settings),
):
    """Compute a depreciation schedule from the calculator form."""
    return _report_or_error(body.model_dump(), locale, settings)


@router.get("/schedule.csv")
def export_schedule_csv(
    basis: str = Query(..., description="Asset basis"),
    business_use_percent: str | None = Query(None),
    salvage_value: str | None = Query(None),
    recovery_period: str | None = Query(None),
    method: str | None = Query(None),
    localized: bool = Query(False, description="Formatted values and headers"),
    locale: str = Depends(get_locale),
    settings: Settings = Depends(get_app_settings),
):
    """Download the schedule table as CSV."""
    raw = {
        "basis": basis,
        "business_use_percent": business_use_percent,
        "salvage_value": salvage_value,
        "recovery_period": recovery_period,
        "method": method,
    }
    report = _report_or_error(raw, locale, settings)
    csv = schedule_dataframe(report, localized=localized).to_csv(index=False)
    filename = (
        f"macrs_{report.inputs.recovery_period}yr_{report.applied_method}.csv"
    )
    return Response(
        content=csv,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
