from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Convention = Literal["half_year", "mid_quarter", "mid_month"]

# --- Engine schemas ---


class CalculationInput(BaseModel):
    """Scalar inputs to the schedule engine.

    Only finiteness is enforced here. Range checks and key normalization
    (``5.0`` -> ``"5"``, ``"200db"`` -> ``"200DB"``) belong to the
    form-parsing boundary in ``depreciation.inputs``; the engine looks up
    ``recovery_period`` and ``method`` exactly as given.
    """

    model_config = ConfigDict(frozen=True)

    basis: float = Field(allow_inf_nan=False)
    business_use_percent: float = Field(100.0, allow_inf_nan=False)
    salvage_value: float = Field(0.0, allow_inf_nan=False)
    recovery_period: str
    method: str = "200DB"
    # Informational only, never used in the calculation.
    convention: Convention = "half_year"
    placed_in_service: date | None = None

    @property
    def depreciable_basis(self) -> float:
        return self.basis * (self.business_use_percent / 100)


class DepreciationScheduleEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    rate: float
    depreciation: float
    accumulated: float
    book_value: float


class ScheduleSummary(BaseModel):
    original_cost: float
    depreciable_basis: float
    salvage_value: float
    total_depreciation: float
    final_book_value: float
    years: int


# --- Presentation schemas ---


class FormattedScheduleRow(BaseModel):
    year: int
    rate: str
    depreciation: str
    accumulated: str
    book_value: str


class FormattedSummary(BaseModel):
    original_cost: str
    depreciable_basis: str
    salvage_value: str
    total_depreciation: str


class ScheduleReport(BaseModel):
    """Engine output plus everything a front end needs to render it."""

    locale: str
    inputs: CalculationInput
    requested_method: str
    applied_method: str
    fallback_applied: bool
    entries: list[DepreciationScheduleEntry]
    summary: ScheduleSummary
    formatted_rows: list[FormattedScheduleRow]
    formatted_summary: FormattedSummary


class RateTableInfo(BaseModel):
    version: str
    periods: list[str]
    methods: dict[str, list[str]]


class RateSequence(BaseModel):
    recovery_period: str
    method: str
    rates: list[float]
    years: int
