"""Parse raw calculator form values into a ``CalculationInput``.

Front ends hand over whatever the user typed (strings from a form or query
string, numbers from JSON). Everything is checked here so that the engine
only ever sees finite, in-range values:

- basis, business use and salvage must be finite numbers;
- basis must be positive;
- business use must be within [0, 100];
- salvage must be non-negative and, unless disabled in settings, no larger
  than the depreciable basis.

Recovery periods are normalized to their rate-table key form (``5.0`` ->
``"5"``) and methods are upper-cased, since the engine matches both keys
literally. Unknown periods or methods are not rejected here; the engine
returns an empty schedule for them and the front end reports the invalid
combination.
"""

import math
from collections.abc import Mapping
from datetime import date

from macrs_calculator.config.settings import Settings, get_settings
from macrs_calculator.depreciation.rate_tables import normalize_period
from macrs_calculator.i18n.formatting import format_currency
from macrs_calculator.i18n.messages import translate
from macrs_calculator.models.schemas import CalculationInput

CONVENTIONS = ("half_year", "mid_quarter", "mid_month")


class InvalidInputError(ValueError):
    """A form value failed validation.

    Carries a translation key so each front end can render the message in
    the user's locale.
    """

    def __init__(self, key: str, field: str | None = None, **params: object):
        self.key = key
        self.field = field
        self.params = params
        super().__init__(self.localized())

    def localized(self, locale: str | None = None) -> str:
        params = {
            name: format_currency(value, locale) if isinstance(value, float) else value
            for name, value in self.params.items()
        }
        if self.field is not None:
            params.setdefault("field", translate(f"fields.{self.field}", locale))
        return translate(self.key, locale, **params)


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_number(
    raw: Mapping[str, object], field: str, default: float | None = None
) -> float:
    value = raw.get(field)
    if _is_blank(value):
        if default is None:
            raise InvalidInputError("errors.required", field)
        return default
    if isinstance(value, bool):
        raise InvalidInputError("errors.not_a_number", field)
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise InvalidInputError("errors.not_a_number", field) from None
    if not math.isfinite(number):
        raise InvalidInputError("errors.not_a_number", field)
    return number


def _parse_convention(value: object) -> str:
    if _is_blank(value):
        return "half_year"
    normalized = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    if normalized not in CONVENTIONS:
        raise InvalidInputError("errors.invalid_convention", "convention", value=value)
    return normalized


def _parse_date(value: object) -> date | None:
    if _is_blank(value):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidInputError("errors.invalid_date", "placed_in_service") from None


def parse_calculation_input(
    raw: Mapping[str, object], settings: Settings | None = None
) -> CalculationInput:
    """Validate raw form values and build the engine input.

    Args:
        raw: Field name -> user-supplied value. Blank optional fields take
            their defaults (100% business use, $0 salvage, the configured
            period and method, half-year convention).
        settings: Overrides ``get_settings()``.

    Raises:
        InvalidInputError: On the first field that fails validation.
    """
    settings = settings or get_settings()

    basis = _parse_number(raw, "basis")
    business_use = _parse_number(raw, "business_use_percent", 100.0)
    salvage = _parse_number(raw, "salvage_value", 0.0)

    if basis <= 0:
        raise InvalidInputError("errors.basis_not_positive", "basis")
    if not 0 <= business_use <= 100:
        raise InvalidInputError("errors.business_use_range", "business_use_percent")
    if salvage < 0:
        raise InvalidInputError("errors.salvage_negative", "salvage_value")

    depreciable_basis = basis * (business_use / 100)
    if settings.reject_excess_salvage and salvage > depreciable_basis:
        raise InvalidInputError(
            "errors.salvage_exceeds_basis",
            "salvage_value",
            salvage=salvage,
            basis=depreciable_basis,
        )

    period = raw.get("recovery_period")
    method = raw.get("method")
    if _is_blank(period):
        period = settings.default_recovery_period
    if _is_blank(method):
        method = settings.default_method

    return CalculationInput(
        basis=basis,
        business_use_percent=business_use,
        salvage_value=salvage,
        recovery_period=normalize_period(period),
        method=str(method).strip().upper(),
        convention=_parse_convention(raw.get("convention")),
        placed_in_service=_parse_date(raw.get("placed_in_service")),
    )
