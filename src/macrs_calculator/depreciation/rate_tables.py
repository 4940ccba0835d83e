"""MACRS percentage tables (IRS Publication 946, Appendix A).

Periods 3 through 20 use the half-year convention tables (A-1 for 200DB,
A-14 for 150DB, A-8 for SL). 27.5-year residential rental and 39-year
nonresidential real property use the January column of the mid-month
straight-line tables (A-6 and A-7a).

The table is built once at import time and exposed through read-only
mapping proxies over tuples.
"""

import math
from collections.abc import Mapping
from types import MappingProxyType

RATE_TABLE_VERSION = "IRS Pub. 946 Appendix A"

METHOD_200DB = "200DB"
METHOD_150DB = "150DB"
METHOD_SL = "SL"
FALLBACK_METHOD = METHOD_SL

RateTable = Mapping[str, Mapping[str, tuple[float, ...]]]


def _freeze(table: dict[str, dict[str, list[float]]]) -> RateTable:
    return MappingProxyType(
        {
            period: MappingProxyType(
                {method: tuple(rates) for method, rates in methods.items()}
            )
            for period, methods in table.items()
        }
    )


# 27.5-year: 3.485% year 1, 3.636% years 2-9, then 3.637/3.636 alternating
# through year 27, 1.970% in year 28.
_SL_27_5 = (
    [0.03485]
    + [0.03636] * 8
    + [0.03637 if year % 2 == 0 else 0.03636 for year in range(10, 28)]
    + [0.01970]
)

# 39-year: 2.461% year 1, 2.564% years 2-39, 0.107% in year 40.
_SL_39 = [0.02461] + [0.02564] * 38 + [0.00107]

MACRS_RATES: RateTable = _freeze(
    {
        "3": {
            METHOD_200DB: [0.3333, 0.4445, 0.1481, 0.0741],
            METHOD_150DB: [0.25, 0.375, 0.25, 0.125],
            METHOD_SL: [0.1667, 0.3333, 0.3333, 0.1667],
        },
        "5": {
            METHOD_200DB: [0.20, 0.32, 0.192, 0.1152, 0.1152, 0.0576],
            METHOD_150DB: [0.15, 0.255, 0.1785, 0.1666, 0.1666, 0.0833],
            METHOD_SL: [0.10, 0.20, 0.20, 0.20, 0.20, 0.10],
        },
        "7": {
            METHOD_200DB: [
                0.1429, 0.2449, 0.1749, 0.1249, 0.0893, 0.0892, 0.0893, 0.0446,
            ],
            METHOD_150DB: [
                0.1071, 0.1913, 0.1503, 0.1225, 0.1225, 0.1225, 0.1225, 0.0613,
            ],
            METHOD_SL: [
                0.0714, 0.1429, 0.1429, 0.1428, 0.1429, 0.1428, 0.1429, 0.0714,
            ],
        },
        "10": {
            METHOD_200DB: [
                0.10, 0.18, 0.144, 0.1152, 0.0922, 0.0737,
                0.0655, 0.0655, 0.0656, 0.0655, 0.0328,
            ],
            METHOD_150DB: [
                0.075, 0.1388, 0.1179, 0.1002, 0.0874, 0.0874,
                0.0874, 0.0874, 0.0874, 0.0874, 0.0437,
            ],
            METHOD_SL: [0.05] + [0.10] * 9 + [0.05],
        },
        "15": {
            METHOD_150DB: [
                0.05, 0.095, 0.0855, 0.077, 0.0693, 0.0623, 0.059, 0.059,
                0.0591, 0.059, 0.0591, 0.059, 0.0591, 0.059, 0.0591, 0.0295,
            ],
            METHOD_SL: [
                0.0333, 0.0667, 0.0667, 0.0667, 0.0667, 0.0667, 0.0667, 0.0666,
                0.0667, 0.0666, 0.0667, 0.0666, 0.0667, 0.0666, 0.0667, 0.0333,
            ],
        },
        "20": {
            METHOD_150DB: [
                0.0375, 0.07219, 0.06677, 0.06177, 0.05713, 0.05285, 0.04888,
                0.04522, 0.04462, 0.04461, 0.04462, 0.04461, 0.04462, 0.04461,
                0.04462, 0.04461, 0.04462, 0.04461, 0.04462, 0.04461, 0.02231,
            ],
            METHOD_SL: [0.025] + [0.05] * 19 + [0.025],
        },
        "27.5": {
            METHOD_SL: _SL_27_5,
        },
        "39": {
            METHOD_SL: _SL_39,
        },
    }
)


def normalize_period(value: str | int | float) -> str:
    """Return the rate-table key form of a recovery period.

    ``5``, ``5.0``, ``"5.0"`` and ``" 5 "`` all become ``"5"``; ``27.5``
    becomes ``"27.5"``. Values that are not numbers are returned stripped
    so that lookups simply miss.
    """
    text = str(value).strip()
    try:
        number = float(text)
    except ValueError:
        return text
    if not math.isfinite(number):
        return text
    if number.is_integer():
        return str(int(number))
    return repr(number)


def recovery_periods(rate_table: RateTable = MACRS_RATES) -> list[str]:
    """Period keys in ascending numeric order."""
    return sorted(rate_table, key=float)


def methods_for(period: str, rate_table: RateTable = MACRS_RATES) -> list[str]:
    """Method keys defined for ``period`` (empty if the period is unknown)."""
    return list(rate_table.get(period, {}))


def resolve_method(
    period: str, method: str, rate_table: RateTable = MACRS_RATES
) -> str | None:
    """Return the method key that will actually be applied.

    Keys are matched literally (``"5.0"`` or ``"200db"`` do not match).
    The requested method if the period defines it, otherwise the
    straight-line fallback if present, otherwise ``None``.
    """
    methods = rate_table.get(period)
    if not methods:
        return None
    if method in methods:
        return method
    if FALLBACK_METHOD in methods:
        return FALLBACK_METHOD
    return None


def resolve_rates(
    period: str, method: str, rate_table: RateTable = MACRS_RATES
) -> tuple[float, ...]:
    """Look up the rate sequence with straight-line fallback.

    Returns an empty tuple when neither the requested method nor ``SL`` is
    available for the period, or the period is unknown.
    """
    applied = resolve_method(period, method, rate_table)
    if applied is None:
        return ()
    return tuple(rate_table[period][applied])
