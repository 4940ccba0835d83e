from fastapi import APIRouter, HTTPException

from macrs_calculator.depreciation.rate_tables import (
    MACRS_RATES,
    RATE_TABLE_VERSION,
    methods_for,
    normalize_period,
    recovery_periods,
)
from macrs_calculator.models.schemas import RateSequence, RateTableInfo

router = APIRouter(prefix="/rate-tables", tags=["rate-tables"])


@router.get("", response_model=RateTableInfo)
def list_rate_tables():
    """Recovery periods and the methods each one defines."""
    periods = recovery_periods()
    return RateTableInfo(
        version=RATE_TABLE_VERSION,
        periods=periods,
        methods={period: methods_for(period) for period in periods},
    )


@router.get("/{period}/{method}", response_model=RateSequence)
def get_rates(period: str, method: str):
    """Exact rate sequence for a period/method pair (no SL fallback)."""
    key = normalize_period(period)
    method = method.upper()
    rates = MACRS_RATES.get(key, {}).get(method)
    if rates is None:
        raise HTTPException(404, f"No {method} table for recovery period '{period}'")
    return RateSequence(
        recovery_period=key, method=method, rates=list(rates), years=len(rates)
    )
