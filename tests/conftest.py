import pytest

from macrs_calculator.config.settings import Settings
from macrs_calculator.models.schemas import CalculationInput


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def scenario_a():
    """$50K asset, full business use, no salvage, 5-year 200DB."""
    return CalculationInput(
        basis=50_000,
        business_use_percent=100,
        salvage_value=0,
        recovery_period="5",
        method="200DB",
    )


@pytest.fixture
def scenario_b():
    """$50K asset at 50% business use, 5-year SL."""
    return CalculationInput(
        basis=50_000,
        business_use_percent=50,
        salvage_value=0,
        recovery_period="5",
        method="SL",
    )


@pytest.fixture
def scenario_c():
    """$10K asset with $8K salvage: the cap is hit in year 2."""
    return CalculationInput(
        basis=10_000,
        business_use_percent=100,
        salvage_value=8_000,
        recovery_period="5",
        method="SL",
    )


@pytest.fixture
def no_sl_rate_table():
    """A table whose only period defines 200DB and no SL fallback."""
    return {"9": {"200DB": (0.5, 0.5)}}
