import logging

import pytest
from pydantic import ValidationError

from macrs_calculator.depreciation.engine import compute_schedule, summarize_schedule
from macrs_calculator.depreciation.rate_tables import MACRS_RATES, resolve_rates
from macrs_calculator.models.schemas import CalculationInput

ALL_COMBINATIONS = [
    (period, method) for period, methods in MACRS_RATES.items() for method in methods
]


def _input(**overrides) -> CalculationInput:
    values = {
        "basis": 50_000,
        "business_use_percent": 100,
        "salvage_value": 0,
        "recovery_period": "5",
        "method": "200DB",
    }
    values.update(overrides)
    return CalculationInput(**values)


class TestScenarios:
    def test_zero_salvage_full_term(self, scenario_a):
        """$50K, 5-year 200DB: 20% in year 1, 5.76% in year 6."""
        schedule = compute_schedule(scenario_a)
        assert len(schedule) == 6
        assert schedule[0].depreciation == pytest.approx(10_000.00)
        assert schedule[-1].depreciation == pytest.approx(2_880.00)
        assert schedule[-1].accumulated == pytest.approx(50_000.00)
        assert schedule[-1].book_value == pytest.approx(0.0, abs=1e-6)

    def test_partial_business_use(self, scenario_b):
        """50% business use halves the depreciable basis."""
        schedule = compute_schedule(scenario_b)
        assert len(schedule) == 6
        assert schedule[0].depreciation == pytest.approx(2_500.00)
        assert schedule[-1].accumulated == pytest.approx(25_000.00)

    def test_salvage_truncation(self, scenario_c):
        """$8K salvage on $10K caps depreciation at $2K, reached in year 2."""
        schedule = compute_schedule(scenario_c)
        assert len(schedule) == 2

        first, second = schedule
        assert first.depreciation == pytest.approx(1_000)
        assert first.accumulated == pytest.approx(1_000)
        assert first.book_value == pytest.approx(9_000)

        assert second.depreciation == pytest.approx(1_000)
        assert second.accumulated == 2_000
        assert second.book_value == 8_000

    def test_rate_reported_as_percent(self, scenario_a):
        schedule = compute_schedule(scenario_a)
        assert [round(e.rate, 2) for e in schedule] == [
            20.0, 32.0, 19.2, 11.52, 11.52, 5.76,
        ]

    def test_years_are_one_based_and_contiguous(self):
        schedule = compute_schedule(_input(recovery_period="39", method="SL"))
        assert [e.year for e in schedule] == list(range(1, 41))


class TestResolution:
    def test_fallback_matches_explicit_sl(self):
        fallback = compute_schedule(_input(recovery_period="27.5", method="200DB"))
        explicit = compute_schedule(_input(recovery_period="27.5", method="SL"))
        assert fallback == explicit
        assert len(fallback) == 28

    def test_15yr_200db_falls_back_to_sl(self):
        schedule = compute_schedule(_input(recovery_period="15", method="200DB"))
        assert len(schedule) == 16
        assert schedule[0].rate == pytest.approx(3.33)

    def test_sl_is_a_direct_choice(self):
        schedule = compute_schedule(_input(method="SL"))
        assert schedule[0].rate == pytest.approx(10.0)

    def test_unknown_period_returns_empty(self):
        assert compute_schedule(_input(recovery_period="100")) == []

    def test_missing_method_without_sl_returns_empty(self, no_sl_rate_table):
        calc_input = _input(recovery_period="9", method="150DB")
        assert compute_schedule(calc_input, no_sl_rate_table) == []

    def test_custom_rate_table(self, no_sl_rate_table):
        calc_input = _input(basis=1_000, recovery_period="9", method="200DB")
        schedule = compute_schedule(calc_input, no_sl_rate_table)
        assert [e.depreciation for e in schedule] == [500, 500]

    def test_fallback_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="macrs_calculator.depreciation.engine")
        compute_schedule(_input(recovery_period="39", method="150DB"))
        assert "using 'SL'" in caplog.text

    def test_unresolvable_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="macrs_calculator.depreciation.engine")
        compute_schedule(_input(recovery_period="100"))
        assert "No rates" in caplog.text


class TestEdgeCases:
    def test_salvage_equal_to_basis_single_zero_row(self):
        schedule = compute_schedule(_input(basis=10_000, salvage_value=10_000))
        assert len(schedule) == 1
        assert schedule[0].depreciation == 0
        assert schedule[0].accumulated == 0
        assert schedule[0].book_value == 10_000

    def test_salvage_above_basis_negative_cap(self):
        """The cap is not special-cased: year 1 is clipped to a negative amount."""
        schedule = compute_schedule(_input(basis=10_000, salvage_value=12_000))
        assert len(schedule) == 1
        assert schedule[0].depreciation == pytest.approx(-2_000)
        assert schedule[0].accumulated == -2_000
        assert schedule[0].book_value == 12_000

    def test_no_rounding_during_accumulation(self):
        schedule = compute_schedule(_input(basis=33_333.33))
        assert schedule[0].depreciation == 33_333.33 * 0.20
        assert schedule[1].accumulated == 33_333.33 * 0.20 + 33_333.33 * 0.32

    def test_business_use_not_clamped(self):
        schedule = compute_schedule(_input(business_use_percent=150))
        assert schedule[0].depreciation == pytest.approx(15_000)

    def test_zero_basis(self):
        schedule = compute_schedule(_input(basis=0))
        assert len(schedule) == 1
        assert schedule[0].depreciation == 0


class TestInvariants:
    @pytest.mark.parametrize("period,method", ALL_COMBINATIONS)
    @pytest.mark.parametrize("business_use", [100, 60])
    @pytest.mark.parametrize("salvage", [0, 1_000, 5_000, 20_000])
    def test_schedule_invariants(self, period, method, business_use, salvage):
        calc_input = _input(
            recovery_period=period,
            method=method,
            business_use_percent=business_use,
            salvage_value=salvage,
        )
        schedule = compute_schedule(calc_input)
        max_depreciation = calc_input.depreciable_basis - salvage
        table_length = len(resolve_rates(period, method))

        assert 0 < len(schedule) <= table_length
        assert [e.year for e in schedule] == list(range(1, len(schedule) + 1))

        previous_book = calc_input.depreciable_basis
        for entry in schedule:
            assert entry.book_value <= previous_book + 1e-9
            assert entry.book_value >= salvage
            assert entry.accumulated <= max_depreciation + 1e-6
            previous_book = entry.book_value

        # Every year but the last is below the cap.
        for entry in schedule[:-1]:
            assert entry.accumulated < max_depreciation
        if len(schedule) < table_length:
            assert schedule[-1].accumulated == max_depreciation

    @pytest.mark.parametrize("period,method", ALL_COMBINATIONS)
    def test_zero_salvage_uses_full_table(self, period, method):
        schedule = compute_schedule(_input(recovery_period=period, method=method))
        assert len(schedule) == len(MACRS_RATES[period][method])
        assert schedule[-1].accumulated == pytest.approx(50_000, abs=10)


class TestSummary:
    def test_summary_after_truncation(self, scenario_c):
        summary = summarize_schedule(scenario_c, compute_schedule(scenario_c))
        assert summary.original_cost == 10_000
        assert summary.depreciable_basis == 10_000
        assert summary.salvage_value == 8_000
        assert summary.total_depreciation == 2_000
        assert summary.final_book_value == 8_000
        assert summary.years == 2

    def test_summary_partial_business_use(self, scenario_b):
        summary = summarize_schedule(scenario_b, compute_schedule(scenario_b))
        assert summary.original_cost == 50_000
        assert summary.depreciable_basis == 25_000

    def test_summary_of_empty_schedule(self):
        calc_input = _input(recovery_period="100")
        summary = summarize_schedule(calc_input, [])
        assert summary.total_depreciation == 0
        assert summary.final_book_value == 50_000
        assert summary.years == 0


class TestCalculationInput:
    def test_rejects_nan(self):
        with pytest.raises(ValidationError):
            _input(basis=float("nan"))

    def test_rejects_infinite_salvage(self):
        with pytest.raises(ValidationError):
            _input(salvage_value=float("inf"))

    def test_keys_kept_as_given(self):
        calc_input = _input(recovery_period="5.0", method="200db")
        assert calc_input.recovery_period == "5.0"
        assert calc_input.method == "200db"

    def test_unnormalized_period_gives_empty_schedule(self):
        assert compute_schedule(_input(recovery_period="5.0")) == []

    def test_lowercase_method_falls_back_to_sl(self):
        schedule = compute_schedule(_input(method="200db"))
        assert [round(e.rate, 2) for e in schedule] == [
            10.0, 20.0, 20.0, 20.0, 20.0, 10.0,
        ]
        assert schedule[0].depreciation == pytest.approx(5_000)

    def test_depreciable_basis(self):
        assert _input(business_use_percent=40).depreciable_basis == 20_000

    def test_convention_is_informational(self):
        half_year = compute_schedule(_input())
        mid_quarter = compute_schedule(_input(convention="mid_quarter"))
        assert half_year == mid_quarter

    def test_frozen(self, scenario_a):
        with pytest.raises(ValidationError):
            scenario_a.basis = 1
