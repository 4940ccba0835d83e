import pytest

from macrs_calculator.models.schemas import CalculationInput
from macrs_calculator.presentation import (
    SCHEDULE_COLUMNS,
    InvalidCombinationError,
    build_report,
    fallback_note,
    schedule_dataframe,
)


class TestBuildReport:
    def test_formatted_rows(self, scenario_a):
        report = build_report(scenario_a)
        assert report.locale == "en"
        assert len(report.formatted_rows) == 6
        first = report.formatted_rows[0]
        assert first.year == 1
        assert first.rate == "20.00%"
        assert first.depreciation == "$10,000.00"
        assert first.book_value == "$40,000.00"
        assert report.formatted_rows[-1].depreciation == "$2,880.00"

    def test_formatted_summary(self, scenario_c):
        report = build_report(scenario_c)
        assert report.formatted_summary.original_cost == "$10,000.00"
        assert report.formatted_summary.salvage_value == "$8,000.00"
        assert report.formatted_summary.total_depreciation == "$2,000.00"
        assert report.summary.years == 2

    def test_locale_resolved(self, scenario_b):
        report = build_report(scenario_b, "zh-CN")
        assert report.locale == "zh"
        assert report.formatted_summary.depreciable_basis == "US$25,000.00"

    def test_no_fallback(self, scenario_a):
        report = build_report(scenario_a)
        assert report.applied_method == "200DB"
        assert report.fallback_applied is False
        assert fallback_note(report) is None

    def test_fallback_reported(self):
        calc_input = CalculationInput(basis=300_000, recovery_period="27.5", method="200DB")
        report = build_report(calc_input)
        assert report.requested_method == "200DB"
        assert report.applied_method == "SL"
        assert report.fallback_applied is True
        note = fallback_note(report)
        assert "27.5" in note
        assert "SL" in note

    def test_invalid_combination(self):
        calc_input = CalculationInput(basis=1000, recovery_period="100", method="SL")
        with pytest.raises(InvalidCombinationError) as exc:
            build_report(calc_input)
        assert str(exc.value) == (
            "Invalid recovery period or depreciation method combination"
        )
        assert exc.value.recovery_period == "100"

    def test_invalid_combination_localized(self):
        calc_input = CalculationInput(basis=1000, recovery_period="100", method="SL")
        with pytest.raises(InvalidCombinationError, match="无效的恢复期"):
            build_report(calc_input, "zh")


class TestScheduleDataFrame:
    def test_numeric_frame(self, scenario_a):
        df = schedule_dataframe(build_report(scenario_a))
        assert list(df.columns) == SCHEDULE_COLUMNS
        assert len(df) == 6
        assert df["depreciation"].sum() == pytest.approx(50_000)

    def test_localized_frame(self, scenario_a):
        df = schedule_dataframe(build_report(scenario_a, "zh"), localized=True)
        assert list(df.columns) == ["年份", "折旧率", "年度折旧", "累计折旧", "账面价值"]
        assert df.iloc[0]["年度折旧"] == "US$10,000.00"
