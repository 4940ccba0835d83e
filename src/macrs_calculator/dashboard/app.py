"""Streamlit calculator page for macrs-calculator."""

from datetime import date

import plotly.graph_objects as go
import streamlit as st

from macrs_calculator.config.settings import get_settings
from macrs_calculator.depreciation.inputs import (
    CONVENTIONS,
    InvalidInputError,
    parse_calculation_input,
)
from macrs_calculator.depreciation.rate_tables import (
    METHOD_150DB,
    METHOD_200DB,
    METHOD_SL,
    recovery_periods,
)
from macrs_calculator.i18n.messages import SUPPORTED_LOCALES, translate
from macrs_calculator.presentation import (
    InvalidCombinationError,
    build_report,
    fallback_note,
    schedule_dataframe,
)

settings = get_settings()

# ── Page config ──────────────────────────────────────────────────────
st.set_page_config(page_title="MACRS Depreciation Calculator", layout="wide")

# ── Sidebar ──────────────────────────────────────────────────────────
locale = st.sidebar.selectbox(
    "Language",
    list(SUPPORTED_LOCALES),
    index=list(SUPPORTED_LOCALES).index(settings.default_locale)
    if settings.default_locale in SUPPORTED_LOCALES
    else 0,
)


def t(key: str, **params) -> str:
    return translate(key, locale, **params)


st.title(t("app.title"))
st.caption(t("app.subtitle"))

# ── Input form ───────────────────────────────────────────────────────
st.subheader(t("input.title"))
st.write(t("input.description"))

periods = recovery_periods()
methods = [METHOD_200DB, METHOD_150DB, METHOD_SL]

with st.form("calculator"):
    col1, col2 = st.columns(2)
    basis = col1.text_input(f"{t('fields.basis')} ($)", "50000")
    business_use = col2.text_input(f"{t('fields.business_use_percent')} (%)", "100")
    salvage = col1.text_input(
        f"{t('fields.salvage_value')} ($)", "0", help=t("fields.salvage_note")
    )
    period = col2.selectbox(
        t("fields.recovery_period"),
        periods,
        index=periods.index(settings.default_recovery_period)
        if settings.default_recovery_period in periods
        else 0,
        format_func=lambda p: t(f"periods.{p}"),
    )
    method = col1.selectbox(
        t("fields.method"),
        methods,
        index=methods.index(settings.default_method)
        if settings.default_method in methods
        else 0,
        format_func=lambda m: t(f"methods.{m}"),
    )
    convention = col2.selectbox(
        t("fields.convention"),
        list(CONVENTIONS),
        format_func=lambda c: t(f"conventions.{c}"),
    )
    placed_in_service = col1.date_input(t("fields.placed_in_service"), date(2025, 1, 1))
    submitted = st.form_submit_button(t("button.calculate"))

if submitted:
    raw = {
        "basis": basis,
        "business_use_percent": business_use,
        "salvage_value": salvage,
        "recovery_period": period,
        "method": method,
        "convention": convention,
        "placed_in_service": placed_in_service,
    }
    try:
        report = build_report(parse_calculation_input(raw, settings), locale)
    except InvalidInputError as e:
        st.error(e.localized(locale))
        st.stop()
    except InvalidCombinationError as e:
        st.error(str(e))
        st.stop()

    note = fallback_note(report)
    if note:
        st.warning(note)

    # ── Schedule table ──
    st.subheader(t("table.title"))
    st.caption(t("table.description"))
    st.dataframe(
        schedule_dataframe(report, localized=True), width="stretch", hide_index=True
    )

    # ── Book value chart ──
    df = schedule_dataframe(report)
    fig = go.Figure()
    fig.add_trace(
        go.Bar(x=df["year"], y=df["depreciation"], name=t("table.depreciation"))
    )
    fig.add_trace(
        go.Scatter(
            x=df["year"],
            y=df["book_value"],
            mode="lines+markers",
            name=t("table.book_value"),
            line=dict(color="blue", width=2),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df["year"],
            y=df["accumulated"],
            mode="lines",
            name=t("table.accumulated"),
            line=dict(color="gray", dash="dot"),
        )
    )
    fig.update_layout(
        height=400,
        xaxis_title=t("table.year"),
        yaxis_title="$",
        legend=dict(orientation="h", yanchor="bottom", y=1.02),
    )
    st.plotly_chart(fig, width="stretch")

    # ── Summary ──
    st.subheader(t("summary.title"))
    summary = report.formatted_summary
    mc1, mc2, mc3, mc4 = st.columns(4)
    mc1.metric(t("summary.original_cost"), summary.original_cost)
    mc2.metric(t("summary.depreciable_basis"), summary.depreciable_basis)
    mc3.metric(t("summary.salvage_value"), summary.salvage_value)
    mc4.metric(t("summary.total_depreciation"), summary.total_depreciation)

    st.download_button(
        "CSV",
        df.to_csv(index=False),
        file_name=f"macrs_{report.inputs.recovery_period}yr_{report.applied_method}.csv",
        mime="text/csv",
    )

# ── About ────────────────────────────────────────────────────────────
with st.expander(t("about.title")):
    st.write(t("about.intro"))
    st.write(t("about.methods"))
    st.write(t("about.salvage"))
