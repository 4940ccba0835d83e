import logging

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(help="macrs-calculator CLI")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """MACRS depreciation schedules from the command line."""
    from macrs_calculator.config.log_config import configure_logging
    from macrs_calculator.config.settings import get_settings

    configure_logging(logging.DEBUG if verbose else get_settings().log_level)


@app.command()
def schedule(
    basis: str = typer.Argument(..., help="Asset basis (cost)"),
    business_use: str = typer.Option(
        "100", "--business-use", "-b", help="Business use percentage"
    ),
    salvage: str = typer.Option("0", "--salvage", "-s", help="Salvage value"),
    period: str = typer.Option(
        None, "--period", "-p", help="Recovery period: 3, 5, 7, 10, 15, 20, 27.5, 39"
    ),
    method: str = typer.Option(None, "--method", "-m", help="200DB, 150DB or SL"),
    convention: str = typer.Option(
        "half_year", "--convention", help="half_year, mid_quarter or mid_month"
    ),
    placed_in_service: str = typer.Option(
        None, "--placed-in-service", help="Date placed in service (YYYY-MM-DD)"
    ),
    locale: str = typer.Option(None, "--locale", "-l", help="en, zh or de"),
    csv: str = typer.Option(None, "--csv", help="Also write the schedule to CSV"),
):
    """Compute and print a MACRS depreciation schedule."""
    from macrs_calculator.config.settings import get_settings
    from macrs_calculator.depreciation.inputs import (
        InvalidInputError,
        parse_calculation_input,
    )
    from macrs_calculator.i18n.messages import resolve_locale, translate
    from macrs_calculator.presentation import (
        InvalidCombinationError,
        build_report,
        fallback_note,
        schedule_dataframe,
    )

    settings = get_settings()
    locale = resolve_locale(locale or settings.default_locale)

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
        console.print(f"[red]{e.localized(locale)}[/red]")
        raise typer.Exit(1)
    except InvalidCombinationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    note = fallback_note(report)
    if note:
        console.print(f"[yellow]{note}[/yellow]")

    period_label = translate(f"periods.{report.inputs.recovery_period}", locale)
    method_label = translate(f"methods.{report.applied_method}", locale)

    table = Table(
        title=f"{translate('table.title', locale)}: {period_label}, {method_label}"
    )
    table.add_column(translate("table.year", locale), justify="center", style="bold")
    table.add_column(translate("table.rate", locale), justify="right")
    table.add_column(
        translate("table.depreciation", locale), justify="right", style="green"
    )
    table.add_column(translate("table.accumulated", locale), justify="right")
    table.add_column(
        translate("table.book_value", locale), justify="right", style="cyan"
    )

    for row in report.formatted_rows:
        table.add_row(
            str(row.year), row.rate, row.depreciation, row.accumulated, row.book_value
        )
    console.print(table)

    summary = report.formatted_summary
    console.print(f"\n[bold]{translate('summary.title', locale)}[/bold]")
    for field in (
        "original_cost",
        "depreciable_basis",
        "salvage_value",
        "total_depreciation",
    ):
        label = translate(f"summary.{field}", locale)
        console.print(f"  {label}: {getattr(summary, field)}")

    if csv:
        schedule_dataframe(report).to_csv(csv, index=False)
        console.print(f"[green]Wrote {len(report.entries)} rows to {csv}[/green]")


@app.command()
def rates(
    period: str = typer.Option(
        None, "--period", "-p", help="Only this recovery period"
    ),
    locale: str = typer.Option(None, "--locale", "-l", help="en, zh or de"),
):
    """Print the MACRS percentage tables."""
    from macrs_calculator.config.settings import get_settings
    from macrs_calculator.depreciation.rate_tables import (
        MACRS_RATES,
        RATE_TABLE_VERSION,
        normalize_period,
        recovery_periods,
    )
    from macrs_calculator.i18n.messages import resolve_locale, translate

    locale = resolve_locale(locale or get_settings().default_locale)

    periods = recovery_periods()
    if period is not None:
        key = normalize_period(period)
        if key not in MACRS_RATES:
            message = translate("errors.unknown_period", locale, period=period)
            console.print(f"[red]{message}[/red]")
            raise typer.Exit(1)
        periods = [key]

    console.print(f"[dim]{RATE_TABLE_VERSION}[/dim]")
    for key in periods:
        methods = MACRS_RATES[key]
        # Not a table title: titles wrap to the table width.
        console.print(f"\n[bold]{translate(f'periods.{key}', locale)}[/bold]")
        table = Table()
        table.add_column(
            translate("table.year", locale), justify="center", style="bold"
        )
        for method in methods:
            table.add_column(method, justify="right")

        years = max(len(r) for r in methods.values())
        for i in range(years):
            cells = [
                f"{methods[m][i] * 100:.3f}%" if i < len(methods[m]) else ""
                for m in methods
            ]
            table.add_row(str(i + 1), *cells)
        console.print(table)


@app.command()
def serve(host: str = "0.0.0.0", port: int = 8000):
    """Start the FastAPI server."""
    import uvicorn

    uvicorn.run("macrs_calculator.api.main:app", host=host, port=port, reload=True)


@app.command()
def dashboard(port: int = typer.Option(8501, "--port", "-p", help="Streamlit port")):
    """Start the Streamlit calculator page."""
    import subprocess
    import sys
    from pathlib import Path

    dashboard_path = Path(__file__).parent / "dashboard" / "app.py"
    subprocess.run(
        [
            sys.executable,
            "-m",
            "streamlit",
            "run",
            str(dashboard_path),
            f"--server.port={port}",
            "--server.headless=true",
        ],
        check=True,
    )


if __name__ == "__main__":
    app()
