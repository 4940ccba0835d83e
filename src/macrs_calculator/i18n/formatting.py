from dataclasses import dataclass

from macrs_calculator.i18n.messages import resolve_locale


@dataclass(frozen=True)
class NumberFormat:
    group_separator: str
    decimal_separator: str
    currency_pattern: str  # "{amount}" is replaced with the grouped number
    percent_pattern: str


NUMBER_FORMATS: dict[str, NumberFormat] = {
    "en": NumberFormat(",", ".", "${amount}", "{amount}%"),
    "zh": NumberFormat(",", ".", "US${amount}", "{amount}%"),
    "de": NumberFormat(".", ",", "{amount} $", "{amount} %"),
}


def _format_number(value: float, fmt: NumberFormat, grouped: bool = True) -> str:
    text = f"{abs(value):,.2f}" if grouped else f"{abs(value):.2f}"
    # Swap through a placeholder so "," and "." can trade places.
    text = (
        text.replace(",", "\x00")
        .replace(".", fmt.decimal_separator)
        .replace("\x00", fmt.group_separator)
    )
    return text


def format_currency(value: float, locale: str | None = None) -> str:
    """Format a USD amount with 2 decimals and the locale's separators."""
    fmt = NUMBER_FORMATS[resolve_locale(locale)]
    amount = _format_number(value, fmt)
    sign = "-" if round(value, 2) < 0 else ""
    return sign + fmt.currency_pattern.format(amount=amount)


def format_percent(value: float, locale: str | None = None) -> str:
    """Format a percentage value (already multiplied by 100) with 2 decimals."""
    fmt = NUMBER_FORMATS[resolve_locale(locale)]
    amount = _format_number(value, fmt, grouped=False)
    sign = "-" if round(value, 2) < 0 else ""
    return sign + fmt.percent_pattern.format(amount=amount)
