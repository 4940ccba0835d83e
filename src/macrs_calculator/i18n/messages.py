"""Display strings for the calculator front ends, keyed by locale."""

import logging

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "app.title": "MACRS Depreciation Calculator",
        "app.subtitle": "Modified Accelerated Cost Recovery System",
        "input.title": "Input Parameters",
        "input.description": "Enter asset information to calculate MACRS depreciation schedule",
        "fields.basis": "Asset Basis",
        "fields.business_use_percent": "Business Use Percentage",
        "fields.salvage_value": "Salvage Value",
        "fields.salvage_note": "Note: MACRS typically assumes $0 salvage value, but you can enter an estimated value",
        "fields.recovery_period": "Recovery Period",
        "fields.method": "Depreciation Method",
        "fields.convention": "Convention",
        "fields.placed_in_service": "Date Placed in Service",
        "button.calculate": "Calculate Depreciation",
        "methods.200DB": "200% Declining Balance (GDS)",
        "methods.150DB": "150% Declining Balance (GDS)",
        "methods.SL": "Straight Line (SL)",
        "periods.3": "3-Year",
        "periods.5": "5-Year",
        "periods.7": "7-Year",
        "periods.10": "10-Year",
        "periods.15": "15-Year",
        "periods.20": "20-Year",
        "periods.27.5": "27.5-Year (Residential Rental)",
        "periods.39": "39-Year (Nonresidential Real Property)",
        "conventions.half_year": "Half-Year Convention",
        "conventions.mid_quarter": "Mid-Quarter Convention",
        "conventions.mid_month": "Mid-Month Convention",
        "table.title": "Depreciation Schedule",
        "table.description": "Detailed annual depreciation breakdown",
        "table.year": "Year",
        "table.rate": "Rate",
        "table.depreciation": "Depreciation",
        "table.accumulated": "Accumulated",
        "table.book_value": "Book Value",
        "summary.title": "Summary",
        "summary.original_cost": "Original Cost",
        "summary.depreciable_basis": "Depreciable Basis",
        "summary.salvage_value": "Salvage Value",
        "summary.total_depreciation": "Total Depreciation",
        "notes.fallback": "{requested} is not available for {period}-year property; {applied} rates were used.",
        "errors.invalid_combination": "Invalid recovery period or depreciation method combination",
        "errors.required": "{field} is required",
        "errors.not_a_number": "{field} must be a finite number",
        "errors.basis_not_positive": "Asset basis must be greater than zero",
        "errors.business_use_range": "Business use percentage must be between 0 and 100",
        "errors.salvage_negative": "Salvage value cannot be negative",
        "errors.salvage_exceeds_basis": "Salvage value ({salvage}) exceeds the depreciable basis ({basis})",
        "errors.invalid_date": "{field} must be a date in YYYY-MM-DD format",
        "errors.invalid_convention": "Unknown convention: {value}",
        "errors.unknown_period": "Unknown recovery period: {period}",
        "about.title": "About MACRS Depreciation",
        "about.intro": "MACRS (Modified Accelerated Cost Recovery System) is the primary method used for U.S. federal income tax depreciation deductions.",
        "about.methods": "200% declining balance gives the largest deductions in the early years; 150% declining balance is between 200% and straight line; straight line deducts the same amount each year except the first and last.",
        "about.salvage": "MACRS normally assumes a $0 salvage value. If you enter one, depreciation stops when book value reaches it.",
    },
    "zh": {
        "app.title": "MACRS 折旧计算器",
        "app.subtitle": "修正加速成本回收系统",
        "input.title": "输入参数",
        "input.description": "输入资产信息以计算 MACRS 折旧计划",
        "fields.basis": "资产基础",
        "fields.business_use_percent": "商业使用百分比",
        "fields.salvage_value": "残值",
        "fields.salvage_note": "注意：MACRS 通常假设残值为 $0，但您可以输入估计值",
        "fields.recovery_period": "恢复期",
        "fields.method": "折旧方法",
        "fields.convention": "惯例",
        "fields.placed_in_service": "投入使用日期",
        "button.calculate": "计算折旧",
        "methods.200DB": "200% 余额递减法 (GDS)",
        "methods.150DB": "150% 余额递减法 (GDS)",
        "methods.SL": "直线法 (SL)",
        "periods.3": "3 年",
        "periods.5": "5 年",
        "periods.7": "7 年",
        "periods.10": "10 年",
        "periods.15": "15 年",
        "periods.20": "20 年",
        "periods.27.5": "27.5 年（住宅租赁）",
        "periods.39": "39 年（非住宅房地产）",
        "conventions.half_year": "半年惯例",
        "conventions.mid_quarter": "季中惯例",
        "conventions.mid_month": "月中惯例",
        "table.title": "折旧计划表",
        "table.description": "详细的年度折旧明细",
        "table.year": "年份",
        "table.rate": "折旧率",
        "table.depreciation": "年度折旧",
        "table.accumulated": "累计折旧",
        "table.book_value": "账面价值",
        "summary.title": "汇总信息",
        "summary.original_cost": "原始成本",
        "summary.depreciable_basis": "可折旧基础",
        "summary.salvage_value": "残值",
        "summary.total_depreciation": "总折旧",
        "notes.fallback": "{period} 年期资产不适用 {requested}，已使用 {applied} 折旧率。",
        "errors.invalid_combination": "无效的恢复期或折旧方法组合",
        "errors.required": "{field}为必填项",
        "errors.not_a_number": "{field}必须是有效数字",
        "errors.basis_not_positive": "资产基础必须大于零",
        "errors.business_use_range": "商业使用百分比必须在 0 到 100 之间",
        "errors.salvage_negative": "残值不能为负数",
        "errors.salvage_exceeds_basis": "残值（{salvage}）超过可折旧基础（{basis}）",
        "errors.invalid_date": "{field}必须是 YYYY-MM-DD 格式的日期",
        "errors.invalid_convention": "未知的惯例：{value}",
        "errors.unknown_period": "未知的恢复期：{period}",
        "about.title": "关于 MACRS 折旧",
        "about.intro": "MACRS（修正加速成本回收系统）是美国联邦所得税用于确定折旧扣除的主要方法。",
        "about.methods": "200% 余额递减法在前几年提供最高的税收扣除；150% 余额递减法的扣除介于 200% 方法与直线法之间；直线法每年扣除相同金额（第一年和最后一年除外）。",
        "about.salvage": "根据 MACRS 规则，折旧计算通常假设残值为 $0。输入残值后，折旧将在账面价值达到残值时停止。",
    },
    "de": {
        "app.title": "MACRS-Abschreibungsrechner",
        "app.subtitle": "Modified Accelerated Cost Recovery System",
        "input.title": "Eingabeparameter",
        "input.description": "Geben Sie die Anlagedaten ein, um den MACRS-Abschreibungsplan zu berechnen",
        "fields.basis": "Anschaffungskosten",
        "fields.business_use_percent": "Betrieblicher Nutzungsanteil",
        "fields.salvage_value": "Restwert",
        "fields.salvage_note": "Hinweis: MACRS geht üblicherweise von einem Restwert von 0 $ aus, Sie können aber einen Schätzwert eingeben",
        "fields.recovery_period": "Nutzungsdauer",
        "fields.method": "Abschreibungsmethode",
        "fields.convention": "Konvention",
        "fields.placed_in_service": "Datum der Inbetriebnahme",
        "button.calculate": "Abschreibung berechnen",
        "methods.200DB": "200 % degressiv (GDS)",
        "methods.150DB": "150 % degressiv (GDS)",
        "methods.SL": "Linear (SL)",
        "periods.3": "3 Jahre",
        "periods.5": "5 Jahre",
        "periods.7": "7 Jahre",
        "periods.10": "10 Jahre",
        "periods.15": "15 Jahre",
        "periods.20": "20 Jahre",
        "periods.27.5": "27,5 Jahre (Wohnimmobilien)",
        "periods.39": "39 Jahre (Gewerbeimmobilien)",
        "conventions.half_year": "Halbjahreskonvention",
        "conventions.mid_quarter": "Quartalsmittekonvention",
        "conventions.mid_month": "Monatsmittekonvention",
        "table.title": "Abschreibungsplan",
        "table.description": "Jährliche Abschreibung im Detail",
        "table.year": "Jahr",
        "table.rate": "Satz",
        "table.depreciation": "Abschreibung",
        "table.accumulated": "Kumuliert",
        "table.book_value": "Buchwert",
        "summary.title": "Zusammenfassung",
        "summary.original_cost": "Anschaffungskosten",
        "summary.depreciable_basis": "Abschreibungsbasis",
        "summary.salvage_value": "Restwert",
        "summary.total_depreciation": "Gesamtabschreibung",
        "notes.fallback": "{requested} ist für {period}-jährige Anlagen nicht verfügbar; es wurden {applied}-Sätze verwendet.",
        "errors.invalid_combination": "Ungültige Kombination aus Nutzungsdauer und Abschreibungsmethode",
        "errors.required": "{field} ist erforderlich",
        "errors.not_a_number": "{field} muss eine endliche Zahl sein",
        "errors.basis_not_positive": "Die Anschaffungskosten müssen größer als null sein",
        "errors.business_use_range": "Der betriebliche Nutzungsanteil muss zwischen 0 und 100 liegen",
        "errors.salvage_negative": "Der Restwert darf nicht negativ sein",
        "errors.salvage_exceeds_basis": "Der Restwert ({salvage}) übersteigt die Abschreibungsbasis ({basis})",
        "errors.invalid_date": "{field} muss ein Datum im Format JJJJ-MM-TT sein",
        "errors.invalid_convention": "Unbekannte Konvention: {value}",
        "errors.unknown_period": "Unbekannte Nutzungsdauer: {period}",
        "about.title": "Über die MACRS-Abschreibung",
        "about.intro": "MACRS (Modified Accelerated Cost Recovery System) ist das wichtigste Verfahren für Abschreibungen in der US-Bundeseinkommensteuer.",
        "about.methods": "Die 200 %-degressive Methode bringt die höchsten Abzüge in den ersten Jahren; 150 % degressiv liegt zwischen 200 % und linear; die lineare Methode zieht jedes Jahr denselben Betrag ab, außer im ersten und letzten Jahr.",
        "about.salvage": "MACRS geht normalerweise von einem Restwert von 0 $ aus. Wird ein Restwert eingegeben, endet die Abschreibung, sobald der Buchwert ihn erreicht.",
    },
}

SUPPORTED_LOCALES = tuple(MESSAGES)


def resolve_locale(value: str | None, default: str = DEFAULT_LOCALE) -> str:
    """Map a locale tag such as ``zh-CN`` or ``de_DE`` onto a supported locale."""
    if not value:
        return default
    primary = value.strip().replace("_", "-").split("-")[0].lower()
    if primary in MESSAGES:
        return primary
    logger.warning("Unsupported locale %r, falling back to %r", value, default)
    return default


def translate(key: str, locale: str | None = None, **params: object) -> str:
    """Return the display string for ``key`` in ``locale``.

    Missing keys fall back to the default locale. A key that the default
    locale does not define either raises ``KeyError``.
    """
    locale = resolve_locale(locale)
    catalog = MESSAGES[locale]
    if key in catalog:
        template = catalog[key]
    else:
        if locale != DEFAULT_LOCALE:
            logger.warning("Missing translation for %r in %r", key, locale)
        template = MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**params) if params else template
