from fastapi import Depends, Header, Query

from macrs_calculator.config.settings import Settings, get_settings
from macrs_calculator.i18n.messages import resolve_locale


def get_app_settings() -> Settings:
    """FastAPI dependency returning the cached settings."""
    return get_settings()


def get_locale(
    locale: str | None = Query(None, description="Display locale (en, zh, de)"),
    accept_language: str | None = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Pick the display locale from ``?locale=``, then Accept-Language."""
    if locale:
        return resolve_locale(locale, settings.default_locale)
    if accept_language:
        first = accept_language.split(",")[0].split(";")[0]
        return resolve_locale(first, settings.default_locale)
    return resolve_locale(settings.default_locale)
