"""
API Dependencies

Request-scoped display context built from query parameters, falling back
to the configured defaults.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Query

from api.config import Settings, get_settings
from pourcost.models.common import MeasurementSystem
from pourcost.services import currency_formatter, measurement_resolver


@dataclass(frozen=True)
class DisplayContext:
    """How amounts and volumes should be rendered for this request."""
    currency: str
    locale: str
    system: MeasurementSystem


def get_display_context(
    currency: Optional[str] = Query(None, min_length=3, max_length=3, description="ISO 4217 code"),
    locale: Optional[str] = Query(None, description="Locale tag, e.g. en-GB"),
    settings: Settings = Depends(get_settings),
) -> DisplayContext:
    """Resolve display currency, locale and measurement system."""
    locale = locale or settings.locale
    if currency:
        code = currency_formatter.require_currency(currency.upper()).code
    elif locale != settings.locale and measurement_resolver.known_locale(locale):
        code = measurement_resolver.locale_config(locale).currency
    else:
        code = settings.base_currency

    if measurement_resolver.known_locale(locale):
        system = measurement_resolver.system_for_locale(locale)
    else:
        system = settings.measurement_system

    return DisplayContext(currency=code, locale=locale, system=system)
