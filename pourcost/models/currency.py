"""Currency and locale data models."""

from typing import Optional

from pydantic import BaseModel, Field

from pourcost.models.common import MeasurementSystem, SymbolPosition


class CurrencyInfo(BaseModel):
    """Static description of a currency."""

    code: str
    symbol: str
    name: str
    decimals: int = 2
    symbol_position: SymbolPosition = SymbolPosition.BEFORE

    model_config = {"frozen": True}


class CurrencyAmount(BaseModel):
    """An amount tagged with its currency. Display only."""

    amount: float
    currency_code: str = Field(..., min_length=3, max_length=3)


class LocaleFormat(BaseModel):
    """Number and unit conventions for a locale."""

    locale: str
    measurement_system: MeasurementSystem = MeasurementSystem.US
    currency: str = "USD"
    date_format: str = "MM/DD/YYYY"
    time_format: str = "12h"
    decimal_separator: str = "."
    thousands_separator: str = ","
    symbol_position: Optional[SymbolPosition] = None

    model_config = {"frozen": True}
