"""Currency display endpoints."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import DisplayContext, get_display_context
from api.middleware.errors import UnparseableInputError
from pourcost.models.currency import CurrencyAmount, CurrencyInfo
from pourcost.services import currency_formatter

router = APIRouter()


@router.get("/format")
async def format_amount(
    amount: float = Query(...),
    decimals: Optional[int] = Query(None, ge=0, le=6),
    compact: bool = Query(False),
    context: DisplayContext = Depends(get_display_context),
) -> Dict[str, str]:
    """Format an amount in the request's currency and locale."""
    return {
        "formatted": currency_formatter.format_currency(
            amount,
            context.currency,
            decimals=decimals,
            locale=context.locale,
            compact=compact,
        ),
        "currency_code": context.currency,
        "locale": context.locale,
    }


@router.get("/parse", response_model=CurrencyAmount)
async def parse_amount(
    text: str = Query(..., min_length=1, examples=["$12.50"]),
    context: DisplayContext = Depends(get_display_context),
):
    """Read a typed price; bare numbers take the request's currency."""
    parsed = currency_formatter.parse(
        text, default_currency=context.currency, locale=context.locale
    )
    if parsed is None:
        raise UnparseableInputError("amount", text)
    return parsed


@router.get("/convert", response_model=CurrencyAmount)
async def convert_amount(
    amount: float = Query(...),
    from_code: str = Query(..., min_length=3, max_length=3),
    to_code: str = Query(..., min_length=3, max_length=3),
    rate: Optional[float] = Query(None, description="Explicit rate; static table when omitted"),
):
    """Convert an amount for display. Not for settlement."""
    converted = currency_formatter.convert(amount, from_code, to_code, rate=rate)
    return CurrencyAmount(amount=converted, currency_code=to_code.upper())


@router.get("/supported", response_model=List[CurrencyInfo])
async def list_currencies(popular_only: bool = Query(False)):
    """Currencies with display metadata."""
    if popular_only:
        return [currency_formatter.currency_info(code) for code in currency_formatter.POPULAR_CURRENCIES]
    return currency_formatter.supported_currencies()
