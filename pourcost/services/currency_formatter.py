"""
Currency Formatter

Symbol lookup, locale-aware formatting, parsing and a static conversion
table. Conversion here is a display approximation only; there is no live
exchange-rate service behind it.
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pourcost.errors import InvalidInputError, UnsupportedCurrencyError
from pourcost.models.common import SymbolPosition
from pourcost.models.currency import CurrencyAmount, CurrencyInfo
from pourcost.services.measurement_resolver import locale_config, known_locale

logger = logging.getLogger(__name__)

_BEFORE = SymbolPosition.BEFORE
_AFTER = SymbolPosition.AFTER


def _info(code: str, symbol: str, name: str, decimals: int = 2, position=_BEFORE) -> CurrencyInfo:
    return CurrencyInfo(code=code, symbol=symbol, name=name, decimals=decimals, symbol_position=position)


# Currencies with full formatting metadata
CURRENCY_INFO: Mapping[str, CurrencyInfo] = MappingProxyType({
    info.code: info for info in (
        _info("USD", "$", "US Dollar"),
        _info("EUR", "€", "Euro", position=_AFTER),
        _info("GBP", "£", "British Pound"),
        _info("CAD", "C$", "Canadian Dollar"),
        _info("AUD", "A$", "Australian Dollar"),
        _info("JPY", "¥", "Japanese Yen", decimals=0),
        _info("CHF", "CHF", "Swiss Franc"),
        _info("SEK", "kr", "Swedish Krona", position=_AFTER),
        _info("NOK", "kr", "Norwegian Krone", position=_AFTER),
        _info("DKK", "kr", "Danish Krone", position=_AFTER),
        _info("PLN", "zł", "Polish Złoty", position=_AFTER),
        _info("CZK", "Kč", "Czech Koruna", position=_AFTER),
        _info("HUF", "Ft", "Hungarian Forint", decimals=0, position=_AFTER),
        _info("RUB", "₽", "Russian Ruble", position=_AFTER),
        _info("CNY", "¥", "Chinese Yuan"),
        _info("INR", "₹", "Indian Rupee"),
        _info("KRW", "₩", "South Korean Won", decimals=0),
        _info("BRL", "R$", "Brazilian Real"),
        _info("MXN", "$", "Mexican Peso"),
        _info("ZAR", "R", "South African Rand"),
        _info("THB", "฿", "Thai Baht"),
        _info("SGD", "S$", "Singapore Dollar"),
        _info("HKD", "HK$", "Hong Kong Dollar"),
        _info("NZD", "NZ$", "New Zealand Dollar"),
        _info("ILS", "₪", "Israeli Shekel"),
        _info("TRY", "₺", "Turkish Lira"),
    )
})

# Display symbols for every selectable base currency. A trailing space
# separates letter symbols from the amount.
CURRENCY_SYMBOLS: Mapping[str, str] = MappingProxyType({
    # Major
    "USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥", "AUD": "A$", "CAD": "C$",
    "CHF": "CHF ", "CNY": "¥",
    # Europe
    "SEK": "kr ", "NOK": "kr ", "DKK": "kr ", "PLN": "zł ", "CZK": "Kč ",
    "HUF": "Ft ", "RON": "lei ", "BGN": "лв ", "HRK": "kn ", "ISK": "kr ",
    # Asia
    "INR": "₹", "KRW": "₩", "SGD": "S$", "HKD": "HK$", "TWD": "NT$",
    "THB": "฿", "MYR": "RM ", "IDR": "Rp ", "PHP": "₱", "VND": "₫",
    # Middle East
    "AED": "د.إ ", "SAR": "﷼", "QAR": "﷼", "KWD": "د.ك ", "BHD": ".د.ب ",
    "OMR": "﷼", "JOD": "د.ا ", "LBP": "£", "SYP": "£", "IQD": "ع.د ",
    # Americas
    "BRL": "R$", "MXN": "$", "ARS": "$", "CLP": "$", "COP": "$", "PEN": "S/.",
    "UYU": "$U ", "BOB": "Bs.", "PYG": "₲", "VES": "Bs.",
    # Africa
    "ZAR": "R", "EGP": "£", "NGN": "₦", "KES": "KSh ", "GHS": "₵",
    "ETB": "Br ", "UGX": "USh ", "TZS": "TSh ", "ZMW": "ZK ", "BWP": "P ",
    # Other
    "TRY": "₺", "RUB": "₽", "UAH": "₴", "ILS": "₪", "NZD": "NZ$",
    "BTC": "₿", "XAU": "oz ", "XAG": "oz ",
    # Pacific
    "FJD": "FJ$", "PGK": "K ", "SBD": "SI$", "TOP": "T$", "VUV": "VT ",
    "WST": "WS$",
    # Rest of world
    "AFN": "؋", "ALL": "L ", "AMD": "֏", "AOA": "Kz ", "AZN": "₼",
    "BAM": "КМ ", "BDT": "৳", "BIF": "FBu ", "BND": "B$", "BSD": "B$",
    "BTN": "Nu.", "BYN": "Br ", "BZD": "BZ$", "CDF": "FC ", "CRC": "₡",
    "CUP": "₱", "CVE": "$", "DJF": "Fdj ", "DOP": "RD$", "DZD": "دج ",
    "ERN": "Nfk ", "GEL": "₾", "GGP": "£", "GIP": "£", "GMD": "D ",
    "GNF": "FG ", "GTQ": "Q ", "GYD": "G$ ", "HNL": "L ", "HTG": "G ",
    "IMP": "£", "IRR": "﷼", "JEP": "£", "JMD": "J$", "KGS": "лв ",
    "KHR": "៛", "KMF": "CF ", "KPW": "₩", "KZT": "₸", "LAK": "₭",
    "LKR": "₨", "LRD": "L$", "LSL": "M ", "LYD": "ل.د ", "MAD": "د.م. ",
    "MDL": "lei ", "MGA": "Ar ", "MKD": "ден ", "MMK": "K ", "MNT": "₮",
    "MOP": "MOP$", "MRU": "UM ", "MUR": "₨", "MVR": ".ރ ", "MWK": "MK ",
    "MZN": "MT ", "NAD": "N$", "NIO": "C$", "NPR": "₨", "PAB": "B/.",
    "PKR": "₨", "RSD": "дин. ", "RWF": "RF ", "SCR": "₨", "SDG": "ج.س.",
    "SHP": "£", "SLE": "Le ", "SOS": "S ", "SRD": "$", "STN": "Db ",
    "SZL": "E ", "TJS": "SM ", "TMT": "T ", "TND": "د.ت ", "TTD": "TT$",
    "TVD": "TV$", "UZS": "лв ", "XCD": "EC$", "XOF": "CFA ", "XPF": "₣",
    "YER": "﷼", "ZWL": "Z$",
})

# Currencies without minor units beyond the detailed table
ZERO_DECIMAL_CURRENCIES = frozenset({
    "JPY", "KRW", "HUF", "VND", "CLP", "ISK", "PYG", "UGX", "BIF", "DJF",
    "GNF", "KMF", "RWF", "VUV", "XOF", "XPF",
})

POPULAR_CURRENCIES = ("USD", "EUR", "GBP", "CAD", "AUD", "JPY", "CHF")

CURRENCY_REGIONS = MappingProxyType({
    "North America": ("USD", "CAD", "MXN"),
    "Europe": ("EUR", "GBP", "CHF", "SEK", "NOK", "DKK", "PLN", "CZK", "HUF"),
    "Asia Pacific": ("JPY", "CNY", "KRW", "INR", "THB", "SGD", "HKD", "AUD", "NZD"),
    "Other": ("BRL", "ZAR", "RUB", "ILS", "TRY"),
})

# Static display rates, "FROM-TO"
STATIC_RATES = MappingProxyType({
    "USD-EUR": 0.85,
    "USD-GBP": 0.73,
    "USD-CAD": 1.25,
    "USD-AUD": 1.35,
    "USD-JPY": 110.0,
    "EUR-USD": 1.18,
    "GBP-USD": 1.37,
    "CAD-USD": 0.80,
    "AUD-USD": 0.74,
    "JPY-USD": 0.009,
})

COMPACT_SUFFIXES = ((1e9, "B"), (1e6, "M"), (1e3, "K"))

_NUMBER = r"(\d{1,3}(?:,\d{3})+|\d+)(?:\.(\d+))?"
_CODE_SUFFIXED = re.compile(r"^(.+?)\s*([A-Z]{3})$")
_PLAIN = re.compile(rf"^{_NUMBER}$")


def _build_symbol_lookup() -> Dict[str, str]:
    lookup: Dict[str, str] = {}
    for code, info in CURRENCY_INFO.items():
        lookup.setdefault(info.symbol, code)
    # Longest symbols first so "HK$" wins over "$"
    return dict(sorted(lookup.items(), key=lambda kv: len(kv[0]), reverse=True))


_SYMBOL_TO_CODE = _build_symbol_lookup()


# ============================================================================
# Currency information
# ============================================================================

def is_supported_currency(currency_code: str) -> bool:
    return currency_code.upper() in CURRENCY_SYMBOLS


def currency_info(currency_code: str) -> Optional[CurrencyInfo]:
    """Formatting metadata for a currency, or None when unknown."""
    code = currency_code.upper()
    info = CURRENCY_INFO.get(code)
    if info is not None:
        return info
    if code in CURRENCY_SYMBOLS:
        return CurrencyInfo(
            code=code,
            symbol=CURRENCY_SYMBOLS[code].strip(),
            name=code,
            decimals=0 if code in ZERO_DECIMAL_CURRENCIES else 2,
        )
    return None


def require_currency(currency_code: str) -> CurrencyInfo:
    """Strict lookup, for callers that want unknown codes rejected."""
    info = currency_info(currency_code)
    if info is None:
        raise UnsupportedCurrencyError(currency_code)
    return info


def symbol_for(currency_code: str) -> str:
    """Display symbol for a currency. Unknown codes render as "XYZ "."""
    return CURRENCY_SYMBOLS.get(currency_code.upper(), f"{currency_code} ")


def decimals_for(currency_code: str) -> int:
    info = currency_info(currency_code)
    return info.decimals if info else 2


def supported_currencies() -> List[CurrencyInfo]:
    return [currency_info(code) for code in CURRENCY_SYMBOLS]


def currencies_by_region() -> Dict[str, List[CurrencyInfo]]:
    return {
        region: [CURRENCY_INFO[code] for code in codes]
        for region, codes in CURRENCY_REGIONS.items()
    }


# ============================================================================
# Formatting
# ============================================================================

def format_currency(
    amount: float,
    currency_code: str = "USD",
    decimals: Optional[int] = None,
    locale: str = "en-US",
    compact: bool = False,
    show_symbol: bool = True,
    strict: bool = False,
) -> str:
    """
    Format an amount for display.

    Args:
        amount: Value in major units
        currency_code: ISO currency code
        decimals: Override the currency's default decimal places
        locale: Locale for separators and symbol placement
        compact: Abbreviate values of 1000 and up as K/M/B
        show_symbol: Include the currency symbol
        strict: Raise UnsupportedCurrencyError for unknown codes

    Returns:
        Display string such as "$1,234.50" or "1.234,50 €"
    """
    if strict:
        require_currency(currency_code)

    places = decimals_for(currency_code) if decimals is None else decimals
    conventions = locale_config(locale)

    if compact and abs(amount) >= 1000:
        number = _compact_number(abs(amount), conventions.decimal_separator)
    else:
        number = _group_number(
            abs(round_to_decimal(amount, places)),
            places,
            conventions.decimal_separator,
            conventions.thousands_separator,
        )

    sign = "-" if amount < 0 and number.strip("0.,") else ""
    if not show_symbol:
        return f"{sign}{number}"

    return sign + _place_symbol(number, currency_code, locale)


def format_range(
    min_amount: float,
    max_amount: float,
    currency_code: str = "USD",
    **options,
) -> str:
    """Format a price range, e.g. "$5.00 - $10.00"."""
    low = format_currency(min_amount, currency_code, **options)
    high = format_currency(max_amount, currency_code, **options)
    return f"{low} - {high}"


def round_to_decimal(value: float, decimals: int = 2) -> float:
    """Round half away from zero."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_to_currency(amount: float, currency_code: str) -> float:
    """Round to the currency's minor unit."""
    return round_to_decimal(amount, decimals_for(currency_code))


def _group_number(value: float, places: int, decimal_sep: str, thousands_sep: str) -> str:
    text = f"{value:,.{places}f}"
    return text.translate(str.maketrans({",": thousands_sep, ".": decimal_sep}))


def _compact_number(value: float, decimal_sep: str) -> str:
    for threshold, suffix in COMPACT_SUFFIXES:
        if value >= threshold:
            scaled = f"{round_to_decimal(value / threshold, 1):.1f}"
            if scaled.endswith(".0"):
                scaled = scaled[:-2]
            return scaled.replace(".", decimal_sep) + suffix
    return f"{value}"


def _place_symbol(number: str, currency_code: str, locale: str) -> str:
    info = currency_info(currency_code)
    conventions = locale_config(locale)

    if known_locale(locale) and conventions.symbol_position is not None:
        position = conventions.symbol_position
    elif info is not None:
        position = info.symbol_position
    else:
        position = SymbolPosition.BEFORE

    if position == SymbolPosition.AFTER:
        symbol = info.symbol if info else currency_code.upper()
        return f"{number} {symbol}"
    return f"{symbol_for(currency_code)}{number}"


# ============================================================================
# Parsing
# ============================================================================

def parse(
    text: str,
    default_currency: str = "USD",
    locale: Optional[str] = None,
) -> Optional[CurrencyAmount]:
    """
    Parse a currency string.

    Recognises "$12.34", "12.34 EUR", "12.34 €" and plain "12.34" (assigned
    to default_currency). With a locale, numbers written with that locale's
    separators ("1.234,50 €" for de-DE) are read first; en-US numbers are
    always accepted. Returns None when the text is not a currency amount.
    """
    if not text:
        return None
    cleaned = text.strip()
    separators = _separators(locale)

    for symbol, code in _SYMBOL_TO_CODE.items():
        if cleaned.startswith(symbol):
            amount = _parse_number(cleaned[len(symbol):].strip(), separators)
        elif cleaned.endswith(symbol):
            amount = _parse_number(cleaned[:-len(symbol)].strip(), separators)
        else:
            continue
        if amount is not None:
            return CurrencyAmount(amount=amount, currency_code=code)

    match = _CODE_SUFFIXED.match(cleaned.upper())
    if match:
        amount = _parse_number(match.group(1).strip(), separators)
        code = match.group(2)
        if amount is not None:
            if not is_supported_currency(code):
                logger.debug(f"Unknown currency code in {text!r}")
                return None
            return CurrencyAmount(amount=amount, currency_code=code)

    amount = _parse_number(cleaned, separators)
    if amount is not None:
        return CurrencyAmount(amount=amount, currency_code=default_currency.upper())

    return None


def _separators(locale: Optional[str]) -> Optional[Tuple[str, str]]:
    """(decimal, thousands) for a known non en-US style locale, else None."""
    if locale is None or not known_locale(locale):
        return None
    conventions = locale_config(locale)
    if conventions.decimal_separator == ".":
        return None
    return conventions.decimal_separator, conventions.thousands_separator


def _parse_number(text: str, separators: Optional[Tuple[str, str]] = None) -> Optional[float]:
    if separators is not None:
        decimal_sep, thousands_sep = separators
        localized = text.replace(thousands_sep, "\0").replace(decimal_sep, ".").replace("\0", ",")
        match = _PLAIN.match(localized)
        if match:
            return _number_from_match(match)

    match = _PLAIN.match(text)
    if not match:
        return None
    return _number_from_match(match)


def _number_from_match(match) -> float:
    whole = match.group(1).replace(",", "")
    fraction = match.group(2)
    return float(f"{whole}.{fraction}" if fraction else whole)


# ============================================================================
# Conversion
# ============================================================================

def convert(
    amount: float,
    from_code: str,
    to_code: str,
    rate: Optional[float] = None,
) -> float:
    """
    Convert an amount between currencies for display.

    Uses the supplied rate, else the static table, else a cross rate through
    USD. Pairs with no known rate are returned unconverted.
    """
    source = from_code.upper()
    target = to_code.upper()
    if source == target:
        return amount

    if rate is not None:
        if rate <= 0:
            raise InvalidInputError("Exchange rate must be greater than 0", details={"rate": rate})
        return amount * rate

    return amount * static_rate(source, target)


def static_rate(from_code: str, to_code: str) -> float:
    """Static display rate between two currencies (1.0 when unknown)."""
    source = from_code.upper()
    target = to_code.upper()
    if source == target:
        return 1.0

    direct = STATIC_RATES.get(f"{source}-{target}")
    if direct is not None:
        return direct

    to_usd = STATIC_RATES.get(f"{source}-USD")
    from_usd = STATIC_RATES.get(f"USD-{target}")
    if to_usd is not None and from_usd is not None:
        return to_usd * from_usd

    logger.warning(f"No static rate for {source}-{target}; leaving amount unconverted")
    return 1.0


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a percentage, e.g. "20.0%"."""
    return f"{round_to_decimal(value, decimals):.{decimals}f}%"
