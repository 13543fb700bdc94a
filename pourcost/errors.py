"""Typed errors raised by the pour-cost engine."""

from typing import Any, Dict, Optional


class PourCostError(Exception):
    """Base class for engine errors."""

    code = "POUR_COST_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidInputError(PourCostError):
    """Non-positive volume, negative price, or out-of-range target percentage."""

    code = "INVALID_INPUT"


class UnsupportedUnitError(PourCostError):
    """Unknown volume unit."""

    code = "UNSUPPORTED_UNIT"

    def __init__(self, unit: Any):
        super().__init__(
            f"Unsupported volume unit: {unit}",
            details={"unit": str(unit)},
        )


class UnsupportedCurrencyError(PourCostError):
    """Unknown currency code (strict validation only)."""

    code = "UNSUPPORTED_CURRENCY"

    def __init__(self, currency_code: str):
        super().__init__(
            f"Unsupported currency code: {currency_code}",
            details={"currency_code": currency_code},
        )


class InvalidRangeError(PourCostError):
    """Scale domain does not bracket the goal."""

    code = "INVALID_RANGE"
