"""API Routers"""

from api.routers import currency, health, pricing, units

__all__ = ["currency", "health", "pricing", "units"]
