"""API endpoints package."""

from . import health
from . import products
from . import deck
from . import session

__all__ = ["health", "products", "deck", "session"]
