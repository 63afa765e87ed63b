"""
Service Models Package

This package contains the Pydantic models used throughout the service:
the request model, the catalog and order records, and the check result.
"""

from .catalog import Ingredient, Meal
from .input import AcceptOrderRequest
from .order import Order
from .output import FailureKind, OrderCheckResult, OrderOutcome

__all__ = [
    # Input models
    "AcceptOrderRequest",

    # Output models
    "FailureKind",
    "OrderCheckResult",
    "OrderOutcome",

    # Domain models
    "Ingredient",
    "Meal",
    "Order",
]
