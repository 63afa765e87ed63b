"""
Business Logic Layer Module.

This module contains the order acceptance logic: resolving meals to ingredient
demand, checking stock and settling the outcome. It is the middle layer between
the Lambda handler and the catalog store.
"""

from order_checker.logic.menu_updater import MenuUpdater, NoOpMenuUpdater
from order_checker.logic.order_acceptance import OrderInventoryChecker

__all__ = [
    "MenuUpdater",
    "NoOpMenuUpdater",
    "OrderInventoryChecker",
]
