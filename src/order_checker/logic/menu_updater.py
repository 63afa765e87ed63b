"""
Menu update collaborator.

When an order is rejected the checker hands the unavailable meals to a menu
updater. Removing meals from the public menu is owned by another service, so
the default implementation only records the request.
"""

from typing import List, Protocol, runtime_checkable

from order_checker.handlers.utils.observability import logger


@runtime_checkable
class MenuUpdater(Protocol):
    """Receives meals that can no longer be prepared."""

    def remove_meals(self, meal_names: List[str]) -> None:
        ...


class NoOpMenuUpdater:
    """Menu updater that logs the request and changes nothing."""

    def remove_meals(self, meal_names: List[str]) -> None:
        logger.info("Menu removal requested", extra={"meal_names": meal_names})
