"""
Business logic for order acceptance.

``OrderInventoryChecker`` decides whether an order can be fulfilled from
ingredient stock and records the decision:

1. resolve every ordered meal to its ingredients;
2. collapse the demand to the distinct ingredients;
3. fetch their counts and simulate reserving the demand in order;
4. settle: store the order as accepted and decrement stock, or store it as
   rejected and report the unavailable meals.

Known limitation: the read of stock counts and the later decrements are not
atomic. Two orders checked at the same time can both see enough stock and
both commit, driving counts negative. ``guard_stock`` turns each decrement
into a conditional update so an over-commit fails the second order instead.
No write is ever rolled back.
"""

from typing import List, Optional

from aws_lambda_powertools.metrics import MetricUnit

from order_checker.dal import CatalogStore, CatalogTables
from order_checker.handlers.utils.errors import (
    CatalogStoreError,
    ErrorContext,
    MenuUpdateFailedError,
    OrderCheckError,
    PersistFailedError,
)
from order_checker.handlers.utils.observability import logger, metrics, tracer
from order_checker.logic.inventory import (
    aggregate_ingredients,
    fetch_ingredient_counts,
    fetch_meals,
    find_unavailable_meals,
    reserve_ingredients,
    unique_ingredients,
)
from order_checker.logic.menu_updater import MenuUpdater, NoOpMenuUpdater
from order_checker.models.catalog import INGREDIENT_COUNT_FIELD, INGREDIENT_KEY
from order_checker.models.order import Order
from order_checker.models.output import FailureKind, OrderCheckResult, OrderOutcome


class OrderInventoryChecker:
    """Checks orders against ingredient inventory and settles the outcome."""

    def __init__(
        self,
        store: CatalogStore,
        tables: Optional[CatalogTables] = None,
        menu_updater: Optional[MenuUpdater] = None,
        guard_stock: bool = False,
    ):
        """
        Initialize the checker.

        Args:
            store: Catalog store holding orders, meals and ingredients
            tables: Table names, defaults to Orders / Meals / Ingredients
            menu_updater: Collaborator told about unavailable meals
            guard_stock: Make each decrement conditional on stock remaining
        """
        self.store = store
        self.tables = tables or CatalogTables()
        self.menu_updater = menu_updater or NoOpMenuUpdater()
        self.guard_stock = guard_stock

    @tracer.capture_method
    def check_order(self, order: Order, context: Optional[ErrorContext] = None) -> OrderCheckResult:
        """
        Check an order and record the outcome.

        Args:
            order: Order to check; its ``order_accepted`` value is ignored
            context: Error context attached to any failure

        Returns:
            Accepted, rejected (with unavailable meals) or failed result
        """
        logger.info("Checking order inventory", extra={
            "order_id": order.order_id,
            "meal_orders": order.meal_orders,
        })
        tracer.put_annotation("order_id", order.order_id)

        try:
            result = self._check(order)
        except OrderCheckError as e:
            e.context = e.context or context
            logger.error("Order check failed", extra={
                "order_id": order.order_id,
                "error": e.to_dict(),
            })
            metrics.add_metric(name="OrderCheckFailed", unit=MetricUnit.Count, value=1)
            return OrderCheckResult.failed(order.order_id, e.kind)

        if result.outcome == OrderOutcome.ACCEPTED:
            metrics.add_metric(name="OrdersAccepted", unit=MetricUnit.Count, value=1)
        else:
            metrics.add_metric(name="OrdersRejected", unit=MetricUnit.Count, value=1)
            metrics.add_metric(
                name="IngredientShortages",
                unit=MetricUnit.Count,
                value=len(result.missing_ingredients),
            )

        logger.info("Order check completed", extra={
            "order_id": order.order_id,
            "outcome": result.outcome.value,
            "unavailable_meals": result.unavailable_meals,
        })
        return result

    def _check(self, order: Order) -> OrderCheckResult:
        meals = fetch_meals(self.store, self.tables.meals, order.meal_orders)
        demand = aggregate_ingredients(meals)
        counts = fetch_ingredient_counts(self.store, self.tables.ingredients, unique_ingredients(demand))
        report = reserve_ingredients(demand, counts)

        if report.has_shortage:
            unavailable_meals = find_unavailable_meals(meals, report.missing)
            self._settle_rejected(order, unavailable_meals)
            return OrderCheckResult.rejected(order.order_id, unavailable_meals, report.missing)

        self._settle_accepted(order, demand)
        return OrderCheckResult.accepted(order.order_id)

    @tracer.capture_method
    def _settle_rejected(self, order: Order, unavailable_meals: List[str]) -> None:
        self._record_outcome(order, accepted=False)
        try:
            self.menu_updater.remove_meals(unavailable_meals)
        except Exception as e:
            raise MenuUpdateFailedError(f"Menu update failed for order {order.order_id}: {e}") from e

    @tracer.capture_method
    def _settle_accepted(self, order: Order, demand: List[str]) -> None:
        self._record_outcome(order, accepted=True)

        # One decrement per consumed unit, in demand order
        min_value = 1 if self.guard_stock else None
        for applied, ingredient in enumerate(demand):
            try:
                self.store.update(
                    self.tables.ingredients,
                    {INGREDIENT_KEY: ingredient},
                    INGREDIENT_COUNT_FIELD,
                    -1,
                    min_value=min_value,
                )
            except CatalogStoreError as e:
                logger.error("Ingredient decrement failed, earlier decrements remain applied", extra={
                    "order_id": order.order_id,
                    "ingredient": ingredient,
                    "decrements_applied": applied,
                    "decrements_total": len(demand),
                    "error_code": e.error_code,
                })
                raise PersistFailedError(
                    f"Unable to decrement '{ingredient}' for order {order.order_id}",
                    kind=FailureKind.INVENTORY_PERSIST_FAILED,
                ) from e

    def _record_outcome(self, order: Order, accepted: bool) -> None:
        try:
            self.store.put(self.tables.orders, order.mark(accepted).to_item())
        except CatalogStoreError as e:
            raise PersistFailedError(
                f"Unable to store order {order.order_id}",
                kind=FailureKind.ORDER_PERSIST_FAILED,
            ) from e
