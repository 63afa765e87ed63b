"""
Ingredient inventory steps of the order check.

These functions resolve ordered meals to ingredient demand, look up stock for
each distinct ingredient and simulate reserving it. Store access is strictly
sequential: each lookup finishes before the next one starts.
"""

from typing import Dict, Iterable, List, NamedTuple, Set

from order_checker.dal import CatalogStore
from order_checker.handlers.utils.errors import (
    CatalogStoreError,
    IngredientNotFoundError,
    LookupFailedError,
    MealNotFoundError,
)
from order_checker.handlers.utils.observability import logger, tracer
from order_checker.models.catalog import INGREDIENT_KEY, MEAL_KEY, Ingredient, Meal


class AvailabilityReport(NamedTuple):
    """Outcome of reserving ingredient demand against stored counts."""

    missing: List[str]
    remaining: Dict[str, int]

    @property
    def has_shortage(self) -> bool:
        return bool(self.missing)


@tracer.capture_method
def fetch_meals(store: CatalogStore, meals_table: str, meal_names: Iterable[str]) -> List[Meal]:
    """
    Resolve each ordered meal name to its meal record.

    A meal ordered twice is looked up twice.

    Raises:
        MealNotFoundError: If a meal has no record
        LookupFailedError: If the store read fails or the record is malformed
    """
    meals = []
    for meal_name in meal_names:
        try:
            item = store.get(meals_table, {MEAL_KEY: meal_name})
        except CatalogStoreError as e:
            raise LookupFailedError(f"Unable to read meal '{meal_name}': {e.message}") from e
        if item is None:
            raise MealNotFoundError(meal_name)
        try:
            meals.append(Meal.from_item(item))
        except (KeyError, TypeError, ValueError) as e:
            raise LookupFailedError(f"Malformed meal record '{meal_name}': {e}") from e
    return meals


def aggregate_ingredients(meals: Iterable[Meal]) -> List[str]:
    """Flatten meals into ingredient demand, one entry per unit, in order."""
    return [ingredient for meal in meals for ingredient in meal.ingredients]


def unique_ingredients(ingredients: Iterable[str]) -> Set[str]:
    return set(ingredients)


@tracer.capture_method
def fetch_ingredient_counts(store: CatalogStore, ingredients_table: str, names: Iterable[str]) -> Dict[str, int]:
    """
    Look up the stored count of every distinct ingredient, once each.

    Raises:
        IngredientNotFoundError: If an ingredient has no record
        LookupFailedError: If the store read fails or the record is malformed
    """
    counts: Dict[str, int] = {}
    for name in sorted(names):
        try:
            item = store.get(ingredients_table, {INGREDIENT_KEY: name})
        except CatalogStoreError as e:
            raise LookupFailedError(f"Unable to read ingredient '{name}': {e.message}") from e
        if item is None:
            raise IngredientNotFoundError(name)
        try:
            counts[name] = Ingredient.from_item(item).count
        except (KeyError, TypeError, ValueError) as e:
            raise LookupFailedError(f"Malformed ingredient record '{name}': {e}") from e
    return counts


def reserve_ingredients(demand: Iterable[str], counts: Dict[str, int]) -> AvailabilityReport:
    """
    Reserve one unit per demand entry, first come first served.

    Earlier entries claim stock before later ones, so meals earlier in the
    order win scarce ingredients. ``counts`` is left untouched.
    """
    remaining = dict(counts)
    missing = []
    for ingredient in demand:
        if remaining.get(ingredient, 0) > 0:
            remaining[ingredient] -= 1
        else:
            missing.append(ingredient)

    if missing:
        logger.info("Ingredient shortage detected", extra={"missing_ingredients": missing})
    return AvailabilityReport(missing=missing, remaining=remaining)


def find_unavailable_meals(meals: Iterable[Meal], missing: Iterable[str]) -> List[str]:
    """Names of the ordered meals that need at least one missing ingredient."""
    missing_set = unique_ingredients(missing)
    return [meal.name for meal in meals if meal.requires_any(missing_set)]
