"""
Catalog domain models: meals and the ingredients they consume.

Both are stored as plain DynamoDB items; ``from_item`` converts the raw item
(including ``Decimal`` numbers and string sets) into typed models.
"""

from decimal import Decimal
from typing import Annotated, Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

MEAL_KEY = 'mealName'
INGREDIENT_KEY = 'ingName'
INGREDIENT_COUNT_FIELD = 'ingCount'


class Meal(BaseModel):
    """A dish and the ingredient units needed to prepare it."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Annotated[str, Field(
        alias=MEAL_KEY,
        min_length=1,
        examples=['burger']
    )]

    # One entry per required unit, so ["egg", "egg"] needs two eggs
    ingredients: Annotated[List[str], Field(
        default_factory=list,
        examples=[['bun', 'patty']]
    )]

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Meal':
        ingredients = item.get('ingredients') or []
        if isinstance(ingredients, set):
            ingredients = sorted(ingredients)
        elif not isinstance(ingredients, list):
            raise TypeError(f"ingredients must be a list or set, got {type(ingredients).__name__}")
        return cls(name=item[MEAL_KEY], ingredients=ingredients)

    def requires_any(self, ingredient_names: set) -> bool:
        """Check whether the meal needs at least one of the given ingredients."""
        return any(ingredient in ingredient_names for ingredient in self.ingredients)


class Ingredient(BaseModel):
    """A stocked ingredient and its current count."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Annotated[str, Field(
        alias=INGREDIENT_KEY,
        min_length=1,
        examples=['cheese']
    )]

    count: Annotated[int, Field(
        alias=INGREDIENT_COUNT_FIELD,
        description='Units currently in stock',
        examples=[5]
    )]

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Ingredient':
        # DynamoDB returns numbers as Decimal
        count = item[INGREDIENT_COUNT_FIELD]
        if isinstance(count, Decimal):
            whole = count.is_finite() and count == count.to_integral_value()
        else:
            whole = isinstance(count, int) and not isinstance(count, bool)
        if not whole:
            raise ValueError(f"{INGREDIENT_COUNT_FIELD} must be a whole number, got {count!r}")
        return cls(name=item[INGREDIENT_KEY], count=int(count))
