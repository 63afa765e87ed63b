"""
Input models for request validation using Pydantic.

This module defines the body accepted by the order checker endpoint.
"""

from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from order_checker.models.order import Order


class AcceptOrderRequest(BaseModel):
    """Request body for an order acceptance check."""

    model_config = ConfigDict(populate_by_name=True)

    order_id: Annotated[str, Field(
        alias='orderId',
        min_length=1,
        description='Identifier of the order being placed',
        examples=['o1']
    )]

    meal_orders: Annotated[List[str], Field(
        alias='mealOrders',
        min_length=1,
        description='Names of the ordered meals; earlier meals claim scarce stock first',
        examples=[['burger', 'fries']]
    )]

    @field_validator('meal_orders')
    @classmethod
    def validate_meal_names(cls, v: List[str]) -> List[str]:
        """Validate that every meal name is non-blank."""
        if any(not name.strip() for name in v):
            raise ValueError('mealOrders cannot contain blank meal names')
        return v

    def to_order(self) -> Order:
        return Order(order_id=self.order_id, meal_orders=list(self.meal_orders))
