"""
Order domain model.

An order is written to the Orders table by the checker once its outcome is
known; the checker never reads it back.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

ORDER_KEY = 'orderId'


class Order(BaseModel):
    """Order record as stored in the Orders table."""

    model_config = ConfigDict(populate_by_name=True)

    order_id: Annotated[str, Field(
        alias='orderId',
        min_length=1,
        description='Unique identifier for the order',
        examples=['o1']
    )]

    meal_orders: Annotated[List[str], Field(
        alias='mealOrders',
        description='Meal names in the order they were requested',
        examples=[['burger', 'fries']]
    )]

    order_accepted: Annotated[Optional[bool], Field(
        alias='orderAccepted',
        description='Outcome of the inventory check, absent until decided'
    )] = None

    def mark(self, accepted: bool) -> 'Order':
        """Return a copy of the order carrying the given outcome."""
        return self.model_copy(update={'order_accepted': accepted})

    def to_item(self) -> Dict[str, Any]:
        """Convert the order to a DynamoDB item."""
        return self.model_dump(by_alias=True, exclude_none=True)
