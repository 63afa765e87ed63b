"""
Data Access Layer (DAL) for the order checker.

The checker talks to a key-value Catalog Store holding three tables (Orders,
Meals, Ingredients). This module defines that interface and the factory that
builds the DynamoDB implementation.
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from pydantic import BaseModel


class CatalogTables(BaseModel):
    """Physical table names for the three catalog record kinds."""

    orders: str = 'Orders'
    meals: str = 'Meals'
    ingredients: str = 'Ingredients'


@runtime_checkable
class CatalogStore(Protocol):
    """Protocol defining the catalog store interface."""

    def get(self, table: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Return the item stored under ``key``, or None if absent."""
        ...

    def put(self, table: str, item: Dict[str, Any]) -> None:
        """Create or replace an item."""
        ...

    def update(
        self,
        table: str,
        key: Dict[str, Any],
        field: str,
        delta: int,
        min_value: Optional[int] = None,
    ) -> int:
        """
        Atomically add ``delta`` to a numeric field and return the new value.

        When ``min_value`` is given the update only applies if the current
        value is at least ``min_value``.
        """
        ...


def get_catalog_store(endpoint_url: Optional[str] = None, region_name: Optional[str] = None) -> CatalogStore:
    """
    Factory function to get the catalog store implementation.

    Args:
        endpoint_url: DynamoDB endpoint override (local testing)
        region_name: AWS region name

    Returns:
        Catalog store instance
    """
    # Import here to avoid circular imports
    from order_checker.dal.dynamodb_store import DynamoDBCatalogStore

    return DynamoDBCatalogStore(endpoint_url=endpoint_url, region_name=region_name)


__all__ = [
    'CatalogStore',
    'CatalogTables',
    'get_catalog_store',
]
