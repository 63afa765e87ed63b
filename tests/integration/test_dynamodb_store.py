"""
Integration tests for the DynamoDB catalog store.

This module tests the store against DynamoDB tables mocked with moto, and the
checker running on top of it.
"""

import pytest

from order_checker.dal import CatalogStore, get_catalog_store
from order_checker.dal.dynamodb_store import DynamoDBCatalogStore
from order_checker.handlers.utils.errors import CatalogStoreError
from order_checker.logic.order_acceptance import OrderInventoryChecker
from order_checker.models.order import Order
from order_checker.models.output import FailureKind, OrderOutcome


@pytest.mark.integration
class TestDynamoDBCatalogStore:
    """Integration tests for DynamoDBCatalogStore."""

    def test_factory_returns_catalog_store(self, dynamodb_catalog):
        store = get_catalog_store(region_name="us-east-1")

        assert isinstance(store, DynamoDBCatalogStore)
        assert isinstance(store, CatalogStore)

    def test_get_existing_item(self, dynamodb_catalog, seed_catalog):
        seed_catalog(meals={"burger": ["bun", "patty"]}, stock={})
        store = DynamoDBCatalogStore(region_name="us-east-1")

        item = store.get("Meals", {"mealName": "burger"})

        assert item == {"mealName": "burger", "ingredients": ["bun", "patty"]}

    def test_get_missing_item(self, dynamodb_catalog):
        store = DynamoDBCatalogStore(region_name="us-east-1")

        assert store.get("Meals", {"mealName": "pizza"}) is None

    def test_put_item(self, dynamodb_catalog):
        store = DynamoDBCatalogStore(region_name="us-east-1")

        store.put("Orders", {"orderId": "o1", "mealOrders": ["burger"], "orderAccepted": False})

        item = dynamodb_catalog.Table("Orders").get_item(Key={"orderId": "o1"})["Item"]
        assert item["orderAccepted"] is False
        assert item["mealOrders"] == ["burger"]

    def test_update_decrements(self, dynamodb_catalog, seed_catalog, read_stock):
        seed_catalog(meals={}, stock={"bun": 3})
        store = DynamoDBCatalogStore(region_name="us-east-1")

        new_value = store.update("Ingredients", {"ingName": "bun"}, "ingCount", -1)

        assert new_value == 2
        assert read_stock("bun") == 2

    def test_update_without_condition_goes_negative(self, dynamodb_catalog, seed_catalog, read_stock):
        seed_catalog(meals={}, stock={"bun": 0})
        store = DynamoDBCatalogStore(region_name="us-east-1")

        assert store.update("Ingredients", {"ingName": "bun"}, "ingCount", -1) == -1

    def test_conditional_update_fails_when_exhausted(self, dynamodb_catalog, seed_catalog, read_stock):
        seed_catalog(meals={}, stock={"bun": 0})
        store = DynamoDBCatalogStore(region_name="us-east-1")

        with pytest.raises(CatalogStoreError) as exc_info:
            store.update("Ingredients", {"ingName": "bun"}, "ingCount", -1, min_value=1)

        assert exc_info.value.error_code == "CONDITIONAL_CHECK_FAILED"
        assert read_stock("bun") == 0

    def test_missing_table(self, dynamodb_catalog):
        store = DynamoDBCatalogStore(region_name="us-east-1")

        with pytest.raises(CatalogStoreError) as exc_info:
            store.get("Desserts", {"mealName": "cake"})

        assert exc_info.value.error_code == "TABLE_NOT_FOUND"
        assert exc_info.value.table_name == "Desserts"


@pytest.mark.integration
class TestCheckerOnDynamoDB:
    """Order checks against moto-backed tables."""

    def test_accepted_burger(self, dynamodb_catalog, seed_catalog, read_stock):
        seed_catalog(meals={"burger": ["bun", "patty"]}, stock={"bun": 2, "patty": 5})
        checker = OrderInventoryChecker(DynamoDBCatalogStore(region_name="us-east-1"))

        result = checker.check_order(Order(order_id="o1", meal_orders=["burger"]))

        assert result.outcome == OrderOutcome.ACCEPTED
        assert read_stock("bun") == 1
        assert read_stock("patty") == 4
        order = dynamodb_catalog.Table("Orders").get_item(Key={"orderId": "o1"})["Item"]
        assert order["orderAccepted"] is True

    def test_rejected_burger(self, dynamodb_catalog, seed_catalog, read_stock):
        seed_catalog(meals={"burger": ["bun", "patty"]}, stock={"bun": 2, "patty": 0})
        checker = OrderInventoryChecker(DynamoDBCatalogStore(region_name="us-east-1"))

        result = checker.check_order(Order(order_id="o1", meal_orders=["burger"]))

        assert result.outcome == OrderOutcome.REJECTED
        assert result.unavailable_meals == ["burger"]
        assert read_stock("bun") == 2
        assert read_stock("patty") == 0

    def test_guarded_checker_accepts_with_stock(self, dynamodb_catalog, seed_catalog, read_stock):
        seed_catalog(meals={"omelette": ["egg", "egg"]}, stock={"egg": 2})
        checker = OrderInventoryChecker(DynamoDBCatalogStore(region_name="us-east-1"), guard_stock=True)

        result = checker.check_order(Order(order_id="o2", meal_orders=["omelette"]))

        assert result.outcome == OrderOutcome.ACCEPTED
        assert read_stock("egg") == 0

    def test_missing_ingredient_record(self, dynamodb_catalog, seed_catalog):
        seed_catalog(meals={"burger": ["bun", "patty"]}, stock={"bun": 2})
        checker = OrderInventoryChecker(DynamoDBCatalogStore(region_name="us-east-1"))

        result = checker.check_order(Order(order_id="o1", meal_orders=["burger"]))

        assert result.failure == FailureKind.LOOKUP_FAILED
        assert "Item" not in dynamodb_catalog.Table("Orders").get_item(Key={"orderId": "o1"})
