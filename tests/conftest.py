"""
Pytest configuration and shared fixtures for the order checker.

This module provides the test environment, a mock Lambda context, API Gateway
events and moto-backed DynamoDB catalog tables used across unit, integration
and end-to-end tests.
"""

import json
import os
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

from fakes import FakeCatalogStore, RecordingMenuUpdater

CATALOG_KEYS = {
    "Orders": "orderId",
    "Meals": "mealName",
    "Ingredients": "ingName",
}


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "AWS_DEFAULT_REGION": "us-east-1",
        "AWS_REGION": "us-east-1",
        "AWS_ACCESS_KEY_ID": "test",
        "AWS_SECRET_ACCESS_KEY": "test",
        "ORDERS_TABLE_NAME": "Orders",
        "MEALS_TABLE_NAME": "Meals",
        "INGREDIENTS_TABLE_NAME": "Ingredients",
        "ENVIRONMENT": "test",
        "POWERTOOLS_SERVICE_NAME": "test-order-checker",
        "POWERTOOLS_METRICS_NAMESPACE": "TestOrderChecker",
        "LOG_LEVEL": "DEBUG",
        "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
        "GUARD_INGREDIENT_STOCK": "false",
        "LAMBDA_ENV_MODELER_DISABLE_CACHE": "true",  # Re-read env vars on every call
    })


@pytest.fixture(autouse=True)
def reset_metrics():
    """Drop metrics buffered by code exercised outside a handler flush."""
    from order_checker.handlers.utils.observability import metrics

    metrics.clear_metrics()
    yield
    metrics.clear_metrics()


# In-memory fixtures
@pytest.fixture
def burger_store() -> FakeCatalogStore:
    """Catalog with a burger that needs one bun and one patty."""
    return FakeCatalogStore(
        meals={"burger": ["bun", "patty"]},
        stock={"bun": 2, "patty": 5},
    )


@pytest.fixture
def menu_updater() -> RecordingMenuUpdater:
    return RecordingMenuUpdater()


# DynamoDB fixtures
@pytest.fixture
def dynamodb_catalog():
    """Create mock Orders, Meals and Ingredients tables."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        for table_name, key in CATALOG_KEYS.items():
            table = dynamodb.create_table(
                TableName=table_name,
                KeySchema=[{"AttributeName": key, "KeyType": "HASH"}],
                AttributeDefinitions=[{"AttributeName": key, "AttributeType": "S"}],
                BillingMode="PAY_PER_REQUEST",
            )
            table.wait_until_exists()

        yield dynamodb


@pytest.fixture
def seed_catalog(dynamodb_catalog):
    """Return a helper that writes meals and ingredient stock to the mock tables."""

    def seed(meals: Dict[str, List[str]], stock: Dict[str, int]) -> None:
        meals_table = dynamodb_catalog.Table("Meals")
        for name, ingredients in meals.items():
            meals_table.put_item(Item={"mealName": name, "ingredients": ingredients})

        ingredients_table = dynamodb_catalog.Table("Ingredients")
        for name, count in stock.items():
            ingredients_table.put_item(Item={"ingName": name, "ingCount": count})

    return seed


@pytest.fixture
def read_stock(dynamodb_catalog):
    """Return a helper reading an ingredient count straight from the mock table."""

    def read(ingredient: str) -> int:
        item = dynamodb_catalog.Table("Ingredients").get_item(Key={"ingName": ingredient})["Item"]
        return int(item["ingCount"])

    return read


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-order-checker"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-order-checker"
    context.memory_limit_in_mb = "256"
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-order-checker"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


@pytest.fixture
def order_event():
    """Return a factory for API Gateway events carrying an order body."""

    def make_event(body: Optional[Any] = None, raw_body: Optional[str] = None) -> Dict[str, Any]:
        return {
            "httpMethod": "POST",
            "path": "/orders",
            "headers": {"Content-Type": "application/json"},
            "body": raw_body if raw_body is not None else json.dumps(body),
            "requestContext": {
                "requestId": "test-request-id-123",
                "stage": "test",
                "httpMethod": "POST",
                "path": "/orders",
            },
            "pathParameters": None,
            "queryStringParameters": None,
            "isBase64Encoded": False,
        }

    return make_event


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)
