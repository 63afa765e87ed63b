"""
Accept Order Handler - Lambda function for order inventory checks.

Receives an API Gateway proxy event whose body names an order and its meals,
runs the inventory check and answers with ``true`` (accepted), ``false``
(rejected) or a fixed error message.
"""

import base64
import binascii
from functools import lru_cache
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from order_checker.dal import CatalogTables, get_catalog_store
from order_checker.handlers.models.env_vars import get_handler_env_vars
from order_checker.handlers.utils.errors import create_error_context
from order_checker.handlers.utils.observability import logger, metrics, tracer
from order_checker.logic.order_acceptance import OrderInventoryChecker
from order_checker.models.input import AcceptOrderRequest
from order_checker.models.output import OrderOutcome

INVALID_REQUEST_BODY = 'Invalid order request'
INTERNAL_ERROR_BODY = 'Internal server error'


@lru_cache(maxsize=1)
def get_order_checker() -> OrderInventoryChecker:
    """Build the checker once per container from environment configuration."""
    env_vars = get_handler_env_vars()
    store = get_catalog_store(
        endpoint_url=env_vars.DYNAMODB_ENDPOINT,
        region_name=env_vars.AWS_REGION,
    )
    tables = CatalogTables(
        orders=env_vars.ORDERS_TABLE_NAME,
        meals=env_vars.MEALS_TABLE_NAME,
        ingredients=env_vars.INGREDIENTS_TABLE_NAME,
    )
    logger.debug("Order checker initialized", extra={
        "tables": tables.model_dump(),
        "guard_stock": env_vars.stock_guard_enabled,
    })
    return OrderInventoryChecker(store, tables, guard_stock=env_vars.stock_guard_enabled)


def create_response(status_code: int, body: str, request_id: str) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            "X-Request-ID": request_id,
        },
        "body": body,
    }


@tracer.capture_method
def parse_order_request(event: Dict[str, Any]) -> AcceptOrderRequest:
    """
    Parse and validate the order carried in the event body.

    Raises:
        ValidationError: If the body is missing, not JSON or not a valid order
        binascii.Error: If a base64 encoded body is not valid base64
        UnicodeDecodeError: If a base64 encoded body is not UTF-8
    """
    body = event.get("body") or ""
    if event.get("isBase64Encoded") and body:
        body = base64.b64decode(body, validate=True).decode("utf-8")
    return AcceptOrderRequest.model_validate_json(body)


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Order acceptance Lambda handler.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        API Gateway response whose body is "true", "false" or an error message
    """
    request_id = context.aws_request_id

    try:
        request = parse_order_request(event)
    except ValidationError as e:
        logger.warning("Order request validation failed", extra={
            "validation_errors": e.errors(include_url=False, include_context=False),
            "error_count": e.error_count(),
        })
        metrics.add_metric(name="InvalidOrderRequest", unit=MetricUnit.Count, value=1)
        return create_response(400, INVALID_REQUEST_BODY, request_id)
    except (binascii.Error, UnicodeDecodeError) as e:
        logger.warning("Order request body could not be decoded", extra={"error": str(e)})
        metrics.add_metric(name="InvalidOrderRequest", unit=MetricUnit.Count, value=1)
        return create_response(400, INVALID_REQUEST_BODY, request_id)

    error_context = create_error_context(
        request_id=request_id,
        operation="accept_order",
        resource_id=request.order_id,
    )

    try:
        result = get_order_checker().check_order(request.to_order(), context=error_context)
    except Exception as e:
        logger.exception("Unexpected error in order check", extra={
            "error": str(e),
            "order_id": request.order_id,
        })
        metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)
        return create_response(500, INTERNAL_ERROR_BODY, request_id)

    status_code = 500 if result.outcome == OrderOutcome.FAILED else 200
    return create_response(status_code, result.response_body, request_id)
