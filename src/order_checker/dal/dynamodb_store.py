"""
DynamoDB implementation of the Catalog Store.

Each call is a single synchronous request against one table. Nothing is
batched and nothing runs inside a transaction: callers see every read and
write exactly as they issue them.
"""

import functools
from typing import Any, Callable, Dict, Optional, TypeVar

import boto3
from aws_lambda_powertools.metrics import MetricUnit
from botocore.exceptions import BotoCoreError, ClientError

from order_checker.handlers.utils.errors import CatalogStoreError
from order_checker.handlers.utils.observability import logger, metrics, tracer

F = TypeVar('F', bound=Callable[..., Any])


def handle_dynamodb_errors(operation: str) -> Callable[[F], F]:
    """Decorator translating boto3 failures into ``CatalogStoreError``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: 'DynamoDBCatalogStore', table: str, *args: Any, **kwargs: Any) -> Any:
            try:
                return func(self, table, *args, **kwargs)

            except ClientError as e:
                error_code = e.response['Error']['Code']
                error_message = e.response['Error']['Message']

                metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                logger.error(f"DynamoDB {operation} error", extra={
                    "error_code": error_code,
                    "error_message": error_message,
                    "table_name": table,
                    "operation": operation,
                })

                if error_code == 'ConditionalCheckFailedException':
                    raise CatalogStoreError(
                        message="Conditional check failed",
                        operation=operation,
                        table_name=table,
                        error_code="CONDITIONAL_CHECK_FAILED",
                    ) from e
                if error_code == 'ResourceNotFoundException':
                    raise CatalogStoreError(
                        message=f"Table {table} not found",
                        operation=operation,
                        table_name=table,
                        error_code="TABLE_NOT_FOUND",
                    ) from e
                raise CatalogStoreError(
                    message=f"DynamoDB error: {error_message}",
                    operation=operation,
                    table_name=table,
                    error_code=f"DYNAMODB_{error_code}",
                ) from e

            except BotoCoreError as e:
                metrics.add_metric(name=f"DynamoDB{operation}Error", unit=MetricUnit.Count, value=1)
                logger.error(f"DynamoDB connection error during {operation}", extra={
                    "error": str(e),
                    "table_name": table,
                })
                raise CatalogStoreError(
                    message=f"Database connection error: {e}",
                    operation=operation,
                    table_name=table,
                    error_code="DATABASE_CONNECTION_ERROR",
                ) from e

        return wrapper  # type: ignore[return-value]

    return decorator


class DynamoDBCatalogStore:
    """Catalog store backed by one DynamoDB table per record kind."""

    def __init__(
        self,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
    ):
        """
        Initialize the DynamoDB catalog store.

        Args:
            region_name: AWS region name
            endpoint_url: DynamoDB endpoint URL (for local testing)
        """
        session_config: Dict[str, Any] = {}
        if region_name:
            session_config['region_name'] = region_name
        if endpoint_url:
            session_config['endpoint_url'] = endpoint_url

        self.dynamodb = boto3.resource('dynamodb', **session_config)
        self._tables: Dict[str, Any] = {}

        logger.debug("DynamoDB catalog store initialized", extra={
            "region_name": region_name,
            "endpoint_url": endpoint_url,
        })

    def _table(self, name: str) -> Any:
        if name not in self._tables:
            self._tables[name] = self.dynamodb.Table(name)
        return self._tables[name]

    @tracer.capture_method
    @handle_dynamodb_errors("GetItem")
    def get(self, table: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Get a single item.

        Args:
            table: Table name
            key: Primary key of the item

        Returns:
            Item data or None if not found

        Raises:
            CatalogStoreError: If the DynamoDB operation fails
        """
        response = self._table(table).get_item(Key=key)
        item = response.get('Item')
        if item is None:
            logger.debug("Item not found", extra={"table_name": table, "key": key})
        return item

    @tracer.capture_method
    @handle_dynamodb_errors("PutItem")
    def put(self, table: str, item: Dict[str, Any]) -> None:
        """
        Create or replace an item.

        Raises:
            CatalogStoreError: If the DynamoDB operation fails
        """
        self._table(table).put_item(Item=item)
        logger.debug("Item written", extra={"table_name": table})

    @tracer.capture_method
    @handle_dynamodb_errors("UpdateItem")
    def update(
        self,
        table: str,
        key: Dict[str, Any],
        field: str,
        delta: int,
        min_value: Optional[int] = None,
    ) -> int:
        """
        Atomically add ``delta`` to a numeric attribute.

        Args:
            table: Table name
            key: Primary key of the item
            field: Numeric attribute to change
            delta: Amount to add (negative to decrement)
            min_value: If set, only apply when the current value is >= min_value

        Returns:
            The attribute value after the update

        Raises:
            CatalogStoreError: If the update fails or its condition does not hold
        """
        update_kwargs: Dict[str, Any] = {
            'Key': key,
            'UpdateExpression': 'ADD #field :delta',
            'ExpressionAttributeNames': {'#field': field},
            'ExpressionAttributeValues': {':delta': delta},
            'ReturnValues': 'UPDATED_NEW',
        }
        if min_value is not None:
            update_kwargs['ConditionExpression'] = '#field >= :min'
            update_kwargs['ExpressionAttributeValues'][':min'] = min_value

        response = self._table(table).update_item(**update_kwargs)
        return int(response['Attributes'][field])
