"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for the environment variables read by the
order checker handler. Values are parsed once per container by aws-lambda-env-modeler.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field


class OrderCheckerEnvVars(BaseModel):
    """Environment variables for the order checker handler."""

    # DynamoDB tables backing the catalog store
    ORDERS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table holding order records',
        min_length=1
    )] = 'Orders'

    MEALS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table holding meal recipes',
        min_length=1
    )] = 'Meals'

    INGREDIENTS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table holding ingredient stock counts',
        min_length=1
    )] = 'Ingredients'

    # Only set for local testing (DynamoDB Local, LocalStack)
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        description='Override endpoint URL for DynamoDB'
    )] = None

    AWS_REGION: Annotated[str, Field(
        description='AWS region for service deployment'
    )] = 'us-east-1'

    ENVIRONMENT: Annotated[str, Field(
        description='Deployment environment name',
        pattern=r'^(dev|test|staging|prod)$'
    )] = 'dev'

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        description='Service name for AWS Powertools'
    )] = 'order-checker'

    POWERTOOLS_METRICS_NAMESPACE: Annotated[str, Field(
        description='Namespace for CloudWatch metrics'
    )] = 'OrderChecker'

    LOG_LEVEL: Annotated[str, Field(
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    POWERTOOLS_TRACE_DISABLED: Annotated[str, Field(
        description='Disable X-Ray tracing (true/false)',
        pattern=r'^(true|false)$'
    )] = 'false'

    # Conditional decrements close the over-commit race between concurrent orders.
    # Off by default: a failed condition turns an accepted order into a persist failure.
    GUARD_INGREDIENT_STOCK: Annotated[str, Field(
        description='Make ingredient decrements conditional on remaining stock (true/false)',
        pattern=r'^(true|false)$'
    )] = 'false'

    @property
    def stock_guard_enabled(self) -> bool:
        return self.GUARD_INGREDIENT_STOCK.lower() == 'true'


def get_handler_env_vars() -> OrderCheckerEnvVars:
    """
    Get typed environment variables for the handler.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=OrderCheckerEnvVars)
