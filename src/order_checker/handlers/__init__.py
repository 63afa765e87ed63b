"""
AWS Lambda Handlers Module.

This module contains the Lambda entry point for the order checker. The handler
layer parses the API Gateway event, delegates to the logic layer and shapes the
response; observability and configuration helpers live under ``utils`` and
``models``.
"""

from order_checker.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
