"""
Order Checker Service Module.

Decides whether an order of meals can be fulfilled from ingredient stock,
following a three-layer layout:

- handlers: Lambda entry point, configuration and observability
- logic: inventory check and settlement
- dal: catalog store interface and DynamoDB implementation
- models: request, record and result models
"""

__version__ = "1.0.0"
