"""
Core infrastructure components for DynamoDB requests.

- StoreContext: configuration plus a lazily created boto3 client
- BotoRequest / to_future: pending requests and their asyncio adapter
"""

from .context import StoreContext, create_store_context
from .request import BotoRequest, PendingRequest, StoreResponse, to_future

__all__ = [
    "StoreContext",
    "create_store_context",
    "BotoRequest",
    "PendingRequest",
    "StoreResponse",
    "to_future",
]
