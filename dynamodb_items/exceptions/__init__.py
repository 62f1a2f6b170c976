# Base exception class
from .base import DynamoDBItemsError

from .domain_exceptions import (
    ConfigurationError,
    ConnectionError,
    StoreError,
    UnsupportedTypeError,
)

__all__ = [
    # Base exception
    "DynamoDBItemsError",

    # Domain exceptions (alphabetically ordered)
    "ConfigurationError",
    "ConnectionError",
    "StoreError",
    "UnsupportedTypeError",
]
