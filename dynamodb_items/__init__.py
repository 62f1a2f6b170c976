from .config import DynamoDBConfig
from .exceptions import (
    ConfigurationError,
    ConnectionError,
    DynamoDBItemsError,
    StoreError,
    UnsupportedTypeError,
)
from .models import (
    AttributeType,
    AttributeValue,
    FloatValue,
    IntValue,
    NumberSetValue,
    TextSetValue,
    TextValue,
    infer_value,
)
from .utils import format_item, format_value, unformat_item, unformat_value
from .core import (
    BotoRequest,
    PendingRequest,
    StoreContext,
    StoreResponse,
    create_store_context,
    to_future,
)
from .repositories import RecordRepository, UserRepository

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "ConfigurationError",
    "ConnectionError",
    "DynamoDBItemsError",
    "StoreError",
    "UnsupportedTypeError",

    # Typed attribute variants
    "AttributeType",
    "AttributeValue",
    "IntValue",
    "FloatValue",
    "TextValue",
    "TextSetValue",
    "NumberSetValue",
    "infer_value",

    # Codec
    "format_item",
    "format_value",
    "unformat_item",
    "unformat_value",

    # Requests and context
    "BotoRequest",
    "PendingRequest",
    "StoreContext",
    "StoreResponse",
    "create_store_context",
    "to_future",

    # Repositories
    "RecordRepository",
    "UserRepository",
]
