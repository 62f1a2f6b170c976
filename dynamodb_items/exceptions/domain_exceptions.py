"""
Domain-Specific Exceptions for dynamodb_items

Organized by where they surface:
1. Codec Errors (raised synchronously while formatting items)
2. Store Errors (delivered through the awaitable returned by a request)
3. Setup Errors (configuration and client construction)
"""

from typing import Any, Optional

from botocore.exceptions import ClientError

from .base import DynamoDBItemsError


# =============================================================================
# Codec Errors
# =============================================================================

class UnsupportedTypeError(DynamoDBItemsError):
    """Raised when a native value has no typed attribute representation.

    Used for:
    - Binary values and binary sets
    - Booleans, None, nested mappings
    - Empty lists and lists whose first element is neither text nor number
    """

    def __init__(self, message: str, field: Optional[str] = None, value_type: Optional[str] = None):
        """Initialize unsupported type error.

        Args:
            message: Human-readable error message
            field: Name of the record field holding the value, when known
            value_type: Python type name of the offending value
        """
        self.field = field
        self.value_type = value_type
        context = {}
        if field is not None:
            context['field'] = field
        if value_type is not None:
            context['value_type'] = value_type
        super().__init__(message, None, context)


# =============================================================================
# Store Errors
# =============================================================================

class StoreError(DynamoDBItemsError):
    """Raised when a DynamoDB request fails.

    The client's error is kept unchanged in ``original_error``; no mapping
    to finer-grained exceptions is attempted.
    """

    def __init__(self, message: str, operation: str, table_name: str, original_error: Optional[Any] = None):
        """Initialize store error.

        Args:
            message: Human-readable error message
            operation: The request that failed (e.g., "GetItem", "PutItem")
            table_name: Physical DynamoDB table name
            original_error: The error payload reported by the client
        """
        self.operation = operation
        self.table_name = table_name
        context = {
            'operation': operation,
            'table_name': table_name,
        }
        code = _client_error_code(original_error)
        if code:
            context['error_code'] = code
        super().__init__(message, original_error, context)

    @property
    def error_code(self) -> Optional[str]:
        """botocore error code of the original error, if it was a ClientError."""
        return _client_error_code(self.original_error)


def _client_error_code(error: Any) -> Optional[str]:
    if isinstance(error, ClientError):
        return error.response.get('Error', {}).get('Code')
    return None


# =============================================================================
# Setup Errors
# =============================================================================

class ConfigurationError(DynamoDBItemsError):
    """Raised when configuration is missing or invalid at startup."""


class ConnectionError(DynamoDBItemsError):
    """Raised when the DynamoDB session or client cannot be created.

    Used for:
    - Invalid credentials or region passed to boto3
    - Invalid endpoint configurations
    """
