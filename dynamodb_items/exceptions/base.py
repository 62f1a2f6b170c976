from typing import Any, Dict, Optional


class DynamoDBItemsError(Exception):
    """Base exception for all dynamodb_items errors.

    A failed request may report either a raised exception (a botocore
    ``ClientError``, for instance) or a plain error payload handed to its
    ``error`` listeners. Both are kept as-is in ``original_error``;
    ``has_original_exception`` tells them apart.

    Attributes:
        message: Human-readable error message
        original_error: Exception or raw error payload behind this error, if any
        context: Where the error happened (field, operation, table name, ...)
    """

    def __init__(self, message: str, original_error: Optional[Any] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = dict(context or {})
        super().__init__(message)

    @property
    def has_original_exception(self) -> bool:
        """True when ``original_error`` is an exception rather than a payload."""
        return isinstance(self.original_error, BaseException)

    def _describe_original(self) -> str:
        if self.original_error is None:
            return "original_error=None"
        if self.has_original_exception:
            return f"original_error={self.original_error!r}"
        return f"original_payload={self.original_error!r}"

    def __str__(self) -> str:
        if not self.context:
            return self.message
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} (Context: {context_str})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, {self._describe_original()}, context={self.context!r})"
