from typing import Any, Dict, Optional

from ..core import StoreContext
from .base import RecordRepository


class UserRepository(RecordRepository):
    """Repository for user records, keyed by email address."""

    LOGICAL_TABLE = "users"
    PARTITION_KEY = "email_address"

    def __init__(self, context: StoreContext, consistent_read: bool = True):
        """Initialize repository against the "users" logical table."""
        super().__init__(context, self.LOGICAL_TABLE, self.PARTITION_KEY, consistent_read)

    async def get_by_email_address(self, email_address: str) -> Optional[Dict[str, Any]]:
        """Get a user by email address.

        Returns:
            User record if found, None otherwise
        """
        return await self.get(email_address)
