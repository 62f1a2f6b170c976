import logging
from typing import Any, Dict, Mapping, Optional

from ..core import StoreContext, to_future
from ..exceptions import StoreError
from ..utils import build_key, format_item, unformat_item

logger = logging.getLogger(__name__)


class RecordRepository:
    """Async get/create access to one logical table keyed by a string partition key."""

    def __init__(self, context: StoreContext, logical_table: str, partition_key: str, consistent_read: bool = True):
        """Initialize repository.

        Args:
            context: Store context holding configuration and client
            logical_table: Logical table name, resolved through the config's table_names
            partition_key: Name of the string partition key attribute
            consistent_read: Use strongly consistent reads for ``get``

        Raises:
            ConfigurationError: If the logical table has no configured physical name
        """
        self.context = context
        self.logical_table = logical_table
        self.table_name = context.table_name(logical_table)
        self.partition_key = partition_key
        self.consistent_read = consistent_read

    async def get(self, identifier: str) -> Optional[Dict[str, Any]]:
        """Get a record by partition key.

        Args:
            identifier: Partition key value

        Returns:
            Native record if found, None otherwise

        Raises:
            StoreError: If the GetItem request fails
        """
        data = await self._send(
            "GetItem",
            TableName=self.table_name,
            Key=build_key(self.partition_key, identifier),
            ConsistentRead=self.consistent_read
        )

        item = data.get('Item') if data else None
        if not item:
            logger.info(f"No item in {self.table_name} for {self.partition_key}={identifier}")
            return None
        return unformat_item(item)

    async def create(self, record: Mapping[str, Any]) -> Mapping[str, Any]:
        """Write a record, replacing any existing record with the same key.

        No existence check or condition expression is applied.

        Args:
            record: Native record; must contain the partition key

        Returns:
            The record passed in, unchanged

        Raises:
            UnsupportedTypeError: If a field cannot be formatted (raised before any request)
            StoreError: If the PutItem request fails
        """
        item = format_item(record)
        await self._send("PutItem", TableName=self.table_name, Item=item)
        logger.info(f"Put item in {self.table_name}: {record.get(self.partition_key)}")
        return record

    async def _send(self, operation: str, **params: Any) -> Dict[str, Any]:
        try:
            return await to_future(self.context.request(operation, **params))
        except StoreError:
            raise
        except Exception as e:
            logger.error(f"{operation} on {self.table_name} failed: {e}")
            raise StoreError(
                f"{operation} on {self.table_name} failed: {e}",
                operation=operation,
                table_name=self.table_name,
                original_error=e
            ) from e
