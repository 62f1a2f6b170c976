"""
Store Context

Holds the configuration and the low-level boto3 DynamoDB client for the
lifetime of the process. Repositories receive a context in their constructor
instead of reaching for module-level globals.
"""

import logging
from typing import Any, Optional

import boto3
from botocore.config import Config

from ..config import DynamoDBConfig
from ..exceptions import ConnectionError
from ..utils import configure_logging
from .request import BotoRequest

logger = logging.getLogger(__name__)


class StoreContext:
    """Configuration plus a lazily created DynamoDB client.

    The boto3 client is thread-safe, so one context can serve any number of
    concurrent requests. There is nothing to tear down.
    """

    def __init__(self, config: DynamoDBConfig):
        """Initialize store context.

        Args:
            config: DynamoDB configuration
        """
        self.config = config
        self._client = None
        configure_logging(config.enable_debug_logging)

    @property
    def client(self):
        """Lazy initialization of the low-level DynamoDB client."""
        if self._client is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    region_name=self.config.region_name
                )

                client_kwargs = {
                    'region_name': self.config.region_name
                }

                if self.config.endpoint_url:
                    client_kwargs['endpoint_url'] = self.config.endpoint_url

                # Retry and timeout behaviour is left entirely to botocore
                client_kwargs['config'] = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )

                self._client = session.client('dynamodb', **client_kwargs)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB client: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._client

    def table_name(self, logical_name: str) -> str:
        """Physical table name for a logical one (see DynamoDBConfig.get_table_name)."""
        return self.config.get_table_name(logical_name)

    def request(self, operation: str, **params: Any) -> BotoRequest:
        """
        Build a pending request for a client operation.

        Nothing is sent until the request's ``send()`` is called, usually via
        ``to_future``.

        Example:
            data = await to_future(context.request(
                "GetItem", TableName="users", Key=key, ConsistentRead=True
            ))
        """
        return BotoRequest(self.client, operation, params)


def create_store_context(config: Optional[DynamoDBConfig] = None) -> StoreContext:
    """
    Factory function to create a StoreContext.

    Args:
        config: DynamoDB configuration (loaded from the environment when omitted)

    Returns:
        StoreContext instance
    """
    return StoreContext(config or DynamoDBConfig.from_env())
