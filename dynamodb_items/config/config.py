import json
import os
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigurationError

# Load environment variables from .env file if it exists
load_dotenv()

TABLE_ENV_PREFIX = "DYNAMODB_TABLE_"


def _table_names_from_env() -> Dict[str, str]:
    """Collect DYNAMODB_TABLE_<LOGICAL>=<physical> entries from the environment."""
    return {
        key[len(TABLE_ENV_PREFIX):].lower(): value
        for key, value in os.environ.items()
        if key.startswith(TABLE_ENV_PREFIX) and key != TABLE_ENV_PREFIX and value
    }


class DynamoDBConfig(BaseModel):
    """Configuration for DynamoDB connection and table naming."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # DynamoDB specific settings
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    # Logical table name -> physical table name, e.g. {"users": "staging.users.foo.com"}
    table_names: Dict[str, str] = Field(
        default_factory=_table_names_from_env,
        description="Mapping from logical table names to physical DynamoDB table names"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=10,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of attempts botocore makes for a failed request"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Connect and read timeout in seconds"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for DynamoDB operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('table_names')
    @classmethod
    def validate_table_names(cls, v):
        """Reject blank logical or physical table names."""
        for logical, physical in v.items():
            if not logical or not physical:
                raise ValueError(f"Invalid table mapping: {logical!r} -> {physical!r}")
        return v

    @field_validator('retries', 'max_pool_connections')
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    def get_table_name(self, logical_name: str) -> str:
        """Resolve a logical table name to the physical DynamoDB table name.

        Args:
            logical_name: Logical table name (e.g., "users")

        Returns:
            Physical table name from ``table_names``

        Raises:
            ConfigurationError: If the logical name is not configured
        """
        try:
            return self.table_names[logical_name]
        except KeyError:
            raise ConfigurationError(
                f"No table name configured for '{logical_name}'",
                context={'configured': sorted(self.table_names)}
            ) from None

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        """Create configuration from environment variables.

        Returns:
            DynamoDBConfig instance

        Raises:
            ConfigurationError: If the environment holds invalid values
        """
        try:
            return cls()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid DynamoDB configuration: {e}", e) from e

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> 'DynamoDBConfig':
        """Create configuration from a JSON config file.

        Expected shape::

            {
                "dynamodb": {
                    "region": "eu-west-1",
                    "access_key": "...",
                    "secret_key": "...",
                    "table_names": {"users": "staging.users.foo.com"}
                }
            }

        An optional ``endpoint_url`` key is honoured for local development.

        Args:
            path: Path to the JSON file

        Returns:
            DynamoDBConfig instance

        Raises:
            ConfigurationError: If the file is missing, unreadable or incomplete
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot read config file '{path}': {e}", e) from e

        section = raw.get("dynamodb") if isinstance(raw, dict) else None
        if not isinstance(section, dict):
            raise ConfigurationError(f"Config file '{path}' has no 'dynamodb' section")

        missing = [k for k in ("region", "access_key", "secret_key", "table_names") if k not in section]
        if missing:
            raise ConfigurationError(
                f"Config file '{path}' is missing required fields",
                context={'missing': missing}
            )

        fields = {
            'region_name': section["region"],
            'aws_access_key_id': section["access_key"],
            'aws_secret_access_key': section["secret_key"],
            'table_names': section["table_names"],
        }
        if section.get("endpoint_url"):
            fields['endpoint_url'] = section["endpoint_url"]

        try:
            return cls(**fields)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid DynamoDB configuration in '{path}': {e}", e) from e

    @classmethod
    def for_local_development(cls, table_names: Optional[Dict[str, str]] = None) -> 'DynamoDBConfig':
        """Create configuration for DynamoDB Local.

        Args:
            table_names: Optional logical -> physical mapping (defaults to users -> "users")

        Returns:
            DynamoDBConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url="http://localhost:8000",
            table_names=table_names or {"users": "users"},
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
