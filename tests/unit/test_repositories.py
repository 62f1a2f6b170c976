"""
Tests for RecordRepository / UserRepository against a moto-backed DynamoDB.
"""

import asyncio
from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError

from dynamodb_items import (
    ConfigurationError,
    DynamoDBConfig,
    RecordRepository,
    StoreContext,
    StoreError,
    UnsupportedTypeError,
    UserRepository,
)


def run(coro):
    return asyncio.run(coro)


class TestUserRepositoryGet:
    """get() behaviour."""

    def test_get_missing_returns_none(self, user_repository):
        assert run(user_repository.get("nobody@example.com")) is None

    def test_get_decodes_stored_item(self, user_repository, mock_dynamodb_client, users_table):
        mock_dynamodb_client.put_item(
            TableName=users_table,
            Item={
                'email_address': {'S': 'jelle@defekt.nl'},
                'logins': {'N': '12'},
                'rating': {'N': '4.5'},
                'roles': {'SS': ['admin']},
            }
        )

        user = run(user_repository.get("jelle@defekt.nl"))

        assert user == {
            'email_address': 'jelle@defekt.nl',
            'logins': 12,
            'rating': 4.5,
            'roles': ['admin'],
        }

    def test_get_by_email_address_alias(self, user_repository, sample_user):
        run(user_repository.create(sample_user))

        assert run(user_repository.get_by_email_address(sample_user["email_address"]))["first_name"] == "Jelle"

    def test_get_uses_consistent_read_and_string_key(self, mock_dynamodb_config):
        context = StoreContext(mock_dynamodb_config)
        context._client = Mock()
        context._client.get_item.return_value = {}
        repository = UserRepository(context)

        assert run(repository.get("a@b.c")) is None
        context._client.get_item.assert_called_once_with(
            TableName="test_users",
            Key={'email_address': {'S': 'a@b.c'}},
            ConsistentRead=True
        )

    def test_eventual_read_when_configured(self, mock_dynamodb_config):
        context = StoreContext(mock_dynamodb_config)
        context._client = Mock()
        context._client.get_item.return_value = {}
        repository = UserRepository(context, consistent_read=False)

        run(repository.get("a@b.c"))

        assert context._client.get_item.call_args.kwargs['ConsistentRead'] is False


class TestUserRepositoryCreate:
    """create() behaviour."""

    def test_create_returns_original_record(self, user_repository, sample_user):
        result = run(user_repository.create(sample_user))

        assert result is sample_user

    def test_create_then_get(self, user_repository, sample_user):
        async def scenario():
            await user_repository.create(sample_user)
            return await user_repository.get(sample_user["email_address"])

        user = run(scenario())

        assert user["email_address"] == sample_user["email_address"]
        assert user["first_name"] == "Jelle"
        assert user["logins"] == 12 and isinstance(user["logins"], int)
        assert user["rating"] == 4.5
        assert set(user["roles"]) == {"admin", "editor"}
        assert sorted(user["scores"]) == [3, 7.25]

    def test_stored_wire_format(self, user_repository, mock_dynamodb_client, users_table):
        run(user_repository.create({'email_address': 'n@x.y', 'n': 10, 'ratio': 1.50, 'tags': ['a', 'a', 'b']}))

        item = mock_dynamodb_client.get_item(
            TableName=users_table,
            Key={'email_address': {'S': 'n@x.y'}}
        )['Item']

        assert item['n'] == {'N': '10'}
        assert item['ratio'] == {'N': '1.5'}
        assert sorted(item['tags']['SS']) == ['a', 'b']

    def test_whole_float_comes_back_as_float(self, user_repository):
        async def scenario():
            await user_repository.create({'email_address': 'f@x.y', 'n': 10, 'weight': 10.0})
            return await user_repository.get('f@x.y')

        user = run(scenario())

        assert isinstance(user['n'], int)
        assert user['weight'] == 10.0
        assert isinstance(user['weight'], float)

    def test_create_overwrites_existing_record(self, user_repository):
        async def scenario():
            await user_repository.create({'email_address': 'o@x.y', 'first_name': 'Old', 'age': 30})
            await user_repository.create({'email_address': 'o@x.y', 'first_name': 'New'})
            return await user_repository.get('o@x.y')

        assert run(scenario()) == {'email_address': 'o@x.y', 'first_name': 'New'}

    def test_unsupported_type_raises_before_any_request(self, user_repository):
        with patch.object(StoreContext, 'request') as mock_request:
            with pytest.raises(UnsupportedTypeError, match="binary type unsupported"):
                run(user_repository.create({'email_address': 'b@x.y', 'active': True}))

            mock_request.assert_not_called()

    def test_unsupported_type_writes_nothing(self, user_repository, mock_dynamodb_client, users_table):
        with pytest.raises(UnsupportedTypeError):
            run(user_repository.create({'email_address': 'b@x.y', 'blob': b'\x00'}))

        assert mock_dynamodb_client.scan(TableName=users_table)['Count'] == 0


class TestStoreErrors:
    """Failures surfacing as StoreError."""

    @pytest.fixture
    def missing_table_repository(self, mock_dynamodb_client):
        config = DynamoDBConfig(
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
            table_names={"users": "does_not_exist"}
        )
        return UserRepository(StoreContext(config))

    def test_get_on_missing_table(self, missing_table_repository):
        with pytest.raises(StoreError) as exc_info:
            run(missing_table_repository.get("a@b.c"))

        error = exc_info.value
        assert error.operation == "GetItem"
        assert error.table_name == "does_not_exist"
        assert isinstance(error.original_error, ClientError)
        assert error.error_code == "ResourceNotFoundException"

    def test_create_on_missing_table(self, missing_table_repository):
        with pytest.raises(StoreError) as exc_info:
            run(missing_table_repository.create({'email_address': 'a@b.c'}))

        assert exc_info.value.operation == "PutItem"
        assert isinstance(exc_info.value.original_error, ClientError)

    def test_missing_partition_key_is_store_error(self, user_repository):
        with pytest.raises(StoreError) as exc_info:
            run(user_repository.create({'first_name': 'No Key'}))

        assert exc_info.value.error_code == "ValidationException"

    def test_unknown_logical_table(self, store_context):
        with pytest.raises(ConfigurationError, match="No table name configured for 'orders'"):
            RecordRepository(store_context, "orders", "order_id")


class TestConcurrency:
    """Independent calls share no state."""

    def test_concurrent_creates_and_gets(self, user_repository):
        records = [
            {'email_address': f'user{i}@x.y', 'index': i, 'tags': [f't{i}']}
            for i in range(10)
        ]

        async def scenario():
            created = await asyncio.gather(*(user_repository.create(r) for r in records))
            fetched = await asyncio.gather(*(user_repository.get(r['email_address']) for r in records))
            return created, fetched

        created, fetched = run(scenario())

        assert created == records
        assert fetched == records

    def test_concurrent_hit_and_miss(self, user_repository, sample_user):
        async def scenario():
            await user_repository.create(sample_user)
            return await asyncio.gather(
                user_repository.get(sample_user['email_address']),
                user_repository.get('missing@x.y'),
            )

        hit, miss = run(scenario())

        assert hit['first_name'] == 'Jelle'
        assert miss is None
