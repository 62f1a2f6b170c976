#!/usr/bin/env python3
"""
Get-or-create example for dynamodb_items.

1. Load configuration (config.json if given, otherwise environment variables)
2. Build a store context and the user repository
3. Look a user up; create one when it does not exist yet

Example config.json (keep it out of version control, one per environment)::

    {
        "dynamodb": {
            "region": "eu-west-1",
            "access_key": "...",
            "secret_key": "...",
            "table_names": {"users": "staging.users.foo.com"}
        }
    }

Usage:
    python examples/get_or_create_user.py [config.json]
"""

import asyncio
import logging
import sys

from dynamodb_items import (
    DynamoDBConfig,
    DynamoDBItemsError,
    UserRepository,
    create_store_context,
)


async def get_or_create(users: UserRepository):
    """Chain a lookup and a create; each step runs after the previous one settles."""
    user = await users.get("jelleherold@gmail.com")
    if user:
        print("user: ", user)
        return user

    print("user not found, creating one")
    new_user = await users.create({
        "email_address": "jelle@defekt.nl",
        "first_name": "Jelle",
        "last_name": "Herold",
    })
    print("created user with email address", new_user["email_address"])
    return new_user


def main():
    """Run the example."""
    logging.basicConfig(level=logging.INFO)

    try:
        if len(sys.argv) > 1:
            config = DynamoDBConfig.from_json_file(sys.argv[1])
        else:
            config = DynamoDBConfig.from_env()

        users = UserRepository(create_store_context(config))
        asyncio.run(get_or_create(users))
    except DynamoDBItemsError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
