"""
Pytest configuration and fixtures for testing.

Provides mock Motor client, database and collection objects for unit tests,
and a live database fixture for the opt-in integration tests.
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId

from mongoconn.db.connection import Connection, ConnectionBuilder

# =============================================================================
# Mock Driver Fixtures
# =============================================================================


@pytest.fixture
def mock_collection() -> MagicMock:
    """Mock Motor collection whose create_index returns a generated name."""
    collection = MagicMock()
    collection.name = "orders"

    async def _create_index(keys, **options):
        return options.get("name") or "_".join(f"{field}_{direction}" for field, direction in keys)

    collection.create_index = AsyncMock(side_effect=_create_index)
    return collection


@pytest.fixture
def mock_database(mock_collection: MagicMock) -> MagicMock:
    """Mock Motor database."""
    database = MagicMock()
    database.name = "shop"
    database.create_collection = AsyncMock(return_value=mock_collection)
    database.drop_collection = AsyncMock(return_value={"ok": 1.0})
    database.__getitem__.return_value = mock_collection
    return database


@pytest.fixture
def mock_client(mock_database: MagicMock) -> MagicMock:
    """Mock Motor client that answers ping and hands out mock_database."""
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    client.server_info = AsyncMock(return_value={"version": "7.0.4"})
    client.__getitem__.return_value = mock_database
    return client


@pytest.fixture
def client_factory(mock_client: MagicMock) -> MagicMock:
    """Stand-in for AsyncIOMotorClient."""
    return MagicMock(return_value=mock_client)


@pytest.fixture
def builder(client_factory: MagicMock) -> ConnectionBuilder:
    """ConnectionBuilder wired to the mock driver."""
    return ConnectionBuilder(client_factory)


@pytest_asyncio.fixture
async def connection(builder: ConnectionBuilder) -> Connection:
    """Connection opened against the mock driver."""
    return await builder.build({"host": "localhost", "port": 27017, "database": "shop"})


# =============================================================================
# Live Database Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def live_connection() -> AsyncGenerator[Connection, None]:
    """
    Connection to a real MongoDB server.

    Skipped unless TEST_MONGO_URI is set. Uses a throwaway database that is
    dropped after the test.
    """
    mongo_uri = os.getenv("TEST_MONGO_URI")
    if not mongo_uri:
        pytest.skip("TEST_MONGO_URI not set")

    db_name = f"test_mongoconn_{ObjectId()}"
    builder = ConnectionBuilder()
    connection = await builder.build(
        {"url": mongo_uri, "database": db_name, "connectTimeoutMS": 2000}
    )

    try:
        yield connection
    finally:
        await connection.client.drop_database(db_name)
        connection.close()
