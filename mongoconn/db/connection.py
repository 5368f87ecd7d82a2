"""
MongoDB connection construction and lifecycle using the Motor driver.

ConnectionBuilder turns a configuration record into a connection target and
driver options, opens the client and returns a Connection that owns the
database handle for every later collection operation.
"""

import asyncio
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import parse_qs, quote_plus, unquote, urlsplit, urlunsplit

import structlog
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from mongoconn.db.exceptions import ConnectionConfigError, DegenerateConnectError
from mongoconn.db.indexes import ensure_indexes
from mongoconn.models.collection import CollectionSpec
from mongoconn.models.options import ConnectionConfig, ResolvedConnectionOptions

logger = structlog.get_logger(__name__)

SCHEME = "mongodb"

# Database opened when neither the url path nor the config names one
DEFAULT_DATABASE = "admin"

# Query values that do not turn TLS on
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})

ClientFactory = Callable[..., Any]
ConfigInput = ConnectionConfig | Mapping[str, Any]


def build_connection_string(config: ConnectionConfig) -> str:
    """
    Build ``mongodb://[user:password@]host:port/[database]`` from discrete fields.

    Raises:
        ConnectionConfigError: If credentials are set without a database.
    """
    target = f"{SCHEME}://"

    if config.uses_auth:
        if not config.database:
            raise ConnectionConfigError(
                "A database config option is required when authentication is used."
            )
        target += f"{quote_plus(config.user)}:{quote_plus(config.password_value)}@"

    # host and port are not validated here; the driver rejects a malformed target
    target += f"{config.host}:{config.port}/"

    if config.database:
        target += config.database

    return target


def redact_target(target: str) -> str:
    """Hide credentials in a connection string for logging."""
    parts = urlsplit(target)
    if "@" not in parts.netloc:
        return target
    hosts = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit(parts._replace(netloc=f"***@{hosts}"))


def _url_query(url: str) -> dict[str, str]:
    """Last value of each query parameter, keyed case-insensitively."""
    query = parse_qs(urlsplit(url).query)
    return {key.lower(): values[-1] for key, values in query.items()}


def _url_database(url: str) -> str | None:
    path = unquote(urlsplit(url).path).lstrip("/")
    return path or None


class Connection:
    """
    A live MongoDB connection owning one client and its database handle.

    Created by ConnectionBuilder.build(); all collection operations go
    through it. The handle is not replaced after construction.

    Usage:
        connection = await ConnectionBuilder().build({"url": "mongodb://localhost/app"})
        await connection.create_collection(
            "orders", {"indexes": [{"index": {"sku": 1}, "options": {"unique": True}}]}
        )
        connection.close()

    Or as context manager:
        async with await connect(config) as connection:
            ...
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        database: AsyncIOMotorDatabase,
        target: str,
        options: ResolvedConnectionOptions,
    ) -> None:
        self._client = client
        self._database = database
        self._target = target
        self._options = options

    @property
    def client(self) -> AsyncIOMotorClient:
        """Get the Motor client instance."""
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """Get the database instance."""
        return self._database

    @property
    def target(self) -> str:
        """Connection string the client was opened with."""
        return self._target

    @property
    def options(self) -> ResolvedConnectionOptions:
        """Driver options the client was opened with."""
        return self._options

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        """Direct access to a collection handle."""
        return self._database[name]

    async def create_collection(
        self,
        name: str,
        spec: CollectionSpec | Mapping[str, Any] | None = None,
    ) -> AsyncIOMotorCollection:
        """
        Create a collection and its declared indexes.

        The collection is not dropped when index creation fails, so it may
        exist with only some of its indexes.

        Args:
            name: Collection name.
            spec: Collection specification with its ``indexes``.

        Returns:
            The created collection.

        Raises:
            IndexProvisionError: If any declared index could not be created.
        """
        collection_spec = CollectionSpec.from_value(spec)

        collection = await self._database.create_collection(name)
        await ensure_indexes(collection, collection_spec.indexes)

        logger.info(
            "Collection created",
            collection=name,
            indexes=len(collection_spec.indexes),
        )
        return collection

    async def drop_collection(self, name: str) -> Any:
        """Drop a collection. Returns the driver response."""
        return await self._database.drop_collection(name)

    async def health_check(self) -> dict[str, Any]:
        """Ping the server. Driver failures are reported in the result, not raised."""
        loop = asyncio.get_running_loop()
        start = loop.time()
        try:
            await self._client.admin.command("ping")
            server_info = await self._client.server_info()
        except PyMongoError as e:
            return {"healthy": False, "error": str(e)}

        return {
            "healthy": True,
            "latency_ms": round((loop.time() - start) * 1000, 2),
            "server_version": server_info.get("version", "unknown"),
        }

    def close(self) -> None:
        """Close the client and release its connection pool."""
        logger.info("Disconnecting from MongoDB", database=self._database.name)
        self._client.close()

    async def __aenter__(self) -> "Connection":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class ConnectionBuilder:
    """
    Builds a Connection from a configuration record.

    The client factory is the driver's connect primitive; it is called with
    the connection target and the resolved options as keyword arguments.
    """

    def __init__(self, client_factory: ClientFactory = AsyncIOMotorClient) -> None:
        self._client_factory = client_factory

    def resolve(self, config: ConfigInput) -> tuple[str, ResolvedConnectionOptions]:
        """
        Compute the connection target and driver options without any I/O.

        When ``url`` is set it is used verbatim, and its ``ssl``,
        ``authSource`` and ``replicaSet`` query parameters take precedence
        over the matching discrete fields.

        Raises:
            ConnectionConfigError: If credentials are set without a database.
        """
        config = ConnectionConfig.from_value(config)
        options = ResolvedConnectionOptions.from_config(config)

        if not config.url:
            return build_connection_string(config), options

        query = _url_query(config.url)
        overrides: dict[str, Any] = {}

        ssl = query.get("ssl", query.get("tls"))
        if ssl and ssl.lower() not in _FALSE_VALUES:
            overrides["ssl"] = True
        if query.get("authsource"):
            overrides["auth_source"] = query["authsource"]
        if query.get("replicaset"):
            overrides["replica_set"] = query["replicaset"]

        if overrides:
            options = options.model_copy(update=overrides)

        return config.url, options

    async def build(self, config: ConfigInput) -> Connection:
        """
        Open a connection to MongoDB.

        Makes exactly one connection attempt; nothing is retried. Driver
        errors propagate unchanged.

        Returns:
            The established Connection.

        Raises:
            ConnectionConfigError: If the configuration is invalid.
            DegenerateConnectError: If the driver returned no client or database.
        """
        config = ConnectionConfig.from_value(config)
        target, options = self.resolve(config)

        unsupported = options.unsupported_options()
        if unsupported:
            logger.debug("Options without a driver equivalent not passed", options=unsupported)

        logger.info("Connecting to MongoDB", target=redact_target(target))

        client = self._client_factory(target, **options.to_client_kwargs())
        if client is None:
            raise DegenerateConnectError("no database object returned")

        try:
            await client.admin.command("ping")
        except BaseException:
            client.close()
            raise

        database_name = _url_database(config.url) if config.url else None
        database_name = database_name or config.database or DEFAULT_DATABASE
        database = client[database_name]

        if database is None:
            client.close()
            raise DegenerateConnectError("no database object returned")

        logger.info("Successfully connected to MongoDB", database=database_name)
        return Connection(client, database, target, options)


async def connect(
    config: ConfigInput,
    client_factory: ClientFactory = AsyncIOMotorClient,
) -> Connection:
    """
    Open a connection with a default ConnectionBuilder.

    Example:
        connection = await connect(get_settings().mongo)
        await connection.drop_collection("orders")
    """
    return await ConnectionBuilder(client_factory).build(config)
