"""
Database connection and management module.

Provides async MongoDB connectivity through the Motor driver.
"""

from mongoconn.db.connection import (
    Connection,
    ConnectionBuilder,
    build_connection_string,
    connect,
)
from mongoconn.db.exceptions import (
    ConnectionConfigError,
    ConnectionLayerError,
    DegenerateConnectError,
    IndexProvisionError,
)
from mongoconn.db.indexes import create_index, ensure_indexes

__all__ = [
    "Connection",
    "ConnectionBuilder",
    "build_connection_string",
    "connect",
    "create_index",
    "ensure_indexes",
    "ConnectionLayerError",
    "ConnectionConfigError",
    "DegenerateConnectError",
    "IndexProvisionError",
]
