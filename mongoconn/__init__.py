"""
MongoDB connection construction and index provisioning on Motor.
"""

from mongoconn.db import (
    Connection,
    ConnectionBuilder,
    ConnectionConfigError,
    ConnectionLayerError,
    DegenerateConnectError,
    IndexProvisionError,
    connect,
    ensure_indexes,
)
from mongoconn.models import CollectionSpec, ConnectionConfig, IndexSpec, ResolvedConnectionOptions

__version__ = "0.1.0"

__all__ = [
    "Connection",
    "ConnectionBuilder",
    "connect",
    "ensure_indexes",
    "ConnectionConfig",
    "ResolvedConnectionOptions",
    "CollectionSpec",
    "IndexSpec",
    "ConnectionLayerError",
    "ConnectionConfigError",
    "DegenerateConnectError",
    "IndexProvisionError",
]
