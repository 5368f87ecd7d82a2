"""
Pydantic models for connection configuration and collection specifications.
"""

from mongoconn.models.collection import CollectionSpec, IndexSpec
from mongoconn.models.options import (
    ConnectionConfig,
    DriverOptions,
    ResolvedConnectionOptions,
)

__all__ = [
    # Connection
    "ConnectionConfig",
    "DriverOptions",
    "ResolvedConnectionOptions",
    # Collections
    "CollectionSpec",
    "IndexSpec",
]
