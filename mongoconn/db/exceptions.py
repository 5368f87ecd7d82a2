"""
Exceptions raised by the connection layer.

Driver errors raised while connecting are not wrapped; callers see the
pymongo exception. The classes below cover the failures this package detects
itself, and subclass the matching pymongo error so one ``except`` clause
handles both.
"""

from typing import Any

from pymongo.errors import ConfigurationError, ConnectionFailure


class ConnectionLayerError(Exception):
    """Base exception for connection layer errors."""

    pass


class ConnectionConfigError(ConnectionLayerError, ConfigurationError):
    """Raised when the configuration cannot produce a valid connection target."""

    pass


class DegenerateConnectError(ConnectionLayerError, ConnectionFailure):
    """Raised when the driver connects but yields no usable database handle."""

    pass


class IndexProvisionError(ConnectionLayerError):
    """
    Raised when creating one of a collection's declared indexes fails.

    The driver error is available as ``__cause__``.
    """

    def __init__(self, collection: str | None, spec: Any, error: BaseException) -> None:
        self.collection = collection
        self.spec = spec
        self.error = error
        super().__init__(f"Failed to create index {spec.index} on {collection}: {error}")
