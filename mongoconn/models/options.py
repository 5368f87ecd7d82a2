"""
Connection configuration and resolved driver options.

ConnectionConfig is the flat configuration record a caller hands in.
ResolvedConnectionOptions is the immutable option set computed from it for a
single connection attempt, translated to pymongo keyword arguments on demand.
"""

from collections.abc import Mapping
from typing import Any, Self

from bson.raw_bson import RawBSONDocument
from pydantic import BaseModel, ConfigDict, Field, SecretStr

# Option fields that map 1:1 onto a pymongo client keyword argument
_DRIVER_OPTION_NAMES: dict[str, str] = {
    "ssl": "tls",
    "ssl_ca": "tlsCAFile",
    "ssl_pass": "tlsCertificateKeyFilePassword",
    "ssl_crl": "tlsCRLFile",
    "pool_size": "maxPoolSize",
    "connect_timeout_ms": "connectTimeoutMS",
    "socket_timeout_ms": "socketTimeoutMS",
    "replica_set": "replicaSet",
    "ha_interval": "heartbeatFrequencyMS",
    "max_staleness_seconds": "maxStalenessSeconds",
    "w": "w",
    "j": "journal",
    "wtimeout": "wTimeoutMS",
    "read_preference": "readPreference",
    "auth_source": "authSource",
    "appname": "appname",
    "event_listeners": "event_listeners",
}

# Option fields handled by to_client_kwargs() with a conversion
_CONVERTED_OPTIONS = frozenset(
    {
        "ssl_validate",
        "check_server_identity",
        "ssl_cert",
        "ssl_key",
        "secondary_acceptable_latency_ms",
        "acceptable_latency_ms",
        "read_concern",
        "raw",
    }
)


class DriverOptions(BaseModel):
    """
    Driver-level connection options.

    Every field defaults to None, meaning "use the driver default". Fields
    accept either their Python name or the camelCase configuration key.
    """

    model_config = ConfigDict(
        # Accept "pool_size" as well as "poolSize"
        populate_by_name=True,
        # Unknown configuration keys are passed over silently
        extra="ignore",
        # Logger hooks and event listeners are plain objects
        arbitrary_types_allowed=True,
    )

    # TLS
    ssl: bool | None = Field(default=None, description="Enable TLS")
    ssl_validate: bool | None = Field(
        default=None, alias="sslValidate", description="Validate the server certificate"
    )
    ssl_ca: str | None = Field(default=None, alias="sslCA", description="CA bundle path")
    ssl_cert: str | None = Field(
        default=None, alias="sslCert", description="Client certificate path"
    )
    ssl_key: str | None = Field(default=None, alias="sslKey", description="Client key path")
    ssl_pass: SecretStr | None = Field(
        default=None, alias="sslPass", description="Client key password"
    )
    ssl_crl: str | None = Field(
        default=None, alias="sslCRL", description="Certificate revocation list path"
    )
    check_server_identity: bool | None = Field(
        default=None, alias="checkServerIdentity", description="Verify the server hostname"
    )
    ciphers: str | None = Field(default=None, description="Allowed TLS ciphers")

    # Pooling and timeouts
    pool_size: int | None = Field(default=None, alias="poolSize", ge=0)
    connect_timeout_ms: int | None = Field(default=None, alias="connectTimeoutMS", ge=0)
    socket_timeout_ms: int | None = Field(default=None, alias="socketTimeoutMS", ge=0)
    keep_alive: bool | None = Field(default=None, alias="keepAlive")
    keep_alive_initial_delay: int | None = Field(
        default=None, alias="keepAliveInitialDelay", ge=0
    )

    # Replication
    replica_set: str | None = Field(default=None, alias="replicaSet")
    ha: bool | None = None
    ha_interval: int | None = Field(default=None, alias="haInterval", ge=0)
    secondary_acceptable_latency_ms: int | None = Field(
        default=None, alias="secondaryAcceptableLatencyMS", ge=0
    )
    acceptable_latency_ms: int | None = Field(default=None, alias="acceptableLatencyMS", ge=0)
    max_staleness_seconds: int | None = Field(default=None, alias="maxStalenessSeconds")
    connect_with_no_primary: bool | None = Field(default=None, alias="connectWithNoPrimary")

    # Write and read concern
    w: int | str | None = None
    j: bool | None = None
    wtimeout: int | None = Field(default=None, ge=0)
    read_preference: str | None = Field(default=None, alias="readPreference")
    read_concern: str | dict[str, Any] | None = Field(default=None, alias="readConcern")

    # BSON and driver behavior
    promote_values: bool | None = Field(default=None, alias="promoteValues")
    promote_buffers: bool | None = Field(default=None, alias="promoteBuffers")
    promote_longs: bool | None = Field(default=None, alias="promoteLongs")
    raw: bool | None = None
    ignore_undefined: bool | None = Field(default=None, alias="ignoreUndefined")
    serialize_functions: bool | None = Field(default=None, alias="serializeFunctions")
    force_server_object_id: bool | None = Field(default=None, alias="forceServerObjectId")

    # Authentication and identification
    auth_source: str | None = Field(default=None, alias="authSource")
    appname: str | None = None

    # Logger hooks
    logger: Any = None
    logger_level: str | None = Field(default=None, alias="loggerLevel")
    event_listeners: list[Any] | None = Field(default=None, alias="eventListeners")


class ConnectionConfig(DriverOptions):
    """
    Configuration record for a single MongoDB connection.

    Either ``url`` is supplied, or the discrete host/port/user/password/
    database fields are used to build the connection string.

    Usage:
        config = ConnectionConfig.from_value({"host": "localhost", "port": 27017})
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        arbitrary_types_allowed=True,
        frozen=True,
    )

    url: str | None = Field(default=None, description="Complete connection string")
    host: str | None = Field(default=None, description="Server host")
    port: int | None = Field(default=None, description="Server port")
    user: str | None = Field(default=None, description="Username")
    password: SecretStr | None = Field(default=None, description="Password")
    database: str | None = Field(default=None, description="Database name")

    @classmethod
    def from_value(cls, value: "ConnectionConfig | Mapping[str, Any] | None") -> Self:
        """Coerce a mapping (or None) into a ConnectionConfig."""
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value or {}))

    @property
    def password_value(self) -> str | None:
        """Plain-text password, or None when unset or empty."""
        if self.password is None:
            return None
        return self.password.get_secret_value() or None

    @property
    def uses_auth(self) -> bool:
        """Whether both credentials are present."""
        return bool(self.user and self.password_value)


class ResolvedConnectionOptions(DriverOptions):
    """Immutable driver options for one connection attempt."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        arbitrary_types_allowed=True,
        frozen=True,
    )

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> Self:
        """Copy every option field verbatim from the configuration."""
        return cls(**{name: getattr(config, name) for name in DriverOptions.model_fields})

    def to_client_kwargs(self) -> dict[str, Any]:
        """
        Translate the set options into pymongo client keyword arguments.

        Unset options are omitted so the driver applies its own defaults.
        Options without a pymongo counterpart are omitted as well; see
        unsupported_options().

        Returns:
            Keyword arguments for AsyncIOMotorClient
        """
        kwargs: dict[str, Any] = {}

        for field_name, driver_name in _DRIVER_OPTION_NAMES.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            kwargs[driver_name] = value

        if self.ssl_validate is not None:
            kwargs["tlsAllowInvalidCertificates"] = not self.ssl_validate

        if self.check_server_identity is not None:
            kwargs["tlsAllowInvalidHostnames"] = not self.check_server_identity

        # pymongo reads certificate and key from one PEM file
        certificate = self.ssl_cert or self.ssl_key
        if certificate is not None:
            kwargs["tlsCertificateKeyFile"] = certificate

        latency = self.secondary_acceptable_latency_ms
        if latency is None:
            latency = self.acceptable_latency_ms
        if latency is not None:
            kwargs["localThresholdMS"] = latency

        if isinstance(self.read_concern, Mapping):
            level = self.read_concern.get("level")
        else:
            level = self.read_concern
        if level is not None:
            kwargs["readConcernLevel"] = level

        if self.raw:
            kwargs["document_class"] = RawBSONDocument

        return kwargs

    def unsupported_options(self) -> list[str]:
        """Names of set options that pymongo has no equivalent for."""
        return [
            name
            for name in DriverOptions.model_fields
            if name not in _DRIVER_OPTION_NAMES
            and name not in _CONVERTED_OPTIONS
            and getattr(self, name) is not None
        ]
