"""Client resource representations and their JSON (de)serialization.

Every field defaults to ``UNSET``; unset fields are omitted from the JSON
payload, which is how the Management API distinguishes "leave unchanged"
from an explicit value. ``0``, ``""`` and ``False`` are regular values and
are always sent.

Usage:
    client = Client(name="Billing", jwt_configuration=ClientJWTConfiguration(lifetime_in_seconds=3600))
    client.to_dict()
    # {'name': 'Billing', 'jwt_configuration': {'lifetime_in_seconds': 3600}}

    update = ClientUpdate.from_client(client)  # read-only fields dropped
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Union

from .exceptions import MalformedNumericString, TypeMismatch

LIFETIME_FIELD = "lifetime_in_seconds"

_INTEGER_STRING = re.compile(r"[+-]?[0-9]+")


class _Unset:
    """Marker for a field that is absent from the JSON object."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Unset":
        return self

    def __deepcopy__(self, memo) -> "_Unset":
        return self

    def __reduce__(self):
        return (_Unset, ())


UNSET = _Unset()


def is_set(value: Any) -> bool:
    """Return True when value is present (anything but UNSET)."""
    return value is not UNSET


# ─────────────────────────────────────────────────────────────────────────────
# lifetime_in_seconds codec
# ─────────────────────────────────────────────────────────────────────────────
def encode_lifetime(value: Union[int, _Unset]) -> Dict[str, int]:
    """Encode lifetime_in_seconds as a JSON object fragment.

    Args:
        value: Lifetime in seconds, or UNSET

    Returns:
        ``{}`` when unset, otherwise ``{"lifetime_in_seconds": value}``

    Raises:
        TypeError: If value is neither UNSET nor an integer
        ValueError: If value is negative
    """
    if value is UNSET:
        return {}
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{LIFETIME_FIELD} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{LIFETIME_FIELD} must be >= 0, got {value}")
    return {LIFETIME_FIELD: value}


def decode_lifetime(data: Dict[str, Any]) -> Union[int, _Unset]:
    """Decode lifetime_in_seconds from a jwt_configuration JSON object.

    The API has historically returned the value both as a number and as a
    numeric string; both decode to the same integer. The sign is not
    checked here: whatever the API reports is returned as is, while
    encode_lifetime refuses to send a negative value.

    Args:
        data: Decoded jwt_configuration object

    Returns:
        The lifetime in seconds, or UNSET when the key is absent or null

    Raises:
        MalformedNumericString: If the value is a string but not an integer
        TypeMismatch: If the value is neither a number nor a string
    """
    if LIFETIME_FIELD not in data:
        return UNSET
    raw = data[LIFETIME_FIELD]
    if raw is None:
        return UNSET
    # bool is an int subclass
    if isinstance(raw, bool):
        raise TypeMismatch(LIFETIME_FIELD, raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if raw.is_integer():
            return int(raw)
        raise TypeMismatch(LIFETIME_FIELD, raw)
    if isinstance(raw, str):
        if not _INTEGER_STRING.fullmatch(raw):
            raise MalformedNumericString(LIFETIME_FIELD, raw)
        return int(raw, 10)
    raise TypeMismatch(LIFETIME_FIELD, raw)


# ─────────────────────────────────────────────────────────────────────────────
# Representations
# ─────────────────────────────────────────────────────────────────────────────
class _Representation:
    """Dataclass mixin mapping fields to JSON keys of the same name."""

    _nested: ClassVar[Dict[str, type]] = {}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is UNSET:
                continue
            if isinstance(value, _Representation):
                value = value.to_dict()
            payload[f.name] = value
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build from a decoded JSON object, ignoring unknown keys and nulls."""
        if not isinstance(data, dict):
            raise TypeMismatch(cls.__name__, data)
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, raw in data.items():
            if key not in known or raw is None:
                continue
            nested = cls._nested.get(key)
            if nested:
                if not isinstance(raw, dict):
                    raise TypeMismatch(key, raw)
                raw = nested.from_dict(raw)
            kwargs[key] = raw
        return cls(**kwargs)


class _LifetimeCodecMixin:
    """Routes lifetime_in_seconds through the lenient codec."""

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload.pop(LIFETIME_FIELD, None)
        return {**encode_lifetime(self.lifetime_in_seconds), **payload}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        if not isinstance(data, dict):
            raise TypeMismatch("jwt_configuration", data)
        lifetime = decode_lifetime(data)
        rest = {key: value for key, value in data.items() if key != LIFETIME_FIELD}
        instance = super().from_dict(rest)
        instance.lifetime_in_seconds = lifetime
        return instance


@dataclass
class ClientJWTConfiguration(_LifetimeCodecMixin, _Representation):
    """JWT settings of a client as returned by the API."""

    lifetime_in_seconds: Union[int, _Unset] = UNSET
    secret_encoded: Union[bool, _Unset] = UNSET  # read-only
    scopes: Union[Dict[str, Any], _Unset] = UNSET
    alg: Union[str, _Unset] = UNSET


@dataclass
class JWTConfigurationUpdate(_LifetimeCodecMixin, _Representation):
    """Writable JWT settings; has no secret_encoded field."""

    lifetime_in_seconds: Union[int, _Unset] = UNSET
    scopes: Union[Dict[str, Any], _Unset] = UNSET
    alg: Union[str, _Unset] = UNSET


@dataclass
class Client(_Representation):
    """A client (application) registered with the identity provider."""

    _nested: ClassVar[Dict[str, type]] = {"jwt_configuration": ClientJWTConfiguration}

    client_id: Union[str, _Unset] = UNSET  # read-only
    name: Union[str, _Unset] = UNSET
    description: Union[str, _Unset] = UNSET
    client_secret: Union[str, _Unset] = UNSET
    app_type: Union[str, _Unset] = UNSET
    logo_uri: Union[str, _Unset] = UNSET
    is_first_party: Union[bool, _Unset] = UNSET
    oidc_conformant: Union[bool, _Unset] = UNSET
    callbacks: Union[List[str], _Unset] = UNSET
    allowed_origins: Union[List[str], _Unset] = UNSET
    web_origins: Union[List[str], _Unset] = UNSET
    allowed_logout_urls: Union[List[str], _Unset] = UNSET
    grant_types: Union[List[str], _Unset] = UNSET
    token_endpoint_auth_method: Union[str, _Unset] = UNSET
    client_metadata: Union[Dict[str, str], _Unset] = UNSET
    signing_keys: Union[List[Dict[str, Any]], _Unset] = UNSET  # read-only
    jwt_configuration: Union[ClientJWTConfiguration, _Unset] = UNSET

    def merge(self, other: "Client") -> None:
        """Copy every set field of other onto this instance."""
        for f in fields(other):
            value = getattr(other, f.name)
            if value is not UNSET:
                setattr(self, f.name, value)


@dataclass
class ClientUpdate(_Representation):
    """PATCH body for a client.

    Read-only fields (client_id, signing_keys, jwt_configuration.secret_encoded)
    have no attribute here, so they can never be sent on update.
    """

    _nested: ClassVar[Dict[str, type]] = {"jwt_configuration": JWTConfigurationUpdate}

    name: Union[str, _Unset] = UNSET
    description: Union[str, _Unset] = UNSET
    client_secret: Union[str, _Unset] = UNSET
    app_type: Union[str, _Unset] = UNSET
    logo_uri: Union[str, _Unset] = UNSET
    is_first_party: Union[bool, _Unset] = UNSET
    oidc_conformant: Union[bool, _Unset] = UNSET
    callbacks: Union[List[str], _Unset] = UNSET
    allowed_origins: Union[List[str], _Unset] = UNSET
    web_origins: Union[List[str], _Unset] = UNSET
    allowed_logout_urls: Union[List[str], _Unset] = UNSET
    grant_types: Union[List[str], _Unset] = UNSET
    token_endpoint_auth_method: Union[str, _Unset] = UNSET
    client_metadata: Union[Dict[str, str], _Unset] = UNSET
    jwt_configuration: Union[JWTConfigurationUpdate, _Unset] = UNSET

    def __post_init__(self) -> None:
        self.jwt_configuration = _writable_jwt_configuration(self.jwt_configuration)

    def to_dict(self) -> Dict[str, Any]:
        # jwt_configuration may have been reassigned after construction.
        self.jwt_configuration = _writable_jwt_configuration(self.jwt_configuration)
        return super().to_dict()

    @classmethod
    def from_client(cls, client: Client) -> "ClientUpdate":
        """Build an update from a full client, dropping read-only fields."""
        writable = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for f in fields(client):
            value = getattr(client, f.name)
            if f.name not in writable or value is UNSET:
                continue
            kwargs[f.name] = value
        return cls(**kwargs)


def _writable_jwt_configuration(value: Any) -> Union[JWTConfigurationUpdate, _Unset]:
    """Strip secret_encoded from a full configuration; reject anything else."""
    if value is UNSET or type(value) is JWTConfigurationUpdate:
        return value
    if isinstance(value, ClientJWTConfiguration):
        return JWTConfigurationUpdate(
            lifetime_in_seconds=value.lifetime_in_seconds,
            scopes=value.scopes,
            alg=value.alg,
        )
    raise TypeError(
        f"jwt_configuration must be a JWTConfigurationUpdate, got {type(value).__name__}"
    )


@dataclass
class ClientList:
    """One page of clients.

    start/limit/length/total are only reported when totals were requested.
    """

    clients: List[Client] = field(default_factory=list)
    start: Union[int, _Unset] = UNSET
    limit: Union[int, _Unset] = UNSET
    length: Union[int, _Unset] = UNSET
    total: Union[int, _Unset] = UNSET

    @classmethod
    def from_response(cls, data: Any) -> "ClientList":
        """Accept either a bare array or the paged envelope."""
        if isinstance(data, list):
            return cls(clients=[Client.from_dict(item) for item in data])
        if not isinstance(data, dict):
            raise TypeMismatch("clients", data)
        page = cls(clients=[Client.from_dict(item) for item in data.get("clients") or []])
        for key in ("start", "limit", "length", "total"):
            if data.get(key) is not None:
                setattr(page, key, data[key])
        return page
