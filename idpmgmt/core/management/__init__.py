"""Management API client library.

This package provides a typed interface to the identity provider's
Management API v2.

Architecture:
- api.py: HTTP client with bearer authentication and error mapping
- models.py: Client representations and the jwt_configuration codec
- options.py: Query options for list/read calls
- clients.py: Client lifecycle operations (create, read, update, delete, list, rotate secret)
- manager.py: Facade bundling the services
- exceptions.py: Typed exceptions for error handling

Usage:
    from idpmgmt.core.management import Management, Client, ClientUpdate

    m = Management("tenant.eu.auth0.com", token)
    client = m.client.create(Client(name="Billing", description="Billing service"))

    client.description = "Billing and invoicing"
    m.client.update(client.client_id, ClientUpdate.from_client(client))
"""
from .api import ManagementAPI, REQUEST_TIMEOUT
from .clients import ClientService
from .exceptions import (
    ManagementError,
    JWTConfigurationError,
    MalformedNumericString,
    TypeMismatch,
    ManagementAPIError,
    RemoteValidationError,
    InsufficientPermissionsError,
    NotFoundError,
    RateLimitError,
    TransportError,
    MalformedResponseError,
)
from .manager import Management
from .models import (
    UNSET,
    is_set,
    encode_lifetime,
    decode_lifetime,
    Client,
    ClientJWTConfiguration,
    ClientList,
    ClientUpdate,
    JWTConfigurationUpdate,
)
from .options import (
    RequestOption,
    include_fields,
    exclude_fields,
    page,
    per_page,
    include_totals,
    parameter,
    apply_options,
)

__all__ = [
    # Client
    "Management",
    "ManagementAPI",
    "ClientService",
    "REQUEST_TIMEOUT",

    # Exceptions
    "ManagementError",
    "JWTConfigurationError",
    "MalformedNumericString",
    "TypeMismatch",
    "ManagementAPIError",
    "RemoteValidationError",
    "InsufficientPermissionsError",
    "NotFoundError",
    "RateLimitError",
    "TransportError",
    "MalformedResponseError",

    # Models
    "UNSET",
    "is_set",
    "encode_lifetime",
    "decode_lifetime",
    "Client",
    "ClientJWTConfiguration",
    "ClientList",
    "ClientUpdate",
    "JWTConfigurationUpdate",

    # Options
    "RequestOption",
    "include_fields",
    "exclude_fields",
    "page",
    "per_page",
    "include_totals",
    "parameter",
    "apply_options",
]
