"""Management API exceptions for error handling."""


class ManagementError(Exception):
    """Base exception for all Management API operations."""
    pass


class JWTConfigurationError(ManagementError, ValueError):
    """A jwt_configuration field could not be decoded.

    Attributes:
        field: JSON key that failed to decode
        value: Raw decoded JSON value
    """

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"{field}: {reason} (got {value!r})")


class MalformedNumericString(JWTConfigurationError):
    """String value is not a base-10 integer."""

    def __init__(self, field: str, value: str):
        super().__init__(field, value, "string is not a valid integer")


class TypeMismatch(JWTConfigurationError):
    """Value is neither a JSON number nor a JSON string."""

    def __init__(self, field: str, value):
        super().__init__(field, value, f"unexpected type {type(value).__name__}")


class ManagementAPIError(ManagementError):
    """HTTP error from the Management API.

    Attributes:
        status_code: HTTP status code
        error: Status text reported by the API (e.g. "Not Found")
        message: Error message from response
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, error: str, message: str, endpoint: str = ""):
        self.status_code = status_code
        self.error = error
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"{status_code} {error}: {message}")


class RemoteValidationError(ManagementAPIError):
    """Payload rejected by the remote service (400)."""
    pass


class InsufficientPermissionsError(ManagementAPIError):
    """Token is missing, expired or lacks the required scopes (401/403)."""
    pass


class NotFoundError(ManagementAPIError):
    """Resource identifier does not exist (404)."""
    pass


class RateLimitError(ManagementAPIError):
    """Too many requests (429)."""
    pass


class TransportError(ManagementError):
    """Request never produced an HTTP response.

    Attributes:
        endpoint: API endpoint being called
    """

    def __init__(self, endpoint: str, cause: Exception):
        self.endpoint = endpoint
        super().__init__(f"{endpoint}: {cause}")


class MalformedResponseError(ManagementError):
    """Successful response whose body is not JSON.

    Attributes:
        status_code: HTTP status code
        endpoint: API endpoint being called
    """

    def __init__(self, status_code: int, endpoint: str, body: str):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(f"{status_code} {endpoint}: response is not JSON ({body[:100]!r})")
