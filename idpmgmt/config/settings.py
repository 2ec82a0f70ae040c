"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from idpmgmt.core.management.api import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as e:
            logger.warning(f"Failed to read /run/secrets/{secret_name}: {e}")
        else:
            if secret_value:
                logger.debug(f"Loaded {secret_name} from /run/secrets")
                return secret_value

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug(f"Loaded {env_var} from environment")
            return secret_value

    return None


@dataclass
class ManagementSettings:
    """Management API client configuration."""
    domain: str
    api_token: str
    request_timeout: float = REQUEST_TIMEOUT
    log_level: str = "WARNING"

    def __repr__(self) -> str:
        return (
            f"ManagementSettings(domain={self.domain!r}, api_token='***', "
            f"request_timeout={self.request_timeout!r}, log_level={self.log_level!r})"
        )


def _get_required(var_name: str) -> str:
    value = os.environ.get(var_name)
    if value:
        return value
    raise RuntimeError(f"Environment variable {var_name} is required.")


def _get_timeout(var_name: str, default: float) -> float:
    raw = os.environ.get(var_name)
    if not raw:
        return default
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"{var_name} must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise RuntimeError(f"{var_name} must be positive, got {raw!r}")
    return timeout


def load_settings() -> ManagementSettings:
    """Load client settings from environment and /run/secrets.

    Variables:
        AUTH0_DOMAIN: Tenant domain (required)
        AUTH0_MANAGEMENT_TOKEN: Management API token (required; the
            /run/secrets/auth0_management_token file takes priority)
        AUTH0_REQUEST_TIMEOUT: Request timeout in seconds (default 5)
        AUTH0_LOG_LEVEL: Log level for the idpmgmt logger (default WARNING)

    Raises:
        RuntimeError: If a required value is missing or malformed
    """
    domain = _get_required("AUTH0_DOMAIN")

    api_token = _load_secret_from_file("auth0_management_token", "AUTH0_MANAGEMENT_TOKEN")
    if not api_token:
        raise RuntimeError(
            "AUTH0_MANAGEMENT_TOKEN not found. "
            "Provide it via /run/secrets/auth0_management_token or the environment."
        )

    log_level = os.environ.get("AUTH0_LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"AUTH0_LOG_LEVEL is not a valid log level: {log_level!r}")

    return ManagementSettings(
        domain=domain,
        api_token=api_token,
        request_timeout=_get_timeout("AUTH0_REQUEST_TIMEOUT", REQUEST_TIMEOUT),
        log_level=log_level,
    )


def configure_logging(settings: ManagementSettings, handler: Optional[logging.Handler] = None) -> logging.Logger:
    """Apply the configured level to the package logger.

    Args:
        settings: Loaded settings
        handler: Optional handler to attach (e.g. logging.StreamHandler())

    Returns:
        The idpmgmt logger
    """
    package_logger = logging.getLogger("idpmgmt")
    package_logger.setLevel(settings.log_level)
    if handler is not None and handler not in package_logger.handlers:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)
    return package_logger
