"""Entry point bundling the resource services over one HTTP client."""
from __future__ import annotations
from typing import TYPE_CHECKING

from .api import ManagementAPI, REQUEST_TIMEOUT
from .clients import ClientService

if TYPE_CHECKING:
    from idpmgmt.config import ManagementSettings


class Management:
    """Management API facade.

    Usage:
        m = Management("tenant.eu.auth0.com", token)
        client = m.client.read("abc123")
    """

    def __init__(self, domain: str, token: str, timeout: float = REQUEST_TIMEOUT):
        self.api = ManagementAPI(domain, token, timeout=timeout)
        self.client = ClientService(self.api)

    @classmethod
    def from_settings(cls, settings: "ManagementSettings") -> "Management":
        """Build from loaded settings (see idpmgmt.config.load_settings)."""
        return cls(settings.domain, settings.api_token, timeout=settings.request_timeout)
