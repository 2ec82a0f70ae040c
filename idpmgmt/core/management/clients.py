"""Client (application) management operations."""
from __future__ import annotations
import logging
from urllib.parse import quote

from .api import ManagementAPI
from .models import Client, ClientList, ClientUpdate
from .options import RequestOption, apply_options

logger = logging.getLogger(__name__)


def _path(client_id: str, suffix: str = "") -> str:
    if not client_id:
        raise ValueError("client_id is required")
    return f"/clients/{quote(client_id, safe='')}{suffix}"


class ClientService:
    """Service for managing clients.

    Every method is one request/response exchange; nothing is cached and
    nothing is retried.
    """

    def __init__(self, api: ManagementAPI):
        """Initialize client service.

        Args:
            api: Management API HTTP client
        """
        self.api = api

    def create(self, client: Client) -> Client:
        """Create a client and populate server-assigned fields in place.

        Args:
            client: Client description without client_id

        Returns:
            The same client object, now carrying client_id, client_secret,
            signing_keys and the other fields reported by the API

        Raises:
            ManagementAPIError: If the API rejects the client
        """
        resp = self.api.post("/clients", json=client.to_dict())
        # Decode fully before touching the caller's object.
        created = Client.from_dict(self.api.json(resp))
        client.merge(created)
        logger.info(f"Client '{client.name}' created (client_id={client.client_id})")
        return client

    def read(self, client_id: str, *options: RequestOption) -> Client:
        """Fetch a client.

        Args:
            client_id: Client identifier
            *options: Field selection options

        Raises:
            NotFoundError: If the client does not exist
        """
        resp = self.api.get(_path(client_id), params=apply_options(*options) or None)
        return Client.from_dict(self.api.json(resp))

    def update(self, client_id: str, update: ClientUpdate) -> Client:
        """Apply a partial update to a client.

        Args:
            client_id: Client identifier
            update: Writable fields to change; build one from a full client
                with ``ClientUpdate.from_client``

        Returns:
            The updated client as reported by the API

        Raises:
            TypeError: If update is not a ClientUpdate
            NotFoundError: If the client does not exist
        """
        if not isinstance(update, ClientUpdate):
            raise TypeError(
                f"update must be a ClientUpdate, got {type(update).__name__}; "
                "use ClientUpdate.from_client() to drop read-only fields"
            )
        resp = self.api.patch(_path(client_id), json=update.to_dict())
        logger.info(f"Client '{client_id}' updated")
        return Client.from_dict(self.api.json(resp))

    def delete(self, client_id: str) -> None:
        """Delete a client.

        Raises:
            NotFoundError: If the client does not exist
        """
        self.api.delete(_path(client_id))
        logger.info(f"Client '{client_id}' deleted")

    def list(self, *options: RequestOption) -> ClientList:
        """List clients.

        Ordering is whatever the API returns.

        Args:
            *options: Field selection, paging and filter options

        Returns:
            ClientList; paging metadata is set only with include_totals()
        """
        resp = self.api.get("/clients", params=apply_options(*options) or None)
        return ClientList.from_response(self.api.json(resp))

    def rotate_secret(self, client_id: str) -> Client:
        """Generate a new client secret.

        Returns:
            The client carrying the new client_secret

        Raises:
            NotFoundError: If the client does not exist
        """
        resp = self.api.post(_path(client_id, "/rotate-secret"))
        logger.info(f"Client '{client_id}' secret rotated")
        return Client.from_dict(self.api.json(resp))
