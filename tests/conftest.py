"""Pytest shared fixtures: network guard rails and a stubbed tenant."""
import json
import pathlib
import secrets
import sys
from typing import Optional
from urllib.parse import urlsplit

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from idpmgmt.core.management import Management

TEST_DOMAIN = "tenant.test.local"
TEST_TOKEN = "test-management-token"
BASE_URL = f"https://{TEST_DOMAIN}/api/v2"

READ_ONLY_FIELDS = ("client_id", "signing_keys")


class StubResponse:
    def __init__(self, payload=None, status_code: int = 200, url: str = ""):
        self._payload = payload
        self.status_code = status_code
        self.url = url
        self.text = "" if payload is None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(response=self)


def _error(status_code: int, error: str, message: str, url: str, code: Optional[str] = None) -> StubResponse:
    body = {"statusCode": status_code, "error": error, "message": message}
    if code:
        body["errorCode"] = code
    return StubResponse(body, status_code, url)


class FakeTenant:
    """In-memory emulation of the /api/v2/clients endpoints."""

    def __init__(self):
        self.clients = {}
        self.requests = []
        # Tenants have returned lifetime_in_seconds as a string.
        self.lifetime_as_string = True

    def _new_secret(self) -> str:
        return secrets.token_urlsafe(48)

    def _validate_write(self, payload: dict, url: str) -> Optional[StubResponse]:
        for name in READ_ONLY_FIELDS:
            if name in payload:
                return _error(400, "Bad Request",
                              f"Payload validation error: 'Additional properties not allowed: {name}'.",
                              url, "invalid_body")
        if "secret_encoded" in (payload.get("jwt_configuration") or {}):
            return _error(400, "Bad Request",
                          "Payload validation error: 'Additional properties not allowed: secret_encoded' "
                          "on property jwt_configuration.",
                          url, "invalid_body")
        return None

    def _render(self, stored: dict, params: Optional[dict] = None) -> dict:
        client = json.loads(json.dumps(stored))
        lifetime = client["jwt_configuration"].get("lifetime_in_seconds")
        if self.lifetime_as_string and lifetime is not None:
            client["jwt_configuration"]["lifetime_in_seconds"] = str(lifetime)
        params = params or {}
        if params.get("fields"):
            names = params["fields"].split(",")
            if params.get("include_fields", "true") == "true":
                client = {k: v for k, v in client.items() if k in names}
            else:
                client = {k: v for k, v in client.items() if k not in names}
        return client

    def _not_found(self, url: str) -> StubResponse:
        return _error(404, "Not Found", "The client does not exist", url, "inexistent_client")

    def handle(self, method: str, url: str, headers=None, params=None, json=None, **kwargs):
        self.requests.append({"method": method, "url": url, "headers": headers or {},
                              "params": params, "json": json})
        if (headers or {}).get("Authorization") != f"Bearer {TEST_TOKEN}":
            return _error(401, "Unauthorized", "Invalid token", url)

        parts = urlsplit(url)
        assert parts.netloc == TEST_DOMAIN, f"Unexpected host in test: {url}"
        assert parts.path.startswith("/api/v2/"), f"Unexpected path in test: {url}"
        segments = parts.path[len("/api/v2/"):].split("/")
        if segments[0] != "clients":
            raise RuntimeError(f"Unexpected endpoint in unit test: {method} {url}")

        if len(segments) == 1:
            if method == "POST":
                return self._create(json or {}, url)
            if method == "GET":
                return self._list(params or {}, url)
        client_id = segments[1]
        stored = self.clients.get(client_id)
        if stored is None:
            return self._not_found(url)
        if len(segments) == 3 and segments[2] == "rotate-secret" and method == "POST":
            stored["client_secret"] = self._new_secret()
            return StubResponse(self._render(stored), 200, url)
        if len(segments) == 2:
            if method == "GET":
                return StubResponse(self._render(stored, params), 200, url)
            if method == "PATCH":
                rejected = self._validate_write(json or {}, url)
                if rejected:
                    return rejected
                for key, value in (json or {}).items():
                    if key == "jwt_configuration":
                        stored["jwt_configuration"].update(value)
                    else:
                        stored[key] = value
                return StubResponse(self._render(stored), 200, url)
            if method == "DELETE":
                del self.clients[client_id]
                return StubResponse(None, 204, url)
        raise RuntimeError(f"Unexpected endpoint in unit test: {method} {url}")

    def _create(self, payload: dict, url: str) -> StubResponse:
        rejected = self._validate_write(payload, url)
        if rejected:
            return rejected
        if not payload.get("name"):
            return _error(400, "Bad Request",
                          "Payload validation error: 'Missing required property: name'.",
                          url, "invalid_body")
        client_id = secrets.token_hex(16)
        stored = {
            "client_id": client_id,
            "client_secret": self._new_secret(),
            "app_type": "regular_web",
            "is_first_party": True,
            "oidc_conformant": False,
            "callbacks": [],
            "signing_keys": [{"cert": "-----BEGIN CERTIFICATE-----", "subject": "/CN=tenant.test.local"}],
            "jwt_configuration": {"lifetime_in_seconds": 36000, "secret_encoded": False, "alg": "RS256"},
        }
        for key, value in payload.items():
            if key == "jwt_configuration":
                stored["jwt_configuration"].update(value)
            else:
                stored[key] = value
        self.clients[client_id] = stored
        return StubResponse(self._render(stored), 201, url)

    def _list(self, params: dict, url: str) -> StubResponse:
        rendered = [self._render(stored, params) for stored in self.clients.values()]
        if params.get("include_totals") == "true":
            return StubResponse({
                "start": 0,
                "limit": 50,
                "length": len(rendered),
                "total": len(rendered),
                "clients": rendered,
            }, 200, url)
        return StubResponse(rendered, 200, url)


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from hitting a live tenant.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _blocked(method):
        def _stub(url, *args, **kwargs):
            raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")
        return _stub

    for method in ("get", "post", "put", "patch", "delete"):
        monkeypatch.setattr(requests, method, _blocked(method.upper()))


# ─────────────────────────────────────────────────────────────────────────────
# Stubbed tenant
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def tenant(monkeypatch):
    """Route requests.get/post/patch/delete to an in-memory tenant."""
    fake = FakeTenant()

    def _route(method):
        def _send(url, *args, **kwargs):
            return fake.handle(method, url, **kwargs)
        return _send

    for method in ("get", "post", "patch", "delete"):
        monkeypatch.setattr(requests, method, _route(method.upper()))
    return fake


@pytest.fixture()
def management(tenant):
    """Management facade bound to the stubbed tenant."""
    return Management(TEST_DOMAIN, TEST_TOKEN)


# ─────────────────────────────────────────────────────────────────────────────
# Pytest Configuration
# ─────────────────────────────────────────────────────────────────────────────
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires a live tenant)"
    )
