import json

import httpx
import pytest
from fastapi.testclient import TestClient

from contact_relay.api.v1.contact import get_email_transport
from contact_relay.config.settings import Settings, get_settings
from contact_relay.main import app


class FakeResendProvider:
    """Stands in for the Resend API; records every request it receives"""

    def __init__(self):
        self.requests = []
        self.statuses = []
        self.error = None

    def respond_with(self, *statuses):
        self.statuses.extend(statuses)

    def fail_with(self, error):
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        status = self.statuses.pop(0) if self.statuses else 200
        if 200 <= status < 300:
            return httpx.Response(status, json={"id": f"email_{len(self.requests)}"})
        return httpx.Response(status, json={"name": "validation_error", "message": "Invalid `to` field"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def payloads(self):
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def provider():
    return FakeResendProvider()


@pytest.fixture
def settings():
    return Settings(resend_api_key="re_test_key", environment="production", dispatch_mode="single")


@pytest.fixture
def valid_form():
    return {
        "name": "Ana Pérez",
        "email": "ana@example.com",
        "message": "Hello!\nI'd like a quote for <your> services & support.",
    }


@pytest.fixture
def make_client(provider):
    def _make(settings: Settings, raise_server_exceptions: bool = True) -> TestClient:
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_email_transport] = lambda: provider.transport
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, settings):
    return make_client(settings)
