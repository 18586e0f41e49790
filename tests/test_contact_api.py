import httpx
import pytest

from contact_relay.api.v1.contact import get_email_transport
from contact_relay.config.settings import OPERATOR_EMAIL, Settings, get_settings
from contact_relay.main import app

CONTACT_URL = "/api/v1/contact/"

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "Content-Type",
    "access-control-allow-methods": "POST, OPTIONS",
    "content-type": "application/json",
}


def assert_cors_headers(response):
    for header, value in CORS.items():
        assert response.headers[header] == value


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "TRACE", "PROPFIND"])
def test_other_methods_are_not_allowed(client, provider, method):
    response = client.request(method, CONTACT_URL)

    assert response.status_code == 405
    assert response.json() == {"success": False, "error": "Method not allowed"}
    assert_cors_headers(response)
    assert provider.requests == []


def test_preflight(client, provider):
    response = client.options(CONTACT_URL)

    assert response.status_code == 200
    assert response.content == b""
    assert_cors_headers(response)
    assert provider.requests == []


def test_valid_submission_is_relayed(client, provider, valid_form):
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Emails sent successfully"}
    assert_cors_headers(response)

    [payload] = provider.payloads()
    assert payload["to"] == OPERATOR_EMAIL
    assert payload["replyTo"] == "ana@example.com"
    assert payload["subject"] == "New inquiry from Ana Pérez"
    assert "I&#039;d like a quote for &lt;your&gt; services &amp; support." in payload["html"]
    assert "Hello!<br>" in payload["html"]


@pytest.mark.parametrize("field", ["name", "email", "message"])
def test_missing_field_is_bad_request(client, provider, valid_form, field):
    del valid_form[field]
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing required fields"}
    assert_cors_headers(response)
    assert provider.requests == []


@pytest.mark.parametrize("field", ["name", "email", "message"])
def test_empty_field_is_bad_request(client, valid_form, field):
    valid_form[field] = ""
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.parametrize("email", ["ana", "ana@example", "ana @example.com", "ana@example."])
def test_malformed_email_is_bad_request(client, provider, valid_form, email):
    valid_form["email"] = email
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid email"}
    assert provider.requests == []


def test_provider_rejection_is_server_error(client, provider, valid_form):
    provider.respond_with(403)
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Error processing the request"}
    assert_cors_headers(response)


def test_provider_unreachable_is_server_error(client, provider, valid_form):
    provider.fail_with(httpx.ConnectTimeout("timed out"))
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 500
    assert response.json()["success"] is False


def test_development_mode_echoes_details(make_client, provider, valid_form):
    client = make_client(Settings(resend_api_key="re_test_key", environment="development"))
    provider.respond_with(401)
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 500
    assert response.json()["details"].startswith("Resend API error: 401")


def test_missing_credential_is_generic_server_error(make_client, provider, valid_form):
    client = make_client(Settings(resend_api_key=None, environment="development"))
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Server configuration incomplete"}
    assert provider.requests == []


def test_invalid_json_is_server_error(client, provider):
    response = client.post(CONTACT_URL, content=b"name=Ana", headers={"Content-Type": "application/x-www-form-urlencoded"})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert provider.requests == []


def test_dual_mode_sends_both_emails(make_client, provider, valid_form):
    client = make_client(Settings(resend_api_key="re_test_key", dispatch_mode="dual"))
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 200
    assert [p["to"] for p in provider.payloads()] == [OPERATOR_EMAIL, "ana@example.com"]


@pytest.mark.parametrize("statuses", [(200, 500), (500, 200)])
def test_dual_mode_fails_if_either_email_fails(make_client, provider, valid_form, statuses):
    client = make_client(Settings(resend_api_key="re_test_key", dispatch_mode="dual"))
    provider.respond_with(*statuses)
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Error processing the request"}


def test_unexpected_error_is_rendered_by_global_handler(make_client, settings, valid_form):
    client = make_client(settings, raise_server_exceptions=False)

    def broken_settings():
        raise RuntimeError("settings unavailable")

    app.dependency_overrides[get_settings] = broken_settings
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert_cors_headers(response)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_global_handler_follows_overridden_settings(make_client, valid_form):
    client = make_client(Settings(resend_api_key="re_test_key", environment="development"), raise_server_exceptions=False)

    def broken_transport():
        raise RuntimeError("transport unavailable")

    app.dependency_overrides[get_email_transport] = broken_transport
    response = client.post(CONTACT_URL, json=valid_form)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Error processing the request",
        "details": "transport unavailable",
    }
    assert_cors_headers(response)


def test_unknown_path_keeps_default_not_found(client):
    response = client.get("/api/v1/nope")

    assert response.status_code == 404
