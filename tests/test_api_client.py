"""Tests for the dashboard's HTTP client, run end to end against the proxy app."""
import httpx
import pytest

from app.models import ApplicationFormError
from streamlit_ui.components import api_client
from streamlit_ui.components.api_client import NetworkFailure, NotFound


class TestReads:
    """Tests for list and detail fetches."""

    def test_get_applications(self, client):
        data = api_client.get_applications(client)
        assert data["status"]["total"] == 3
        assert {a["id"] for a in data["applications"]} == {"app-001", "app-002", "app-003"}

    def test_get_applications_status_all_not_sent(self, client, fake_backend):
        api_client.get_applications(client, status="all")
        assert "status" not in fake_backend.requests_to("GET", "/applications")[-1].url.params

    def test_get_application(self, client):
        data = api_client.get_application("app-001", client=client)
        assert data["contact_name"] == "Sanket Sarkar"

    def test_get_application_not_found(self, client):
        with pytest.raises(NotFound, match="Application not found"):
            api_client.get_application("missing", client=client)

    def test_backend_failure_is_network_failure(self, client, fake_backend):
        fake_backend.fail_with = 500
        with pytest.raises(NetworkFailure) as exc_info:
            api_client.get_applications(client)
        assert exc_info.value.status_code == 500

    def test_transport_error_is_network_failure(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        offline = httpx.Client(base_url="http://proxy.test", transport=httpx.MockTransport(refuse))
        with pytest.raises(NetworkFailure) as exc_info:
            api_client.get_application("app-001", client=offline)
        assert exc_info.value.status_code is None


class TestWrites:
    """Tests for updates, uploads and actions."""

    def test_save_raw_data(self, client, fake_backend, sample_raw):
        sample_raw["product"]["is_scalable"] = False
        api_client.save_raw_data("app-001", sample_raw, client=client)
        assert fake_backend.applications["app-001"]["raw"]["product"]["is_scalable"] is False

    def test_upload_pitch_deck(self, client, fake_backend, pdf_bytes):
        api_client.upload_pitch_deck("app-002", "new.pdf", pdf_bytes, client=client)
        assert fake_backend.applications["app-002"]["deck_uploaded"] is True

    def test_trigger_action(self, client, fake_backend):
        result = api_client.trigger_action("app-001", "evaluate", client=client)
        assert result["action"] == "evaluate"
        assert fake_backend.applications["app-001"]["actions"] == ["evaluate"]

    def test_trigger_unknown_action_rejected_locally(self, client, fake_backend):
        with pytest.raises(ValueError):
            api_client.trigger_action("app-001", "delete", client=client)
        assert fake_backend.requests == []


class TestCreate:
    """Tests for creating applications."""

    def test_create_application(self, client, fake_backend, pdf_bytes):
        created = api_client.create_application(
            startup_name="Zeron Cybersecurity",
            contact_name="Sanket Sarkar",
            contact_email="founders@zeron.one",
            website_url="https://zeron.one",
            filename="deck.pdf",
            content=pdf_bytes,
            content_type="application/pdf",
            client=client,
        )
        assert created["id"] == "app-new"
        assert len(fake_backend.requests_to("POST", "/applications")) == 1

    def test_invalid_website_sends_no_request(self, pdf_bytes):
        sent = []

        def record(request):
            sent.append(request)
            return httpx.Response(201, json={})

        recorder = httpx.Client(base_url="http://proxy.test", transport=httpx.MockTransport(record))
        with pytest.raises(ApplicationFormError) as exc_info:
            api_client.create_application(
                startup_name="Zeron",
                contact_name="Sanket Sarkar",
                contact_email="founders@zeron.one",
                website_url="ht!tp://bad",
                filename="deck.pdf",
                content=pdf_bytes,
                content_type="application/pdf",
                client=recorder,
            )
        assert exc_info.value.errors == {"website_url": "Please enter a valid website URL"}
        assert sent == []

    def test_missing_file_reported(self, client, fake_backend):
        with pytest.raises(ApplicationFormError) as exc_info:
            api_client.create_application(
                startup_name="Zeron",
                contact_name="Sanket Sarkar",
                contact_email="founders@zeron.one",
                website_url="https://zeron.one",
                filename=None,
                content=None,
                content_type=None,
                client=client,
            )
        assert exc_info.value.errors == {"file": "Pitch deck file is required"}
        assert fake_backend.requests == []


class TestLogs:
    """Tests for fetching proxy logs."""

    def test_get_backend_logs(self, client):
        data = api_client.get_backend_logs(client=client)
        assert set(data) == {"lines", "total"}
