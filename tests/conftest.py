"""Pytest fixtures and configuration."""
import copy
import json
import re
import pytest
import httpx
import fakeredis
from unittest.mock import patch
from fastapi.testclient import TestClient

from app.services.backend_api import BackendApiClient
from streamlit_ui.utils.kv_store import JsonFileStore, RedisStore


SAMPLE_RAW = {
    "company_website": "https://zeron.one",
    "contact_info": {
        "emails": ["founders@zeron.one"],
        "phone_numbers": ["+91-7980700938"],
    },
    "founders": [
        {
            "name": "SANKET SARKAR",
            "current_designation": "FOUNDER",
            "roles": ["FOUNDER"],
            "domain_alignment": True,
            "is_repeat_founder": False,
            "total_experience_years": 0,
            "education": [],
            "linkedin_url": "null",
            "co_founder_overlap": {
                "shared_employers": [],
                "shared_universities": [],
            },
        },
        {
            "name": "SWARNALI SINGHA",
            "current_designation": "CO-FOUNDER & CBO",
            "roles": ["CO-FOUNDER", "CBO"],
            "domain_alignment": True,
            "is_repeat_founder": False,
            "total_experience_years": 0,
            "education": [],
            "linkedin_url": "null",
            "co_founder_overlap": {
                "shared_employers": [],
                "shared_universities": [],
            },
        },
    ],
    "market": {
        "sam": "$15B",
        "som": "$1.1B",
        "tam": "$256B",
        "target_geography": "null",
        "problem_statement": "Cybersecurity Trust Gaps exists on many levels across the corporate ecosystem.",
        "regulatory_domain": [],
        "competitive_landscape": None,
    },
    "product": {
        "tech_stack": [],
        "description": "A complete scalable, adaptive, automated cybersecurity platform.",
        "is_scalable": True,
        "innovation_or_ip": "null",
    },
    "traction": {
        "gmv": 0,
        "users": 0,
        "revenue": 70700,
        "growth_rate": "null",
        "current_customers": ["AMANISystems"],
    },
}

SAMPLE_APPLICATIONS = [
    {
        "id": "app-001",
        "startup_name": "Zeron Cybersecurity",
        "contact_email": "founders@zeron.one",
        "contact_name": "Sanket Sarkar",
        "website_url": "https://zeron.one",
        "status": "completed",
        "score": 7.2,
        "created_at": "2024-01-15T10:30:00Z",
        "last_updated_at": "2024-01-20T14:45:00Z",
        "issues": ["Missing TAM/SAM data in market section - requires manual verification"],
        "raw": SAMPLE_RAW,
        "enriched": {"market": {"summary": "Operating in the $878B cybersecurity market", "confidence": 92}},
        "results": {"founders": {"score": 8.5, "bucket": "Strong", "confidenceScore": 90, "issues": [], "manualCheck": False}},
    },
    {
        "id": "app-002",
        "startup_name": "FinTech Solutions",
        "contact_email": "contact@fintechsolutions.com",
        "contact_name": "Sarah Johnson",
        "website_url": "https://fintechsolutions.com",
        "status": "submitted",
        "created_at": "2024-01-14T08:15:00Z",
        "last_updated_at": "2024-01-14T08:15:00Z",
    },
    {
        "id": "app-003",
        "startup_name": "HealthAI Platform",
        "contact_email": "contact@healthai.com",
        "contact_name": "Michael Chen",
        "status": "completed",
        "score": 8.1,
        "created_at": "2024-01-13T14:20:00Z",
        "last_updated_at": "2024-01-18T16:30:00Z",
    },
]


class FakeBackend:
    """In-memory stand-in for the evaluation backend, served through httpx.MockTransport."""

    def __init__(self, applications):
        self.applications = {a["id"]: copy.deepcopy(a) for a in applications}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self.raise_transport_error = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_transport_error:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"error": "backend failure"})

        path = request.url.path
        if path == "/applications":
            if request.method == "GET":
                items = list(self.applications.values())
                status = request.url.params.get("status")
                search = request.url.params.get("search")
                if status:
                    items = [a for a in items if a.get("status") == status]
                if search:
                    items = [a for a in items if search.lower() in a.get("startup_name", "").lower()]
                return httpx.Response(200, json=items)
            if request.method == "POST":
                created = {"id": "app-new", "status": "submitted"}
                self.applications["app-new"] = created
                return httpx.Response(201, json=created)

        match = re.fullmatch(r"/applications/([^/]+)", path)
        if match:
            app_id = match.group(1)
            application = self.applications.get(app_id)
            if application is None:
                return httpx.Response(404, json={"detail": "not found"})
            if request.method == "GET":
                return httpx.Response(200, json=application)
            if request.method == "PATCH":
                if request.headers.get("content-type", "").startswith("application/json"):
                    application.update(json.loads(request.content))
                else:
                    application["deck_uploaded"] = True
                return httpx.Response(200, json=application)
            if request.method == "POST":
                application.setdefault("actions", []).append(request.url.params.get("action"))
                return httpx.Response(200, json={"status": "done"})
        return httpx.Response(404, json={"detail": "unknown route"})

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def fake_backend():
    """Fake evaluation backend seeded with three applications."""
    return FakeBackend(SAMPLE_APPLICATIONS)


@pytest.fixture
def backend_api(fake_backend):
    """Backend API client wired to the fake backend."""
    return BackendApiClient(
        base_url="http://backend.test",
        transport=httpx.MockTransport(fake_backend.handler),
    )


@pytest.fixture
def client(backend_api):
    """Create test client with the backend replaced by the fake."""
    with patch("app.routers.applications.get_backend_api", return_value=backend_api):
        with patch("app.routers.health.get_backend_api", return_value=backend_api):
            from app.main import app
            yield TestClient(app)


@pytest.fixture
def sample_raw():
    """Deep copy of the sample raw extracted data."""
    return copy.deepcopy(SAMPLE_RAW)


@pytest.fixture
def redis_store():
    """RedisStore backed by fakeredis."""
    return RedisStore(fakeredis.FakeRedis(decode_responses=True))


@pytest.fixture
def file_store(tmp_path):
    """JsonFileStore in a temporary directory."""
    return JsonFileStore(tmp_path / "store.json")


@pytest.fixture
def pdf_bytes():
    """Minimal PDF payload."""
    return b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"
