import copy

import pytest

from archdocs.errors import ExtractionError
from archdocs.extraction.adapter import ArchitectureSource
from archdocs.pipeline.controller import PipelineController
from archdocs.store.file_store import FileDiagramStore

LOGIN_REQUIREMENT = {
    "id": "US-00001",
    "type": "USER_STORY",
    "title": "User login",
    "description": "user authenticates",
}

AUTH_PAYLOAD = {
    "system": {"name": "Shop", "description": "Online shop", "scope": "Web storefront"},
    "people": [
        {"id": "customer", "name": "Customer", "role": "Buyer", "description": "Buys things"}
    ],
    "externalSystems": [
        {"id": "payments", "name": "Payment Provider", "type": "SaaS",
         "description": "Card payments", "protocol": "HTTPS"},
        {"id": "mailer", "name": "Mail Service", "type": "SaaS",
         "description": "Sends mail", "protocol": "SMTP"},
    ],
    "level1Relationships": [
        {"from": "customer", "to": "system", "label": "Shops", "protocol": "HTTPS"},
        {"from": "system", "to": "payments", "label": "Charges cards"},
        {"from": "system", "to": "mailer", "label": "Sends receipts"},
    ],
    "containers": [
        {"id": "auth", "name": "Auth Service", "type": "API", "technology": "FastAPI",
         "description": "Handles authentication", "responsibilities": ["login"]},
        {"id": "orders", "name": "Order Service", "type": "API", "technology": "FastAPI",
         "description": "Order handling", "responsibilities": ["checkout"]},
    ],
    "level2Relationships": [
        {"from": "orders", "to": "auth", "label": "Verifies tokens", "protocol": "HTTPS"},
        {"from": "orders", "to": "payments", "label": "Charges", "protocol": "HTTPS"},
    ],
    "componentsByContainer": {
        "auth": [
            {"id": "login-ui", "name": "Login UI", "type": "UI", "technology": "React",
             "description": "Login form", "capabilities": ["login"]},
            {"id": "auth-api", "name": "Auth API", "type": "Controller",
             "technology": "FastAPI", "description": "Token issuing",
             "capabilities": ["token issuing"]},
        ]
    },
    "level3RelationshipsByContainer": {
        "auth": [
            {"from": "login-ui", "to": "auth-api", "label": "Submits credentials",
             "pattern": "REST"}
        ]
    },
}


class FakeExtractor(ArchitectureSource):
    """Returns a fixed payload and records every call."""

    def __init__(self, payload=None):
        self.payload = payload
        self.calls = []

    def extract(self, requirements):
        self.calls.append(list(requirements))
        return copy.deepcopy(self.payload)


class FailingExtractor(ArchitectureSource):
    def __init__(self):
        self.calls = 0

    def extract(self, requirements):
        self.calls += 1
        raise ExtractionError("service unavailable")


@pytest.fixture
def auth_payload():
    return copy.deepcopy(AUTH_PAYLOAD)


@pytest.fixture
def login_requirements():
    return [dict(LOGIN_REQUIREMENT)]


@pytest.fixture
def file_store(tmp_path):
    return FileDiagramStore(str(tmp_path / "projects"))


@pytest.fixture
def make_controller(file_store):
    def _make(extractor, diagram_format="mermaid"):
        return PipelineController(
            extractor=extractor, store=file_store, diagram_format=diagram_format
        )
    return _make
