"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.routes.strategy import get_service
from src.service.strategy_builder_service import StrategyBuilderService
from src.translator.errors import TranslationError
from tests.conftest import FakeTranslator, make_ir, parametric, sma

WIRE_IR = {
    "Version": "1.0",
    "Strategy": {
        "EntrySignals": [
            {
                "CatalogId": "sma",
                "Args": {"Length": 200},
                "Children": [{"CatalogId": "raw.close"}],
            }
        ],
        "ExitSignals": [],
    },
}


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator(make_ir(entry=[parametric()], exit=[sma(50)]))


@pytest.fixture
def client(catalog, translator):
    service = StrategyBuilderService(catalog, translator)
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_list_catalog(client, catalog):
    """All capabilities are listed with their argument schema."""
    response = client.get("/catalog")

    assert response.status_code == 200
    items = response.json()
    assert len(items) == len(catalog)
    sma_item = next(item for item in items if item["id"] == "sma")
    assert sma_item["signal_type"] == "SignalValueSMA"
    assert sma_item["required_children"] == 1
    assert sma_item["required_args"][0]["key"] == "Length"
    assert sma_item["required_args"][0]["min"] == 1


def test_search_catalog(client):
    """The q parameter filters by name or alias."""
    response = client.get("/catalog", params={"q": "moving"})

    assert [item["id"] for item in response.json()] == ["sma", "ema"]


def test_compact_registry(client, catalog):
    response = client.get("/catalog/registry")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == catalog.compact_registry()


def test_validate_valid_ir(client):
    response = client.post("/strategies/validate", json=WIRE_IR)

    assert response.status_code == 200
    assert response.json() == {"is_valid": True, "errors": [], "message": "Validation passed"}


def test_validate_reports_errors(client):
    """Every error is returned with path, message and kind."""
    ir = {"Version": "2.0", "Strategy": {"EntrySignals": [{"CatalogId": "nope"}]}}

    body = client.post("/strategies/validate", json=ir).json()

    assert body["is_valid"] is False
    assert body["errors"] == [
        {"Path": "Version", "Message": "Unsupported IR version", "Kind": "schema"},
        {
            "Path": "EntrySignals",
            "Message": "Unknown signal catalog ID: nope",
            "Kind": "unknown_capability",
        },
    ]


def test_validate_rejects_malformed_body(client):
    """Bodies that are not IR-shaped fail request validation."""
    ir = {"Version": "1.0", "Strategy": {"EntrySignals": [{"CatalogId": "sma", "Args": {"Length": [1]}}]}}

    assert client.post("/strategies/validate", json=ir).status_code == 422


def test_compile(client):
    """Compiling returns the wire signal document."""
    body = client.post("/strategies/compile", json=WIRE_IR).json()

    assert body["Success"] is True
    assert body["Status"] == "success"
    assert body["EntrySignals"][0]["Key"] == "SMA_200"
    assert body["EntrySignals"][0]["Children"][0]["$type"] == "SignalValueRAW"


def test_build(client, translator):
    """Build runs the translator and returns compiled signals."""
    response = client.post("/strategies/build", json={"text": "Buy when Close > 200 SMA"})

    assert response.status_code == 200
    body = response.json()
    assert translator.calls == ["Buy when Close > 200 SMA"]
    assert body["Success"] is True
    assert body["EntrySignals"][0]["$type"] == "SignalParametric"
    assert body["ExitSignals"][0]["Key"] == "SMA_50"


def test_build_failure_is_a_document(client, translator):
    """Translator failures still return 200 with Success false."""
    translator.error = TranslationError("OpenAI API error (401): bad key")

    response = client.post("/strategies/build", json={"text": "anything"})

    assert response.status_code == 200
    body = response.json()
    assert body["Success"] is False
    assert body["Status"] == "failed"
    assert body["ErrorMessage"] == "Error building strategy: OpenAI API error (401): bad key"


def test_build_requires_text(client):
    assert client.post("/strategies/build", json={"text": ""}).status_code == 422
