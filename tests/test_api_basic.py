from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

import app.agents as agents
from app.core.config import settings
from app.core.errors import ProductServiceError
from app.core.models import Product
from app.main import app

client = TestClient(app)

PRODUCTS = [Product(name="Trail Runner Shoes", price=89.0, description="Waterproof")]


class FakeChat:
    def __init__(self, reply="STUB_ANSWER", error=None):
        self.reply = reply
        self.error = error

    async def ainvoke(self, prompt):
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


def _use_catalog(monkeypatch, products=None, error=None):
    async def fake_fetch_products(client=None):
        if error is not None:
            raise error
        return list(products or [])

    monkeypatch.setattr(agents, "fetch_products", fake_fetch_products)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_query_returns_query_and_answer(monkeypatch):
    """Test the happy path: catalog, prompt, model, JSON response."""
    _use_catalog(monkeypatch, PRODUCTS)
    monkeypatch.setattr(agents, "_get_chat", lambda: FakeChat("They cost $89.00."))

    resp = client.get("/query", params={"q": "How much are the trail shoes?"})

    assert resp.status_code == 200, resp.text
    assert resp.json() == {"query": "How much are the trail shoes?", "answer": "They cost $89.00."}


def test_validation_error_on_missing_query():
    """Test that a missing q parameter returns a validation error."""
    resp = client.get("/query")
    assert resp.status_code == 422, resp.text


def test_validation_error_on_blank_query():
    """Test that empty and whitespace-only queries are rejected."""
    assert client.get("/query", params={"q": ""}).status_code == 422
    assert client.get("/query", params={"q": "   "}).status_code == 422


def test_product_service_unavailable_returns_error(monkeypatch):
    """Test that a catalog failure returns 502 instead of crashing."""
    _use_catalog(monkeypatch, error=ProductServiceError("connection refused to 10.0.0.7"))
    monkeypatch.setattr(agents, "_get_chat", lambda: FakeChat())

    resp = client.get("/query", params={"q": "anything in stock?"})

    assert resp.status_code == 502
    assert resp.json() == {"detail": "The product catalog is currently unavailable."}
    assert "10.0.0.7" not in resp.text


def test_unreachable_product_service_returns_error(monkeypatch):
    """Test that a real connection failure to product-service is handled."""
    monkeypatch.setattr(settings, "PRODUCT_SERVICE_URL", "http://127.0.0.1:1")
    monkeypatch.setattr(settings, "PRODUCT_SERVICE_TIMEOUT", 1.0)

    resp = client.get("/query", params={"q": "anything in stock?"})

    assert resp.status_code == 502
    assert resp.json()["detail"] == "The product catalog is currently unavailable."


def test_inference_failure_does_not_leak_trace(monkeypatch):
    """Test that a Bedrock failure returns 502 with no exception details."""
    _use_catalog(monkeypatch, PRODUCTS)
    monkeypatch.setattr(
        agents, "_get_chat", lambda: FakeChat(error=RuntimeError("AccessDeniedException secret-arn"))
    )

    resp = client.get("/query", params={"q": "How much are the trail shoes?"})

    assert resp.status_code == 502
    assert resp.json() == {"detail": "The answer service is currently unavailable."}
    assert "Traceback" not in resp.text
    assert "secret-arn" not in resp.text


def test_unexpected_error_returns_generic_500(monkeypatch):
    """Test that unexpected failures map to a generic 500."""

    async def broken_fetch_products(client=None):
        raise KeyError("boom")

    monkeypatch.setattr(agents, "fetch_products", broken_fetch_products)

    resp = client.get("/query", params={"q": "hello"})

    assert resp.status_code == 500
    assert resp.json() == {"detail": "An internal error occurred while processing the query."}
    assert "boom" not in resp.text
