import os

import pytest

# Seed configuration before any app module builds its settings
os.environ.setdefault("PRODUCT_SERVICE_URL", "http://product-service.test")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("BEDROCK_MODEL_ID", "test-model")


@pytest.fixture(autouse=True)
def reset_chat_model(monkeypatch):
    """Never reuse a chat model built by another test."""
    import app.agents as agents

    monkeypatch.setattr(agents, "_chat", None)
