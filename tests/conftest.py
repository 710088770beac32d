"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and provides
the required settings before the application modules are imported.
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so we can import app, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("OPENAI_API_KEY", "")

from fastapi.testclient import TestClient  # noqa: E402

from test_fixtures import FakeCompletionClient, FakeStore  # noqa: E402


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def llm() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def app(store, llm):
    from main import create_app

    return create_app(store=store, completion_client=llm)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
