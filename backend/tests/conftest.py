"""
Pipeline Demo — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own app and its own UserStore, so user data never
       leaks between tests.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── user_store: Freshly seeded UserStore (persist_created off)
    ├── test_settings: Settings for the development environment
    ├── test_app: FastAPI app wired to user_store and test_settings
    ├── test_client: HTTPX AsyncClient talking to test_app in-process
    └── free_port: A loopback port nothing is listening on
"""

import os
import socket

# Override settings for testing BEFORE any app imports
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PERSIST_CREATED_USERS"] = "false"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from pipeline_demo.config import Settings
from pipeline_demo.main import create_app
from pipeline_demo.store import UserStore


@pytest.fixture
def user_store():
    return UserStore()


@pytest.fixture
def test_settings():
    return Settings(environment="development", log_level="WARNING")


@pytest.fixture
def test_app(test_settings, user_store):
    return create_app(settings=test_settings, store=user_store)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
