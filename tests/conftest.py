import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("GHL_API_KEY", "test-ghl-key")
    monkeypatch.setenv("GHL_LOCATION_ID", "loc-1")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("SNAPSHOT_DIR", str(tmp_path / "snapshots"))
    monkeypatch.delenv("LOG_DIR", raising=False)


@pytest.fixture
def production_env(mock_env, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")


async def _asgi_client():
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c


@pytest.fixture
async def client(mock_env):
    async for c in _asgi_client():
        yield c


@pytest.fixture
async def production_client(production_env):
    async for c in _asgi_client():
        yield c
