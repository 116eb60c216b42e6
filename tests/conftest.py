# FILE: tests/conftest.py

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from snapcode.config import Settings, get_settings
from snapcode.providers.base import ModelProvider
from snapcode.providers.registry import (
    ProviderRegistry, get_optional_provider_registry, get_provider_registry
)
from snapcode.services.image_store import ImageStore, get_image_store


class FakeProvider(ModelProvider):
    """Model provider stub: replays canned responses and records calls"""

    def __init__(self, responses=("",), error=None):
        self.responses = list(responses)
        self.error = error
        self.calls = []

    async def generate(self, model, parts):
        self.calls.append({"model": model, "parts": list(parts)})
        if self.error is not None:
            raise self.error
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


@pytest.fixture
def fake_provider():
    """Provider stub returning an empty completion until configured"""
    return FakeProvider()


@pytest.fixture
def registry(fake_provider):
    """Registry wrapping the provider stub"""
    return ProviderRegistry(fake_provider, max_io_log_size=10)


@pytest.fixture
def image_store():
    """Fresh image store per test"""
    return ImageStore(max_entries=16, ttl_seconds=60)


@pytest.fixture
def test_settings():
    """Settings with a dummy key, isolated from any .env file"""
    return Settings(GEMINI_API_KEY="test-key", _env_file=None)


@pytest.fixture
def client(registry, image_store, test_settings):
    """TestClient with model, store and settings dependencies overridden"""
    from snapcode.app import app

    app.dependency_overrides[get_provider_registry] = lambda: registry
    app.dependency_overrides[get_optional_provider_registry] = lambda: registry
    app.dependency_overrides[get_image_store] = lambda: image_store
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_component():
    """Well-formed generated component (no apostrophes in text content)"""
    return """import { useState } from 'react'

const NAV_ITEMS = [
  'Home',
  'Pricing',
  'About'
]

export default function Navbar() {
  const [active, setActive] = useState('Home')
  const [query, setQuery] = useState("")

  return (
    <nav className="flex items-center justify-between px-6 py-4 bg-white">
      <span className="font-bold text-xl">LOGO</span>
      <input
        value={query}
        onChange={(e) => setQuery(e.target.value)}
        placeholder="Search"
      />
      {NAV_ITEMS.map((item) => (
        <button
          key={item}
          onClick={() => setActive(item)}
          className={`px-4 py-2 ${active === item ? 'bg-black text-white' : 'bg-white'}`}
        >
          {item}
        </button>
      ))}
      <p className="text-sm">{query ? `Results for ${query}` : ''}</p>
    </nav>
  )
}
"""
