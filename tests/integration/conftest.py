"""Shared fixtures for integration tests.

These tests wire real infrastructure components (HttpxCatalogFetcher,
CatalogStore, load_config) together, with HTTP mocked via respx.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.fixture()
async def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    async with httpx.AsyncClient() as client:
        yield client
