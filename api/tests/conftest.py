"""Pytest configuration and shared fixtures.

This module provides:
- Deterministic settings for every test (cache cleared around each test)
- A ready-made CertificateRequest and a call-recording PageCanvas
- FastAPI test client for route tests
"""

# Set environment variables BEFORE any imports that trigger Settings validation
import os

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("PUBLIC_BASE_URL", "https://certs.example.test")
os.environ.setdefault("RATELIMIT_STORAGE_URI", "memory://")

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from core.config import clear_settings_cache
from rendering.models import CertificateRequest
from tests.factories import CertificateRequestFactory
from tests.fakes import RecordingCanvas

# =============================================================================
# Rendering Fixtures
# =============================================================================


@pytest.fixture
def certificate_request() -> CertificateRequest:
    """A complete request with a recipient name."""
    return CertificateRequestFactory.build()


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    """Canvas double that records drawing calls instead of producing a PDF."""
    return RecordingCanvas()


@pytest.fixture
def small_qr_matrix() -> list[list[bool]]:
    """A 21x21 matrix (QR version 1 size) with a checkerboard pattern."""
    return [[(row + col) % 2 == 0 for col in range(21)] for row in range(21)]


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def app() -> AsyncGenerator[FastAPI]:
    """FastAPI app configured for testing."""
    # Import here so settings are read after the environment is prepared
    from main import app as fastapi_app

    yield fastapi_app


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing routes."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio backend for anyio (required by httpx)."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Reset settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
