"""
Fixtures for integration tests.

Provides:
- Recording mock upstream client standing in for the parent service
- Test client for the FastAPI app with dependencies overridden
- Gateway configuration pointing at a deterministic test target
"""

import asyncio
import json
from typing import Any, AsyncGenerator, Callable, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.core.config import GatewayConfig, get_gateway_config
from src.core.dependencies import get_upstream_client
from src.domain.exceptions import UpstreamTimeoutException, UpstreamUnreachableException
from src.domain.interfaces import RawResponse, UpstreamClient, UpstreamRequest


# =============================================================================
# Mock Upstream Client
# =============================================================================

class MockUpstreamClient(UpstreamClient):
    """
    Upstream client double that records every call.

    Responses are queued per operation name; ``fail_with`` makes every call
    raise the given exception instead.
    """

    def __init__(self, fail_with: Optional[Exception] = None, delay: float = 0.0):
        self.fail_with = fail_with
        self.delay = delay
        self.calls: List[UpstreamRequest] = []
        self._responses: dict[str, RawResponse] = {}

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def respond(
        self,
        operation: str,
        body: Any,
        status_code: int = 200,
        content_type: str = "application/json",
    ) -> None:
        content = body if isinstance(body, bytes) else json.dumps(body).encode()
        self._responses[operation] = RawResponse(
            status_code=status_code,
            content=content,
            content_type=content_type,
        )

    async def call(self, request: UpstreamRequest) -> RawResponse:
        self.calls.append(request)

        if self.delay:
            await asyncio.sleep(self.delay)

        if self.fail_with is not None:
            raise self.fail_with

        return self._responses.get(
            request.operation,
            RawResponse(status_code=200, content=b"{}"),
        )


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def gateway_config() -> GatewayConfig:
    """Configuration pointing at a fake parent service."""
    return GatewayConfig(base_url="http://parent.test", timeout_seconds=0.2)


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def mock_upstream() -> MockUpstreamClient:
    """Create a mock upstream client with default empty responses."""
    return MockUpstreamClient()


@pytest.fixture
def timeout_upstream() -> MockUpstreamClient:
    """Create an upstream client that always times out."""
    return MockUpstreamClient(fail_with=UpstreamTimeoutException("balance", 0.2))


@pytest.fixture
def unreachable_upstream() -> MockUpstreamClient:
    """Create an upstream client that cannot connect."""
    return MockUpstreamClient(
        fail_with=UpstreamUnreachableException("balance", "connection refused")
    )


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest.fixture
def make_client(
    gateway_config: GatewayConfig,
) -> Callable[[UpstreamClient], AsyncClient]:
    """
    Factory for test clients bound to a given upstream client.

    Dependency overrides are installed when the client is created and
    cleared by the fixture teardown.
    """

    def _make(upstream: UpstreamClient, config: Optional[GatewayConfig] = None) -> AsyncClient:
        app.dependency_overrides[get_upstream_client] = lambda: upstream
        app.dependency_overrides[get_gateway_config] = lambda: config or gateway_config
        transport = ASGITransport(app=app)
        return AsyncClient(transport=transport, base_url="http://test")

    yield _make

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    make_client: Callable[[UpstreamClient], AsyncClient],
    mock_upstream: MockUpstreamClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses the recording mock upstream client
    - Uses a fixed gateway configuration
    """
    async with make_client(mock_upstream) as ac:
        yield ac


@pytest_asyncio.fixture
async def client_with_timeout(
    make_client: Callable[[UpstreamClient], AsyncClient],
    timeout_upstream: MockUpstreamClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client where the parent service always times out."""
    async with make_client(timeout_upstream) as ac:
        yield ac


@pytest_asyncio.fixture
async def client_with_unreachable_upstream(
    make_client: Callable[[UpstreamClient], AsyncClient],
    unreachable_upstream: MockUpstreamClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client where the parent service is unreachable."""
    async with make_client(unreachable_upstream) as ac:
        yield ac


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def debit_request() -> dict:
    """Valid check-and-debit body."""
    return {
        "userId": "user_1",
        "projectId": "proj_1",
        "cost": 5,
        "metadata": {"feature": "image"},
    }


@pytest.fixture
def checkout_request() -> dict:
    """Valid subscription checkout body."""
    return {
        "user_id": "user_1",
        "project_id": "proj_1",
        "amount": 9.99,
        "type": "subscription",
        "tier": "Pro",
    }
