"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - assistant_config: Config with fast polling and a small attempt bound
    - fake_api: In-memory stand-in for the hosted Assistants API
    - http_client: HTTPX client routed to fake_api
    - assistant_client: AssistantClient wired to http_client
    - async_client: HTTPX client for API testing

The remote service is faked at the transport level so the real client code
builds and parses every request.
"""

import asyncio
import re
from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.assistant.client import AssistantClient
from src.assistant.config import AssistantConfig

BASE_URL = "https://assistants.test/v1"

_ROUTES = [
    ("POST", re.compile(r"^/threads$"), "create_thread"),
    ("POST", re.compile(r"^/threads/[^/]+/messages$"), "add_message"),
    ("POST", re.compile(r"^/threads/[^/]+/runs$"), "create_run"),
    ("GET", re.compile(r"^/threads/[^/]+/runs/[^/]+$"), "get_run"),
    ("GET", re.compile(r"^/threads/[^/]+/messages$"), "list_messages"),
]


def assistant_message(text: str, message_id: str = "msg_assistant") -> dict:
    return {
        "id": message_id,
        "role": "assistant",
        "content": [{"type": "text", "text": {"value": text, "annotations": []}}],
    }


def user_message(text: str, message_id: str = "msg_user") -> dict:
    return {
        "id": message_id,
        "role": "user",
        "content": [{"type": "text", "text": {"value": text, "annotations": []}}],
    }


class FakeAssistantAPI:
    """Serves the five Assistants API endpoints used by the client.

    Attributes:
        calls: Route names in the order they were requested.
        requests: Raw requests in the same order.
        run_statuses: Statuses returned by successive run checks. The last
            one repeats once the list is down to a single entry.
        messages: Thread messages returned by the list endpoint, newest first.
        failures: One-shot failures keyed by route name. An int is returned
            as an error status, an exception is raised.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.requests: list[httpx.Request] = []
        self.run_statuses: list[str] = ["completed"]
        self.messages: list[dict] = [assistant_message("Hello from the assistant")]
        self.failures: dict[str, int | Exception] = {}
        self.responses: dict[str, dict] = {}
        self._thread_count = 0

    def count(self, route: str) -> int:
        return self.calls.count(route)

    def _route(self, request: httpx.Request) -> str:
        path = request.url.path.removeprefix("/v1")
        for method, pattern, name in _ROUTES:
            if request.method == method and pattern.match(path):
                return name
        raise AssertionError(f"Unexpected request: {request.method} {path}")

    def handler(self, request: httpx.Request) -> httpx.Response:
        route = self._route(request)
        self.calls.append(route)
        self.requests.append(request)

        failure = self.failures.pop(route, None)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return httpx.Response(failure, json={"error": {"message": f"{route} failed"}})

        if route in self.responses:
            return httpx.Response(200, json=self.responses[route])
        if route == "create_thread":
            self._thread_count += 1
            return httpx.Response(200, json={"id": f"thread_{self._thread_count}"})
        if route == "add_message":
            return httpx.Response(200, json=user_message("ignored"))
        if route == "create_run":
            return httpx.Response(200, json={"id": "run_1", "status": "queued"})
        if route == "get_run":
            status = self.run_statuses.pop(0) if len(self.run_statuses) > 1 else self.run_statuses[0]
            return httpx.Response(200, json={"id": "run_1", "status": status})
        return httpx.Response(200, json={"object": "list", "data": self.messages})


@pytest.fixture
def assistant_config() -> AssistantConfig:
    """Return config with zero poll delay and a bound of three checks."""
    return AssistantConfig(
        api_key="sk-test-key",
        assistant_id="asst_test",
        base_url=BASE_URL,
        poll_interval=0.0,
        max_poll_attempts=3,
    )


@pytest.fixture
def fake_api() -> FakeAssistantAPI:
    return FakeAssistantAPI()


@pytest.fixture
async def http_client(fake_api: FakeAssistantAPI) -> AsyncGenerator[httpx.AsyncClient]:
    """Create an HTTPX client whose requests are answered by fake_api."""
    transport = httpx.MockTransport(fake_api.handler)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client


@pytest.fixture
def assistant_client(
    assistant_config: AssistantConfig, http_client: httpx.AsyncClient
) -> AssistantClient:
    return AssistantClient(config=assistant_config, http_client=http_client)


@pytest.fixture
async def async_client(assistant_client: AssistantClient) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    ASGITransport does not run the lifespan, so the state it would set up
    is assigned directly.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app = create_app()
    app.state.assistant_client = assistant_client
    app.state.chat_lock = asyncio.Lock()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
