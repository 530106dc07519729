"""Pytest fixtures: test settings and an in-memory LifeUp Cloud API."""
import json
from typing import Any, AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from lifeup_agent.config import Settings
from lifeup_agent.services.lifeup_client import LifeUpClient


def envelope(data: Any = None, code: int = 200, message: str = "success") -> dict:
    return {"code": code, "message": message, "data": data}


class FakeLifeUp:
    """httpx.MockTransport handler emulating the LifeUp Cloud endpoints.

    - ``GET /`` answers ``health_statuses`` in order, then 200 (or 503 when
      ``healthy`` is False)
    - ``POST /api`` records the command and answers the next queued reply
      (envelope dict, httpx.Response, or an exception to raise)
    - any other GET answers ``routes[path]`` wrapped in a success envelope
    """

    def __init__(self):
        self.healthy = True
        self.health_statuses: list[int] = []
        self.health_calls = 0
        self.commands: list[str] = []
        self.command_replies: list[Any] = []
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/":
            self.health_calls += 1
            if self.health_statuses:
                return httpx.Response(self.health_statuses.pop(0))
            return httpx.Response(200 if self.healthy else 503)

        if request.method == "POST" and path == "/api":
            self.commands.append(json.loads(request.content)["urls"][0])
            reply = self.command_replies.pop(0) if self.command_replies else envelope()
            if isinstance(reply, Exception):
                raise reply
            if isinstance(reply, httpx.Response):
                return reply
            return httpx.Response(200, json=reply)

        if path in self.routes:
            value = self.routes[path]
            if isinstance(value, Exception):
                raise value
            if isinstance(value, httpx.Response):
                return value
            return httpx.Response(200, json=envelope(value))

        return httpx.Response(404, json=envelope(code=404, message="not found"))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        LIFEUP_HOST="lifeup.test",
        LIFEUP_PORT=13276,
        LIFEUP_API_TOKEN="",
        LIFEUP_HEALTH_RETRIES=2,
        LIFEUP_HEALTH_RETRY_DELAY=0,
        LIFEUP_SUBTASK_DELAY=0,
        SAFE_MODE=False,
    )


@pytest.fixture
def lifeup() -> FakeLifeUp:
    return FakeLifeUp()


@pytest_asyncio.fixture
async def lifeup_client(settings, lifeup) -> AsyncGenerator[LifeUpClient, None]:
    async with LifeUpClient(settings, transport=httpx.MockTransport(lifeup)) as client:
        yield client
