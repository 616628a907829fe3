"""
tests.conftest

Shared fixtures: an in-process fake UAA and token refresher doubles.

Responsibilities:
- Capture every request the code under test sends (method, path, headers, body).
- Replay scripted responses in order, one per request.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

UAA_URL = "http://uaa.test"


@dataclass(slots=True)
class CapturedRequest:
    method: str
    path: str
    raw_path: str
    headers: dict[str, str]
    body: bytes

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass(slots=True)
class FakeUaa:
    """
    Per-test fake server. Queue responses with `respond(...)` before exercising the
    code under test, then assert on `requests`.
    """

    responses: list[tuple[int, bytes]] = field(default_factory=list)
    requests: list[CapturedRequest] = field(default_factory=list)

    def respond(self, *codes: int, body: bytes | dict[str, Any] | None = None) -> None:
        raw = json.dumps(body).encode() if isinstance(body, dict) else (body or b"")
        for code in codes:
            self.responses.append((code, raw))

    @property
    def app(self) -> Starlette:
        async def handle(request: Request) -> Response:
            self.requests.append(
                CapturedRequest(
                    method=request.method,
                    path=request.url.path,
                    raw_path=request.scope["raw_path"].decode().split("?", 1)[0],
                    headers=dict(request.headers),
                    body=await request.body(),
                )
            )
            if not self.responses:
                return Response(b"no scripted response", status_code=500)
            code, body = self.responses.pop(0)
            return Response(body, status_code=code)

        return Starlette(
            routes=[Route("/{path:path}", handle, methods=["GET", "POST", "PUT", "DELETE"])]
        )

    @property
    def transport(self) -> httpx.ASGITransport:
        return httpx.ASGITransport(app=self.app)


class StubTokenRefresher:
    def __init__(self, token: str = "my-token", *, error: Exception | None = None) -> None:
        self.token = token
        self.error = error
        self.calls = 0

    async def refresh_auth_token(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.token


@pytest.fixture
def fake_uaa() -> FakeUaa:
    return FakeUaa()


@pytest.fixture
def token_refresher() -> StubTokenRefresher:
    return StubTokenRefresher()


# --- Module Notes -----------------------------------------------------------
# Each test gets its own FakeUaa; nothing is shared between tests.
