"""Shared fixtures: a frozen config and a fake Unomi behind httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any, Callable, Union

import httpx
import pytest

from core.client import UnomiClient
from core.config import UnomiConfig

Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


def make_config(**overrides) -> UnomiConfig:
    values = dict(
        base_url="http://unomi.test:8181",
        username="karaf",
        password="karaf-secret",
        key="peer-key",
        profile_id="fallback-profile",
    )
    values.update(overrides)
    return UnomiConfig(**values)


class FakeUnomi:
    """Records every request and answers from a (method, path) route table.

    Unrouted requests get a 404 with a Unomi-style ``message`` body.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Responder] = {}

    def route(self, method: str, path: str, responder: Responder = None, *, status: int = 200, body: Any = None):
        if responder is None:
            def responder(request: httpx.Request) -> httpx.Response:
                if body is None:
                    return httpx.Response(status)
                return httpx.Response(status, json=body)

        self.routes[(method, path)] = responder

    def fail(self, method: str, path: str, message: str = "connection refused"):
        def raise_connect(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(message, request=request)

        self.routes[(method, path)] = raise_connect

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404, json={"message": f"no route for {request.method} {request.url.path}"})
        if callable(responder):
            return responder(request)
        return responder

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def config() -> UnomiConfig:
    return make_config()


@pytest.fixture
def unomi() -> FakeUnomi:
    return FakeUnomi()


@pytest.fixture
def client(config, unomi) -> UnomiClient:
    return UnomiClient(config, transport=unomi.transport)
