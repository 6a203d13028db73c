from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from deepl_client.config import ClientConfig
from deepl_client.retry import RetryPolicy

TEST_KEY = "test-api-key"
TEST_USER_AGENT = "deepl-client-test"


def json_response(status: int, data: Optional[Any] = None) -> httpx.Response:
    if data is None:
        return httpx.Response(status, content=b"")
    return httpx.Response(status, content=json.dumps(data).encode("utf-8"))


def make_config(max_retries: int = 3, **overrides: Any) -> ClientConfig:
    values = dict(
        auth_key=TEST_KEY,
        user_agent=TEST_USER_AGENT,
        retry_policy=RetryPolicy(max_retries=max_retries, max_delay=0.0, backoff_base=0.0),
        timeout=10.0,
    )
    values.update(overrides)
    return ClientConfig(**values)


class Recorder:
    """Counts calls and keeps every request seen by a mock transport."""

    def __init__(self, handler: Callable[[httpx.Request, int], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    @property
    def count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request, len(self.requests))


@pytest.fixture()
def config() -> ClientConfig:
    return make_config()
