from __future__ import annotations

import logging

import httpx
import pytest

from conftest import TEST_KEY, json_response, make_config
from deepl_client import AsyncClient, Client
from deepl_client.transport import build_http_client


def test_trace_logs_request_and_response(caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return json_response(200, {"character_count": 3, "character_limit": 10})

    caplog.set_level(logging.INFO, logger="deepl_client.trace")
    client = Client(config=make_config(trace=True), transport=httpx.MockTransport(handler))
    with client:
        usage = client.get_usage()

    assert usage.character_count == 3
    messages = [record.getMessage() for record in caplog.records if record.name == "deepl_client.trace"]
    assert any(m.startswith("HTTP Request:\nPOST https://api.deepl.com/v2/usage") for m in messages)
    assert any(m.startswith("HTTP Response:\n200") and '"character_count": 3' in m for m in messages)
    assert all(TEST_KEY not in m for m in messages)
    assert any("DeepL-Auth-Key [REDACTED]" in m for m in messages)


def test_no_trace_by_default(caplog) -> None:
    caplog.set_level(logging.INFO, logger="deepl_client.trace")
    client = Client(config=make_config(), transport=httpx.MockTransport(lambda request: json_response(200, [])))
    with client:
        client.get_source_languages()

    assert not [record for record in caplog.records if record.name == "deepl_client.trace"]


@pytest.mark.asyncio
async def test_async_trace(caplog) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return json_response(200, [])

    caplog.set_level(logging.INFO, logger="deepl_client.trace")
    async with AsyncClient(config=make_config(trace=True), transport=httpx.MockTransport(handler)) as client:
        await client.get_target_languages()

    messages = [record.getMessage() for record in caplog.records if record.name == "deepl_client.trace"]
    assert len(messages) == 2


def test_http_client_uses_config() -> None:
    config = make_config(server_url="http://localhost:3000", timeout=7.0)
    http = build_http_client(config)
    try:
        assert http.base_url.host == "localhost"
        assert http.base_url.port == 3000
        assert http.timeout.read == 7.0
    finally:
        http.close()


def test_retry_attempts_are_logged(caplog) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            return json_response(503)
        return json_response(200, [])

    caplog.set_level(logging.WARNING, logger="deepl_client.executor")
    with Client(config=make_config(), transport=httpx.MockTransport(handler)) as client:
        client.get_source_languages()

    warnings = [r for r in caplog.records if r.name == "deepl_client.executor"]
    assert len(warnings) == 1
    assert "status=503" in warnings[0].getMessage()
