"""httpx client construction: base URL, proxy, timeout and request tracing."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .config import ClientConfig

logger = logging.getLogger("deepl_client.trace")

REDACTED = "[REDACTED]"


def _redact(headers: httpx.Headers) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for name, value in headers.items():
        if name.lower() == "authorization":
            scheme = value.split(" ", 1)[0] if " " in value else ""
            value = f"{scheme} {REDACTED}".strip()
        out[name] = value
    return out


def _dump_headers(headers: httpx.Headers) -> str:
    return "\n".join(f"{name}: {value}" for name, value in _redact(headers).items())


def _body_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def format_request(request: httpx.Request) -> str:
    return (
        f"HTTP Request:\n{request.method} {request.url}\n"
        f"{_dump_headers(request.headers)}\n\n{_body_text(request.content)}"
    )


def format_response(response: httpx.Response) -> str:
    return (
        f"HTTP Response:\n{response.status_code} {response.reason_phrase}\n"
        f"{_dump_headers(response.headers)}\n\n{_body_text(response.content)}"
    )


def _log_request(request: httpx.Request) -> None:
    logger.info(format_request(request))


def _log_response(response: httpx.Response) -> None:
    response.read()
    logger.info(format_response(response))


async def _alog_request(request: httpx.Request) -> None:
    logger.info(format_request(request))


async def _alog_response(response: httpx.Response) -> None:
    await response.aread()
    logger.info(format_response(response))


def _client_kwargs(config: ClientConfig, transport: Optional[Any]) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {
        "base_url": config.server_url,
        "timeout": config.timeout,
    }
    if config.proxy:
        kwargs["proxy"] = config.proxy
    if transport is not None:
        kwargs["transport"] = transport
    return kwargs


def build_http_client(
    config: ClientConfig, *, transport: Optional[httpx.BaseTransport] = None
) -> httpx.Client:
    kwargs = _client_kwargs(config, transport)
    if config.trace:
        kwargs["event_hooks"] = {"request": [_log_request], "response": [_log_response]}
    return httpx.Client(**kwargs)


def build_async_http_client(
    config: ClientConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    kwargs = _client_kwargs(config, transport)
    if config.trace:
        kwargs["event_hooks"] = {"request": [_alog_request], "response": [_alog_response]}
    return httpx.AsyncClient(**kwargs)


__all__ = ["build_http_client", "build_async_http_client", "format_request", "format_response"]
