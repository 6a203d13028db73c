"""Request execution with authentication, bounded retries and response decoding."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from functools import lru_cache
from typing import Any, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import ClientConfig
from .errors import DecodeError, DeepLError, RequestCancelled, RequestTimeout, error_from_response
from .request import OutboundRequest
from .retry import compute_delay, should_retry

logger = logging.getLogger("deepl_client.executor")

T = TypeVar("T")


@lru_cache(maxsize=64)
def _adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def decode_body(body: bytes, result_type: Type[T]) -> T:
    try:
        return _adapter(result_type).validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"failed to decode response body: {exc}") from exc


class _ExecutorBase:
    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _headers(self) -> dict:
        headers = dict(self._config.headers)
        headers["Authorization"] = f"DeepL-Auth-Key {self._config.auth_key}"
        headers["Content-Type"] = "application/json"
        if self._config.user_agent:
            headers["User-Agent"] = self._config.user_agent
        return headers

    def _next_attempt(self, request: OutboundRequest) -> OutboundRequest:
        clone = request.clone()
        clone.headers.update(self._headers())
        return clone

    def _log_retry(
        self,
        request: OutboundRequest,
        attempt: int,
        delay: float,
        response: Optional[httpx.Response],
        error: Optional[BaseException],
    ) -> None:
        outcome = f"status={response.status_code}" if response is not None else f"error={error!r}"
        logger.warning(
            "Retrying %s %s after %s attempt=%d/%d delay=%.3fs",
            request.method,
            request.url,
            outcome,
            attempt + 1,
            self._config.retry_policy.max_attempts,
            delay,
        )

    def _log_exhausted(
        self,
        request: OutboundRequest,
        response: Optional[httpx.Response],
        error: Optional[BaseException],
    ) -> None:
        outcome = f"status={response.status_code}" if response is not None else f"error={error!r}"
        logger.error(
            "Giving up on %s %s after %d attempts %s",
            request.method,
            request.url,
            self._config.retry_policy.max_attempts,
            outcome,
        )

    @staticmethod
    def _result(
        response: Optional[httpx.Response],
        error: Optional[BaseException],
        body: bytes,
        result_type: Type[T],
    ) -> T:
        if response is None:
            if error is None:
                raise DeepLError("request finished without a response or an error")
            raise error
        if not response.is_success:
            raise error_from_response(response.status_code, body)
        return decode_body(body, result_type)


class RequestExecutor(_ExecutorBase):
    """Runs requests over a blocking ``httpx.Client``.

    ``cancel`` is a ``threading.Event``; setting it interrupts a backoff wait
    immediately. ``timeout`` bounds the whole call including retries. An
    in-flight network call is bounded by the remaining deadline rather than
    interrupted; a cancel or an expired deadline seen when it returns still
    ends the call with a cancellation error.
    """

    def __init__(self, config: ClientConfig, http: httpx.Client) -> None:
        super().__init__(config)
        self._http = http

    def execute(
        self,
        request: OutboundRequest,
        result_type: Type[T],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> T:
        deadline = None if timeout is None else time.monotonic() + timeout
        cancel = cancel if cancel is not None else threading.Event()
        policy = self._config.retry_policy

        response: Optional[httpx.Response] = None
        error: Optional[BaseException] = None
        for attempt in range(policy.max_attempts):
            self._check(cancel, deadline)
            attempt_request = self._next_attempt(request)
            response, error = self._send(attempt_request, deadline)
            self._check_after_send(response, error, cancel, deadline)
            if not should_retry(response, error):
                break
            if attempt == policy.max_retries:
                self._log_exhausted(request, response, error)
                break
            delay = compute_delay(attempt, policy)
            self._log_retry(request, attempt, delay, response, error)
            if response is not None:
                response.close()
            self._wait(delay, cancel, deadline)

        body = b""
        if response is not None:
            try:
                body = response.read()
            finally:
                response.close()
        return self._result(response, error, body, result_type)

    def _send(
        self, request: OutboundRequest, deadline: Optional[float]
    ) -> Tuple[Optional[httpx.Response], Optional[httpx.TransportError]]:
        timeout: Any = httpx.USE_CLIENT_DEFAULT
        if deadline is not None:
            timeout = min(self._config.timeout, max(deadline - time.monotonic(), 0.001))
        http_request = self._http.build_request(
            request.method,
            request.url,
            params=request.params or None,
            headers=request.headers,
            content=request.body,
            timeout=timeout,
        )
        try:
            return self._http.send(http_request, stream=True), None
        except httpx.TransportError as exc:
            return None, exc

    @staticmethod
    def _check(cancel: threading.Event, deadline: Optional[float]) -> None:
        if cancel.is_set():
            raise RequestCancelled("request cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise RequestTimeout("request deadline exceeded")

    @staticmethod
    def _check_after_send(
        response: Optional[httpx.Response],
        error: Optional[BaseException],
        cancel: threading.Event,
        deadline: Optional[float],
    ) -> None:
        expired = deadline is not None and time.monotonic() >= deadline
        if not cancel.is_set() and not expired:
            return
        if response is not None:
            response.close()
        if cancel.is_set():
            raise RequestCancelled("request cancelled while awaiting response") from error
        raise RequestTimeout("request deadline exceeded while awaiting response") from error

    @staticmethod
    def _wait(delay: float, cancel: threading.Event, deadline: Optional[float]) -> None:
        if deadline is not None and time.monotonic() + delay >= deadline:
            raise RequestTimeout("request deadline exceeded during retry backoff")
        if cancel.wait(delay):
            raise RequestCancelled("request cancelled during retry backoff")


class AsyncRequestExecutor(_ExecutorBase):
    """Runs requests over an ``httpx.AsyncClient``.

    ``cancel`` is an ``asyncio.Event`` raced against each network call and
    each backoff sleep; ``timeout`` bounds the whole call. Cancelling the
    awaiting task propagates ``asyncio.CancelledError`` unchanged.
    """

    def __init__(self, config: ClientConfig, http: httpx.AsyncClient) -> None:
        super().__init__(config)
        self._http = http

    async def execute(
        self,
        request: OutboundRequest,
        result_type: Type[T],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> T:
        if timeout is None:
            return await self._run(request, result_type, cancel)
        try:
            return await asyncio.wait_for(self._run(request, result_type, cancel), timeout)
        except asyncio.TimeoutError as exc:
            raise RequestTimeout("request deadline exceeded") from exc

    async def _run(
        self,
        request: OutboundRequest,
        result_type: Type[T],
        cancel: Optional[asyncio.Event],
    ) -> T:
        policy = self._config.retry_policy

        response: Optional[httpx.Response] = None
        error: Optional[BaseException] = None
        for attempt in range(policy.max_attempts):
            if cancel is not None and cancel.is_set():
                raise RequestCancelled("request cancelled")
            attempt_request = self._next_attempt(request)
            response, error = await self._exchange(attempt_request, cancel)
            if not should_retry(response, error):
                break
            if attempt == policy.max_retries:
                self._log_exhausted(request, response, error)
                break
            delay = compute_delay(attempt, policy)
            self._log_retry(request, attempt, delay, response, error)
            if response is not None:
                await response.aclose()
            await self._wait(delay, cancel)

        body = b""
        if response is not None:
            try:
                body = await response.aread()
            finally:
                await response.aclose()
        return self._result(response, error, body, result_type)

    async def _send(
        self, request: OutboundRequest
    ) -> Tuple[Optional[httpx.Response], Optional[httpx.TransportError]]:
        http_request = self._http.build_request(
            request.method,
            request.url,
            params=request.params or None,
            headers=request.headers,
            content=request.body,
        )
        try:
            return await self._http.send(http_request, stream=True), None
        except httpx.TransportError as exc:
            return None, exc

    async def _exchange(
        self, request: OutboundRequest, cancel: Optional[asyncio.Event]
    ) -> Tuple[Optional[httpx.Response], Optional[httpx.TransportError]]:
        if cancel is None:
            return await self._send(request)
        send_task = asyncio.ensure_future(self._send(request))
        cancel_task = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = [task for task in (send_task, cancel_task) if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if cancel.is_set():
            if not send_task.cancelled() and send_task.exception() is None:
                response, _ = send_task.result()
                if response is not None:
                    await response.aclose()
            raise RequestCancelled("request cancelled while awaiting response")
        return send_task.result()

    @staticmethod
    async def _wait(delay: float, cancel: Optional[asyncio.Event]) -> None:
        if cancel is None:
            await asyncio.sleep(delay)
            return
        if cancel.is_set():
            raise RequestCancelled("request cancelled during retry backoff")
        try:
            await asyncio.wait_for(cancel.wait(), delay)
        except asyncio.TimeoutError:
            return
        raise RequestCancelled("request cancelled during retry backoff")


__all__ = ["RequestExecutor", "AsyncRequestExecutor", "decode_body"]
