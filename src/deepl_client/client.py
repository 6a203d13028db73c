"""Python clients for the DeepL translation API."""

from __future__ import annotations

import asyncio
import threading
from typing import List, Optional

import httpx

from .config import ClientConfig, Option
from .endpoints import (
    LanguageList,
    languages_request,
    rephrase_request,
    translate_request,
    usage_request,
)
from .errors import EmptyResultError
from .executor import AsyncRequestExecutor, RequestExecutor
from .models import (
    Improvement,
    Language,
    RephraseOptions,
    RephraseResponse,
    TranslateTextOptions,
    Translation,
    TranslationsResponse,
    Usage,
)
from .transport import build_async_http_client, build_http_client


def _resolve_config(
    auth_key: Optional[str], options: tuple, config: Optional[ClientConfig]
) -> ClientConfig:
    if config is not None:
        if auth_key is not None or options:
            raise ValueError("pass either auth_key with options or a ClientConfig, not both")
        return config
    if auth_key is None:
        raise ValueError("auth_key is required")
    return ClientConfig.create(auth_key, *options)


class Client:
    """Blocking DeepL client.

    Every call accepts ``timeout`` (seconds for the whole call, retries
    included) and ``cancel`` (a ``threading.Event`` that aborts pending
    retries). The client holds no per-call state and may be shared between
    threads.
    """

    def __init__(
        self,
        auth_key: Optional[str] = None,
        *options: Option,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = _resolve_config(auth_key, options, config)
        self._http = build_http_client(self._config, transport=transport)
        self._executor = RequestExecutor(self._config, self._http)

    @classmethod
    def from_config(
        cls, config: ClientConfig, *, transport: Optional[httpx.BaseTransport] = None
    ) -> "Client":
        return cls(config=config, transport=transport)

    @classmethod
    def from_env(cls, *, transport: Optional[httpx.BaseTransport] = None) -> "Client":
        return cls(config=ClientConfig.from_env(), transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def translate_text(
        self,
        text: str,
        target_lang: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Translation:
        options = TranslateTextOptions(text=[text], target_lang=target_lang)
        translations = self.translate_text_with_options(options, timeout=timeout, cancel=cancel)
        if not translations:
            raise EmptyResultError("no translation returned")
        return translations[0]

    def translate_text_with_options(
        self,
        options: TranslateTextOptions,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> List[Translation]:
        response = self._executor.execute(
            translate_request(options), TranslationsResponse, timeout=timeout, cancel=cancel
        )
        return response.translations

    def rephrase(
        self,
        text: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Improvement:
        improvements = self.rephrase_with_options(
            RephraseOptions(text=[text]), timeout=timeout, cancel=cancel
        )
        if not improvements:
            raise EmptyResultError("no improvements returned")
        return improvements[0]

    def rephrase_with_options(
        self,
        options: RephraseOptions,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> List[Improvement]:
        response = self._executor.execute(
            rephrase_request(options), RephraseResponse, timeout=timeout, cancel=cancel
        )
        return response.improvements

    def get_source_languages(
        self, *, timeout: Optional[float] = None, cancel: Optional[threading.Event] = None
    ) -> List[Language]:
        return self._executor.execute(
            languages_request("source"), LanguageList, timeout=timeout, cancel=cancel
        )

    def get_target_languages(
        self, *, timeout: Optional[float] = None, cancel: Optional[threading.Event] = None
    ) -> List[Language]:
        return self._executor.execute(
            languages_request("target"), LanguageList, timeout=timeout, cancel=cancel
        )

    def get_usage(
        self, *, timeout: Optional[float] = None, cancel: Optional[threading.Event] = None
    ) -> Usage:
        return self._executor.execute(usage_request(), Usage, timeout=timeout, cancel=cancel)

    def close(self) -> None:
        self._http.close()


class AsyncClient:
    """asyncio DeepL client with the same operations as :class:`Client`."""

    def __init__(
        self,
        auth_key: Optional[str] = None,
        *options: Option,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = _resolve_config(auth_key, options, config)
        self._http = build_async_http_client(self._config, transport=transport)
        self._executor = AsyncRequestExecutor(self._config, self._http)

    @classmethod
    def from_config(
        cls, config: ClientConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "AsyncClient":
        return cls(config=config, transport=transport)

    @classmethod
    def from_env(cls, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> "AsyncClient":
        return cls(config=ClientConfig.from_env(), transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def translate_text(
        self,
        text: str,
        target_lang: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> Translation:
        options = TranslateTextOptions(text=[text], target_lang=target_lang)
        translations = await self.translate_text_with_options(options, timeout=timeout, cancel=cancel)
        if not translations:
            raise EmptyResultError("no translation returned")
        return translations[0]

    async def translate_text_with_options(
        self,
        options: TranslateTextOptions,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> List[Translation]:
        response = await self._executor.execute(
            translate_request(options), TranslationsResponse, timeout=timeout, cancel=cancel
        )
        return response.translations

    async def rephrase(
        self,
        text: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> Improvement:
        improvements = await self.rephrase_with_options(
            RephraseOptions(text=[text]), timeout=timeout, cancel=cancel
        )
        if not improvements:
            raise EmptyResultError("no improvements returned")
        return improvements[0]

    async def rephrase_with_options(
        self,
        options: RephraseOptions,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> List[Improvement]:
        response = await self._executor.execute(
            rephrase_request(options), RephraseResponse, timeout=timeout, cancel=cancel
        )
        return response.improvements

    async def get_source_languages(
        self, *, timeout: Optional[float] = None, cancel: Optional[asyncio.Event] = None
    ) -> List[Language]:
        return await self._executor.execute(
            languages_request("source"), LanguageList, timeout=timeout, cancel=cancel
        )

    async def get_target_languages(
        self, *, timeout: Optional[float] = None, cancel: Optional[asyncio.Event] = None
    ) -> List[Language]:
        return await self._executor.execute(
            languages_request("target"), LanguageList, timeout=timeout, cancel=cancel
        )

    async def get_usage(
        self, *, timeout: Optional[float] = None, cancel: Optional[asyncio.Event] = None
    ) -> Usage:
        return await self._executor.execute(usage_request(), Usage, timeout=timeout, cancel=cancel)

    async def close(self) -> None:
        await self._http.aclose()


__all__ = ["Client", "AsyncClient"]
