"""Configuration objects for the DeepL client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Optional

from .retry import DEFAULT_RETRY_POLICY, RetryPolicy

__version__ = "0.2.0"

SERVER_URL = "https://api.deepl.com"
SERVER_URL_FREE = "https://api-free.deepl.com"
FREE_KEY_SUFFIX = ":fx"
DEFAULT_USER_AGENT = f"deepl-client-python/{__version__}"


def server_url_for(auth_key: str) -> str:
    if auth_key.endswith(FREE_KEY_SUFFIX):
        return SERVER_URL_FREE
    return SERVER_URL


@dataclass(frozen=True)
class ClientConfig:
    auth_key: str
    server_url: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    proxy: Optional[str] = None
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    trace: bool = False
    timeout: float = 60.0
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.server_url:
            object.__setattr__(self, "server_url", server_url_for(self.auth_key))
        else:
            object.__setattr__(self, "server_url", self.server_url.rstrip("/"))

    @property
    def is_free_account(self) -> bool:
        return self.auth_key.endswith(FREE_KEY_SUFFIX)

    @classmethod
    def create(cls, auth_key: str, *options: "Option") -> "ClientConfig":
        config = cls(auth_key=auth_key)
        for option in options:
            config = option(config)
        return config

    @classmethod
    def from_env(cls) -> "ClientConfig":
        auth_key = os.environ.get("DEEPL_AUTH_KEY", "")
        defaults = DEFAULT_RETRY_POLICY
        retry_policy = RetryPolicy(
            max_retries=int(os.environ.get("DEEPL_MAX_RETRIES", defaults.max_retries)),
            max_delay=float(os.environ.get("DEEPL_MAX_DELAY", defaults.max_delay)),
            backoff_base=float(os.environ.get("DEEPL_BACKOFF_BASE", defaults.backoff_base)),
        )
        return cls(
            auth_key=auth_key,
            server_url=os.environ.get("DEEPL_SERVER_URL") or None,
            user_agent=os.environ.get("DEEPL_USER_AGENT", DEFAULT_USER_AGENT),
            proxy=os.environ.get("DEEPL_PROXY_URL") or None,
            retry_policy=retry_policy,
            trace=os.environ.get("DEEPL_TRACE", "false").lower() in ("1", "true", "yes"),
            timeout=float(os.environ.get("DEEPL_TIMEOUT", "60")),
        )


Option = Callable[[ClientConfig], ClientConfig]


def with_user_agent(user_agent: str) -> Option:
    return lambda config: replace(config, user_agent=user_agent)


def with_proxy(proxy_url: str) -> Option:
    return lambda config: replace(config, proxy=proxy_url)


def with_retry_policy(
    max_retries: int,
    max_delay: float,
    backoff_base: Optional[float] = None,
) -> Option:
    if backoff_base is None:
        backoff_base = min(DEFAULT_RETRY_POLICY.backoff_base, max_delay)
    policy = RetryPolicy(max_retries=max_retries, max_delay=max_delay, backoff_base=backoff_base)
    return lambda config: replace(config, retry_policy=policy)


def with_trace(enabled: bool = True) -> Option:
    return lambda config: replace(config, trace=enabled)


def with_server_url(server_url: str) -> Option:
    return lambda config: replace(config, server_url=server_url)


def with_timeout(timeout: float) -> Option:
    return lambda config: replace(config, timeout=timeout)


__all__ = [
    "ClientConfig",
    "Option",
    "SERVER_URL",
    "SERVER_URL_FREE",
    "DEFAULT_USER_AGENT",
    "server_url_for",
    "with_user_agent",
    "with_proxy",
    "with_retry_policy",
    "with_trace",
    "with_server_url",
    "with_timeout",
]
