"""DeepL translation API client."""

from .client import AsyncClient, Client
from .config import (
    ClientConfig,
    __version__,
    with_proxy,
    with_retry_policy,
    with_server_url,
    with_timeout,
    with_trace,
    with_user_agent,
)
from .errors import (
    APIError,
    AuthorizationError,
    DecodeError,
    DeepLError,
    EmptyResultError,
    QuotaExceededError,
    RequestCancelled,
    RequestCloneError,
    RequestTimeout,
    ServerError,
    TooManyRequestsError,
)
from .models import (
    Improvement,
    Language,
    ProductUsage,
    RephraseOptions,
    TranslateTextOptions,
    Translation,
    Usage,
    WritingStyle,
    WritingTone,
)
from .request import OutboundRequest
from .retry import RetryPolicy

__all__ = [
    "Client",
    "AsyncClient",
    "ClientConfig",
    "RetryPolicy",
    "OutboundRequest",
    "with_proxy",
    "with_retry_policy",
    "with_server_url",
    "with_timeout",
    "with_trace",
    "with_user_agent",
    "DeepLError",
    "APIError",
    "AuthorizationError",
    "QuotaExceededError",
    "TooManyRequestsError",
    "ServerError",
    "DecodeError",
    "RequestCloneError",
    "RequestCancelled",
    "RequestTimeout",
    "EmptyResultError",
    "TranslateTextOptions",
    "Translation",
    "RephraseOptions",
    "Improvement",
    "WritingStyle",
    "WritingTone",
    "Language",
    "Usage",
    "ProductUsage",
]
