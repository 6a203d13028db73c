"""Error taxonomy for the DeepL client."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Dict, Optional

HTTP_ERROR_MESSAGES: Dict[int, str] = {
    400: "Bad request. Please check error message and your parameters.",
    403: "Authorization failed. Please supply a valid auth_key parameter.",
    404: "The requested resource could not be found.",
    413: "The request size exceeds the limit.",
    414: (
        "The request URL is too long. You can avoid this error by using a POST request "
        "instead of a GET request, and sending the parameters in the HTTP body."
    ),
    429: "Too many requests. Please wait and resend your request.",
    456: "Quota exceeded. The character limit has been reached.",
    500: "Internal server error.",
    503: "Resource currently unavailable. Try again later.",
    529: "Too many requests. Please wait and resend your request.",
}


class DeepLError(Exception):
    """Base exception for the client."""


class APIError(DeepLError):
    """Non-2xx response from the API."""

    def __init__(self, http_status: int, status_text: str, message: Optional[str] = None) -> None:
        self.http_status = http_status
        self.status_text = status_text
        self.message = message
        text = f"HTTP {http_status}: {status_text}"
        if message:
            text = f"{text} --> {message}"
        super().__init__(text)

    @property
    def retryable(self) -> bool:
        return self.http_status == 429 or self.http_status >= 500


class AuthorizationError(APIError):
    pass


class QuotaExceededError(APIError):
    pass


class TooManyRequestsError(APIError):
    pass


class ServerError(APIError):
    pass


class DecodeError(DeepLError):
    """Successful status but the body is not the expected JSON shape."""


class RequestCloneError(DeepLError):
    """The request body could not be read for another attempt."""


class RequestCancelled(DeepLError):
    """The caller cancelled the call before it completed."""


class RequestTimeout(RequestCancelled):
    """The call's deadline passed before it completed."""


class EmptyResultError(DeepLError):
    """The API answered successfully but returned no items."""


def status_text_for(status: int) -> str:
    if status in HTTP_ERROR_MESSAGES:
        return HTTP_ERROR_MESSAGES[status]
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "unknown error"


def extract_message(body: bytes) -> Optional[str]:
    if not body:
        return None
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def error_from_response(status: int, body: bytes) -> APIError:
    if status == 403:
        cls = AuthorizationError
    elif status == 456:
        cls = QuotaExceededError
    elif status in (429, 529):
        cls = TooManyRequestsError
    elif status >= 500:
        cls = ServerError
    else:
        cls = APIError
    return cls(status, status_text_for(status), extract_message(body))


__all__ = [
    "HTTP_ERROR_MESSAGES",
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
    "status_text_for",
    "extract_message",
    "error_from_response",
]
