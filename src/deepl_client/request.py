"""Outbound request representation with a body that survives retries."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import IO, Any, Dict, Optional, Union

from .errors import RequestCloneError

Body = Union[bytes, IO[bytes], None]


@dataclass
class OutboundRequest:
    """A logical API request.

    The body may arrive as a readable stream; it is read once and kept as
    bytes so every retry attempt sends an identical payload.
    """

    method: str
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Body = None

    @classmethod
    def json(
        cls,
        method: str,
        url: str,
        payload: Optional[Any] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> "OutboundRequest":
        body = None
        if payload is not None:
            body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        return cls(method=method, url=url, params=dict(params or {}), body=body)

    def materialize(self) -> Optional[bytes]:
        if self.body is None or isinstance(self.body, bytes):
            return self.body
        if isinstance(self.body, (bytearray, memoryview)):
            self.body = bytes(self.body)
            return self.body
        try:
            data = self.body.read()
        except (OSError, ValueError) as exc:
            raise RequestCloneError(f"failed to read request body: {exc}") from exc
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.body = bytes(data)
        return self.body

    def clone(self) -> "OutboundRequest":
        body = self.materialize()
        return OutboundRequest(
            method=self.method,
            url=self.url,
            params=dict(self.params),
            headers=dict(self.headers),
            body=body,
        )


__all__ = ["OutboundRequest", "Body"]
