"""Request builders for the supported DeepL endpoints."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from .models import Language, RephraseOptions, TranslateTextOptions
from .request import OutboundRequest

TRANSLATE_PATH = "/v2/translate"
REPHRASE_PATH = "/v2/write/rephrase"
LANGUAGES_PATH = "/v2/languages"
USAGE_PATH = "/v2/usage"

LanguageList = List[Language]


def _payload(options: BaseModel) -> dict:
    return options.model_dump(mode="json", exclude_none=True)


def translate_request(options: TranslateTextOptions) -> OutboundRequest:
    return OutboundRequest.json("POST", TRANSLATE_PATH, _payload(options))


def rephrase_request(options: RephraseOptions) -> OutboundRequest:
    return OutboundRequest.json("POST", REPHRASE_PATH, _payload(options))


def languages_request(kind: str) -> OutboundRequest:
    if kind not in ("source", "target"):
        raise ValueError(f"language type must be 'source' or 'target', got {kind!r}")
    return OutboundRequest.json("POST", LANGUAGES_PATH, params={"type": kind})


def usage_request() -> OutboundRequest:
    return OutboundRequest.json("POST", USAGE_PATH)


__all__ = [
    "LanguageList",
    "translate_request",
    "rephrase_request",
    "languages_request",
    "usage_request",
]
