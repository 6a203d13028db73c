"""Pydantic models for DeepL request payloads and responses."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WritingStyle(str, Enum):
    ACADEMIC = "academic"
    BUSINESS = "business"
    CASUAL = "casual"
    DEFAULT = "default"
    SIMPLE = "simple"
    PREFER_ACADEMIC = "prefer_academic"
    PREFER_BUSINESS = "prefer_business"
    PREFER_CASUAL = "prefer_casual"
    PREFER_SIMPLE = "prefer_simple"


class WritingTone(str, Enum):
    CONFIDENT = "confident"
    DEFAULT = "default"
    DIPLOMATIC = "diplomatic"
    ENTHUSIASTIC = "enthusiastic"
    FRIENDLY = "friendly"
    PREFER_CONFIDENT = "prefer_confident"
    PREFER_DIPLOMATIC = "prefer_diplomatic"
    PREFER_ENTHUSIASTIC = "prefer_enthusiastic"
    PREFER_FRIENDLY = "prefer_friendly"


class TranslateTextOptions(BaseModel):
    text: List[str] = Field(..., min_length=1)
    target_lang: str = Field(..., min_length=1)
    source_lang: Optional[str] = None
    context: Optional[str] = None
    show_billed_characters: Optional[bool] = None
    split_sentences: Optional[str] = None  # "0", "1" or "nonewlines"
    preserve_formatting: Optional[bool] = None
    formality: Optional[str] = None
    model_type: Optional[str] = None
    glossary_id: Optional[str] = None
    tag_handling: Optional[str] = None  # "xml" or "html"
    outline_detection: Optional[bool] = None
    non_splitting_tags: Optional[List[str]] = None
    splitting_tags: Optional[List[str]] = None
    ignore_tags: Optional[List[str]] = None


class Translation(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str
    detected_source_language: str = ""
    billed_characters: Optional[int] = None
    model_type_used: Optional[str] = None


class TranslationsResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    translations: List[Translation] = Field(default_factory=list)


class Language(BaseModel):
    model_config = ConfigDict(extra="allow")

    language: str
    name: str
    supports_formality: bool = False


class ProductUsage(BaseModel):
    model_config = ConfigDict(extra="allow")

    product_type: str
    api_key_character_count: int = 0
    character_count: int = 0


class Usage(BaseModel):
    model_config = ConfigDict(extra="allow")

    character_count: int = 0
    character_limit: int = 0
    products: List[ProductUsage] = Field(default_factory=list)
    api_key_character_count: Optional[int] = None
    api_key_character_limit: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def limit_reached(self) -> bool:
        return self.character_limit > 0 and self.character_count >= self.character_limit


class RephraseOptions(BaseModel):
    text: List[str] = Field(..., min_length=1)
    target_lang: Optional[str] = None
    writing_style: Optional[WritingStyle] = None
    tone: Optional[WritingTone] = None

    @model_validator(mode="after")
    def _style_or_tone(self) -> "RephraseOptions":
        if self.writing_style is not None and self.tone is not None:
            raise ValueError("only one of writing_style or tone can be set")
        return self


class Improvement(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str
    detected_source_language: str = ""
    target_language: Optional[str] = None


class RephraseResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    improvements: List[Improvement] = Field(default_factory=list)


__all__ = [
    "WritingStyle",
    "WritingTone",
    "TranslateTextOptions",
    "Translation",
    "TranslationsResponse",
    "Language",
    "ProductUsage",
    "Usage",
    "RephraseOptions",
    "Improvement",
    "RephraseResponse",
]
