from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest
from pydantic import ValidationError

from conftest import TEST_USER_AGENT, Recorder, json_response, make_config
from deepl_client import (
    APIError,
    Client,
    EmptyResultError,
    QuotaExceededError,
    RephraseOptions,
    TranslateTextOptions,
    WritingStyle,
    WritingTone,
)


def make_client(handler, **config_overrides) -> Client:
    return Client(config=make_config(**config_overrides), transport=httpx.MockTransport(handler))


def test_translate_text() -> None:
    def handler(request: httpx.Request, attempt: int) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/v2/translate"
        assert request.headers["User-Agent"] == TEST_USER_AGENT
        assert json.loads(request.content) == {"text": ["Hello, world!"], "target_lang": "DE"}
        return json_response(
            200,
            {"translations": [{"detected_source_language": "EN", "text": "Hallo, Welt!"}]},
        )

    with make_client(Recorder(handler)) as client:
        translation = client.translate_text("Hello, world!", "DE")

    assert translation.text == "Hallo, Welt!"
    assert translation.detected_source_language == "EN"


def test_translate_text_with_options_serializes_set_fields_only() -> None:
    seen = {}

    def handler(request: httpx.Request, attempt: int) -> httpx.Response:
        seen.update(json.loads(request.content))
        return json_response(
            200,
            {
                "translations": [
                    {"detected_source_language": "EN", "text": "Hallo", "billed_characters": 5, "model_type_used": "quality_optimized"},
                    {"detected_source_language": "EN", "text": "Welt", "billed_characters": 5},
                ]
            },
        )

    options = TranslateTextOptions(
        text=["Hello", "World"],
        target_lang="DE",
        source_lang="EN",
        show_billed_characters=True,
        formality="more",
        tag_handling="xml",
        ignore_tags=["x"],
    )

    with make_client(Recorder(handler)) as client:
        translations = client.translate_text_with_options(options)

    assert [t.text for t in translations] == ["Hallo", "Welt"]
    assert translations[0].billed_characters == 5
    assert translations[0].model_type_used == "quality_optimized"
    assert seen == {
        "text": ["Hello", "World"],
        "target_lang": "DE",
        "source_lang": "EN",
        "show_billed_characters": True,
        "formality": "more",
        "tag_handling": "xml",
        "ignore_tags": ["x"],
    }


def test_translate_text_empty_result() -> None:
    with make_client(Recorder(lambda request, attempt: json_response(200, {"translations": []}))) as client:
        with pytest.raises(EmptyResultError):
            client.translate_text("Hello", "DE")


def test_translate_text_quota_error() -> None:
    recorder = Recorder(lambda request, attempt: json_response(456, {"message": "quota exceeded"}))

    with make_client(recorder) as client:
        with pytest.raises(QuotaExceededError) as excinfo:
            client.translate_text("Hello", "DE")

    assert "HTTP 456" in str(excinfo.value)
    assert recorder.count == 1


def test_rephrase() -> None:
    def handler(request: httpx.Request, attempt: int) -> httpx.Response:
        assert request.url.path == "/v2/write/rephrase"
        assert json.loads(request.content) == {"text": ["this is a test"]}
        return json_response(
            200,
            {"improvements": [{"detected_source_language": "en", "text": "This is a test."}]},
        )

    with make_client(Recorder(handler)) as client:
        improvement = client.rephrase("this is a test")

    assert improvement.text == "This is a test."


def test_rephrase_with_options_multiple_texts() -> None:
    def handler(request: httpx.Request, attempt: int) -> httpx.Response:
        payload = json.loads(request.content)
        assert payload["writing_style"] == "business"
        assert payload["target_lang"] == "en-US"
        assert "tone" not in payload
        return json_response(
            200,
            {"improvements": [{"text": t.upper(), "detected_source_language": "en"} for t in payload["text"]]},
        )

    options = RephraseOptions(text=["one", "two"], target_lang="en-US", writing_style=WritingStyle.BUSINESS)
    with make_client(Recorder(handler)) as client:
        improvements = client.rephrase_with_options(options)

    assert [i.text for i in improvements] == ["ONE", "TWO"]


def test_rephrase_rejects_style_and_tone() -> None:
    with pytest.raises(ValidationError):
        RephraseOptions(text=["x"], writing_style=WritingStyle.CASUAL, tone=WritingTone.FRIENDLY)


def test_rephrase_no_improvements() -> None:
    with make_client(Recorder(lambda request, attempt: json_response(200, {"improvements": []}))) as client:
        with pytest.raises(EmptyResultError):
            client.rephrase("text")


def test_rephrase_api_error() -> None:
    recorder = Recorder(lambda request, attempt: json_response(400, {"message": "bad"}))
    with make_client(recorder) as client:
        with pytest.raises(APIError):
            client.rephrase("text")


@pytest.mark.parametrize("kind", ["source", "target"])
def test_get_languages(kind: str) -> None:
    def handler(request: httpx.Request, attempt: int) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/v2/languages"
        assert request.url.params["type"] == kind
        return json_response(
            200,
            [
                {"language": "DE", "name": "German", "supports_formality": True},
                {"language": "EN", "name": "English"},
            ],
        )

    with make_client(Recorder(handler)) as client:
        if kind == "source":
            languages = client.get_source_languages()
        else:
            languages = client.get_target_languages()

    assert [lang.language for lang in languages] == ["DE", "EN"]
    assert languages[0].supports_formality is True
    assert languages[1].supports_formality is False


def test_get_languages_retries_server_error() -> None:
    def handler(request: httpx.Request, attempt: int) -> httpx.Response:
        if attempt == 1:
            return json_response(500)
        return json_response(200, [])

    recorder = Recorder(handler)
    with make_client(recorder) as client:
        assert client.get_target_languages() == []

    assert recorder.count == 2


def test_get_usage() -> None:
    def handler(request: httpx.Request, attempt: int) -> httpx.Response:
        assert request.url.path == "/v2/usage"
        assert request.content == b""
        return json_response(
            200,
            {
                "character_count": 180118,
                "character_limit": 1250000,
                "products": [
                    {"product_type": "write", "api_key_character_count": 0, "character_count": 10000},
                    {"product_type": "translate", "api_key_character_count": 880000, "character_count": 900000},
                ],
                "api_key_character_count": 880000,
                "api_key_character_limit": 0,
                "start_time": "2025-05-13T09:18:42Z",
                "end_time": "2025-06-13T09:18:42Z",
            },
        )

    with make_client(Recorder(handler)) as client:
        usage = client.get_usage()

    assert usage.character_count == 180118
    assert usage.character_limit == 1250000
    assert usage.products[1].product_type == "translate"
    assert usage.api_key_character_count == 880000
    assert usage.start_time == datetime(2025, 5, 13, 9, 18, 42, tzinfo=timezone.utc)
    assert not usage.limit_reached


def test_get_usage_error() -> None:
    recorder = Recorder(lambda request, attempt: json_response(403))
    with make_client(recorder) as client:
        with pytest.raises(APIError) as excinfo:
            client.get_usage()

    assert excinfo.value.http_status == 403
    assert recorder.count == 1


def test_free_key_client_targets_free_server() -> None:
    hosts = []

    def handler(request: httpx.Request, attempt: int) -> httpx.Response:
        hosts.append(request.url.host)
        return json_response(200, {"character_count": 0, "character_limit": 0})

    client = Client("free-key:fx", transport=httpx.MockTransport(Recorder(handler)))
    with client:
        client.get_usage()

    assert hosts == ["api-free.deepl.com"]
