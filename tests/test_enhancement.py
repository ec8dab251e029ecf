"""Tests for LLM enhancement with mocked OpenAI / Anthropic clients."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest
from anthropic.types import TextBlock

from src.enhancement.enhancer import (
    SYSTEM_PROMPT,
    EnhancementError,
    EnhancementFailedError,
    MissingCredentialError,
    enhance,
    extract_json_object,
)
from src.enhancement.models import parse_enhancement
from src.extraction.models import EnrichedEntry, PlainEntry
from src.pipeline_config import EnhancementProvider

SAMPLE = {
    "actions": [{"text": "Follow up with John", "priority": "high", "confidence": 0.9}],
    "people": [{"name": "John", "context": "owes invoice"}],
    "dates": [{"text": "Friday", "urgency": "medium"}],
    "questions": ["Which database?"],
    "ideas": ["Start a newsletter"],
    "blockers": ["Waiting on legal"],
}


def _openai_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices[0].message.content = content
    return response


def _anthropic_response(text: str) -> MagicMock:
    response = MagicMock()
    response.content = [TextBlock(type="text", text=text)]
    return response


@pytest.fixture()
def mock_settings():
    with patch("src.enhancement.enhancer.settings") as settings:
        settings.api_key_for.return_value = "test-key"
        settings.model_for.return_value = "test-model"
        settings.openai_base_url = "https://api.openai.com/v1"
        yield settings


# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------


class TestParseEnhancement:
    def test_parses_strings_and_objects(self) -> None:
        result = parse_enhancement(SAMPLE)

        assert result.actions == [
            EnrichedEntry(
                text="Follow up with John",
                metadata={"priority": "high", "confidence": 0.9},
            )
        ]
        assert result.people == [EnrichedEntry(text="John", metadata={"context": "owes invoice"})]
        assert result.dates[0].text == "Friday"
        assert result.questions == [PlainEntry(text="Which database?")]
        assert result.decisions == []

    def test_missing_and_null_keys_are_empty(self) -> None:
        result = parse_enhancement({"ideas": None})
        assert result.actions == []
        assert result.ideas == []

    def test_drops_blank_entries(self) -> None:
        result = parse_enhancement({"blockers": ["  ", {"note": "no text"}, "Real blocker"]})
        assert result.blockers == [PlainEntry(text="Real blocker")]

    def test_keeps_unknown_fields_as_metadata(self) -> None:
        result = parse_enhancement({"ideas": [{"text": "Podcast", "effort": "low"}]})
        assert result.ideas == [EnrichedEntry(text="Podcast", metadata={"effort": "low"})]

    def test_malformed_metadata_is_dropped(self) -> None:
        result = parse_enhancement(
            {
                "actions": [{"text": "Book venue", "confidence": "high", "priority": 3}],
                "people": [{"name": "Ana", "context": ["team"]}],
                "dates": [{"text": "Monday", "urgency": None}],
            }
        )
        assert result.actions == [EnrichedEntry(text="Book venue", metadata={})]
        assert result.people == [EnrichedEntry(text="Ana", metadata={})]
        assert result.dates == [EnrichedEntry(text="Monday", metadata={})]

    def test_numeric_string_confidence_is_kept(self) -> None:
        result = parse_enhancement({"actions": [{"text": "Book venue", "confidence": "0.6"}]})
        assert result.actions[0].metadata == {"confidence": 0.6}

    def test_non_list_category_is_rejected(self) -> None:
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            parse_enhancement({"actions": "do everything"})


class TestExtractJsonObject:
    def test_finds_object_in_prose(self) -> None:
        content = 'Sure! Here you go:\n{"ideas": ["a"], "people": [{"name": "B"}]}\nHope that helps.'
        assert extract_json_object(content) == {"ideas": ["a"], "people": [{"name": "B"}]}

    def test_no_object_raises(self) -> None:
        with pytest.raises(ValueError, match="no JSON object"):
            extract_json_object("I could not find anything.")

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            extract_json_object("{not json}")


# ---------------------------------------------------------------------------
# enhance()
# ---------------------------------------------------------------------------


class TestEnhanceOpenAI:
    @patch("src.enhancement.enhancer.OpenAI")
    def test_calls_chat_completions_in_json_mode(
        self, mock_openai_cls: MagicMock, mock_settings: MagicMock
    ) -> None:
        mock_client = mock_openai_cls.return_value
        mock_client.chat.completions.create.return_value = _openai_response(json.dumps(SAMPLE))

        result = enhance("need to chase John", provider="openai")

        mock_openai_cls.assert_called_once_with(
            api_key="test-key", base_url="https://api.openai.com/v1"
        )
        call_kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert call_kwargs["model"] == "test-model"
        assert call_kwargs["response_format"] == {"type": "json_object"}
        assert call_kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert call_kwargs["messages"][1] == {"role": "user", "content": "need to chase John"}
        assert result.actions[0].text == "Follow up with John"

    @patch("src.enhancement.enhancer.OpenAI")
    def test_explicit_key_and_model_win(
        self, mock_openai_cls: MagicMock, mock_settings: MagicMock
    ) -> None:
        mock_client = mock_openai_cls.return_value
        mock_client.chat.completions.create.return_value = _openai_response("{}")

        enhance("text", api_key="explicit", model="gpt-x")

        assert mock_openai_cls.call_args.kwargs["api_key"] == "explicit"
        assert mock_client.chat.completions.create.call_args.kwargs["model"] == "gpt-x"
        mock_settings.api_key_for.assert_not_called()

    @patch("src.enhancement.enhancer.OpenAI")
    def test_api_error_is_wrapped(
        self, mock_openai_cls: MagicMock, mock_settings: MagicMock
    ) -> None:
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        mock_openai_cls.return_value.chat.completions.create.side_effect = (
            openai.APIConnectionError(request=request)
        )

        with pytest.raises(EnhancementFailedError) as exc_info:
            enhance("text", provider=EnhancementProvider.OPENAI)

        assert exc_info.value.provider is EnhancementProvider.OPENAI
        assert str(exc_info.value).startswith("LLM enhancement failed (openai):")
        assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)

    @patch("src.enhancement.enhancer.OpenAI")
    def test_invalid_json_is_wrapped(
        self, mock_openai_cls: MagicMock, mock_settings: MagicMock
    ) -> None:
        mock_openai_cls.return_value.chat.completions.create.return_value = _openai_response(
            "not json"
        )
        with pytest.raises(EnhancementFailedError):
            enhance("text")

    @patch("src.enhancement.enhancer.OpenAI")
    def test_no_choices_is_wrapped(
        self, mock_openai_cls: MagicMock, mock_settings: MagicMock
    ) -> None:
        response = MagicMock()
        response.choices = []
        mock_openai_cls.return_value.chat.completions.create.return_value = response

        with pytest.raises(EnhancementFailedError, match="no choices"):
            enhance("x", api_key="k")

    @patch("src.enhancement.enhancer.OpenAI")
    def test_schema_violation_is_wrapped(
        self, mock_openai_cls: MagicMock, mock_settings: MagicMock
    ) -> None:
        mock_openai_cls.return_value.chat.completions.create.return_value = _openai_response(
            json.dumps({"actions": 42})
        )
        with pytest.raises(EnhancementFailedError, match="unexpected response schema"):
            enhance("text")


class TestEnhanceAnthropic:
    @patch("src.enhancement.enhancer.Anthropic")
    def test_extracts_json_from_text_block(
        self, mock_anthropic_cls: MagicMock, mock_settings: MagicMock
    ) -> None:
        mock_client = mock_anthropic_cls.return_value
        mock_client.messages.create.return_value = _anthropic_response(
            "Here is the JSON you asked for:\n" + json.dumps(SAMPLE)
        )

        result = enhance("brain dump", provider="anthropic")

        call_kwargs = mock_client.messages.create.call_args.kwargs
        assert call_kwargs["system"] == SYSTEM_PROMPT
        assert call_kwargs["max_tokens"] == 1024
        assert call_kwargs["messages"] == [{"role": "user", "content": "brain dump"}]
        assert result.people[0].text == "John"
        mock_settings.api_key_for.assert_called_once_with(EnhancementProvider.ANTHROPIC)

    @patch("src.enhancement.enhancer.Anthropic")
    def test_missing_json_object_fails(
        self, mock_anthropic_cls: MagicMock, mock_settings: MagicMock
    ) -> None:
        mock_anthropic_cls.return_value.messages.create.return_value = _anthropic_response(
            "Sorry, nothing to extract."
        )

        with pytest.raises(EnhancementFailedError) as exc_info:
            enhance("brain dump", provider="anthropic")

        assert exc_info.value.provider is EnhancementProvider.ANTHROPIC
        assert "no JSON object" in str(exc_info.value)


class TestMissingCredential:
    @pytest.mark.parametrize("provider", ["openai", "anthropic"])
    def test_fails_before_any_client_is_built(self, provider: str) -> None:
        with (
            patch("src.enhancement.enhancer.settings") as settings,
            patch("src.enhancement.enhancer.OpenAI") as mock_openai_cls,
            patch("src.enhancement.enhancer.Anthropic") as mock_anthropic_cls,
        ):
            settings.api_key_for.return_value = ""
            with pytest.raises(MissingCredentialError) as exc_info:
                enhance("text", provider=provider)

        mock_openai_cls.assert_not_called()
        mock_anthropic_cls.assert_not_called()
        assert isinstance(exc_info.value, EnhancementError)
        assert f"{provider.upper()}_API_KEY" in str(exc_info.value)

    def test_unknown_provider_rejected(self) -> None:
        with pytest.raises(ValueError):
            enhance("text", provider="gemini")
