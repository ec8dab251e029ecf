"""LLM-powered enhancement of brain dump extraction via OpenAI or Anthropic."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import anthropic
import openai
from anthropic import Anthropic
from anthropic.types import TextBlock
from openai import OpenAI
from pydantic import ValidationError

from src.config import settings
from src.enhancement.models import parse_enhancement
from src.extraction.models import EnhancementResult
from src.pipeline_config import EnhancementProvider

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are extracting structured information from a brain dump. The user dumps \
thoughts in whatever order they come out. Your job is to find:

1. ACTION ITEMS - things that need to be done (explicit or implicit)
2. PEOPLE - anyone mentioned or implied
3. DEADLINES - dates, timeframes, urgency indicators
4. QUESTIONS - decisions that need to be made
5. BLOCKERS - things preventing progress
6. IDEAS - possibilities to explore later
7. DECISIONS - unresolved choices between alternatives ("X or Y")

For each action item, be aggressive about finding implicit ones:
- "John owes me X" -> implies "follow up with John about X"
- "Haven't heard back from X" -> implies "follow up with X"
- "X is broken" -> implies "fix X"

Output as JSON with this structure:
{
  "actions": [{"text": "...", "priority": "high|medium|low", "confidence": 0.0-1.0}],
  "people": [{"name": "...", "context": "..."}],
  "dates": [{"text": "...", "urgency": "high|medium|low"}],
  "questions": ["..."],
  "ideas": ["..."],
  "blockers": ["..."],
  "decisions": ["..."]
}

Be concise. Clean up text but stay faithful to the original meaning."""

# Greedy: spans from the first "{" to the last "}"
_JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


class EnhancementError(Exception):
    """Base class for failures of the optional LLM enhancement step."""

    def __init__(self, provider: EnhancementProvider | str, message: str) -> None:
        self.provider = EnhancementProvider(provider)
        super().__init__(message)


class MissingCredentialError(EnhancementError):
    """No API key is configured for the selected provider."""

    def __init__(self, provider: EnhancementProvider | str) -> None:
        provider = EnhancementProvider(provider)
        env_var = f"{provider.value.upper()}_API_KEY"
        super().__init__(
            provider,
            f"{provider.value} API key required. Set {env_var} or pass api_key.",
        )


class EnhancementFailedError(EnhancementError):
    """The provider call failed or its response could not be parsed."""

    def __init__(self, provider: EnhancementProvider | str, cause: str) -> None:
        provider = EnhancementProvider(provider)
        self.cause = cause
        super().__init__(provider, f"LLM enhancement failed ({provider.value}): {cause}")


def extract_json_object(content: str) -> dict[str, Any]:
    """Locate and decode the outermost ``{...}`` span in free text.

    Raises:
        ValueError: If no object can be found or it is not valid JSON.
    """
    match = _JSON_OBJECT_PATTERN.search(content)
    if match is None:
        raise ValueError("no JSON object found in response")
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _call_openai(text: str, api_key: str, model: str) -> Any:
    """Call the Chat Completions API in JSON mode and decode the reply."""
    client = OpenAI(api_key=api_key, base_url=settings.openai_base_url)
    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": text},
        ],
        response_format={"type": "json_object"},
        temperature=0.3,
    )
    if not response.choices:
        raise ValueError("empty response: no choices returned")
    content = response.choices[0].message.content
    if not content:
        raise ValueError("empty response content")
    return json.loads(content)


def _call_anthropic(text: str, api_key: str, model: str) -> Any:
    """Call the Messages API and pull the JSON object out of the text reply."""
    client = Anthropic(api_key=api_key)
    response = client.messages.create(
        model=model,
        max_tokens=1024,
        system=SYSTEM_PROMPT,
        messages=[{"role": "user", "content": text}],
    )

    # No JSON mode here, so the object has to be found in prose.
    block = response.content[0] if response.content else None
    if not isinstance(block, TextBlock):
        raise ValueError(f"Expected TextBlock from Claude, got {type(block).__name__}")
    return extract_json_object(block.text)


def enhance(
    text: str,
    provider: EnhancementProvider | str = EnhancementProvider.OPENAI,
    model: str | None = None,
    api_key: str | None = None,
) -> EnhancementResult:
    """Ask an LLM to extract the same categories as the pattern extractor.

    A single attempt is made; the caller decides whether to retry.

    Args:
        text: Raw brain dump text.
        provider: ``"openai"`` or ``"anthropic"`` (string or enum).
        model: Model name; defaults to the provider's configured model.
        api_key: Credential; defaults to the provider's configured key.

    Returns:
        The parsed EnhancementResult.

    Raises:
        MissingCredentialError: No key configured; raised before any request.
        EnhancementFailedError: The request failed or the reply was unusable.
    """
    provider = EnhancementProvider(provider)
    api_key = api_key or settings.api_key_for(provider)
    if not api_key:
        raise MissingCredentialError(provider)
    model = model or settings.model_for(provider)
    logger.info("Requesting %s enhancement with model %s", provider.value, model)

    try:
        if provider is EnhancementProvider.ANTHROPIC:
            data = _call_anthropic(text, api_key, model)
        else:
            data = _call_openai(text, api_key, model)
        return parse_enhancement(data)
    except (openai.APIError, anthropic.APIError) as exc:
        raise EnhancementFailedError(provider, f"API error: {exc}") from exc
    except ValidationError as exc:
        raise EnhancementFailedError(provider, f"unexpected response schema: {exc}") from exc
    except ValueError as exc:
        # json.JSONDecodeError is a ValueError
        raise EnhancementFailedError(provider, str(exc)) from exc
