"""Pipeline configuration: provider enum and PipelineConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EnhancementProvider(str, Enum):
    """LLM vendors that can enhance pattern-based extraction."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable configuration for a single processing run.

    Defaults mirror the command-line behaviour: pattern extraction only,
    with OpenAI as the provider if enhancement is switched on.
    """

    enhance: bool = False
    provider: EnhancementProvider = EnhancementProvider.OPENAI
    model: str | None = None
