"""End-to-end processing pipeline: extract -> (enhance -> merge)."""

from __future__ import annotations

import logging

from src.enhancement.enhancer import enhance
from src.extraction.extractor import process_dump
from src.extraction.merger import merge_results
from src.extraction.models import ExtractionResult
from src.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)


def enhance_result(result: ExtractionResult, config: PipelineConfig) -> ExtractionResult:
    """Enhance an existing extraction result with the configured LLM provider.

    ``result`` itself is never modified, so it stays usable if the provider
    call raises.

    Raises:
        EnhancementError: Propagated from the enhancer unchanged.
    """
    enhancement = enhance(result.raw, provider=config.provider, model=config.model)
    merged = merge_results(result, enhancement)
    logger.info(
        "Enhanced extraction via %s: %d -> %d actions, %d -> %d people",
        config.provider.value,
        len(result.actions),
        len(merged.actions),
        len(result.people),
        len(merged.people),
    )
    return merged


def process_text(text: str, config: PipelineConfig | None = None) -> ExtractionResult:
    """Full pipeline: pattern extraction, then optional LLM enhancement.

    Args:
        text: Raw brain dump text.
        config: Run configuration; defaults to pattern extraction only.

    Returns:
        The extraction result, merged with the LLM result when enabled.
    """
    config = config or PipelineConfig()
    result = process_dump(text)
    if not config.enhance:
        return result
    return enhance_result(result, config)
