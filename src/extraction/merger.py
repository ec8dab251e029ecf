"""Merge LLM enhancement results into pattern-based extraction results."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from src.extraction.models import (
    CATEGORIES,
    EnhancementResult,
    Entry,
    EnrichedEntry,
    ExternalAction,
    ExtractionResult,
    entry_text,
)
from src.extraction.similarity import is_near_duplicate

DEFAULT_PRIORITY = "medium"
DEFAULT_CONFIDENCE = 0.8


def is_duplicate(existing: list[Any], incoming: str) -> bool:
    """Return True if ``incoming`` matches any entry already in ``existing``."""
    return any(is_near_duplicate(entry_text(e), incoming) for e in existing)


def _external_action(entry: Entry) -> ExternalAction:
    metadata = entry.metadata if isinstance(entry, EnrichedEntry) else {}
    return ExternalAction(
        text=entry.text,
        priority=metadata.get("priority") or DEFAULT_PRIORITY,
        confidence=metadata.get("confidence") or DEFAULT_CONFIDENCE,
    )


def merge_results(result: ExtractionResult, enhancement: EnhancementResult) -> ExtractionResult:
    """Fold LLM-provided entries into a copy of ``result``.

    Each incoming entry is checked against the growing merged list, so
    duplicates within the enhancement itself are suppressed too. People are
    de-duplicated by case-insensitive name only; every other category uses
    substring / similarity matching. New actions are tagged as external.

    Args:
        result: Pattern extraction result; left unmodified.
        enhancement: Parsed LLM response.

    Returns:
        A new ExtractionResult with ``enhanced`` set.
    """
    merged = replace(result, **{name: list(result.category(name)) for name in CATEGORIES})

    for action in enhancement.actions:
        if not is_duplicate(merged.actions, action.text):
            merged.actions.append(_external_action(action))

    for person in enhancement.people:
        name = person.text
        if not any(p.lower() == name.lower() for p in merged.people):
            merged.people.append(name)

    for name in ("dates", "questions", "ideas", "blockers", "decisions"):
        target = merged.category(name)
        for entry in getattr(enhancement, name):
            if not is_duplicate(target, entry.text):
                target.append(entry.text)

    merged.enhanced = True
    return merged
