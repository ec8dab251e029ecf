"""Pattern-based extraction of actions, people, dates and more from brain dumps."""

from __future__ import annotations

import re

from src.extraction.models import ExtractionResult
from src.extraction.patterns import (
    DECISION_FILLER_WORDS,
    DECISION_PATTERNS,
    PATTERNS,
    QUOTED_SPAN_PATTERN,
)


def extract_matches(text: str, patterns: list[re.Pattern[str]]) -> list[str]:
    """Run every pattern over ``text`` and collect unique, trimmed matches.

    Args:
        text: The raw input text.
        patterns: Ordered rules for a single category.

    Returns:
        Matches in first-seen order, with exact duplicates removed across
        all rules.
    """
    # dict keys keep insertion order and reject repeats
    matches: dict[str, None] = {}

    for pattern in patterns:
        for match in pattern.finditer(text):
            extracted = (match.group(1) if pattern.groups else None) or match.group(0)
            extracted = extracted.strip()
            if extracted:
                matches.setdefault(extracted, None)

    return list(matches)


def _blank_quoted(text: str) -> str:
    """Replace quoted spans with spaces so their contents never match."""
    return QUOTED_SPAN_PATTERN.sub(lambda m: " " * len(m.group(0)), text)


def extract_decisions(text: str) -> list[str]:
    """Find unresolved ``X or Y`` choices outside of quoted examples."""
    decisions: list[str] = []
    for candidate in extract_matches(_blank_quoted(text), DECISION_PATTERNS):
        sides = re.split(r"[ \t]+or[ \t]+", candidate.lower(), maxsplit=1)
        if any(side in DECISION_FILLER_WORDS for side in sides):
            continue
        decisions.append(candidate)
    return decisions


def extract_questions(text: str) -> list[str]:
    """Find questions, dropping whole lines that merely contain a narrower match."""
    questions = extract_matches(text, PATTERNS["questions"])
    return [q for q in questions if not any(other != q and other in q for other in questions)]


def process_dump(text: str) -> ExtractionResult:
    """Extract structured items from a brain dump using the pattern catalogue.

    Never fails: empty or unstructured input produces empty categories.

    Args:
        text: Free-form text.

    Returns:
        A fresh ExtractionResult.
    """
    return ExtractionResult(
        raw=text,
        actions=extract_matches(text, PATTERNS["actions"]),  # type: ignore[arg-type]
        people=extract_matches(text, PATTERNS["people"]),
        dates=extract_matches(text, PATTERNS["dates"]),
        questions=extract_questions(text),
        ideas=extract_matches(text, PATTERNS["ideas"]),
        blockers=extract_matches(text, PATTERNS["blockers"]),
        decisions=extract_decisions(text),
    )
