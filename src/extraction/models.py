"""Data models for pattern extraction and LLM enhancement results."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any

# Category order used for rendering and merging
CATEGORIES: tuple[str, ...] = (
    "actions",
    "people",
    "dates",
    "questions",
    "ideas",
    "blockers",
    "decisions",
)


@dataclass(frozen=True)
class PlainEntry:
    """An enhancement entry returned as a bare string."""

    text: str


@dataclass(frozen=True)
class EnrichedEntry:
    """An enhancement entry returned as an object with extra fields."""

    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


Entry = PlainEntry | EnrichedEntry


@dataclass
class ExternalAction:
    """An action item contributed by the LLM rather than the pattern catalogue."""

    text: str
    priority: str = "medium"
    confidence: float = 0.8
    source: str = "external"


def entry_text(entry: str | Entry | ExternalAction) -> str:
    """Return the comparable text of a stored or incoming entry."""
    if isinstance(entry, str):
        return entry
    return entry.text


@dataclass
class ExtractionStats:
    """Scalar metrics derived from an ExtractionResult."""

    word_count: int
    action_count: int
    people_mentioned: int
    has_deadlines: bool
    has_blockers: bool
    enhanced: bool = False


@dataclass
class ExtractionResult:
    """Structured items pulled out of a single brain dump."""

    raw: str
    actions: list[str | ExternalAction] = field(default_factory=list)
    people: list[str] = field(default_factory=list)
    dates: list[str] = field(default_factory=list)
    questions: list[str] = field(default_factory=list)
    ideas: list[str] = field(default_factory=list)
    blockers: list[str] = field(default_factory=list)
    decisions: list[str] = field(default_factory=list)
    enhanced: bool = False
    processed_at: datetime = field(default_factory=lambda: datetime.now(UTC), compare=False)

    @property
    def stats(self) -> ExtractionStats:
        """Recompute the summary metrics from the current category lists."""
        return ExtractionStats(
            word_count=count_words(self.raw),
            action_count=len(self.actions),
            people_mentioned=len(self.people),
            has_deadlines=bool(self.dates),
            has_blockers=bool(self.blockers),
            enhanced=self.enhanced,
        )

    def category(self, name: str) -> list[Any]:
        """Return the list backing category ``name``."""
        if name not in CATEGORIES:
            raise KeyError(f"Unknown extraction category: {name}")
        return getattr(self, name)  # type: ignore[no-any-return]

    def to_dict(self) -> dict[str, Any]:
        """Serialise the result to a JSON-ready mapping."""
        data: dict[str, Any] = {
            "raw": self.raw,
            "processed_at": self.processed_at.isoformat(),
        }
        for name in CATEGORIES:
            data[name] = [
                asdict(item) if isinstance(item, ExternalAction) else item
                for item in self.category(name)
            ]
        data["stats"] = asdict(self.stats)
        return data


@dataclass
class EnhancementResult:
    """Categorised entries returned by an LLM provider."""

    actions: list[Entry] = field(default_factory=list)
    people: list[Entry] = field(default_factory=list)
    dates: list[Entry] = field(default_factory=list)
    questions: list[Entry] = field(default_factory=list)
    ideas: list[Entry] = field(default_factory=list)
    blockers: list[Entry] = field(default_factory=list)
    decisions: list[Entry] = field(default_factory=list)


def count_words(text: str) -> int:
    """Count whitespace-separated pieces; an empty string counts as one."""
    # Leading/trailing whitespace yields empty pieces, which are counted too.
    return len(re.split(r"\s+", text))
