"""Pydantic schema for the JSON object returned by enhancement providers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from src.extraction.models import EnhancementResult, EnrichedEntry, Entry, PlainEntry


class EntryPayload(BaseModel):
    """An object-shaped entry; unknown keys are kept as metadata."""

    model_config = ConfigDict(extra="allow")

    text: str | None = None


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class ActionPayload(EntryPayload):
    priority: str | None = None
    confidence: float | None = None

    # Malformed metadata is dropped so the merger defaults apply.
    @field_validator("priority", mode="before")
    @classmethod
    def loose_priority(cls, value: Any) -> str | None:
        return _str_or_none(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def loose_confidence(cls, value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None


class PersonPayload(EntryPayload):
    name: str | None = None
    context: str | None = None

    @field_validator("context", mode="before")
    @classmethod
    def loose_context(cls, value: Any) -> str | None:
        return _str_or_none(value)


class DatePayload(EntryPayload):
    urgency: str | None = None

    @field_validator("urgency", mode="before")
    @classmethod
    def loose_urgency(cls, value: Any) -> str | None:
        return _str_or_none(value)


class EnhancementPayload(BaseModel):
    """Top-level response object. Missing or null keys are empty categories."""

    actions: list[str | ActionPayload] = []
    people: list[str | PersonPayload] = []
    dates: list[str | DatePayload] = []
    questions: list[str | EntryPayload] = []
    ideas: list[str | EntryPayload] = []
    blockers: list[str | EntryPayload] = []
    decisions: list[str | EntryPayload] = []

    @field_validator("*", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_result(self) -> EnhancementResult:
        """Normalise every entry to PlainEntry / EnrichedEntry, dropping blanks."""
        return EnhancementResult(
            actions=_entries(self.actions),
            people=_entries(self.people),
            dates=_entries(self.dates),
            questions=_entries(self.questions),
            ideas=_entries(self.ideas),
            blockers=_entries(self.blockers),
            decisions=_entries(self.decisions),
        )


def _entries(items: list[str | Any]) -> list[Entry]:
    entries: list[Entry] = []
    for item in items:
        if isinstance(item, str):
            if item.strip():
                entries.append(PlainEntry(text=item.strip()))
            continue

        # People objects carry "name" rather than "text"
        text = item.text or getattr(item, "name", None) or ""
        if not text.strip():
            continue
        metadata = item.model_dump(exclude={"text", "name"}, exclude_none=True)
        entries.append(EnrichedEntry(text=text.strip(), metadata=metadata))
    return entries


def parse_enhancement(data: Any) -> EnhancementResult:
    """Validate a decoded JSON value and convert it to an EnhancementResult.

    Raises:
        pydantic.ValidationError: If ``data`` does not match the schema.
    """
    return EnhancementPayload.model_validate(data).to_result()
