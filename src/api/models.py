"""Pydantic request/response schemas for the Brain Dump Processor API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.config import settings
from src.pipeline_config import EnhancementProvider


class ProcessRequest(BaseModel):
    """Request body for the /api/process endpoint."""

    text: str
    enhance: bool = False
    provider: EnhancementProvider = Field(default_factory=lambda: settings.enhancement_provider)
    model: str | None = None


class ActionItemResponse(BaseModel):
    """A single action item; pattern matches carry source ``"pattern"``."""

    text: str
    priority: str | None = None
    confidence: float | None = None
    source: str = "pattern"


class StatsResponse(BaseModel):
    word_count: int
    action_count: int
    people_mentioned: int
    has_deadlines: bool
    has_blockers: bool
    enhanced: bool = False


class ProcessResponse(BaseModel):
    """Response body for the /api/process endpoint."""

    actions: list[ActionItemResponse] = []
    people: list[str] = []
    dates: list[str] = []
    questions: list[str] = []
    ideas: list[str] = []
    blockers: list[str] = []
    decisions: list[str] = []
    stats: StatsResponse
    summary: str
    processed_at: str
