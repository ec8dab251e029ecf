"""Process endpoint: run extraction (and optional enhancement) on posted text."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from src.api.models import ActionItemResponse, ProcessRequest, ProcessResponse, StatsResponse
from src.enhancement.enhancer import EnhancementFailedError, MissingCredentialError
from src.extraction.formatting import summarize
from src.extraction.models import ExternalAction, ExtractionResult
from src.extraction.pipeline import process_text
from src.pipeline_config import PipelineConfig

router = APIRouter()


def _action_response(action: str | ExternalAction) -> ActionItemResponse:
    if isinstance(action, ExternalAction):
        return ActionItemResponse(**asdict(action))
    return ActionItemResponse(text=action)


def _to_response(result: ExtractionResult) -> ProcessResponse:
    return ProcessResponse(
        actions=[_action_response(a) for a in result.actions],
        people=result.people,
        dates=result.dates,
        questions=result.questions,
        ideas=result.ideas,
        blockers=result.blockers,
        decisions=result.decisions,
        stats=StatsResponse(**asdict(result.stats)),
        summary=summarize(result),
        processed_at=result.processed_at.isoformat(),
    )


@router.post("/api/process", response_model=ProcessResponse)
async def process(request: ProcessRequest) -> ProcessResponse:
    """Extract structured items from a brain dump.

    With ``enhance`` set, the selected LLM provider is asked for additional
    items. Returns 501 if that provider has no API key configured and 502 if
    the provider call fails.
    """
    config = PipelineConfig(
        enhance=request.enhance,
        provider=request.provider,
        model=request.model,
    )

    try:
        result = process_text(request.text, config)
    except MissingCredentialError as exc:
        raise HTTPException(status_code=501, detail=str(exc)) from exc
    except EnhancementFailedError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return _to_response(result)
