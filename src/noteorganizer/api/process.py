"""Stateless processing endpoints: organize/visualize text, or just classify it."""

import asyncio
import logging

from fastapi import APIRouter

from noteorganizer.api.dependencies import get_processor
from noteorganizer.models import AnalyzeRequest, AnalyzeResponse, ProcessRequest, ProcessResponse
from noteorganizer.processing.classifier import (
    classify_diagram,
    classify_note,
    classify_tone,
    should_visualize,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["process"])


@router.post("/process", response_model=ProcessResponse)
async def process(request: ProcessRequest) -> ProcessResponse:
    """Organize or visualize text.

    Text shorter than the minimum length is not processed and comes back
    with status "skipped". The sequence number is echoed so clients can
    drop responses that arrive out of order.
    """
    processor = get_processor()
    # Remote generation is blocking I/O, run it in a thread
    outcome = await asyncio.to_thread(
        processor.process, request.text, request.mode, request.local_only
    )
    if outcome.skipped:
        return ProcessResponse(status="skipped", sequence=request.sequence)

    logger.info(
        "Processed %d chars in %s mode via %s", len(request.text), outcome.mode, outcome.source
    )
    return ProcessResponse(
        status="processed",
        source=outcome.source,
        fallback_reason=outcome.fallback_reason,
        sequence=request.sequence,
        result=outcome.result,
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest) -> AnalyzeResponse:
    """Classify text without rendering it."""
    tone = classify_tone(request.text)
    return AnalyzeResponse(
        note_category=classify_note(request.text),
        diagram_kind=classify_diagram(request.text),
        should_visualize=should_visualize(request.text),
        tone=tone.tone,
        tone_intensity=tone.intensity,
    )
