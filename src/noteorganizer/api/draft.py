"""Draft session endpoints: the single current note and its current result."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from noteorganizer.api.dependencies import get_session
from noteorganizer.export import export_content, export_filename
from noteorganizer.models import DraftResponse, DraftUpdate, ModeUpdate, SessionResult
from noteorganizer.session import NoteSession

router = APIRouter(prefix="/api/v1/draft", tags=["draft"])


def _draft_response(session: NoteSession) -> DraftResponse:
    return DraftResponse(text=session.text, saved=session.saved, last_saved=session.last_saved)


def _session_result(session: NoteSession) -> SessionResult:
    current = session.current
    return SessionResult(
        sequence=session.sequence,
        source=current.source if current else None,
        result=current.result if current else None,
    )


@router.get("", response_model=DraftResponse)
async def get_draft() -> DraftResponse:
    return _draft_response(get_session())


@router.put("", response_model=DraftResponse)
async def update_draft(body: DraftUpdate) -> DraftResponse:
    """Replace the draft. Processing and autosave run after their debounce delays."""
    session = get_session()
    session.edit(body.text)
    return _draft_response(session)


@router.delete("", response_model=DraftResponse)
async def clear_draft() -> DraftResponse:
    session = get_session()
    session.clear()
    return _draft_response(session)


@router.post("/save", response_model=DraftResponse)
async def save_draft() -> DraftResponse:
    session = get_session()
    session.save()
    return _draft_response(session)


@router.put("/mode", response_model=SessionResult)
async def set_mode(body: ModeUpdate) -> SessionResult:
    session = get_session()
    session.set_mode(body.mode)
    return _session_result(session)


@router.post("/process", response_model=SessionResult)
async def process_draft() -> SessionResult:
    """Process the draft now instead of waiting for the debounce delay."""
    session = get_session()
    await session.process_now()
    return _session_result(session)


@router.post("/blur", response_model=SessionResult)
async def blur_draft() -> SessionResult:
    """The editor lost focus: process if the text changed since the last pass."""
    session = get_session()
    await session.blur()
    return _session_result(session)


@router.get("/result", response_model=SessionResult)
async def get_result() -> SessionResult:
    return _session_result(get_session())


@router.get("/export")
async def export_result() -> PlainTextResponse:
    """Download the current result as notes.md or notes.mmd."""
    current = get_session().current
    if current is None or current.result is None:
        raise HTTPException(status_code=404, detail="Nothing processed yet")
    filename = export_filename(current.result)
    return PlainTextResponse(
        export_content(current.result),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
