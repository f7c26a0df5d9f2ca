"""Pydantic models for the NoteOrganizer API."""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, computed_field


class NoteCategory(StrEnum):
    """What kind of notes the text looks like."""

    MEETING = "meeting"
    PROJECT = "project"
    GENERAL = "general"


class DiagramKind(StrEnum):
    """Which diagram shape suits the text. NONE renders a plain chain of nodes."""

    FLOWCHART = "flowchart"
    MINDMAP = "mindmap"
    TIMELINE = "timeline"
    NONE = "none"


class Mode(StrEnum):
    """Output style requested by the user."""

    ORGANIZE = "organize"
    VISUALIZE = "visualize"


class OutputFormat(StrEnum):
    """Serialized format of a processed note."""

    MARKDOWN = "markdown"
    MERMAID = "mermaid"


class Tone(StrEnum):
    """Emotional tone detected from keyword hits."""

    NEUTRAL = "neutral"
    HAPPY = "happy"
    SAD = "sad"
    EXCITED = "excited"
    ANGRY = "angry"
    LOVE = "love"


class Organized(BaseModel):
    """Notes organized into a markdown document."""

    kind: Literal["organized"] = "organized"
    markdown: str
    html: str
    category: NoteCategory | None = None  # None when produced remotely

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mode(self) -> Mode:
        return Mode.ORGANIZE

    @computed_field  # type: ignore[prop-decorator]
    @property
    def format(self) -> OutputFormat:
        return OutputFormat.MARKDOWN


class Diagram(BaseModel):
    """Notes rendered as Mermaid diagram text."""

    kind: Literal["diagram"] = "diagram"
    dsl: str
    diagram_kind: DiagramKind | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mode(self) -> Mode:
        return Mode.VISUALIZE

    @computed_field  # type: ignore[prop-decorator]
    @property
    def format(self) -> OutputFormat:
        return OutputFormat.MERMAID


ProcessedNote = Annotated[Organized | Diagram, Field(discriminator="kind")]


# --- Processing API ---


class ProcessRequest(BaseModel):
    """Request body for the /process endpoint."""

    text: str = Field(max_length=50000)
    mode: Mode | None = None  # None = use the smart-mode preference
    local_only: bool = False
    sequence: int | None = None


class ProcessResponse(BaseModel):
    """Response body for the /process endpoint."""

    status: Literal["processed", "skipped"]
    source: Literal["remote", "local"] | None = None
    fallback_reason: str | None = None
    sequence: int | None = None
    result: ProcessedNote | None = None


class AnalyzeRequest(BaseModel):
    """Request body for the /analyze endpoint."""

    text: str = Field(max_length=50000)


class AnalyzeResponse(BaseModel):
    """Classification of a piece of text, without rendering it."""

    note_category: NoteCategory
    diagram_kind: DiagramKind
    should_visualize: bool
    tone: Tone
    tone_intensity: float


# --- Draft session ---


class DraftUpdate(BaseModel):
    """Request body for replacing the current draft."""

    text: str = Field(max_length=50000)


class DraftResponse(BaseModel):
    """The current draft and whether it has been persisted."""

    text: str
    saved: bool
    last_saved: str | None  # ISO timestamp


class SessionResult(BaseModel):
    """The currently applied result of the draft session."""

    sequence: int
    source: Literal["remote", "local"] | None
    result: ProcessedNote | None


# --- Settings ---


class CredentialRequest(BaseModel):
    """Request body for storing an API key."""

    api_key: str = Field(min_length=1, max_length=500)


class CredentialStatus(BaseModel):
    """Whether a credential is available and where it comes from."""

    present: bool
    source: Literal["stored", "environment"] | None
    looks_valid: bool


class Preferences(BaseModel):
    """User preferences."""

    smart_mode: bool


class ModeUpdate(BaseModel):
    """Request body for switching the draft session's output mode."""

    mode: Mode | None  # None = let smart mode decide
