"""Prompting and response parsing for the remote delegate.

The model is asked to answer with a fenced JSON envelope:

    ```json
    {"mode": "organize" | "visualize", "content": "...", "format": "markdown" | "mermaid"}
    ```

Anything else raises RemoteResponseError so the caller can fall back to the
local pipeline.
"""

import json
import logging
import re
from typing import Literal

from noteorganizer.models import Diagram, Mode, Organized, ProcessedNote
from noteorganizer.processing.diagram_renderer import (
    degrade_to_bullets,
    detect_diagram_kind,
    validate_diagram,
)
from noteorganizer.processing.markdown_renderer import markdown_to_html

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are NoteOrganizer. You turn messy, unstructured notes into well-structured content.

Always answer with a single JSON object inside a ```json code block, and nothing else:
```json
{
  "mode": "organize" or "visualize",
  "content": "the formatted content",
  "format": "markdown" or "mermaid"
}
```

Organize mode (the default):
- Rewrite the notes as clean markdown with ## headings, bullet lists and **bold** key facts.
- Group related items. Pull out dates, names, numbers and action items.
- Keep it short and easy to scan.

Visualize mode:
- Produce valid Mermaid.js diagram text only, with no code fence inside "content".
- Pick the diagram type that fits: "flowchart LR" for processes, "mindmap" for ideas,
  "timeline" for chronological events, "graph TD" for hierarchies.
- Only draw when the content suits a diagram: steps (first, then, finally), hierarchies,
  workflows or timelines. Use visualize mode whenever the user asks for it.

No explanations outside the JSON.\
"""

_JSON_FENCE_RE = re.compile(r"```json[ \t]*\n(.*?)\n[ \t]*```", re.DOTALL)
_CODE_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\n(.*?)\n?```\s*$", re.DOTALL)


class RemoteResponseError(ValueError):
    """The remote response could not be turned into a processed note."""


def build_user_prompt(text: str, mode: Mode) -> str:
    """Wrap the user's notes and the requested mode for the model."""
    return f"User Input:\n{text}\n\nMode: {mode.value}"


def _strip_code_fence(content: str) -> str:
    match = _CODE_FENCE_RE.match(content.strip())
    return match.group(1) if match else content


def parse_response(
    raw: str, invalid_diagram_policy: Literal["local", "bullets"] = "local"
) -> ProcessedNote:
    """Parse the model's fenced JSON envelope into a processed note.

    Diagram content must pass ``validate_diagram``. With the "bullets" policy a
    failing diagram is degraded to a markdown bullet list instead of rejected.
    """
    if not raw or not raw.strip():
        raise RemoteResponseError("Empty response text")

    match = _JSON_FENCE_RE.search(raw)
    if not match:
        raise RemoteResponseError("No fenced JSON block in response")

    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise RemoteResponseError(f"Malformed JSON in response: {e}") from e
    if not isinstance(data, dict):
        raise RemoteResponseError("JSON envelope is not an object")

    content = data.get("content")
    if not isinstance(content, str) or not content.strip():
        raise RemoteResponseError("JSON envelope has no content")

    output_format = data.get("format") or "markdown"
    if output_format != "mermaid":
        return Organized(markdown=content, html=markdown_to_html(content))

    dsl = _strip_code_fence(content)
    if validate_diagram(dsl):
        return Diagram(dsl=dsl, diagram_kind=detect_diagram_kind(dsl))

    logger.warning("Remote diagram failed syntax check (policy=%s)", invalid_diagram_policy)
    if invalid_diagram_policy == "bullets":
        bullets = degrade_to_bullets(dsl)
        if bullets:
            return Organized(markdown=bullets, html=markdown_to_html(bullets))
    raise RemoteResponseError("Remote diagram failed syntax check")
