"""FastAPI web server for prompt-architect."""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from .agent import HttpAgentClient
from .clipboard import ClipboardProvider, get_clipboard
from .core import ChatMessage, CodeUnit, DisplayUnit
from .export import conversation_to_json, conversation_to_markdown, message_to_dict
from .library import CATEGORIES, PromptLibrary, prompt_to_dict
from .render import copy_code, render_content, render_message
from .session import ConversationSession
from .storage import FileByteStore

logger = logging.getLogger(__name__)

app = FastAPI(title="prompt-architect", version="0.1.0")

# Built on first request
_session: ConversationSession | None = None
_library: PromptLibrary | None = None
_clipboard: ClipboardProvider | None = None


def _get_session() -> ConversationSession:
    global _session
    if _session is None:
        _session = ConversationSession(HttpAgentClient())
        logger.info("Conversation session started for agent %s", _session.agent_id)
    return _session


def _get_library() -> PromptLibrary:
    global _library
    if _library is None:
        _library = PromptLibrary(FileByteStore())
        _library.load()
    return _library


def _get_clipboard() -> ClipboardProvider:
    global _clipboard
    if _clipboard is None:
        _clipboard = get_clipboard()
        logger.info("Using %s clipboard", _clipboard.name)
    return _clipboard


class SendRequest(BaseModel):
    content: str | None = None


class QuickActionRequest(BaseModel):
    action: str


class DraftRequest(BaseModel):
    draft: str


class SavePromptRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    category: str | None = None


class RenderRequest(BaseModel):
    content: str


class CopyRequest(BaseModel):
    message_id: str
    index: int


def _unit_to_dict(unit: DisplayUnit) -> dict:
    if isinstance(unit, CodeUnit):
        return {"type": "code", "language": unit.language, "code": unit.code, "index": unit.index}
    return {"type": "text", "text": unit.text}


def _message_to_dict(msg: ChatMessage) -> dict:
    data = message_to_dict(msg)
    data["units"] = [_unit_to_dict(u) for u in render_message(msg)]
    return data


def _state_to_dict(session: ConversationSession) -> dict:
    return {
        "pending": session.pending,
        "draft": session.draft,
        "messages": [_message_to_dict(m) for m in session.messages],
        "quick_actions": list(session.quick_actions),
    }


# ── Routes ───────────────────────────────────────────────────────


@app.get("/")
async def index():
    """Serve the frontend."""
    html_path = Path(__file__).parent / "static" / "index.html"
    if not html_path.exists():
        raise HTTPException(status_code=404, detail="Frontend not found")
    return HTMLResponse(html_path.read_text(encoding="utf-8"))


@app.get("/api/state")
async def get_state():
    """Return the conversation log, draft and pending flag."""
    return _state_to_dict(_get_session())


@app.post("/api/send")
async def send_message(body: SendRequest):
    """Send the given content, or the current draft, to the agent."""
    session = _get_session()
    if session.pending:
        raise HTTPException(status_code=409, detail="A request is already pending")

    before = len(session.messages)
    reply = await session.send(body.content)
    if reply is None:
        raise HTTPException(status_code=400, detail="Nothing to send")

    return {
        "messages": [_message_to_dict(m) for m in session.messages[before:]],
        "state": _state_to_dict(session),
    }


@app.post("/api/quick-action")
async def quick_action(body: QuickActionRequest):
    session = _get_session()
    if session.pending:
        raise HTTPException(status_code=409, detail="A request is already pending")
    if body.action not in session.quick_actions:
        raise HTTPException(status_code=400, detail="Quick action not available")

    before = len(session.messages)
    await session.quick_action(body.action)
    return {
        "messages": [_message_to_dict(m) for m in session.messages[before:]],
        "state": _state_to_dict(session),
    }


@app.put("/api/draft")
async def set_draft(body: DraftRequest):
    session = _get_session()
    session.draft = body.draft
    return {"draft": session.draft}


@app.delete("/api/messages")
async def clear_messages():
    """Clear the conversation log."""
    if not _get_session().clear():
        raise HTTPException(status_code=409, detail="A request is already pending")
    return {"cleared": True}


@app.get("/api/categories")
async def get_categories():
    return list(CATEGORIES)


@app.get("/api/prompts")
async def get_prompts(
    search: str | None = Query(None, description="Search in titles and content"),
    category: str | None = Query(None, description="Filter by category, or 'all'"),
):
    """Return library prompts, built-ins first."""
    prompts = _get_library().search(search, category)
    return {
        "total": len(prompts),
        "prompts": [prompt_to_dict(p) for p in prompts],
    }


@app.post("/api/prompts")
async def save_prompt(body: SavePromptRequest):
    """Save a prompt. Content defaults to the current draft."""
    content = body.content if body.content is not None else _get_session().draft
    if not content.strip():
        raise HTTPException(status_code=400, detail="Prompt content is empty")

    try:
        prompt = _get_library().save(content, body.title, body.category)
    except OSError as e:
        logger.error("Failed to persist prompt library: %s", e)
        raise HTTPException(status_code=500, detail="Failed to save prompt")

    if prompt is None:
        return {"saved": False}
    return {"saved": True, "prompt": prompt_to_dict(prompt)}


@app.post("/api/prompts/{prompt_id}/load")
async def load_prompt(prompt_id: str):
    """Replace the input draft with a saved prompt."""
    prompt = _get_library().get(prompt_id)
    if prompt is None:
        raise HTTPException(status_code=404, detail=f"Prompt not found: {prompt_id}")

    session = _get_session()
    session.load_prompt(prompt)
    return {"draft": session.draft}


@app.post("/api/render")
async def render_text(body: RenderRequest):
    """Parse and render arbitrary text into display units."""
    return {"units": [_unit_to_dict(u) for u in render_content(body.content)]}


@app.post("/api/copy")
async def copy_block(body: CopyRequest):
    """Copy one code block of a message to the clipboard."""
    message = _get_session().get_message(body.message_id)
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")

    unit = next(
        (u for u in render_message(message) if isinstance(u, CodeUnit) and u.index == body.index),
        None,
    )
    if unit is None:
        raise HTTPException(status_code=404, detail="Code block not found")

    return {"copied": copy_code(unit, _get_clipboard())}


@app.get("/api/export")
async def export_conversation(
    format: str = Query("md", description="Export format: md or json"),
):
    """Export the conversation as Markdown or JSON."""
    messages = _get_session().messages

    if format == "json":
        return Response(
            content=conversation_to_json(messages),
            media_type="application/json",
            headers={"Content-Disposition": 'attachment; filename="conversation.json"'},
        )
    return Response(
        content=conversation_to_markdown(messages),
        media_type="text/markdown",
        headers={"Content-Disposition": 'attachment; filename="conversation.md"'},
    )
