"""Core data models for prompt-architect."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union

USER = "user"
ASSISTANT = "assistant"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ChatMessage:
    """A single message in the conversation log."""

    id: str  # millisecond timestamp, strictly increasing within a session
    role: str  # "user" | "assistant"
    content: str  # raw text, may contain fenced code
    timestamp: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class SavedPrompt:
    """A prompt in the library, either a built-in example or user-created."""

    id: str
    title: str
    content: str
    category: str = "general"  # "api" | "workflow" | "data" | "technical" | free tag
    date: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class CodeSegment:
    """One fenced code sample extracted from message text."""

    language: str  # "text" when the fence has no tag
    code: str
    start_index: int  # offset of the opening fence in the source text


@dataclass
class ParsedContent:
    """Text template with one placeholder per extracted segment."""

    text: str
    segments: list[CodeSegment] = field(default_factory=list)


@dataclass(frozen=True)
class TextUnit:
    text: str


@dataclass(frozen=True)
class CodeUnit:
    language: str
    code: str
    index: int  # segment index the unit was resolved from


DisplayUnit = Union[TextUnit, CodeUnit]
