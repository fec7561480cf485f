"""Prompt library: built-in examples plus user prompts persisted in a byte store.

The persisted payload is a JSON array of ``{id, title, content, category,
date}`` records holding only the user-created prompts. Built-in examples
live in code and are never written out.
"""

import json
import logging
import time
from collections.abc import Collection, Iterable, Sequence
from datetime import datetime, timezone

from .core import SavedPrompt
from .storage import ByteStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "claudeExpertPrompts"
DEFAULT_CATEGORY = "general"
ALL_CATEGORIES = "all"
CATEGORIES = (ALL_CATEGORIES, "api", "workflow", "data", "technical")

_LOADED_AT = datetime.now(timezone.utc)

BUILTIN_PROMPTS: tuple[SavedPrompt, ...] = (
    SavedPrompt(
        id="ex1",
        title="Data Analysis Agent",
        content=(
            "Create a prompt for an agent that analyzes CSV data, identifies trends, "
            "and generates visualizations with insights."
        ),
        category="data",
        date=_LOADED_AT,
    ),
    SavedPrompt(
        id="ex2",
        title="API Integration Helper",
        content=(
            "I need an agent that helps developers integrate third-party APIs by reading "
            "documentation and generating code examples."
        ),
        category="api",
        date=_LOADED_AT,
    ),
    SavedPrompt(
        id="ex3",
        title="Content Moderator",
        content=(
            "Build a prompt for an agent that reviews user-generated content, flags "
            "inappropriate material, and categorizes by severity."
        ),
        category="workflow",
        date=_LOADED_AT,
    ),
)


# ── Serialization ────────────────────────────────────────────────


def prompt_to_dict(prompt: SavedPrompt) -> dict:
    return {
        "id": prompt.id,
        "title": prompt.title,
        "content": prompt.content,
        "category": prompt.category,
        "date": prompt.date.isoformat(),
    }


def prompt_from_dict(data: dict) -> SavedPrompt:
    """Build a SavedPrompt from a stored record.

    Raises KeyError, TypeError or ValueError for malformed records.
    """
    title = data["title"]
    if not isinstance(title, str) or not title.strip():
        raise ValueError(f"title must be a non-empty string, got {title!r}")
    return SavedPrompt(
        id=str(data["id"]),
        title=title,
        content=str(data["content"]),
        category=str(data.get("category") or DEFAULT_CATEGORY),
        date=_parse_date(data["date"]),
    )


def _parse_date(value) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"date must be a string, got {type(value).__name__}")
    # Browsers serialize dates as "...Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def serialize_prompts(prompts: Iterable[SavedPrompt]) -> bytes:
    return json.dumps([prompt_to_dict(p) for p in prompts], ensure_ascii=False).encode("utf-8")


def deserialize_prompts(data: bytes) -> list[SavedPrompt]:
    """Decode a stored payload, skipping records that cannot be read.

    Raises ValueError if the payload as a whole is not a JSON array.
    """
    records = json.loads(data.decode("utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"expected a JSON array, got {type(records).__name__}")

    prompts = []
    for record in records:
        try:
            prompts.append(prompt_from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping unreadable saved prompt %r: %s", record, e)
    return prompts


def new_prompt_id(taken: Collection[str] = ()) -> str:
    """Return a millisecond-timestamp id that is not already taken."""
    value = int(time.time() * 1000)
    while str(value) in taken:
        value += 1
    return str(value)


# ── Store ────────────────────────────────────────────────────────


class PromptLibrary:
    """The visible prompt set: built-in examples first, then user prompts."""

    def __init__(self, store: ByteStore, builtins: Sequence[SavedPrompt] = BUILTIN_PROMPTS):
        self.store = store
        self._builtins = tuple(builtins)
        self._user_prompts: list[SavedPrompt] = []

    @property
    def builtins(self) -> tuple[SavedPrompt, ...]:
        return self._builtins

    @property
    def user_prompts(self) -> list[SavedPrompt]:
        return list(self._user_prompts)

    @property
    def prompts(self) -> list[SavedPrompt]:
        return [*self._builtins, *self._user_prompts]

    def load(self) -> list[SavedPrompt]:
        """Read user prompts from the store and return the visible set.

        Any failure to read or decode the store leaves only the built-ins.
        """
        self._user_prompts = []
        try:
            data = self.store.read(STORAGE_KEY)
            if data:
                self._user_prompts = self._dedupe(deserialize_prompts(data))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Failed to load saved prompts: %s", e)
            self._user_prompts = []

        logger.info(
            "Prompt library loaded: %d built-in, %d saved",
            len(self._builtins),
            len(self._user_prompts),
        )
        return self.prompts

    def save(self, content: str, title: str | None, category: str | None = None) -> SavedPrompt | None:
        """Add a user prompt and persist all user prompts.

        A missing or blank title cancels the save and returns None.
        """
        if not title or not title.strip():
            return None

        prompt = SavedPrompt(
            id=new_prompt_id({p.id for p in self.prompts}),
            title=title.strip(),
            content=content,
            category=(category or "").strip() or DEFAULT_CATEGORY,
        )
        updated = [*self._user_prompts, prompt]
        # Memory only changes once the store has accepted the write
        self.store.write(STORAGE_KEY, serialize_prompts(updated))
        self._user_prompts = updated
        logger.info("Saved prompt %s (%s)", prompt.title, prompt.category)
        return prompt

    def search(self, query: str | None = None, category: str | None = None) -> list[SavedPrompt]:
        """Filter by case-insensitive title/content substring and exact category."""
        needle = (query or "").lower()
        match_all = not category or category == ALL_CATEGORIES

        results = []
        for prompt in self.prompts:
            if needle and needle not in prompt.title.lower() and needle not in prompt.content.lower():
                continue
            if not match_all and prompt.category != category:
                continue
            results.append(prompt)
        return results

    def get(self, prompt_id: str) -> SavedPrompt | None:
        return next((p for p in self.prompts if p.id == prompt_id), None)

    def _dedupe(self, prompts: list[SavedPrompt]) -> list[SavedPrompt]:
        """Drop stored prompts whose id is a built-in or already seen."""
        seen = {p.id for p in self._builtins}
        unique = []
        for prompt in prompts:
            if prompt.id in seen:
                logger.warning("Ignoring saved prompt with duplicate id %s", prompt.id)
                continue
            seen.add(prompt.id)
            unique.append(prompt)
        return unique
