"""Conversation session: the message log and the single-flight send cycle."""

import logging
import time
from enum import Enum

from .agent import AgentClient, describe_failure, interpret_result
from .config import get_agent_id
from .core import ASSISTANT, USER, ChatMessage, SavedPrompt

logger = logging.getLogger(__name__)

QUICK_ACTIONS = (
    "Make it more specific",
    "Add error handling",
    "Simplify this",
    "Add examples",
)


class SessionState(Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class ConversationSession:
    """Owns the ordered message log and drives requests to the agent.

    At most one request is in flight. A send while awaiting a response is
    ignored, and every accepted send appends exactly one user message and
    one assistant message.
    """

    def __init__(self, agent: AgentClient, agent_id: str | None = None):
        self.agent = agent
        self.agent_id = agent_id or get_agent_id()
        self.state = SessionState.IDLE
        self.draft = ""
        self._messages: list[ChatMessage] = []
        self._last_id = 0

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def pending(self) -> bool:
        return self.state is SessionState.AWAITING_RESPONSE

    @property
    def quick_actions(self) -> tuple[str, ...]:
        """Canned follow-ups, offered once the conversation has started."""
        return QUICK_ACTIONS if self._messages else ()

    def get_message(self, message_id: str) -> ChatMessage | None:
        return next((m for m in self._messages if m.id == message_id), None)

    async def send(self, content: str | None = None) -> ChatMessage | None:
        """Send ``content`` (or the trimmed draft) and return the assistant reply.

        Returns None without changing anything when there is nothing to send
        or a request is already pending.
        """
        text = self.draft.strip() if content is None else content
        if not text.strip() or self.pending:
            return None

        self._append(USER, text)
        self.draft = ""
        self.state = SessionState.AWAITING_RESPONSE
        try:
            reply = await self._request(text)
            return self._append(ASSISTANT, reply)
        finally:
            self.state = SessionState.IDLE

    async def quick_action(self, action: str) -> ChatMessage | None:
        if action not in self.quick_actions:
            return None
        return await self.send(action)

    def load_prompt(self, prompt: SavedPrompt) -> None:
        """Replace the input draft with a saved prompt's body."""
        self.draft = prompt.content

    def clear(self) -> bool:
        """Empty the log. Refused while a request is pending."""
        if self.pending:
            return False
        self._messages.clear()
        return True

    async def _request(self, text: str) -> str:
        try:
            result = await self.agent.invoke(text, self.agent_id)
            return interpret_result(result)
        except Exception as e:
            logger.warning("Agent call failed: %s", e)
            return describe_failure(e)

    def _append(self, role: str, content: str) -> ChatMessage:
        # Millisecond ids, bumped so they stay strictly increasing
        self._last_id = max(int(time.time() * 1000), self._last_id + 1)
        message = ChatMessage(id=str(self._last_id), role=role, content=content)
        self._messages.append(message)
        return message
