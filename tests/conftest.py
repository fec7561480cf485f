"""Shared test fixtures for prompt-architect."""

import asyncio
import json
from datetime import datetime, timezone

import pytest

from prompt_architect.agent import AgentClient, AgentResponse, AgentResult
from prompt_architect.clipboard import MemoryClipboard
from prompt_architect.library import STORAGE_KEY, PromptLibrary
from prompt_architect.session import ConversationSession
from prompt_architect.storage import MemoryByteStore

ASSISTANT_REPLY = """Here is a prompt for your agent:

```markdown
You are a data analyst.
```

And a helper to call it:

```python
def run(agent):
    return agent.invoke("analyze")
```

Tune the tone as needed."""


def success_result(text: str) -> AgentResult:
    return AgentResult(success=True, response=AgentResponse(status="success", result={"response": text}))


class FakeAgent(AgentClient):
    """Agent that returns canned results and records every call."""

    def __init__(self, result: AgentResult | None = None):
        self.result = result or success_result("Hi there")
        self.calls: list[tuple[str, str]] = []

    async def invoke(self, prompt: str, agent_id: str) -> AgentResult:
        self.calls.append((prompt, agent_id))
        return self.result


class FailingAgent(AgentClient):
    def __init__(self, exc: Exception | None = None):
        self.exc = exc or ConnectionError("connection refused")

    async def invoke(self, prompt: str, agent_id: str) -> AgentResult:
        raise self.exc


class GatedAgent(AgentClient):
    """Agent that holds each call open until ``release()`` is called."""

    def __init__(self, result: AgentResult | None = None):
        self.result = result or success_result("Hi there")
        self.gate = asyncio.Event()
        self.calls: list[str] = []

    def release(self):
        self.gate.set()

    async def invoke(self, prompt: str, agent_id: str) -> AgentResult:
        self.calls.append(prompt)
        await self.gate.wait()
        return self.result


@pytest.fixture
def fake_agent():
    return FakeAgent()


@pytest.fixture
def session(fake_agent):
    return ConversationSession(fake_agent, agent_id="agent-test")


@pytest.fixture
def memory_store():
    return MemoryByteStore()


@pytest.fixture
def library(memory_store):
    lib = PromptLibrary(memory_store)
    lib.load()
    return lib


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture
def stored_prompts():
    """A byte-store payload with two user prompts, as a browser would write it."""
    records = [
        {
            "id": "1736935200000",
            "title": "SQL Reviewer",
            "content": "Review SQL queries for performance problems.",
            "category": "technical",
            "date": "2025-01-15T10:00:00.000Z",
        },
        {
            "id": "1736938800000",
            "title": "Ticket Triage",
            "content": "Sort incoming support tickets by urgency.",
            "category": "workflow",
            "date": datetime(2025, 1, 15, 11, 0, 0, tzinfo=timezone.utc).isoformat(),
        },
    ]
    return MemoryByteStore({STORAGE_KEY: json.dumps(records).encode("utf-8")})
