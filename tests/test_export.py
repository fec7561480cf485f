"""Tests for conversation export."""

import json
from datetime import datetime, timezone

import pytest

from prompt_architect.core import ChatMessage
from prompt_architect.export import conversation_to_json, conversation_to_markdown


@pytest.fixture
def sample_messages():
    return [
        ChatMessage(
            id="1736935200000",
            role="user",
            content="I need an agent that reviews pull requests",
            timestamp=datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc),
        ),
        ChatMessage(
            id="1736935230000",
            role="assistant",
            content="Here's a prompt:\n\n```markdown\nYou are a meticulous code reviewer.\n```",
            timestamp=datetime(2025, 1, 15, 10, 0, 30, tzinfo=timezone.utc),
        ),
    ]


class TestMarkdownExport:
    def test_includes_title_and_count(self, sample_messages):
        result = conversation_to_markdown(sample_messages)
        assert "# Prompt Architect Session" in result
        assert "**Messages:** 2" in result
        assert "**Started:** 2025-01-15T10:00:00+00:00" in result

    def test_custom_title(self, sample_messages):
        result = conversation_to_markdown(sample_messages, title="PR Reviewer")
        assert result.startswith("# PR Reviewer")

    def test_includes_messages_with_roles(self, sample_messages):
        result = conversation_to_markdown(sample_messages)
        assert "## User (10:00)" in result
        assert "## Claude Expert (10:00)" in result
        assert "reviews pull requests" in result

    def test_preserves_code_fences(self, sample_messages):
        result = conversation_to_markdown(sample_messages)
        assert "```markdown\nYou are a meticulous code reviewer.\n```" in result

    def test_empty_conversation(self):
        result = conversation_to_markdown([])
        assert "**Messages:** 0" in result
        assert "**Started:**" not in result


class TestJsonExport:
    def test_produces_valid_json(self, sample_messages):
        data = json.loads(conversation_to_json(sample_messages))
        assert data["message_count"] == 2
        assert [m["role"] for m in data["messages"]] == ["user", "assistant"]

    def test_message_fields(self, sample_messages):
        data = json.loads(conversation_to_json(sample_messages))
        msg = data["messages"][0]
        assert msg == {
            "id": "1736935200000",
            "role": "user",
            "content": "I need an agent that reviews pull requests",
            "timestamp": "2025-01-15T10:00:00+00:00",
        }

    def test_empty_conversation(self):
        data = json.loads(conversation_to_json([]))
        assert data == {"message_count": 0, "messages": []}
