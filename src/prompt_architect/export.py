"""Export a conversation to Markdown and JSON formats."""

import json

from .core import USER, ChatMessage

ASSISTANT_LABEL = "Claude Expert"


def conversation_to_markdown(messages: list[ChatMessage], title: str = "Prompt Architect Session") -> str:
    """Export the conversation as Markdown, keeping code fences intact."""
    lines = [f"# {title}", ""]
    if messages:
        lines.append(f"**Started:** {messages[0].timestamp.isoformat()}")
    lines.append(f"**Messages:** {len(messages)}")
    lines.extend(["", "---", ""])

    for msg in messages:
        role_label = "User" if msg.role == USER else ASSISTANT_LABEL
        lines.append(f"## {role_label} ({msg.timestamp.strftime('%H:%M')})")
        lines.append("")
        lines.append(msg.content)
        lines.extend(["", "---", ""])

    return "\n".join(lines)


def conversation_to_json(messages: list[ChatMessage]) -> str:
    """Export the conversation as structured JSON."""
    data = {
        "message_count": len(messages),
        "messages": [message_to_dict(msg) for msg in messages],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def message_to_dict(msg: ChatMessage) -> dict:
    return {
        "id": msg.id,
        "role": msg.role,
        "content": msg.content,
        "timestamp": msg.timestamp.isoformat(),
    }
