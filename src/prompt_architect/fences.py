"""Code fence parsing.

Scans message text left to right for fenced code blocks of the form::

    ```lang
    body
    ```

The opening fence must be followed directly by an optional tag made of
word characters and then a newline. Each complete fence is cut out of the
text and replaced by a ``[CODE_BLOCK_n]`` placeholder, where ``n`` is the
0-based order of discovery. A fence with no closing marker is left in the
template as literal text.
"""

from enum import Enum

from .core import CodeSegment, ParsedContent

FENCE = "```"
DEFAULT_LANGUAGE = "text"
PLACEHOLDER = "[CODE_BLOCK_{index}]"


class _State(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


def placeholder(index: int) -> str:
    """Return the placeholder token standing in for segment ``index``."""
    return PLACEHOLDER.format(index=index)


def _is_word_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def _read_opening(content: str, start: int) -> tuple[str, int] | None:
    """Try to read an opening fence at ``start``.

    Returns ``(language, body_start)`` or None when the fence is not
    followed by an optional tag and a newline.
    """
    pos = start + len(FENCE)
    tag_end = pos
    while tag_end < len(content) and _is_word_char(content[tag_end]):
        tag_end += 1
    if tag_end >= len(content) or content[tag_end] != "\n":
        return None
    return content[pos:tag_end], tag_end + 1


def parse(content: str) -> ParsedContent:
    """Split ``content`` into a placeholder template and its code segments."""
    template: list[str] = []
    segments: list[CodeSegment] = []

    state = _State.OUTSIDE
    literal_start = 0  # start of text not yet copied into the template
    pos = 0
    open_at = 0
    language = ""
    body_start = 0

    while True:
        if state is _State.OUTSIDE:
            start = content.find(FENCE, pos)
            if start == -1:
                break
            opening = _read_opening(content, start)
            if opening is None:
                pos = start + 1
                continue
            language, body_start = opening
            open_at = start
            state = _State.INSIDE
        else:
            end = content.find(FENCE, body_start)
            if end == -1:
                # Unterminated: no later fence can close either.
                break
            template.append(content[literal_start:open_at])
            template.append(placeholder(len(segments)))
            segments.append(CodeSegment(
                language=language or DEFAULT_LANGUAGE,
                code=content[body_start:end].strip(),
                start_index=open_at,
            ))
            pos = literal_start = end + len(FENCE)
            state = _State.OUTSIDE

    template.append(content[literal_start:])
    return ParsedContent(text="".join(template), segments=segments)


def join_content(parsed: ParsedContent) -> str:
    """Rebuild plain text from a parsed template, re-fencing each segment."""
    text = parsed.text
    for index, segment in enumerate(parsed.segments):
        fenced = f"{FENCE}{segment.language}\n{segment.code}\n{FENCE}"
        text = text.replace(placeholder(index), fenced, 1)
    return text
