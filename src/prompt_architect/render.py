"""Turn parsed message content into ordered display units."""

import logging
import re

from .clipboard import ClipboardProvider
from .core import ChatMessage, CodeUnit, DisplayUnit, ParsedContent, TextUnit
from .fences import parse

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\[CODE_BLOCK_(\d+)\]")


def render(parsed: ParsedContent) -> list[DisplayUnit]:
    """Rebuild the text/code sequence of a parsed message.

    Blank text spans are dropped. A placeholder whose index has no
    matching segment is omitted rather than failing the whole render.
    """
    units: list[DisplayUnit] = []
    # re.split with one capture group alternates text, index, text, ...
    parts = PLACEHOLDER_PATTERN.split(parsed.text)
    for idx, part in enumerate(parts):
        if idx % 2 == 0:
            text = part.strip()
            if text:
                units.append(TextUnit(text=text))
            continue

        try:
            block_index = int(part)
        except ValueError:
            # Too many digits for int(); cannot name a real segment
            block_index = len(parsed.segments)
        if block_index >= len(parsed.segments):
            logger.debug("Dropping placeholder with no segment: %.20s", part)
            continue
        segment = parsed.segments[block_index]
        units.append(CodeUnit(language=segment.language, code=segment.code, index=block_index))
    return units


def render_content(content: str) -> list[DisplayUnit]:
    """Parse and render raw message text."""
    return render(parse(content))


def render_message(message: ChatMessage) -> list[DisplayUnit]:
    return render_content(message.content)


def copy_code(unit: CodeUnit, clipboard: ClipboardProvider) -> bool:
    """Copy a code unit to the clipboard, reporting success instead of raising."""
    try:
        return bool(clipboard.copy(unit.code))
    except Exception as e:
        logger.debug("Clipboard copy via %s failed: %s", clipboard.name, e)
        return False
