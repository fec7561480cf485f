"""Clipboard access for the copy-code action."""

import logging
import os
import shutil
import subprocess
import sys
from typing import Protocol

logger = logging.getLogger(__name__)


class ClipboardProvider(Protocol):
    """Anything that can put text on a clipboard."""

    @property
    def name(self) -> str:
        ...

    def copy(self, text: str) -> bool:
        """Copy text, returning True on success."""
        ...


class NativeClipboard:
    """Clipboard backed by the platform's command-line tools.

    Supported tools (in order of preference):
    - Linux/BSD: wl-copy (Wayland), xclip, xsel (X11)
    - macOS: pbcopy
    - Windows: clip.exe
    """

    def __init__(self):
        self._tool = self._detect_tool()
        self.last_error: str | None = None

    @property
    def name(self) -> str:
        return f"native ({self._tool[0] if self._tool else 'unavailable'})"

    @property
    def available(self) -> bool:
        return self._tool is not None

    def _detect_tool(self) -> tuple[str, list[str]] | None:
        if sys.platform == "darwin":
            if shutil.which("pbcopy"):
                return ("pbcopy", ["pbcopy"])
            return None
        if sys.platform == "win32":
            if shutil.which("clip"):
                return ("clip", ["clip"])
            return None

        candidates = [
            ("wl-copy", ["wl-copy"]),
            ("xclip", ["xclip", "-selection", "clipboard"]),
            ("xsel", ["xsel", "--clipboard", "--input"]),
        ]
        # Under X11 the Wayland tool is tried last
        if os.environ.get("XDG_SESSION_TYPE", "").lower() != "wayland" and os.environ.get("DISPLAY"):
            candidates = candidates[1:] + candidates[:1]
        for tool, args in candidates:
            if shutil.which(tool):
                return (tool, args)
        return None

    def copy(self, text: str) -> bool:
        if not text or not self._tool:
            return False

        try:
            proc = subprocess.run(
                self._tool[1],
                input=text.encode("utf-8"),
                capture_output=True,
                timeout=5,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            self.last_error = str(e)
            logger.debug("Clipboard tool %s failed: %s", self._tool[0], e)
            return False

        if proc.returncode != 0:
            self.last_error = proc.stderr.decode("utf-8", errors="replace").strip()
            logger.debug("Clipboard tool %s exited %d: %s", self._tool[0], proc.returncode, self.last_error)
            return False
        self.last_error = None
        return True


class MemoryClipboard:
    """In-process clipboard, used when no system tool is present."""

    name = "memory"

    def __init__(self):
        self.contents: str | None = None

    def copy(self, text: str) -> bool:
        if not text:
            return False
        self.contents = text
        return True


def get_clipboard() -> ClipboardProvider:
    """Return the native clipboard if a tool is installed, else an in-memory one."""
    native = NativeClipboard()
    if native.available:
        return native
    logger.info("No clipboard tool found, copies stay in memory")
    return MemoryClipboard()
