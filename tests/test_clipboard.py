"""Tests for clipboard providers."""

import subprocess
from unittest.mock import patch

from prompt_architect.clipboard import MemoryClipboard, NativeClipboard, get_clipboard


def _which(available):
    return lambda tool: f"/usr/bin/{tool}" if tool in available else None


class TestNativeClipboard:
    def test_detects_pbcopy_on_macos(self):
        with patch("prompt_architect.clipboard.sys.platform", "darwin"), \
                patch("prompt_architect.clipboard.shutil.which", _which({"pbcopy"})):
            assert NativeClipboard().name == "native (pbcopy)"

    def test_prefers_x11_tools_with_display(self, monkeypatch):
        monkeypatch.setenv("DISPLAY", ":0")
        monkeypatch.delenv("XDG_SESSION_TYPE", raising=False)
        with patch("prompt_architect.clipboard.sys.platform", "linux"), \
                patch("prompt_architect.clipboard.shutil.which", _which({"wl-copy", "xclip"})):
            assert NativeClipboard().name == "native (xclip)"

    def test_prefers_wl_copy_on_wayland(self, monkeypatch):
        monkeypatch.setenv("XDG_SESSION_TYPE", "wayland")
        monkeypatch.setenv("DISPLAY", ":0")
        with patch("prompt_architect.clipboard.sys.platform", "linux"), \
                patch("prompt_architect.clipboard.shutil.which", _which({"wl-copy", "xclip"})):
            assert NativeClipboard().name == "native (wl-copy)"

    def test_unavailable_without_tools(self):
        with patch("prompt_architect.clipboard.shutil.which", return_value=None):
            clip = NativeClipboard()
            assert clip.available is False
            assert clip.copy("text") is False

    def test_copy_runs_tool(self):
        with patch("prompt_architect.clipboard.sys.platform", "darwin"), \
                patch("prompt_architect.clipboard.shutil.which", _which({"pbcopy"})):
            clip = NativeClipboard()
        completed = subprocess.CompletedProcess(["pbcopy"], 0, b"", b"")
        with patch("prompt_architect.clipboard.subprocess.run", return_value=completed) as run:
            assert clip.copy("print(1)") is True
            assert run.call_args.kwargs["input"] == b"print(1)"

    def test_copy_reports_tool_failure(self):
        with patch("prompt_architect.clipboard.sys.platform", "darwin"), \
                patch("prompt_architect.clipboard.shutil.which", _which({"pbcopy"})):
            clip = NativeClipboard()
        completed = subprocess.CompletedProcess(["pbcopy"], 1, b"", b"no pasteboard")
        with patch("prompt_architect.clipboard.subprocess.run", return_value=completed):
            assert clip.copy("x") is False
            assert clip.last_error == "no pasteboard"

    def test_copy_handles_os_error(self):
        with patch("prompt_architect.clipboard.sys.platform", "darwin"), \
                patch("prompt_architect.clipboard.shutil.which", _which({"pbcopy"})):
            clip = NativeClipboard()
        with patch("prompt_architect.clipboard.subprocess.run", side_effect=OSError("gone")):
            assert clip.copy("x") is False


class TestMemoryClipboard:
    def test_copy(self):
        clip = MemoryClipboard()
        assert clip.copy("abc") is True
        assert clip.contents == "abc"

    def test_empty_text_not_copied(self):
        assert MemoryClipboard().copy("") is False


def test_get_clipboard_falls_back_to_memory():
    with patch("prompt_architect.clipboard.shutil.which", return_value=None):
        assert isinstance(get_clipboard(), MemoryClipboard)
