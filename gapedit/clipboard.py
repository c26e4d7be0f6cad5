"""System clipboard access through external helper programs."""

from __future__ import annotations

import enum
import os
import shutil
import subprocess
import sys


class ClipboardBackend(enum.Enum):
    """Where copied text goes and where pasted text comes from."""

    PBCOPY = "pbcopy"
    WL_COPY = "wl-copy"
    XCLIP = "xclip"
    XSEL = "xsel"
    INTERNAL = "internal"


_COPY_COMMANDS: dict[ClipboardBackend, list[str]] = {
    ClipboardBackend.PBCOPY: ["pbcopy"],
    ClipboardBackend.WL_COPY: ["wl-copy"],
    ClipboardBackend.XCLIP: ["xclip", "-selection", "clipboard"],
    ClipboardBackend.XSEL: ["xsel", "--clipboard", "--input"],
}

_PASTE_COMMANDS: dict[ClipboardBackend, list[str]] = {
    ClipboardBackend.PBCOPY: ["pbpaste"],
    ClipboardBackend.WL_COPY: ["wl-paste", "-n"],
    ClipboardBackend.XCLIP: ["xclip", "-selection", "clipboard", "-o"],
    ClipboardBackend.XSEL: ["xsel", "--clipboard", "--output"],
}


def command_exists(name: str) -> bool:
    """True if an executable called ``name`` is on the PATH."""
    return shutil.which(name) is not None


def _pipe_to_command(args: list[str], text: str) -> None:
    try:
        subprocess.run(
            args,
            input=text.encode("utf-8"),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        pass


def _read_from_command(args: list[str]) -> str:
    try:
        result = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return ""
    return result.stdout.decode("utf-8", errors="replace")


class Clipboard:
    """Copies to and pastes from the system clipboard, keeping a local copy."""

    def __init__(self, backend: ClipboardBackend = ClipboardBackend.INTERNAL) -> None:
        self.backend = backend
        self._internal = ""

    @classmethod
    def detect(cls) -> "Clipboard":
        """Pick the best clipboard helper available on this system."""
        if sys.platform == "darwin":
            backend = (
                ClipboardBackend.PBCOPY
                if command_exists("pbcopy")
                else ClipboardBackend.INTERNAL
            )
        elif "WAYLAND_DISPLAY" in os.environ and command_exists("wl-copy"):
            backend = ClipboardBackend.WL_COPY
        elif command_exists("xclip"):
            backend = ClipboardBackend.XCLIP
        elif command_exists("xsel"):
            backend = ClipboardBackend.XSEL
        else:
            backend = ClipboardBackend.INTERNAL
        return cls(backend)

    @classmethod
    def internal_only(cls) -> "Clipboard":
        """A clipboard that never touches the system."""
        return cls(ClipboardBackend.INTERNAL)

    def copy(self, text: str) -> None:
        """Store ``text``; failures of the helper program are ignored."""
        self._internal = text
        command = _COPY_COMMANDS.get(self.backend)
        if command is not None:
            _pipe_to_command(command, text)

    def paste(self) -> str:
        """Current clipboard text, or an empty string if it cannot be read."""
        command = _PASTE_COMMANDS.get(self.backend)
        if command is None:
            return self._internal
        return _read_from_command(command)