"""Single-line mini editor used for the command palette, find, goto and prompts."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class KeyKind(enum.Enum):
    """Kinds of key press the mini editor can receive."""

    CHAR = enum.auto()
    CTRL = enum.auto()
    ALT = enum.auto()
    ESC = enum.auto()
    BACKSPACE = enum.auto()
    DELETE = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    F = enum.auto()
    OTHER = enum.auto()


@dataclass(frozen=True)
class Key:
    """A key press.

    ``char`` is the character for ``CHAR``, ``CTRL`` and ``ALT`` keys;
    ``number`` is the function-key number for ``F``.
    """

    kind: KeyKind
    char: str = ""
    number: int = 0


class CommandBufferMode(enum.Enum):
    COMMAND = enum.auto()
    FIND = enum.auto()
    GOTO = enum.auto()
    PROMPT = enum.auto()
    SUDO_SAVE = enum.auto()


class ResultKind(enum.Enum):
    SUBMIT = enum.auto()
    CANCEL = enum.auto()
    CONTINUE = enum.auto()
    CHANGED = enum.auto()
    TAB_COMPLETE = enum.auto()


@dataclass(frozen=True)
class CommandBufferResult:
    """Outcome of a key press; ``text`` is the input for SUBMIT and CHANGED."""

    kind: ResultKind
    text: str = ""


_CONTINUE = CommandBufferResult(ResultKind.CONTINUE)


class CommandBuffer:
    """Editable input line with a prompt, cursor, history and completions."""

    def __init__(self) -> None:
        self.input = ""
        self.cursor = 0
        self.history: list[str] = []
        self.history_idx: Optional[int] = None
        self.prompt = "> "
        self.mode = CommandBufferMode.COMMAND
        self.active = False
        self.completions: list[str] = []

    def open(self, mode: CommandBufferMode, prompt: str, prefill: str) -> None:
        """Activate the buffer in ``mode`` with ``prompt`` and initial text."""
        self.mode = mode
        self.prompt = prompt
        self.input = prefill
        self.cursor = len(prefill)
        self.active = True
        self.history_idx = None

    def close(self) -> None:
        """Deactivate, remembering non-empty input in the history."""
        if self.input:
            self.history.append(self.input)
        self.input = ""
        self.cursor = 0
        self.active = False
        self.history_idx = None
        self.completions.clear()

    def display_line(self) -> str:
        """Prompt followed by the input, masked in password mode."""
        if self.mode is CommandBufferMode.SUDO_SAVE:
            return self.prompt + "*" * len(self.input)
        return self.prompt + self.input

    def _changed(self) -> CommandBufferResult:
        return CommandBufferResult(ResultKind.CHANGED, self.input)

    def handle_key(self, key: Key) -> CommandBufferResult:
        """Apply ``key`` to the input and report what happened."""
        kind = key.kind
        if kind is KeyKind.CHAR and key.char == "\n":
            return CommandBufferResult(ResultKind.SUBMIT, self.input)
        if kind is KeyKind.ESC or (kind is KeyKind.CTRL and key.char == "q"):
            return CommandBufferResult(ResultKind.CANCEL)
        if kind is KeyKind.CHAR and key.char == "\t":
            self.completions.clear()
            return CommandBufferResult(ResultKind.TAB_COMPLETE)
        if kind is KeyKind.CHAR:
            self.completions.clear()
            self.input = self.input[: self.cursor] + key.char + self.input[self.cursor:]
            self.cursor += len(key.char)
            return self._changed()
        if kind is KeyKind.BACKSPACE:
            self.completions.clear()
            if self.cursor == 0:
                return _CONTINUE
            self.cursor -= 1
            self.input = self.input[: self.cursor] + self.input[self.cursor + 1:]
            return self._changed()
        if kind is KeyKind.LEFT:
            self.cursor = max(self.cursor - 1, 0)
        elif kind is KeyKind.RIGHT:
            self.cursor = min(self.cursor + 1, len(self.input))
        elif kind is KeyKind.UP:
            self._history_prev()
        elif kind is KeyKind.DOWN:
            self._history_next()
        return _CONTINUE

    def insert_str(self, text: str) -> CommandBufferResult:
        """Insert ``text`` at the cursor with line breaks removed."""
        self.completions.clear()
        clean = text.replace("\n", "").replace("\r", "")
        self.input = self.input[: self.cursor] + clean + self.input[self.cursor:]
        self.cursor += len(clean)
        return self._changed()

    def _show_history(self, idx: int) -> None:
        self.history_idx = idx
        self.input = self.history[idx]
        self.cursor = len(self.input)

    def _history_prev(self) -> None:
        if not self.history or self.history_idx == 0:
            return
        if self.history_idx is None:
            self._show_history(len(self.history) - 1)
        else:
            self._show_history(self.history_idx - 1)

    def _history_next(self) -> None:
        if self.history_idx is None:
            return
        if self.history_idx + 1 < len(self.history):
            self._show_history(self.history_idx + 1)
        else:
            self.history_idx = None
            self.input = ""
            self.cursor = 0