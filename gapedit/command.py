"""Command names typed in the command palette and the actions they request."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Callable


def parse_args(text: str) -> list[str]:
    """Split ``text`` on whitespace, keeping single- or double-quoted tokens whole.

    Quotes are stripped; backslash escapes are not supported. An unclosed
    quote runs to the end of the input.
    """
    args: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch in ("'", '"'):
            close = text.find(ch, i + 1)
            if close == -1:
                args.append(text[i + 1:])
                i = length
            else:
                args.append(text[i + 1:close])
                i = close + 1
        else:
            j = i
            while j < length and not text[j].isspace():
                j += 1
            args.append(text[i:j])
            i = j
    return args


class ActionKind(enum.Enum):
    NONE = enum.auto()
    SAVE = enum.auto()
    SAVE_AS = enum.auto()
    QUIT = enum.auto()
    GOTO = enum.auto()
    TOGGLE_RULER = enum.auto()
    REPLACE_ALL = enum.auto()
    TOGGLE_COMMENT = enum.auto()
    COMMENT_ON = enum.auto()
    COMMENT_OFF = enum.auto()
    FIND = enum.auto()
    SELECT_ALL = enum.auto()
    TRIM = enum.auto()
    TABS_TO_SPACES = enum.auto()
    SPACES_TO_TABS = enum.auto()
    STATUS_MSG = enum.auto()


@dataclass(frozen=True)
class CommandAction:
    """What a command asks the editor to do.

    ``text`` holds the file name, search pattern or status message,
    ``line`` the goto target and ``replacement`` the replace-all text.
    """

    kind: ActionKind
    text: str = ""
    line: int = 0
    replacement: str = ""


_USIZE = re.compile(r"\+?[0-9]+")


def _cmd_save(args: str) -> CommandAction:
    name = args.strip()
    if not name:
        return CommandAction(ActionKind.SAVE)
    return CommandAction(ActionKind.SAVE_AS, text=name)


def _cmd_quit(args: str) -> CommandAction:
    return CommandAction(ActionKind.QUIT)


def _cmd_goto(args: str) -> CommandAction:
    target = args.strip()
    if _USIZE.fullmatch(target):
        return CommandAction(ActionKind.GOTO, line=int(target))
    return CommandAction(ActionKind.STATUS_MSG, text="Usage: goto <line>")


def _cmd_ruler(args: str) -> CommandAction:
    return CommandAction(ActionKind.TOGGLE_RULER)


def _cmd_find(args: str) -> CommandAction:
    parsed = parse_args(args)
    if not parsed:
        return CommandAction(ActionKind.STATUS_MSG, text="Usage: find <pattern>")
    return CommandAction(ActionKind.FIND, text=parsed[0])


def _cmd_replaceall(args: str) -> CommandAction:
    parsed = parse_args(args)
    if len(parsed) < 2:
        return CommandAction(
            ActionKind.STATUS_MSG, text="Usage: replaceall <pattern> <replacement>"
        )
    return CommandAction(ActionKind.REPLACE_ALL, text=parsed[0], replacement=parsed[1])


def _cmd_comment(args: str) -> CommandAction:
    mode = args.strip()
    if mode == "on":
        return CommandAction(ActionKind.COMMENT_ON)
    if mode == "off":
        return CommandAction(ActionKind.COMMENT_OFF)
    if mode == "":
        return CommandAction(ActionKind.TOGGLE_COMMENT)
    return CommandAction(ActionKind.STATUS_MSG, text="Usage: comment [on|off]")


def _simple(kind: ActionKind) -> Callable[[str], CommandAction]:
    def handler(args: str) -> CommandAction:
        return CommandAction(kind)

    return handler


class CommandRegistry:
    """Maps command names to the handlers that turn arguments into actions."""

    def __init__(self) -> None:
        self._commands: dict[str, Callable[[str], CommandAction]] = {
            "save": _cmd_save,
            "quit": _cmd_quit,
            "q": _cmd_quit,
            "goto": _cmd_goto,
            "ruler": _cmd_ruler,
            "find": _cmd_find,
            "replaceall": _cmd_replaceall,
            "comment": _cmd_comment,
            "selectall": _simple(ActionKind.SELECT_ALL),
            "trim": _simple(ActionKind.TRIM),
            "tabstospaces": _simple(ActionKind.TABS_TO_SPACES),
            "spacestotabs": _simple(ActionKind.SPACES_TO_TABS),
        }

    def command_names(self) -> list[str]:
        """Sorted names of all registered commands."""
        return sorted(self._commands)

    def execute(self, text: str) -> CommandAction:
        """Run the command line ``text`` and return the resulting action."""
        trimmed = text.strip()
        if not trimmed:
            return CommandAction(ActionKind.NONE)
        name, _, args = trimmed.partition(" ")
        handler = self._commands.get(name)
        if handler is None:
            return CommandAction(ActionKind.STATUS_MSG, text=f"Unknown command: {name}")
        return handler(args)