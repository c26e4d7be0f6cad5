"""Incrementally maintained line-start index for UTF-8 byte text."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Optional

_NEWLINE = 0x0A


def utf8_char_len(first_byte: int) -> int:
    """Length in bytes of the UTF-8 sequence that starts with ``first_byte``.

    Continuation bytes (0x80-0xBF) count as 1 so that invalid input still
    makes progress.
    """
    if first_byte < 0xC0:
        return 1
    if first_byte < 0xE0:
        return 2
    if first_byte < 0xF0:
        return 3
    return 4


def _as_bytes(data) -> bytes:
    return data if isinstance(data, bytes) else bytes(data)


def char_count(data) -> int:
    """Number of characters in UTF-8 ``data``."""
    data = _as_bytes(data)
    if data.isascii():
        return len(data)
    count = 0
    i = 0
    while i < len(data):
        i += utf8_char_len(data[i])
        count += 1
    return count


def char_to_byte(data, char_col: int) -> int:
    """Byte offset of character ``char_col`` in ``data``.

    Returns ``len(data)`` (or a little past it for a truncated trailing
    sequence) when ``char_col`` is beyond the end.
    """
    data = _as_bytes(data)
    if data.isascii():
        return min(char_col, len(data))
    byte_index = 0
    chars = 0
    while chars < char_col and byte_index < len(data):
        byte_index += utf8_char_len(data[byte_index])
        chars += 1
    return byte_index


class LineIndex:
    """Byte offsets of line starts plus a per-line "all ASCII" flag.

    The first line always starts at 0. The index is kept valid by feeding it
    every insertion and deletion made to the text it describes. An ASCII flag
    of ``True`` guarantees every byte on that line is below 0x80; ``False``
    may be conservative.
    """

    def __init__(self) -> None:
        self._starts: list[int] = [0]
        self._ascii: list[bool] = [True]
        self._min_dirty: Optional[int] = None

    @classmethod
    def from_bytes(cls, data) -> "LineIndex":
        """Build an index for ``data``.

        A newline that is the very last byte does not open a new line.
        """
        data = _as_bytes(data)
        index = cls()
        starts = [0]
        flags: list[bool] = []
        line_ascii = True
        length = len(data)
        for i, byte in enumerate(data):
            if byte >= 0x80:
                line_ascii = False
            if byte == _NEWLINE and i + 1 < length:
                starts.append(i + 1)
                flags.append(line_ascii)
                line_ascii = True
        flags.append(line_ascii)
        index._starts = starts
        index._ascii = flags
        return index

    def find_line(self, offset: int) -> int:
        """Index of the line containing byte ``offset``."""
        i = bisect_left(self._starts, offset)
        if i < len(self._starts) and self._starts[i] == offset:
            return i
        return max(i - 1, 0)

    def _mark_dirty(self, line: int) -> None:
        if self._min_dirty is None or line < self._min_dirty:
            self._min_dirty = line

    def on_insert(self, pos: int, data) -> None:
        """Update the index after ``data`` was inserted at byte ``pos``."""
        data = _as_bytes(data)
        if not data:
            return
        n = len(data)
        starts = self._starts
        i = bisect_left(starts, pos)
        if i < len(starts) and starts[i] == pos:
            insert_line, shift_from = i, i + 1
        else:
            insert_line, shift_from = max(i - 1, 0), i

        starts[shift_from:] = [s + n for s in starts[shift_from:]]
        starts[shift_from:shift_from] = [
            pos + k + 1 for k, byte in enumerate(data) if byte == _NEWLINE
        ]

        was_ascii = self._ascii[insert_line]
        if _NEWLINE not in data:
            if not data.isascii():
                self._ascii[insert_line] = False
        else:
            segment_flags = [segment.isascii() for segment in data.split(b"\n")]
            self._ascii[insert_line] = was_ascii and segment_flags[0]
            segment_flags[-1] = was_ascii and segment_flags[-1]
            self._ascii[shift_from:shift_from] = segment_flags[1:]

        self._mark_dirty(insert_line)

    def on_delete(self, pos: int, count: int) -> None:
        """Update the index after ``count`` bytes were removed at byte ``pos``."""
        if count == 0:
            return
        affected = self.find_line(pos)
        starts = self._starts
        lo = bisect_right(starts, pos)
        hi = bisect_right(starts, pos + count)

        merged = self._ascii[affected] and all(self._ascii[lo:hi])
        del self._ascii[lo:hi]
        self._ascii[affected] = merged

        del starts[lo:hi]
        starts[lo:] = [s - count for s in starts[lo:]]

        self._mark_dirty(affected)

    def take_dirty_line(self) -> Optional[int]:
        """Return and reset the lowest line touched since the last call.

        ``None`` means no line has been touched.
        """
        line = self._min_dirty
        self._min_dirty = None
        return line

    def line_count(self) -> int:
        return len(self._starts)

    def _check(self, line: int) -> None:
        if not 0 <= line < len(self._starts):
            raise IndexError(f"line {line} out of range")

    def line_start(self, line: int) -> int:
        """Byte offset where ``line`` begins."""
        self._check(line)
        return self._starts[line]

    def is_ascii(self, line: int) -> bool:
        """True if every byte on ``line`` is ASCII."""
        self._check(line)
        return self._ascii[line]