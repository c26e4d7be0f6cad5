"""Gap buffer over UTF-8 bytes with an always-valid line index."""

from __future__ import annotations

from typing import Optional

from gapedit.lines import LineIndex, utf8_char_len

MIN_GAP = 128
_NEWLINE = 0x0A
_TAB = 0x09


class GapBuffer:
    """Editable byte text with a movable gap at the last edit position.

    Insertions at the gap fill it; deletions widen it. Line starts and
    per-line ASCII flags are kept up to date on every edit.
    """

    def __init__(self, data=b"") -> None:
        content = bytes(data)
        self._data = bytearray(content)
        self._data.extend(bytes(MIN_GAP))
        self._gap_start = len(content)
        self._gap_end = len(content) + MIN_GAP
        self._lines = LineIndex.from_bytes(content)
        self._version = 0

    def version(self) -> int:
        """Counter bumped on every insert and delete."""
        return self._version

    # -- gap management ------------------------------------------------------

    @property
    def _gap_len(self) -> int:
        return self._gap_end - self._gap_start

    def _move_gap_to(self, pos: int) -> None:
        data = self._data
        if pos < self._gap_start:
            count = self._gap_start - pos
            data[self._gap_end - count:self._gap_end] = data[pos:self._gap_start]
            self._gap_start = pos
            self._gap_end -= count
        elif pos > self._gap_start:
            count = pos - self._gap_start
            data[self._gap_start:self._gap_start + count] = data[
                self._gap_end:self._gap_end + count
            ]
            self._gap_start += count
            self._gap_end += count

    def _ensure_gap(self, needed: int) -> None:
        if self._gap_len >= needed:
            return
        extra = max(needed, MIN_GAP)
        self._data[self._gap_end:self._gap_end] = bytes(extra)
        self._gap_end += extra

    def _read(self, start: int, end: int) -> bytes:
        """Logical bytes in [start, end), read around the gap."""
        if end <= start:
            return b""
        gs, gl = self._gap_start, self._gap_len
        if end <= gs:
            return bytes(self._data[start:end])
        if start >= gs:
            return bytes(self._data[start + gl:end + gl])
        return bytes(self._data[start:gs]) + bytes(self._data[self._gap_end:end + gl])

    # -- editing -------------------------------------------------------------

    def insert(self, pos: int, data) -> None:
        """Insert ``data`` at logical byte offset ``pos``."""
        data = bytes(data)
        if not 0 <= pos <= len(self):
            raise IndexError(f"insert position {pos} out of range")
        self._move_gap_to(pos)
        self._ensure_gap(len(data))
        self._data[self._gap_start:self._gap_start + len(data)] = data
        self._gap_start += len(data)
        self._lines.on_insert(pos, data)
        self._version += 1

    def delete(self, pos: int, count: int) -> None:
        """Delete ``count`` bytes starting at logical byte offset ``pos``."""
        if pos < 0 or count < 0 or pos + count > len(self):
            raise IndexError(f"delete range {pos}+{count} out of range")
        self._move_gap_to(pos)
        self._gap_end += count
        self._lines.on_delete(pos, count)
        self._version += 1

    # -- reading -------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._data) - self._gap_len

    def byte_at(self, pos: int) -> int:
        """The byte at logical offset ``pos``."""
        if not 0 <= pos < len(self):
            raise IndexError(f"offset {pos} out of range")
        if pos >= self._gap_start:
            pos += self._gap_len
        return self._data[pos]

    def slice(self, start: int, end: int) -> bytes:
        """Logical bytes in [start, end)."""
        if start < 0 or end > len(self) or start > end:
            raise IndexError(f"slice {start}..{end} out of range")
        return self._read(start, end)

    def contents(self) -> bytes:
        """All text as one bytes object."""
        return self._read(0, len(self))

    # -- lines ---------------------------------------------------------------

    def take_dirty_line(self) -> Optional[int]:
        """Return and reset the lowest line edited since the last call, or None."""
        return self._lines.take_dirty_line()

    def line_is_ascii(self, line: int) -> bool:
        """True if every byte on ``line`` is ASCII."""
        return self._lines.is_ascii(line)

    def line_count(self) -> int:
        return self._lines.line_count()

    def line_start(self, line: int) -> int:
        """Byte offset of the start of ``line``."""
        return self._lines.line_start(line)

    def line_end(self, line: int) -> int:
        """Byte offset one past the end of ``line``, including its newline."""
        self._lines.line_start(line)
        if line + 1 < self._lines.line_count():
            return self._lines.line_start(line + 1)
        return len(self)

    def _content_end(self, line: int) -> int:
        start = self.line_start(line)
        end = self.line_end(line)
        if end > start and self.byte_at(end - 1) == _NEWLINE:
            return end - 1
        return end

    def line_text(self, line: int) -> bytes:
        """Text of ``line`` without its trailing newline."""
        return self._read(self.line_start(line), self._content_end(line))

    def _chars(self, line: int):
        """Yield the first byte of each character on ``line`` before any newline."""
        raw = self._read(self.line_start(line), self.line_end(line))
        ascii_line = self._lines.is_ascii(line)
        i = 0
        while i < len(raw):
            byte = raw[i]
            if byte == _NEWLINE:
                return
            yield byte
            i += 1 if ascii_line else utf8_char_len(byte)

    def display_col_at(self, line: int, char_col: Optional[int] = None) -> int:
        """Display column of character ``char_col`` on ``line``.

        Tabs are 2 columns wide, everything else 1. ``None`` gives the width
        of the whole line.
        """
        display = 0
        for ci, byte in enumerate(self._chars(line)):
            if char_col is not None and ci >= char_col:
                break
            display += 2 if byte == _TAB else 1
        return display

    def char_col_from_display(self, line: int, target_display: int) -> int:
        """Character column on ``line`` whose display column fits ``target_display``."""
        display = 0
        chars = 0
        for byte in self._chars(line):
            width = 2 if byte == _TAB else 1
            if display + width > target_display:
                break
            display += width
            chars += 1
        return chars

    def pos_to_offset(self, line: int, col: int) -> int:
        """Byte offset of (line, col); ``col`` is clamped to the line length."""
        start = self.line_start(line)
        limit = self._content_end(line)
        if self._lines.is_ascii(line):
            return start + min(col, limit - start)
        offset = start
        chars = 0
        while chars < col and offset < limit:
            offset += min(utf8_char_len(self.byte_at(offset)), limit - offset)
            chars += 1
        return offset

    def _char_count_in_range(self, start: int, end: int) -> int:
        raw = self._read(start, end)
        count = 0
        i = 0
        while i < len(raw):
            i += min(utf8_char_len(raw[i]), len(raw) - i)
            count += 1
        return count

    def offset_to_pos(self, offset: int) -> tuple[int, int]:
        """(line, character column) of byte ``offset``."""
        line = self._lines.find_line(offset)
        start = self._lines.line_start(line)
        if self._lines.is_ascii(line):
            return line, offset - start
        return line, self._char_count_in_range(start, offset)

    def line_char_len(self, line: int) -> int:
        """Number of characters on ``line``, not counting the newline."""
        start = self.line_start(line)
        end = self._content_end(line)
        if self._lines.is_ascii(line):
            return end - start
        return self._char_count_in_range(start, end)