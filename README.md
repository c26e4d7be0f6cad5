# gapedit

Building blocks for a terminal text editor, with no dependencies outside
the standard library.

## Modules

### `gapedit.buffer`

`GapBuffer(data=b"")` stores UTF-8 bytes with a movable gap. It keeps its
line index up to date on every edit.

- Editing: `insert(pos, data)` and `delete(pos, count)` work on byte
  offsets and raise `IndexError` when the position or range is outside the
  text. `version()` counts the edits made so far.
- Reading: `len(buf)`, `byte_at(pos)`, `slice(start, end)` and
  `contents()`.
- Lines: `line_count()`, `line_start(line)`, `line_end(line)` (this offset
  includes the newline), `line_text(line)` (this text leaves the newline
  out), `line_char_len(line)` and `line_is_ascii(line)`. A newline that is
  the last byte of the text does not start another line. Every buffer has
  at least one line.
- Positions: `pos_to_offset(line, col)` clamps the column to the line
  length. `offset_to_pos(offset)` returns `(line, column)`. Columns count
  characters, not bytes.
- Display columns: `display_col_at(line, char_col)` and
  `char_col_from_display(line, target_display)` count a tab as two columns
  and every other character as one. Passing `None` as `char_col` gives the
  width of the whole line.
- `take_dirty_line()` returns the lowest line edited since the last call,
  or `None` if no line has been edited. Calling it resets the record.

### `gapedit.lines`

`LineIndex` holds the line-start offsets and the per-line ASCII flags that
`GapBuffer` uses. It is built with `LineIndex.from_bytes(data)` and kept
current through `on_insert(pos, data)` and `on_delete(pos, count)`. It also
provides `find_line(offset)`, `line_start(line)`, `is_ascii(line)`,
`line_count()` and `take_dirty_line()`.

The module also has these byte-level UTF-8 helpers:

- `utf8_char_len(first_byte)`
- `char_count(data)`
- `char_to_byte(data, char_col)`

### `gapedit.command`

`CommandRegistry().execute(text)` turns a command line into a frozen
`CommandAction`. The action's `kind` is an `ActionKind`. Its other fields
depend on the kind:

- `text` holds the file name, the pattern or the status message.
- `line` holds the goto target.
- `replacement` holds the replacement for replace-all.

The registered commands are `save [name]`, `quit` / `q`, `goto <line>`,
`ruler`, `find <pattern>`, `replaceall <pattern> <replacement>`,
`comment [on|off]`, `selectall`, `trim`, `tabstospaces` and `spacestotabs`.
An unknown name or bad arguments produce an action of kind `STATUS_MSG`
whose `text` explains the problem. `command_names()` lists the names in
sorted order.

`parse_args(text)` splits text on whitespace and keeps single- or
double-quoted tokens whole, with the quotes removed.

### `gapedit.command_buffer`

`CommandBuffer` is a one-line modal editor for the command palette, find,
goto and prompts.

- `open(mode, prompt, prefill)` starts an editing session in a
  `CommandBufferMode`.
- `close()` ends it and saves non-empty input to `history`.
- `display_line()` returns the prompt followed by the input. In
  `SUDO_SAVE` mode the input is masked with `*`.
- `handle_key(Key(...))` applies a key and returns a `CommandBufferResult`
  whose `kind` is a `ResultKind`:
  - Enter (`Key(KeyKind.CHAR, "\n")`) gives `SUBMIT`.
  - Esc or Ctrl-Q gives `CANCEL`.
  - Tab gives `TAB_COMPLETE`.
  - A change to the input gives `CHANGED`.
  - Any other key gives `CONTINUE`.

  Left and Right move the cursor. Up and Down step through the history.
- `insert_str(text)` inserts pasted text with line breaks removed.

### `gapedit.clipboard`

`Clipboard.detect()` picks the first clipboard helper it finds:

- `pbcopy` on macOS;
- otherwise `wl-copy` under Wayland;
- otherwise `xclip`;
- otherwise `xsel`.

If none of these is installed, it falls back to an in-memory store.
`Clipboard.internal_only()` always uses the in-memory store.

`copy(text)` ignores any failure of the helper program. `paste()` returns
an empty string when the helper cannot be run. `command_exists(name)`
reports whether a program is on the `PATH`.

## Example

```python
from gapedit.buffer import GapBuffer
from gapedit.command import ActionKind, CommandRegistry

buf = GapBuffer(b"abc\ndef")
buf.insert(3, b"\nXX")
assert buf.line_count() == 3
assert buf.line_text(1) == b"XX"
assert buf.offset_to_pos(5) == (1, 1)

action = CommandRegistry().execute("replaceall 'foo bar' baz")
assert action.kind is ActionKind.REPLACE_ALL
assert (action.text, action.replacement) == ("foo bar", "baz")
```

## What this package does not do

This package is a set of library parts, not a finished editor.

- It has no command to run and does not draw anything on the terminal.
- It does not read key presses from a terminal. Callers build `Key` values
  themselves.
- It does not open or save files.
- It has no undo or redo, no syntax highlighting and no keybinding
  configuration.
- `CommandRegistry` only reports the action a command asks for. Carrying
  the action out is left to the caller.

## Install and test

    pip install gapedit
    pip install "gapedit[test]"
    pytest