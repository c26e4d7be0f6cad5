import pytest
from hypothesis import given, strategies as st

from gapedit.lines import LineIndex, char_count, char_to_byte, utf8_char_len


def starts(index):
    return [index.line_start(i) for i in range(index.line_count())]


def flags(index):
    return [index.is_ascii(i) for i in range(index.line_count())]


# -- utf8 helpers ------------------------------------------------------------


def test_utf8_char_len():
    assert utf8_char_len(ord("a")) == 1
    assert utf8_char_len(0xC3) == 2
    assert utf8_char_len(0xE4) == 3
    assert utf8_char_len(0xF0) == 4
    assert utf8_char_len(0xA9) == 1


def test_char_count_ascii():
    assert char_count(b"hello") == 5
    assert char_count(b"") == 0


def test_char_count_utf8():
    assert char_count("café".encode()) == 4
    assert char_count("日本".encode()) == 2


def test_char_to_byte():
    assert char_to_byte(b"hello", 3) == 3
    assert char_to_byte(b"hello", 10) == 5
    assert char_to_byte("aé".encode(), 1) == 1
    assert char_to_byte("aé".encode(), 2) == 3
    assert char_to_byte("aé".encode(), 9) == 3


# -- construction ------------------------------------------------------------


def test_empty_index():
    index = LineIndex()
    assert index.line_count() == 1
    assert index.line_start(0) == 0
    assert index.is_ascii(0)


def test_from_bytes_three_lines():
    index = LineIndex.from_bytes(b"line1\nline2\nline3")
    assert index.line_count() == 3
    assert starts(index) == [0, 6, 12]


def test_from_bytes_single_line():
    assert LineIndex.from_bytes(b"hello").line_count() == 1


def test_from_bytes_empty_lines():
    index = LineIndex.from_bytes(b"a\n\nb")
    assert starts(index) == [0, 2, 3]


def test_from_bytes_trailing_newline_not_a_line():
    assert LineIndex.from_bytes(b"hello\n").line_count() == 1


def test_from_bytes_only_newlines():
    index = LineIndex.from_bytes(b"\n\n\n")
    assert starts(index) == [0, 1, 2]


def test_line_start_positions():
    index = LineIndex.from_bytes(b"abc\ndef\nghi")
    assert starts(index) == [0, 4, 8]


def test_line_out_of_range():
    index = LineIndex.from_bytes(b"a\nb")
    with pytest.raises(IndexError):
        index.line_start(2)
    with pytest.raises(IndexError):
        index.is_ascii(-1)


def test_find_line():
    index = LineIndex.from_bytes(b"abc\ndef\nghi")
    assert index.find_line(0) == 0
    assert index.find_line(3) == 0
    assert index.find_line(4) == 1
    assert index.find_line(6) == 1
    assert index.find_line(11) == 2


# -- incremental updates ------------------------------------------------------


def test_insert_newline_and_text():
    index = LineIndex.from_bytes(b"ab\ncd")
    index.on_insert(2, b"\nXX")
    assert starts(index) == [0, 3, 6]


def test_delete_newline():
    index = LineIndex.from_bytes(b"ab\ncd\nef")
    index.on_delete(2, 1)
    assert starts(index) == [0, 5]


def test_insert_newline_at_start():
    index = LineIndex.from_bytes(b"hello")
    index.on_insert(0, b"\n")
    assert starts(index) == [0, 1]


def test_delete_all_multiline():
    index = LineIndex.from_bytes(b"a\nb\nc")
    index.on_delete(0, 5)
    assert starts(index) == [0]


def test_multiple_edits():
    index = LineIndex.from_bytes(b"aa\nbb\ncc")
    index.on_insert(2, b"\nXX")
    index.on_delete(0, 3)
    assert starts(index) == [0, 3, 6]


def test_insert_trailing_newline_opens_line():
    index = LineIndex.from_bytes(b"hello")
    index.on_insert(5, b"\n")
    assert starts(index) == [0, 6]


def test_delete_newline_merges_lines():
    index = LineIndex.from_bytes(b"foo\nbar\nbaz")
    index.on_delete(7, 1)
    assert starts(index) == [0, 4]


def test_empty_edits_do_nothing():
    index = LineIndex.from_bytes(b"a\nb")
    index.on_insert(1, b"")
    index.on_delete(1, 0)
    assert starts(index) == [0, 2]
    assert index.take_dirty_line() is None


# -- dirty tracking -------------------------------------------------------------


def test_take_dirty_line_resets():
    index = LineIndex.from_bytes(b"a\nb\nc")
    index.on_insert(2, b"X")
    assert index.take_dirty_line() == 1
    assert index.take_dirty_line() is None


def test_take_dirty_line_accumulates_min():
    index = LineIndex.from_bytes(b"a\nb\nc\nd\ne")
    index.on_insert(6, b"X")
    index.on_insert(2, b"Y")
    assert index.take_dirty_line() == 1


# -- ascii flags ---------------------------------------------------------------


def test_ascii_flag_pure_ascii():
    assert flags(LineIndex.from_bytes(b"hello\nworld\n")) == [True, True]


def test_ascii_flag_utf8_line():
    index = LineIndex.from_bytes("hello\ncafé\nworld".encode())
    assert flags(index) == [True, False, True]


def test_ascii_flag_insert_ascii():
    index = LineIndex.from_bytes(b"ab\ncd")
    index.on_insert(1, b"X")
    assert index.is_ascii(0)


def test_ascii_flag_insert_utf8():
    index = LineIndex.from_bytes(b"ab\ncd")
    index.on_insert(1, "é".encode())
    assert flags(index) == [False, True]


def test_ascii_flag_insert_newline_splits():
    index = LineIndex.from_bytes(b"abcd")
    index.on_insert(2, b"\n")
    assert index.line_count() == 2
    assert flags(index) == [True, True]


def test_ascii_flag_insert_newline_with_utf8():
    index = LineIndex.from_bytes(b"abcd")
    index.on_insert(2, "xé\ny".encode())
    assert index.line_count() == 2
    assert flags(index) == [False, True]


def test_ascii_flag_delete_merges():
    index = LineIndex.from_bytes(b"ab\ncd")
    index.on_delete(2, 1)
    assert flags(index) == [True]


def test_ascii_flag_delete_merge_preserves_non_ascii():
    index = LineIndex.from_bytes("ab\ncafé".encode())
    assert flags(index) == [True, False]
    index.on_delete(2, 1)
    assert flags(index) == [False]


# -- properties ------------------------------------------------------------------

_edit = st.one_of(
    st.tuples(st.just("ins"), st.floats(0, 1), st.binary(min_size=1, max_size=16)),
    st.tuples(st.just("del"), st.floats(0, 1), st.floats(0, 1)),
)


def _apply(index, text, op):
    kind, a, b = op
    if kind == "ins":
        pos = int(a * len(text)) % (len(text) + 1) if text else 0
        index.on_insert(pos, b)
        return text[:pos] + b + text[pos:]
    if not text:
        return text
    pos = int(a * len(text)) % len(text)
    max_len = len(text) - pos
    count = min(max(int(b * max_len), 1), max_len)
    index.on_delete(pos, count)
    return text[:pos] + text[pos + count:]


@given(st.binary(max_size=128), st.lists(_edit, max_size=30))
def test_index_matches_newlines_after_edits(initial, ops):
    index = LineIndex.from_bytes(initial)
    text = initial
    for op in ops:
        text = _apply(index, text, op)
    line_starts = starts(index)
    assert line_starts[0] == 0
    assert line_starts == sorted(set(line_starts))
    expected = {i + 1 for i, byte in enumerate(text) if byte == 0x0A}
    assert set(line_starts[1:]) - {len(text)} == expected - {len(text)}


@given(st.binary(max_size=128), st.lists(_edit, max_size=30))
def test_ascii_flags_never_lie(initial, ops):
    index = LineIndex.from_bytes(initial)
    text = initial
    for op in ops:
        text = _apply(index, text, op)
    count = index.line_count()
    for line in range(count):
        end = index.line_start(line + 1) if line + 1 < count else len(text)
        if index.is_ascii(line):
            assert text[index.line_start(line):end].isascii()


@given(st.text(max_size=40))
def test_char_count_matches_decoded_length(text):
    assert char_count(text.encode()) == len(text)


@given(st.text(max_size=40), st.integers(0, 50))
def test_char_to_byte_matches_prefix_encoding(text, col):
    assert char_to_byte(text.encode(), col) == len(text[:col].encode())