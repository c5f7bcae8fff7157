import pytest

from normcheck.errors import ValidationError
from normcheck.text import TextBuffer, is_white


class TestReading:
    """Index-checked access and searching."""

    def test_char_at_and_end(self):
        buf = TextBuffer("abc")
        assert buf.char_at(0) == "a"
        assert buf.char_at_end() == "c"
        assert len(buf) == 3

    def test_out_of_range_is_index_error(self):
        buf = TextBuffer("abc")
        with pytest.raises(IndexError):
            buf.char_at(3)
        with pytest.raises(IndexError):
            buf.char_at(-1)
        with pytest.raises(IndexError):
            TextBuffer().char_at_end()

    def test_index_of_and_contains(self):
        buf = TextBuffer("a-b-c")
        assert buf.index_of("-") == 1
        assert buf.index_of("-", 2) == 3
        assert buf.index_of("x") == -1
        assert buf.contains("b-c")
        assert not buf.contains("")

    def test_contains_any_returns_first_present(self):
        buf = TextBuffer("1.2 3")
        assert buf.contains_any("/", "-", ".", " ") == "."
        assert buf.contains_any("(", ")") == ""

    def test_equality_with_str(self):
        assert TextBuffer("abc") == "abc"
        assert TextBuffer("abc") == TextBuffer("abc")
        assert TextBuffer("abc") != "abd"

    def test_sub_buffer(self):
        assert TextBuffer("2125550100").sub_buffer(3, 6) == "555"


class TestEditing:
    def test_insert_append_grow(self):
        buf = TextBuffer()
        for _ in range(100):
            buf.append("x")
        buf.insert(0, "ab")
        assert len(buf) == 102
        assert str(buf).startswith("abx")

    def test_delete_clips_end(self):
        assert TextBuffer("abcdef").delete(2, 100) == "ab"

    def test_delete_bad_range(self):
        with pytest.raises(IndexError):
            TextBuffer("abc").delete(2, 1)

    def test_delete_char_at(self):
        buf = TextBuffer("abc")
        buf.delete_char_at(1).delete_char_at_end()
        assert buf == "a"

    def test_replace_does_not_rescan(self):
        assert TextBuffer("aaa").replace("a", "aa") == "aaaaaa"

    def test_replace_deletes_with_empty(self):
        assert TextBuffer("1-2-3").replace("-") == "123"

    def test_trim(self):
        assert TextBuffer(" \t abc \n").trim() == "abc"

    def test_set_char_at(self):
        assert TextBuffer("abc").set_char_at(1, "X") == "aXc"


class TestWhitespace:
    def test_remove(self):
        assert TextBuffer(" a b\tc\n").edit_whitespace() == "abc"

    def test_title(self):
        assert TextBuffer("  hello   WORLD  ").edit_whitespace(title=True) == "Hello World"

    def test_title_after_punctuation(self):
        assert TextBuffer("mary-jane o'neil").edit_whitespace(title=True) == "Mary-Jane O'Neil"

    def test_invisible_characters_are_white(self):
        assert is_white("\u200b")
        assert is_white("\u00a0")
        assert not is_white("a")


class TestSplitAndDecorate:
    def test_split_drops_trailing_empty(self):
        assert [str(p) for p in TextBuffer("boo:and:").split(":")] == ["boo", "and"]

    def test_split_keeps_leading_empty(self):
        assert [str(p) for p in TextBuffer(":a").split(":")] == ["", "a"]

    def test_decorate(self):
        assert TextBuffer("123456789").decorate("-", 3, 5) == "123-45-6789"

    def test_decorate_cycles_insertions(self):
        assert TextBuffer("+12125550100").decorate("()-", 2, 5, 8) == "+1(212)555-0100"

    def test_decorate_stops_at_end(self):
        assert TextBuffer("12").decorate("-", 3) == "12"


class TestEnsureContent:
    def test_none_and_blank_rejected(self):
        with pytest.raises(ValidationError, match="No thing present"):
            TextBuffer.ensure_content(None, "thing", remove_whitespace=False)
        with pytest.raises(ValidationError, match="No thing present"):
            TextBuffer.ensure_content(" \t", "thing", remove_whitespace=True)

    def test_removes_whitespace(self):
        assert TextBuffer.ensure_content(" 1 2 ", "thing", remove_whitespace=True) == "12"
