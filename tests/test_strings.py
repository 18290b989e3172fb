"""Tests for the shell string helpers (bashist/strings.py)."""

import shlex

from bashist.strings import lines_to_args, regexp_escape


class TestLinesToArgs:
    def test_plain_names_are_untouched(self):
        assert lines_to_args("one.js\ntwo.js") == "one.js two.js"

    def test_spaces_are_quoted(self):
        result = lines_to_args("long-filename-one.js\nfilename with spaces.js\nempty.js")
        assert shlex.split(result) == [
            "long-filename-one.js",
            "filename with spaces.js",
            "empty.js",
        ]

    def test_blank_lines_are_dropped(self):
        assert lines_to_args("a\n\nb\n") == "a b"


class TestRegexpEscape:
    def test_special_characters_are_escaped(self):
        assert regexp_escape("a.b*c") == r"a\.b\*c"
        assert regexp_escape("^[x]$") == r"\^\[x\]\$"

    def test_backslash_is_escaped(self):
        assert regexp_escape("a\\b") == "a\\\\b"

    def test_ordinary_text_is_unchanged(self):
        assert regexp_escape("hello world-1") == "hello world-1"
