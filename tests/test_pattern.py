"""Tests for delimited pattern handling."""
import pytest
import regex
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from src.unistring.exceptions import InvalidPattern
from src.unistring.pattern import compile_pattern, ensure_unicode_mode


def test_ensure_unicode_mode():
    assert ensure_unicode_mode("/abc/") == "/abc/u"
    assert ensure_unicode_mode("/abc/u") == "/abc/u"
    assert ensure_unicode_mode("#a/b#i") == "#a/b#iu"


def test_ensure_unicode_mode_last_delimiter():
    assert ensure_unicode_mode("/a/b/") == "/a/b/u"
    assert ensure_unicode_mode("/a/u/i") == "/a/u/iu"


def test_bracket_delimiters():
    assert ensure_unicode_mode("(a(b)c)i") == "(a(b)c)iu"
    assert compile_pattern("{a{2}}").match("aa")


def test_compile_flags():
    compiled = compile_pattern("/abc/i")
    assert compiled.flags & regex.IGNORECASE
    assert compiled.search("xABCx")


def test_compile_unicode_properties():
    assert compile_pattern(r"/\p{Hebrew}+/").fullmatch("שלום")


@pytest.mark.parametrize("pattern", ["", "/", "/abc", "abc", "/a/Q", "/(/"])
def test_invalid(pattern):
    with pytest.raises(InvalidPattern):
        compile_pattern(pattern)
