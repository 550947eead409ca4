"""UTF-8 string indexed by codepoints rather than bytes.

Offsets may be negative (counted from the end) or larger than the string
(wrapped around). Regular expressions are PCRE-style delimited patterns,
always run in Unicode mode. Collation and normalization go through optional
services; see src.unistring.services.
"""
import logging
import sys
from typing import Callable, Iterator, Optional, Union

from src.unistring import codec
from src.unistring.bidi import Direction, string_direction
from src.unistring.config import get_best_effort_default
from src.unistring.exceptions import InvalidEncoding, NormalizationUnavailable, UnsupportedPrerequisite
from src.unistring.offsets import resolve
from src.unistring.pattern import MatchFlag, Side, SplitFlag, compile_pattern, ensure_unicode_mode
from src.unistring.services import get_collator, get_normalizer, naive_transliterate
from src.unistring.width import string_width

logger = logging.getLogger(__name__)

DEFAULT = object()  # use the process-wide service

_MARKS = "/\\p{Mn}+/u"


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, UnicodeString):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        data = bytes(value)
        if not codec.validate_utf8(data):
            raise InvalidEncoding(f"not valid UTF-8: {data[:16]!r}")
        return data.decode("utf-8")
    if isinstance(value, str):
        return value
    raise TypeError(f"expected str, bytes or UnicodeString, got {type(value).__name__}")


def _encode(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        # lone surrogates in a str
        raise InvalidEncoding(str(e)) from e


class UnicodeString:
    """Mutable UTF-8 string. Mutators return self so calls can be chained."""

    BEGINNING = Side.BEGINNING
    END = Side.END

    def __init__(self, data=None, *, collator=DEFAULT, normalizer=DEFAULT):
        if sys.maxunicode < codec.MAX_CODEPOINT:
            raise UnsupportedPrerequisite("interpreter cannot represent codepoints above U+FFFF")
        self._buffer = b""
        self._direction = Direction.LTR
        self._dirty = True
        self._collator = collator
        self._normalizer = normalizer
        if data is not None:
            self.append(data)

    # buffer

    @property
    def _text(self) -> str:
        return self._buffer.decode("utf-8")

    def _commit(self, text: str) -> "UnicodeString":
        self._buffer = _encode(text)
        self._dirty = True
        return self

    def copy(self) -> "UnicodeString":
        clone = UnicodeString(collator=self._collator, normalizer=self._normalizer)
        clone._buffer = self._buffer
        return clone

    # concatenation

    def append(self, substring) -> "UnicodeString":
        return self._commit(self._text + _as_text(substring))

    def prepend(self, substring) -> "UnicodeString":
        return self._commit(_as_text(substring) + self._text)

    def pad(self, length: int, piece, side: Side = Side.END) -> "UnicodeString":
        """Pad with repetitions of piece until the string has `length` codepoints."""
        piece = _as_text(piece)
        difference = length - self.count()
        if difference <= 0 or not piece:
            return self
        handle = (piece * (difference // len(piece) + 1))[:difference]
        if side & Side.END:
            return self.append(handle)
        return self.prepend(handle)

    # comparison

    def _resolve_collator(self):
        return get_collator() if self._collator is DEFAULT else self._collator

    def compare(self, other) -> int:
        """-1, 0 or 1. Locale collation when available, else byte order."""
        collator = self._resolve_collator()
        if collator is not None:
            return collator.compare(self._text, _as_text(other))
        a, b = self._buffer, _encode(_as_text(other))
        return (a > b) - (a < b)

    def __eq__(self, other):
        if isinstance(other, (UnicodeString, str, bytes, bytearray)):
            try:
                return self._buffer == _encode(_as_text(other))
            except InvalidEncoding:
                return False
        return NotImplemented

    __hash__ = None

    # regular expressions

    @staticmethod
    def safe_pattern(pattern: str) -> str:
        return ensure_unicode_mode(pattern)

    def _group_values(self, text: str, m, with_offset: bool) -> list:
        values = []
        for i in range(m.re.groups + 1):
            start = m.start(i)
            if with_offset:
                if start < 0:
                    values.append(("", -1))
                else:
                    values.append((m.group(i), codec.byte_offset(text, start)))
            else:
                values.append(m.group(i) if start >= 0 else "")
        return values

    def match(self, pattern: str, flags: int = 0, offset: int = 0, global_: bool = False) -> tuple[int, list]:
        """Match pattern against the string, starting at codepoint `offset`.

        Returns (number of matches, matches). A single match is a list of
        groups; a global match is grouped by pattern (default) or by tuple.
        With MatchFlag.WITH_OFFSET every group is (text, byte offset).
        """
        compiled = compile_pattern(pattern)
        text = self._text
        count = len(text)
        if offset < 0:
            offset = max(0, count + offset)
        offset = min(offset, count)
        with_offset = bool(flags & MatchFlag.WITH_OFFSET)
        logger.debug("match %r from codepoint %d (byte %d)", pattern, offset, codec.byte_offset(text, offset))

        if not global_:
            m = compiled.search(text, offset)
            if m is None:
                return 0, []
            return 1, self._group_values(text, m, with_offset)

        tuples = [self._group_values(text, m, with_offset) for m in compiled.finditer(text, offset)]
        if flags & MatchFlag.GROUP_BY_TUPLE:
            return len(tuples), tuples
        by_pattern = [[t[i] for t in tuples] for i in range(compiled.groups + 1)]
        return len(tuples), by_pattern

    def replace(self, pattern: str, replacement: Union[str, Callable], limit: int = -1) -> "UnicodeString":
        """Replace matches with a regex template or the result of a callable(match)."""
        if limit == 0:
            return self
        compiled = compile_pattern(pattern)
        count = 0 if limit < 0 else limit
        return self._commit(compiled.sub(replacement, self._text, count=count))

    def split(self, pattern: str, limit: int = -1, flags: int = SplitFlag.WITHOUT_EMPTY) -> list:
        """Split around matches, with preg_split semantics.

        limit <= 0 means no limit; otherwise at most `limit` pieces, the last
        one holding the rest of the string. WITH_OFFSET reports byte offsets.
        """
        compiled = compile_pattern(pattern)
        text = self._text
        without_empty = bool(flags & SplitFlag.WITHOUT_EMPTY)
        with_delimiters = bool(flags & SplitFlag.WITH_DELIMITERS)
        with_offset = bool(flags & SplitFlag.WITH_OFFSET)
        pieces = []

        def add(start: int, end: int) -> bool:
            if without_empty and start == end:
                return False
            piece = text[start:end]
            pieces.append((piece, codec.byte_offset(text, start)) if with_offset else piece)
            return True

        last = 0
        splits = 0
        for m in compiled.finditer(text):
            if 0 < limit <= splits + 1:
                break
            if add(last, m.start()):
                splits += 1
            if with_delimiters:
                for i in range(1, compiled.groups + 1):
                    if m.start(i) >= 0:
                        add(m.start(i), m.end(i))
            last = m.end()
        add(last, len(text))
        return pieces

    def trim(self, char_class: str = r"\s", side: Side = Side.BOTH) -> "UnicodeString":
        """Strip runs of char_class from the beginning and/or the end."""
        run = "(?:" + char_class + ")+"
        parts = []
        if side & Side.BEGINNING:
            parts.append("(^" + run + ")")
        if side & Side.END:
            parts.append("(" + run + "$)")
        if not parts:
            return self
        return self.replace("#" + "|".join(parts) + "#u", "")

    # codepoint access

    def count(self) -> int:
        return len(self._text)

    __len__ = count

    def __iter__(self) -> Iterator[str]:
        return iter(self._text)

    def get(self, offset: int) -> str:
        text = self._text
        return text[resolve(offset, len(text))]

    def set(self, offset: int, value) -> "UnicodeString":
        """Replace the character at offset with value (any length, possibly empty)."""
        text = self._text
        i = resolve(offset, len(text))
        return self._commit(text[:i] + _as_text(value) + text[i + 1:])

    def delete(self, offset: int) -> "UnicodeString":
        return self.set(offset, "")

    def __getitem__(self, offset: int) -> str:
        if not isinstance(offset, int):
            raise TypeError("UnicodeString indices must be integers")
        return self.get(offset)

    def __setitem__(self, offset: int, value) -> None:
        if not isinstance(offset, int):
            raise TypeError("UnicodeString indices must be integers")
        self.set(offset, value)

    def __delitem__(self, offset: int) -> None:
        if not isinstance(offset, int):
            raise TypeError("UnicodeString indices must be integers")
        self.delete(offset)

    def reduce(self, start: int, length: Optional[int] = None) -> "UnicodeString":
        """Keep `length` characters from `start`. Negative values count from the end."""
        text = self._text[start:]
        if length is not None:
            text = text[:length]
        return self._commit(text)

    # byte access

    def byte_at(self, offset: int) -> bytes:
        i = resolve(offset, len(self._buffer))
        return self._buffer[i:i + 1]

    def byte_length(self) -> int:
        return len(self._buffer)

    # case, width, direction

    def to_lower(self) -> "UnicodeString":
        return self._commit(self._text.lower())

    def to_upper(self) -> "UnicodeString":
        return self._commit(self._text.upper())

    def width(self) -> int:
        """Monospace columns needed to print the string."""
        return string_width(self._text)

    def direction(self) -> Direction:
        if self._dirty:
            self._direction = string_direction(self._buffer)
            self._dirty = False
        return self._direction

    # ASCII

    def _resolve_normalizer(self):
        return get_normalizer() if self._normalizer is DEFAULT else self._normalizer

    def to_ascii(self, best_effort: Optional[bool] = None) -> "UnicodeString":
        """Turn the string into ASCII.

        Uses NFKD, drops nonspacing marks, then transliterates. Without a
        normalizer this raises NormalizationUnavailable unless best_effort is
        set, in which case a rough name-based transliteration is used.
        """
        if self._buffer.isascii():
            return self
        normalizer = self._resolve_normalizer()
        if normalizer is None:
            if best_effort is None:
                best_effort = get_best_effort_default()
            if not best_effort:
                raise NormalizationUnavailable(
                    "to_ascii() needs a normalizer, or call to_ascii(best_effort=True)")
            logger.info("No normalizer, using best-effort transliteration")
            return self._commit(naive_transliterate(self._text))
        text = normalizer.normalize_compatibility_decomposed(self._text)
        text = compile_pattern(_MARKS).sub("", text)
        return self._commit(normalizer.transliterate(text))

    # conversion

    def __str__(self) -> str:
        return self._text

    def __bytes__(self) -> bytes:
        return self._buffer

    def __repr__(self) -> str:
        return f"UnicodeString({self._text!r})"

    # codec helpers

    @staticmethod
    def from_code(code: int) -> str:
        return codec.from_code(code)

    @staticmethod
    def to_code(char) -> int:
        return codec.to_code(char)

    @staticmethod
    def to_binary_code(char, length: int = 32) -> str:
        return codec.to_binary_code(char, length)

    @staticmethod
    def transcode(data: bytes, from_encoding: str, to_encoding: str = "utf-8") -> bytes:
        return codec.transcode(data, from_encoding, to_encoding)

    @staticmethod
    def is_utf8(data: bytes) -> bool:
        return codec.validate_utf8(data)
