"""PCRE-style delimited patterns ("/body/flags") compiled for the regex module in Unicode mode."""
import enum
import logging
from functools import lru_cache

import regex

from src.unistring.exceptions import InvalidPattern

logger = logging.getLogger(__name__)

UNICODE_OPTION = "u"
BRACKET_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
OPTION_FLAGS = {
    "i": regex.IGNORECASE,
    "m": regex.MULTILINE,
    "s": regex.DOTALL,
    "x": regex.VERBOSE,
    "u": regex.UNICODE,
}


class Side(enum.IntFlag):
    BEGINNING = 1
    END = 2
    BOTH = 3


class SplitFlag(enum.IntFlag):
    WITHOUT_EMPTY = 1
    WITH_DELIMITERS = 2
    WITH_OFFSET = 4


class MatchFlag(enum.IntFlag):
    GROUP_BY_PATTERN = 1
    GROUP_BY_TUPLE = 2
    WITH_OFFSET = 4


def _split_delimited(pattern: str) -> tuple[str, str, str]:
    """Return (opening delimiter, body, options) using the last closing delimiter."""
    if len(pattern) < 2:
        raise InvalidPattern(f"pattern too short: {pattern!r}")
    opening = pattern[0]
    if opening.isalnum() or opening.isspace() or opening == "\\":
        raise InvalidPattern(f"invalid delimiter {opening!r} in {pattern!r}")
    closing = BRACKET_DELIMITERS.get(opening, opening)
    end = pattern.rfind(closing)
    if end < 1:
        raise InvalidPattern(f"no closing delimiter {closing!r} in {pattern!r}")
    return opening, pattern[1:end], pattern[end + 1:]


def ensure_unicode_mode(pattern: str) -> str:
    """Append the u option unless the trailing options already carry it."""
    _, _, options = _split_delimited(pattern)
    if UNICODE_OPTION not in options:
        pattern += UNICODE_OPTION
    return pattern


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> "regex.Pattern":
    """Compile a delimited pattern. Unicode mode is always on."""
    _, body, options = _split_delimited(ensure_unicode_mode(pattern))
    flags = 0
    for option in options:
        if option not in OPTION_FLAGS:
            logger.debug("rejecting pattern %r: option %r", pattern, option)
            raise InvalidPattern(f"unsupported option {option!r} in {pattern!r}")
        flags |= OPTION_FLAGS[option]
    try:
        return regex.compile(body, flags)
    except regex.error as e:
        logger.debug("rejecting pattern %r: %s", pattern, e)
        raise InvalidPattern(f"cannot compile {pattern!r}: {e}") from e
