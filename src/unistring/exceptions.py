"""Errors raised by unistring. All derive from UnicodeStringError."""


class UnicodeStringError(Exception):
    """Base class for unistring errors."""


class InvalidEncoding(UnicodeStringError, ValueError):
    """Malformed UTF-8 input, or a codepoint that has no UTF-8 form."""


class EmptyString(UnicodeStringError, IndexError):
    """Offset resolved against a zero-length string."""


class NormalizationUnavailable(UnicodeStringError, RuntimeError):
    """ASCII conversion requested without a normalizer and without best effort."""


class UnsupportedPrerequisite(UnicodeStringError, RuntimeError):
    """Host interpreter cannot represent the full Unicode range."""


class InvalidPattern(UnicodeStringError, ValueError):
    """Delimited pattern is malformed or uses an unsupported option."""
