"""External collaborators: locale collation and Unicode normalization.

Both are optional. A missing collator means byte-wise comparison; a missing
normalizer restricts to_ascii() to its best-effort path. The process-wide
instances are built once, on first use, under a lock.
"""
import locale
import logging
import threading
import unicodedata
from typing import Optional, Protocol

import regex

from src.unistring.config import load_config

logger = logging.getLogger(__name__)


class Collator(Protocol):
    def compare(self, a: str, b: str) -> int: ...


class Normalizer(Protocol):
    def normalize_compatibility_decomposed(self, s: str) -> str: ...

    def transliterate(self, s: str) -> str: ...


class LocaleCollator:
    """Collation through the C library's strcoll() for the current LC_COLLATE.

    Never switches the process locale; call apply_collation_locale() once at
    startup to pick one.
    """

    def __init__(self):
        self.locale_name = locale.setlocale(locale.LC_COLLATE)

    def compare(self, a: str, b: str) -> int:
        r = locale.strcoll(a, b)
        return (r > 0) - (r < 0)


def apply_collation_locale(locale_name: Optional[str]) -> bool:
    """Set LC_COLLATE for the whole process. Not thread-safe; call before other threads start."""
    if not locale_name:
        return False
    try:
        locale.setlocale(locale.LC_COLLATE, locale_name)
    except locale.Error as e:
        logger.warning("Collation locale %r unavailable (%s), keeping current", locale_name, e)
        return False
    return True


_LATIN_LETTER = regex.compile(r"^LATIN (CAPITAL|SMALL) LETTER ([A-Z])(?: WITH .+)?$")
_LIGATURES = {
    "Æ": "AE", "æ": "ae", "Œ": "OE", "œ": "oe",
    "ß": "ss", "ﬀ": "ff", "ﬁ": "fi", "ﬂ": "fl",
}
_ARTIFACT = regex.compile(r"[\'\"`^](\w)")


def fold_to_ascii(s: str) -> str:
    """Ligatures expand, Latin letters fall back to their base letter (read
    from the character name), anything else non-ASCII is dropped."""
    out = []
    for char in s:
        if char.isascii():
            out.append(char)
        elif char in _LIGATURES:
            out.append(_LIGATURES[char])
        else:
            m = _LATIN_LETTER.match(unicodedata.name(char, ""))
            if m:
                letter = m.group(2)
                out.append(letter if m.group(1) == "CAPITAL" else letter.lower())
    return "".join(out)


class UnicodedataNormalizer:
    """NFKD from unicodedata; transliteration folds what NFKD leaves non-ASCII."""

    def normalize_compatibility_decomposed(self, s: str) -> str:
        return unicodedata.normalize("NFKD", s)

    def transliterate(self, s: str) -> str:
        return fold_to_ascii(s)


def naive_transliterate(s: str) -> str:
    """Best-effort ASCII without a normalizer.

    Folds each character on its own, then strips leftover quote/accent marks
    glued to a word character. Approximate by nature.
    """
    return _ARTIFACT.sub(r"\1", fold_to_ascii(s))


_lock = threading.Lock()
_collator = None
_collator_ready = False
_normalizer = None
_normalizer_ready = False


def get_collator() -> Optional[Collator]:
    """Process-wide collator, or None when collation is disabled."""
    global _collator, _collator_ready
    if _collator_ready:
        return _collator
    with _lock:
        if not _collator_ready:
            cfg = load_config().get("collation", {})
            if cfg.get("enabled", True):
                _collator = LocaleCollator()
                logger.debug("Collator ready for LC_COLLATE=%s", _collator.locale_name)
            else:
                logger.debug("Collation disabled, comparing bytes")
            _collator_ready = True
    return _collator


def get_normalizer() -> Optional[Normalizer]:
    """Process-wide normalizer, or None when normalization is disabled."""
    global _normalizer, _normalizer_ready
    if _normalizer_ready:
        return _normalizer
    with _lock:
        if not _normalizer_ready:
            if load_config().get("normalization", {}).get("enabled", True):
                _normalizer = UnicodedataNormalizer()
            else:
                logger.debug("Normalization disabled")
            _normalizer_ready = True
    return _normalizer


def reset_services() -> None:
    """Forget the cached services so the next call re-reads the config."""
    global _collator, _collator_ready, _normalizer, _normalizer_ready
    with _lock:
        _collator, _collator_ready = None, False
        _normalizer, _normalizer_ready = None, False
