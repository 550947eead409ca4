"""Tests for collation and normalization services."""
import locale
import threading
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from src.unistring import services
from src.unistring.services import (
    LocaleCollator,
    UnicodedataNormalizer,
    apply_collation_locale,
    fold_to_ascii,
    get_collator,
    get_normalizer,
    naive_transliterate,
)
from src.unistring.unicode_string import UnicodeString


def test_locale_collator_sign():
    collator = LocaleCollator()
    assert collator.compare("a", "b") == -1
    assert collator.compare("b", "a") == 1
    assert collator.compare("a", "a") == 0


def test_apply_collation_locale_bad_locale(caplog):
    before = locale.setlocale(locale.LC_COLLATE)
    assert apply_collation_locale("xx_NOWHERE.UTF-8") is False
    assert "unavailable" in caplog.text
    assert locale.setlocale(locale.LC_COLLATE) == before


def test_apply_collation_locale_none():
    assert apply_collation_locale(None) is False


def test_get_collator_leaves_process_locale_alone(isolated_config, monkeypatch):
    isolated_config.write_text("collation:\n  locale: C\n", encoding="utf-8")
    calls = []
    original_setlocale = locale.setlocale

    def recording(category, *args):
        calls.append(args)
        return original_setlocale(category, *args)

    monkeypatch.setattr(locale, "setlocale", recording)
    assert isinstance(get_collator(), LocaleCollator)
    assert all(not args or args[0] is None for args in calls)


def test_get_collator_is_singleton():
    assert isinstance(get_collator(), LocaleCollator)
    assert get_collator() is get_collator()


def test_get_collator_thread_safe(monkeypatch):
    built = []
    original = services.LocaleCollator

    def counting(*args, **kwargs):
        built.append(1)
        return original(*args, **kwargs)

    monkeypatch.setattr(services, "LocaleCollator", counting)
    results = []
    threads = [threading.Thread(target=lambda: results.append(get_collator())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(built) == 1
    assert all(r is results[0] for r in results)


def test_collation_disabled(isolated_config):
    isolated_config.write_text("collation:\n  enabled: false\n", encoding="utf-8")
    assert get_collator() is None
    assert UnicodeString("b").compare("a") == 1


def test_normalization_disabled(isolated_config):
    isolated_config.write_text("normalization:\n  enabled: false\nto_ascii:\n  best_effort: true\n", encoding="utf-8")
    assert get_normalizer() is None
    assert str(UnicodeString("é").to_ascii()) == "e"


def test_unicodedata_normalizer():
    n = UnicodedataNormalizer()
    assert n.normalize_compatibility_decomposed("\u00e9") == "e\u0301"
    assert n.normalize_compatibility_decomposed("\ufb01") == "fi"
    assert n.transliterate("e\u0301x\u4e2d") == "ex"
    assert isinstance(get_normalizer(), UnicodedataNormalizer)


def test_naive_transliterate():
    assert naive_transliterate("Ærøskøbing") == "AEroskobing"
    assert naive_transliterate("Straße") == "Strasse"
    assert naive_transliterate("中文") == ""


def test_fold_to_ascii():
    assert fold_to_ascii("\u00df\u0141\u00d8\u4e2d!") == "ssLO!"


def test_naive_transliterate_strips_artifacts():
    assert naive_transliterate("'e \"a `o ^u") == "e a o u"
