"""CLI entry point for unistring (info, chars, ascii, split, pad)."""
import argparse
import logging
import sys
from pathlib import Path

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))

from src.unistring.bidi import classify
from src.unistring.codec import to_binary_code, to_code
from src.unistring.config import load_config
from src.unistring.exceptions import UnicodeStringError
from src.unistring.pattern import Side, SplitFlag
from src.unistring.services import apply_collation_locale
from src.unistring.unicode_string import UnicodeString
from src.unistring.width import char_width

logger = logging.getLogger(__name__)


def cmd_info(args):
    s = UnicodeString(args.text)
    print(f"codepoints: {s.count()}")
    print(f"bytes:      {s.byte_length()}")
    print(f"width:      {s.width()}")
    print(f"direction:  {s.direction().name}")
    return 0


def cmd_chars(args):
    for i, char in enumerate(UnicodeString(args.text)):
        print(f"{i:>4}  U+{to_code(char):04X}  {to_binary_code(char, 21)}  "
              f"w={char_width(char):>2}  {classify(char).name}  {char!r}")
    return 0


def cmd_ascii(args):
    print(UnicodeString(args.text).to_ascii(best_effort=args.best_effort or None))
    return 0


def cmd_split(args):
    flags = 0 if args.keep_empty else SplitFlag.WITHOUT_EMPTY
    for piece in UnicodeString(args.text).split(args.pattern, args.limit, flags):
        print(piece)
    return 0


def cmd_pad(args):
    side = Side.BEGINNING if args.start else Side.END
    print(UnicodeString(args.text).pad(args.length, args.piece, side))
    return 0


def main(argv=None):
    p = argparse.ArgumentParser(prog="unistring", description="Inspect UTF-8 strings by codepoint")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)
    info_p = sub.add_parser("info", help="Codepoints, bytes, width and direction")
    info_p.add_argument("text")
    info_p.set_defaults(func=cmd_info)
    chars_p = sub.add_parser("chars", help="One line per character")
    chars_p.add_argument("text")
    chars_p.set_defaults(func=cmd_chars)
    ascii_p = sub.add_parser("ascii", help="Transliterate to ASCII")
    ascii_p.add_argument("text")
    ascii_p.add_argument("--best-effort", action="store_true")
    ascii_p.set_defaults(func=cmd_ascii)
    split_p = sub.add_parser("split", help="Split on a delimited pattern, e.g. '/\\s+/'")
    split_p.add_argument("pattern")
    split_p.add_argument("text")
    split_p.add_argument("--limit", type=int, default=-1)
    split_p.add_argument("--keep-empty", action="store_true")
    split_p.set_defaults(func=cmd_split)
    pad_p = sub.add_parser("pad", help="Pad to a codepoint length")
    pad_p.add_argument("text")
    pad_p.add_argument("length", type=int)
    pad_p.add_argument("piece")
    pad_p.add_argument("--start", action="store_true", help="Pad at the beginning")
    pad_p.set_defaults(func=cmd_pad)

    args = p.parse_args(argv)
    cfg = load_config()
    level = "DEBUG" if args.verbose else cfg.get("log_level", "WARNING")
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.WARNING), format="%(message)s")
    apply_collation_locale(cfg.get("collation", {}).get("locale"))
    try:
        return args.func(args) or 0
    except UnicodeStringError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
