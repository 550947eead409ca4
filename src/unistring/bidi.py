"""First-strong-character direction. Only the script of the first character counts;
embeddings and the full Bidi Algorithm (UAX #9) are not handled."""
import enum

from src.unistring.codec import to_code
from src.unistring.range_table import contains

BOM = 0xFEFF
LRM = 0x200E
RLM = 0x200F
LRE = 0x202A
RLE = 0x202B
PDF = 0x202C
LRO = 0x202D
RLO = 0x202E


class Direction(enum.IntEnum):
    LTR = 0
    RTL = 1


# Union of every range below; anything outside is LTR.
RTL_ENVELOPE = (0x05BE, 0x10B7F)

# Hebrew, Arabic, Syriac, Thaana, NKo, Samaritan, Mandaic (bidi class R / AL).
RTL_LOW = (
    (0x05BE, 0x05BE), (0x05C0, 0x05C0), (0x05C3, 0x05C3), (0x05C6, 0x05C6),
    (0x05D0, 0x05EA), (0x05F0, 0x05F4), (0x0608, 0x0608), (0x060B, 0x060B),
    (0x060D, 0x060D), (0x061B, 0x061B), (0x061E, 0x064A), (0x066D, 0x066F),
    (0x0671, 0x06D5), (0x06E5, 0x06E6), (0x06EE, 0x06EF), (0x06FA, 0x070D),
    (0x0710, 0x0710), (0x0712, 0x072F), (0x074D, 0x07A5), (0x07B1, 0x07B1),
    (0x07C0, 0x07EA), (0x07F4, 0x07F5), (0x07FA, 0x07FA), (0x0800, 0x0815),
    (0x081A, 0x081A), (0x0824, 0x0824), (0x0828, 0x0828), (0x0830, 0x083E),
    (0x0840, 0x0858), (0x085E, 0x085E),
)
RTL_MARK = ((RLM, RLM),)
# Presentation forms, then Cypriot, Phoenician, Kharoshthi, Old South Arabian and others.
RTL_HIGH = (
    (0xFB1D, 0xFB1D), (0xFB1F, 0xFB28), (0xFB2A, 0xFB36), (0xFB38, 0xFB3C),
    (0xFB3E, 0xFB3E), (0xFB40, 0xFB41), (0xFB43, 0xFB44), (0xFB46, 0xFBC1),
    (0xFBD3, 0xFD3D), (0xFD50, 0xFD8F), (0xFD92, 0xFDC7), (0xFDF0, 0xFDFC),
    (0xFE70, 0xFE74), (0xFE76, 0xFEFC), (0x10800, 0x10805), (0x10808, 0x10808),
    (0x1080A, 0x10835), (0x10837, 0x10838), (0x1083C, 0x1083C), (0x1083F, 0x10855),
    (0x10857, 0x1085F), (0x10900, 0x1091B), (0x10920, 0x10939), (0x1093F, 0x1093F),
    (0x10A00, 0x10A00), (0x10A10, 0x10A13), (0x10A15, 0x10A17), (0x10A19, 0x10A33),
    (0x10A40, 0x10A47), (0x10A50, 0x10A58), (0x10A60, 0x10A7F), (0x10B00, 0x10B35),
    (0x10B40, 0x10B55), (0x10B58, 0x10B72), (0x10B78, 0x10B7F),
)


def classify_code(c: int) -> Direction:
    """Direction of a single codepoint."""
    if not RTL_ENVELOPE[0] <= c <= RTL_ENVELOPE[1]:
        return Direction.LTR
    if c <= 0x085E:
        table = RTL_LOW
    elif c == RLM:
        table = RTL_MARK
    elif c >= 0xFB1D:
        table = RTL_HIGH
    else:
        return Direction.LTR
    return Direction.RTL if contains(table, c) else Direction.LTR


def classify(char) -> Direction:
    """Direction of a character given as str or UTF-8 bytes."""
    return classify_code(to_code(char))


def string_direction(s) -> Direction:
    """Direction of the first character; the empty string is LTR."""
    if not s:
        return Direction.LTR
    return classify(s[:1] if isinstance(s, str) else bytes(s))
