"""UTF-8 codec working directly on bytes. Codepoints are plain ints in [0, 0x10FFFF]."""
from typing import Iterator

from src.unistring.exceptions import InvalidEncoding

MAX_CODEPOINT = 0x10FFFF
SURROGATE_START = 0xD800
SURROGATE_END = 0xDFFF

# (mask, value, length, payload mask) for leading bytes 110xxxxx, 1110xxxx, 11110xxx
_LEADING = (
    (0xE0, 0xC0, 2, 0x1F),
    (0xF0, 0xE0, 3, 0x0F),
    (0xF8, 0xF0, 4, 0x07),
)
# Smallest codepoint each sequence length may carry; anything lower is overlong.
_MIN_FOR_LENGTH = {1: 0x00, 2: 0x80, 3: 0x800, 4: 0x10000}


def decode(data: bytes, position: int = 0) -> tuple[int, int]:
    """Decode the codepoint starting at `position`. Returns (codepoint, byte length)."""
    if position < 0 or position >= len(data):
        raise InvalidEncoding(f"position {position} outside buffer of {len(data)} bytes")
    lead = data[position]
    if lead < 0x80:
        return lead, 1
    for mask, value, length, payload in _LEADING:
        if lead & mask == value:
            break
    else:
        raise InvalidEncoding(f"invalid leading byte 0x{lead:02x} at {position}")
    if position + length > len(data):
        raise InvalidEncoding(f"truncated {length}-byte sequence at {position}")
    code = lead & payload
    for i in range(position + 1, position + length):
        byte = data[i]
        if byte & 0xC0 != 0x80:
            raise InvalidEncoding(f"invalid continuation byte 0x{byte:02x} at {i}")
        code = (code << 6) | (byte & ~0x80)
    return code, length


def encode(codepoint: int) -> bytes:
    """Pack a codepoint into its minimal UTF-8 form."""
    if codepoint < 0 or codepoint > MAX_CODEPOINT:
        raise InvalidEncoding(f"codepoint {codepoint:#x} out of range")
    if SURROGATE_START <= codepoint <= SURROGATE_END:
        raise InvalidEncoding(f"surrogate {codepoint:#x} has no UTF-8 form")
    if codepoint < 0x80:
        return bytes((codepoint,))
    if codepoint < 0x800:
        return bytes((0xC0 | (codepoint >> 6), 0x80 | (codepoint & 0x3F)))
    if codepoint < 0x10000:
        return bytes((
            0xE0 | (codepoint >> 12),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        ))
    return bytes((
        0xF0 | (codepoint >> 18),
        0x80 | ((codepoint >> 12) & 0x3F),
        0x80 | ((codepoint >> 6) & 0x3F),
        0x80 | (codepoint & 0x3F),
    ))


def to_binary(data: bytes) -> str:
    """Concatenated 8-bit binary of each byte, MSB first. Debugging aid."""
    return "".join(f"{byte:08b}" for byte in data)


def iter_codepoints(data: bytes) -> Iterator[tuple[int, int, int]]:
    """Yield (codepoint, byte position, byte length) for every codepoint in data."""
    position = 0
    while position < len(data):
        code, length = decode(data, position)
        yield code, position, length
        position += length


def validate_utf8(data: bytes) -> bool:
    """True iff data is well-formed UTF-8: no bad sequences, overlongs or surrogates."""
    try:
        for code, _, length in iter_codepoints(data):
            if code < _MIN_FOR_LENGTH[length]:
                return False
            if SURROGATE_START <= code <= SURROGATE_END or code > MAX_CODEPOINT:
                return False
    except InvalidEncoding:
        return False
    return True


def byte_offset(text: str, codepoints: int) -> int:
    """Byte length of the first `codepoints` characters of text once re-encoded."""
    return len(text[:codepoints].encode("utf-8"))


def to_code(char) -> int:
    """Codepoint of the first character of a str or UTF-8 bytes."""
    data = char.encode("utf-8") if isinstance(char, str) else bytes(char)
    if not data:
        raise InvalidEncoding("empty character")
    return decode(data, 0)[0]


def from_code(codepoint: int) -> str:
    return encode(codepoint).decode("utf-8")


def to_binary_code(char, length: int = 32) -> str:
    """Binary form of the character's codepoint, zero-padded to `length` digits."""
    return format(to_code(char), f"0{int(length)}b")


def transcode(data: bytes, from_encoding: str, to_encoding: str = "utf-8") -> bytes:
    """Re-encode bytes from one charset to another."""
    try:
        return data.decode(from_encoding).encode(to_encoding)
    except (UnicodeDecodeError, UnicodeEncodeError) as e:
        raise InvalidEncoding(f"cannot transcode {from_encoding} -> {to_encoding}: {e}") from e
