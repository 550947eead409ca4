"""Offset arithmetic: negative offsets count from the end, large ones wrap around."""
from src.unistring.exceptions import EmptyString


def resolve(offset: int, length: int) -> int:
    """Map any integer offset into [0, length)."""
    if length <= 0:
        raise EmptyString("cannot resolve an offset in an empty string")
    if offset < 0:
        r = -offset % length
        return length - r if r != 0 else 0
    if offset >= length:
        return offset % length
    return offset
