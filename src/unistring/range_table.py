"""Binary search over sorted, disjoint, inclusive codepoint ranges."""
from typing import Sequence

Range = tuple[int, int]


def contains(table: Sequence[Range], codepoint: int) -> bool:
    """Check if codepoint falls in any (low, high) range. Table must be sorted and non-overlapping."""
    if not table or codepoint < table[0][0] or codepoint > table[-1][1]:
        return False
    lo, hi = 0, len(table) - 1
    while lo <= hi:
        mid = (lo + hi) // 2
        if codepoint > table[mid][1]:
            lo = mid + 1
        elif codepoint < table[mid][0]:
            hi = mid - 1
        else:
            return True
    return False
