"""
SurfSpots Backend — Pagination Helpers
========================================

What:  Clamp client-supplied limit/offset values into a safe range.
How:   A limit below the minimum falls back to the default page size rather
       than the minimum; a limit above the maximum is capped.
"""

MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 10

MIN_OFFSET = 0


def clamp_limit(
    limit: int,
    minimum: int = MIN_LIMIT,
    maximum: int = MAX_LIMIT,
    fallback: int = DEFAULT_LIMIT,
) -> int:
    if limit < minimum:
        return fallback
    if limit > maximum:
        return maximum
    return limit


def clamp_offset(offset: int, minimum: int = MIN_OFFSET) -> int:
    if offset < minimum:
        return minimum
    return offset
