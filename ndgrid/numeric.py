"""Scalar helpers shared by the iterator, storage and pixel types."""


def clamp(value, low, high):
    """
    Saturate value to the inclusive range [low, high].

    Args:
        value: Value to clamp
        low: Lower bound (infimum)
        high: Upper bound (supremum)

    Returns:
        low if value < low, high if value > high, otherwise value
    """
    return min(high, max(low, value))


def wrap(low: int, high: int, value: int) -> int:
    """
    Wrap an index periodically into the inclusive range [low, high].

    With low=1, high=5: value=0 wraps to 5 and value=6 wraps to 1.
    """
    length = high - low + 1
    shifted = value - low
    if shifted < 0:
        return high - ((-shifted - 1) % length)
    return low + (shifted % length)
