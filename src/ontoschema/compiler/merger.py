"""Interval narrowing for length, range and size constraints.

A constraint may only be narrowed from ancestor to descendant, never widened.
"""

from ..models import Interval


def normalize_interval(interval: Interval | tuple | list) -> Interval:
    """Return the interval with `lower <= upper`.

    When the bounds are reversed they are swapped together with their
    inclusivity flags.
    """
    lower, upper, lower_inclusive, upper_inclusive = interval
    if lower > upper:
        lower, upper = upper, lower
        lower_inclusive, upper_inclusive = upper_inclusive, lower_inclusive
    return Interval(lower, upper, bool(lower_inclusive), bool(upper_inclusive))


def combine_ranges(a: Interval | tuple | list, b: Interval | tuple | list | None = None) -> Interval:
    """Intersect two intervals.

    Args:
        a: Inherited (ancestor) interval
        b: Narrowing (descendant) interval, or None

    Returns:
        New interval: the tighter lower and upper bound of both. On tied
        bounds the inclusivity flags are ANDed. Disjoint inputs give an
        empty interval with lower > upper.
    """
    a = normalize_interval(a)
    if b is None:
        return a
    b = normalize_interval(b)

    if a.lower > b.lower:
        lower, lower_inclusive = a.lower, a.lower_inclusive
    elif b.lower > a.lower:
        lower, lower_inclusive = b.lower, b.lower_inclusive
    else:
        lower, lower_inclusive = a.lower, a.lower_inclusive and b.lower_inclusive

    if a.upper < b.upper:
        upper, upper_inclusive = a.upper, a.upper_inclusive
    elif b.upper < a.upper:
        upper, upper_inclusive = b.upper, b.upper_inclusive
    else:
        upper, upper_inclusive = a.upper, a.upper_inclusive and b.upper_inclusive

    return Interval(lower, upper, lower_inclusive, upper_inclusive)


def merge_interval(current: Interval | None, incoming: Interval | None) -> Interval | None:
    """Fold a node's interval into the accumulated one."""
    if incoming is None:
        return current
    if current is None:
        return normalize_interval(incoming)
    return combine_ranges(current, incoming)
