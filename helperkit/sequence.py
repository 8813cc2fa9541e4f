"""
Sequence helpers: index removal and linear search
"""
from collections.abc import Mapping, Sequence
from typing import Any, Tuple

from .errors import IndexOutOfRange, NotASequence


def _check_sequence(value, param: str):
    # str is a Sequence to Python but not an element list, bytes hold ints
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise NotASequence(value, param)


def remove_at(data: Sequence, index: int) -> Sequence:
    """Return a copy of data without the element at index.

    Args:
        data: list, tuple, bytes, bytearray or any other non-str sequence
        index: position to drop, 0 <= index < len(data)

    Returns:
        A new sequence of the same kind for lists, tuples, bytes and bytearrays,
        a list otherwise.
        The input is left untouched.
    """
    _check_sequence(data, "data")

    length = len(data)
    if index < 0 or index >= length:
        raise IndexOutOfRange(index, length)

    if isinstance(data, (list, tuple, bytes, bytearray)):
        return data[:index] + data[index + 1:]

    return [item for i, item in enumerate(data) if i != index]


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality that also requires matching types at every level."""
    if type(a) is not type(b):
        return False

    if isinstance(a, Mapping):
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b or not deep_equal(value, b[key]):
                return False
        return True

    if isinstance(a, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    return a == b


def index_of(needle: Any, haystack: Sequence) -> Tuple[bool, int]:
    """Find the first element of haystack deep-equal to needle.

    Returns (True, index) on a match and (False, -1) otherwise.
    """
    _check_sequence(haystack, "haystack")

    for i, item in enumerate(haystack):
        if deep_equal(item, needle):
            return True, i

    return False, -1
