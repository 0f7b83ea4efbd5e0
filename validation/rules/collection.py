from typing import Iterable, TypeVar

T = TypeVar("T")


def is_in_collection(value: T, collection: Iterable[T]) -> bool:
    """Return whether the given value is part of a given collection.

    Membership is by equality, so unhashable items are supported.

    Example:
        >>> is_in_collection("SQL", ["SQL", "MongoDB", "Paper"])
        True
        >>> is_in_collection(42, [32, 44, 55])
        False
    """
    return any(item == value for item in collection)
