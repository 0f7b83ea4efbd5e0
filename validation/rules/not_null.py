from typing import Any


def is_not_null(value: Any | None) -> bool:
    """Return whether the optional value holds something.

    Example:
        >>> is_not_null("SQL")
        True
        >>> is_not_null(None)
        False
        >>> is_not_null(0)
        True
    """
    return value is not None
