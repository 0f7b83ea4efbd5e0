import pytest

from validation.rules import is_in_collection, is_not_null


@pytest.mark.parametrize(("value", "expected"), [("SQL", True), (0, True), ("", True), ([], True), (None, False)])
def test_is_not_null(value, expected):
    assert is_not_null(value) is expected


def test_is_in_collection():
    assert is_in_collection("SQL", ["SQL", "MongoDB", "Paper"])
    assert not is_in_collection(42, [32, 44, 55])


def test_is_in_collection_supports_unhashable_items():
    assert is_in_collection([1], [[0], [1]])


def test_is_in_collection_empty():
    assert not is_in_collection("x", [])


def test_is_in_collection_consumes_iterators():
    assert is_in_collection(3, iter(range(5)))
