"""Validation rule check procedures.

Each rule is a plain predicate; the derive registry maps rule names onto them.
"""
from .collection import is_in_collection
from .not_null import is_not_null

__all__ = ["is_in_collection", "is_not_null"]
