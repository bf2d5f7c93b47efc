"""Test utilities and helpers."""

from tests.utils.assertions import assert_single_event, assert_updated_after
from tests.utils.builders import CustomerBuilder

__all__ = [
    # Builders
    "CustomerBuilder",
    # Assertions
    "assert_single_event",
    "assert_updated_after",
]
