"""
Base Value Object Classes for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Self

from app.core.domain.exceptions import ValidationException

# Pragmatic syntactic check: one "@", no whitespace, a dotted domain.
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


@dataclass(frozen=True)
class Email(ValueObject):
    """
    Email address value object.

    Validates and normalizes email addresses. The stored form is stripped and
    lower-cased, so equality is case-insensitive.
    """

    address: str

    def _validate(self) -> None:
        if not isinstance(self.address, str):
            raise ValidationException(f"Invalid email address: {self.address!r}", field="email")
        normalized = self.address.strip().lower()
        if len(normalized) > 255 or not EMAIL_PATTERN.match(normalized):
            raise ValidationException(f"Invalid email address: {self.address}", field="email")
        object.__setattr__(self, "address", normalized)

    @classmethod
    def create(cls, address: str | None) -> "Email | None":
        """Build an Email from optional raw input; blank input yields None."""
        if address is None or not address.strip():
            return None
        return cls(address)

    def get_domain(self) -> str:
        """Get email domain."""
        return self.address.split("@")[1]

    def __str__(self) -> str:
        return self.address


class StatusEnum(str, Enum):
    """
    Base class for status enums.

    Provides common functionality for all status value objects.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValidationException(f"Invalid {cls.__name__}: {value}", field="status")
