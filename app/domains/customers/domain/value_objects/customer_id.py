"""
Customer Identity Value Object

A customer is identified by the integer key the store assigns. Before the
first save an aggregate carries a temporary UUID string instead.
"""

from dataclasses import dataclass
from uuid import uuid4

from app.core.domain import ValidationException, ValueObject


@dataclass(frozen=True)
class CustomerId(ValueObject):
    """
    Customer identifier.

    Example:
        ```python
        draft = CustomerId.generate()          # numeric_value is None
        stored = CustomerId.from_number(42)    # numeric_value == 42
        parsed = CustomerId.from_string("42")  # equal to stored
        ```
    """

    value: int | str

    def _validate(self) -> None:
        if isinstance(self.value, bool):
            raise ValidationException("Customer id must be an integer or string", field="id")
        if isinstance(self.value, int):
            if self.value <= 0:
                raise ValidationException(f"Customer id must be positive, got {self.value}", field="id")
        elif isinstance(self.value, str):
            if not self.value.strip():
                raise ValidationException("Customer id cannot be empty", field="id")
        else:
            raise ValidationException("Customer id must be an integer or string", field="id")

    @classmethod
    def generate(cls) -> "CustomerId":
        """Identity for a new aggregate that has not been persisted yet."""
        return cls(str(uuid4()))

    @classmethod
    def from_number(cls, value: int) -> "CustomerId":
        """Rehydrate from a store-assigned key."""
        return cls(value)

    @classmethod
    def from_string(cls, value: str) -> "CustomerId":
        """Parse a transport-level identifier; digit strings become numeric."""
        text = value.strip()
        if text.isascii() and text.isdigit():
            return cls(int(text))
        return cls(text)

    @classmethod
    def parse(cls, value: "int | str | CustomerId") -> "CustomerId":
        """Accept whatever form an identifier arrives in."""
        if isinstance(value, CustomerId):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        return cls.from_number(value)

    @property
    def numeric_value(self) -> int | None:
        """Store key, or None for an identity generated before persistence."""
        return self.value if isinstance(self.value, int) else None

    def is_persisted(self) -> bool:
        return self.numeric_value is not None

    def __str__(self) -> str:
        return str(self.value)
