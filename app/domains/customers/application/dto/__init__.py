"""
Customers Application DTOs

Data Transfer Objects and query objects for the Customers domain.
"""

from dataclasses import dataclass, field
from datetime import datetime
from math import ceil
from typing import TYPE_CHECKING

from app.core.domain import ValidationException

if TYPE_CHECKING:
    from app.domains.customers.domain.entities import Customer

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 1000


# ==================== Customer DTOs ====================


@dataclass
class CustomerDTO:
    """Customer data transfer object"""

    id: int | None
    name: str
    email: str | None
    horse_name: str | None
    company: str | None
    address: str | None
    city: str | None
    state: str | None
    zipcode: str | None
    country: str | None
    phone_no: str | None
    cell_no: str | None
    bank_account_number: str | None
    fitter_id: int | None
    status: str
    deleted: bool
    is_active: bool
    has_fitter: bool
    display_name: str
    display_info: str
    created_at: datetime
    updated_at: datetime


@dataclass
class DataIntegrityReport:
    """Outcome of a customer consistency check"""

    customer_id: int | str
    valid: bool
    issues: list[str] = field(default_factory=list)


# ==================== Query Objects ====================


@dataclass(frozen=True)
class CustomerFilters:
    """Simple listing filters; None means "no constraint"."""

    fitter_id: int | None = None
    country: str | None = None
    city: str | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class CustomerSearchCriteria:
    """Options for the paginated universal search."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    fitter_id: int | None = None
    name: str | None = None
    email: str | None = None
    country: str | None = None
    city: str | None = None
    search: str | None = None
    id: int | None = None

    def __post_init__(self):
        if self.page < 1:
            raise ValidationException("page must be >= 1", field="page")
        if self.limit < 1 or self.limit > MAX_PAGE_SIZE:
            raise ValidationException(f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class CustomerPage:
    """One window of search results plus the unwindowed total."""

    customers: list["Customer"]
    total: int
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def pages(self) -> int:
        return ceil(self.total / self.limit) if self.total else 0


@dataclass
class CustomerListDTO:
    """Paginated customer listing for transport"""

    customers: list[CustomerDTO]
    total: int
    page: int
    limit: int
    pages: int


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "CustomerDTO",
    "CustomerFilters",
    "CustomerListDTO",
    "CustomerPage",
    "CustomerSearchCriteria",
    "DataIntegrityReport",
]
