"""
Customers API Schemas

Pydantic schemas for API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class CustomerCreateRequest(BaseModel):
    """Customer creation schema."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    horse_name: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zipcode: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)
    phone_no: str | None = Field(default=None, max_length=50)
    cell_no: str | None = Field(default=None, max_length=50)
    bank_account_number: str | None = Field(default=None, max_length=100)
    fitter_id: int | None = Field(default=None, ge=0)


class CustomerUpdateRequest(BaseModel):
    """
    Partial customer update schema.

    Only fields present in the request body are applied; an explicit null
    clears the field (or removes the fitter).
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    horse_name: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zipcode: str | None = Field(default=None, max_length=20)
    country: str | None = Field(default=None, max_length=100)
    phone_no: str | None = Field(default=None, max_length=50)
    cell_no: str | None = Field(default=None, max_length=50)
    bank_account_number: str | None = Field(default=None, max_length=100)
    fitter_id: int | None = Field(default=None, ge=0)


class CustomerStatusRequest(BaseModel):
    """Status change schema."""

    status: str = Field(..., description="active or inactive")


class CustomerResponse(BaseModel):
    """Customer response schema."""

    id: int
    name: str
    email: str | None = None
    horse_name: str | None = None
    company: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None
    phone_no: str | None = None
    cell_no: str | None = None
    bank_account_number: str | None = None
    fitter_id: int | None = None
    status: str
    deleted: bool
    is_active: bool
    has_fitter: bool
    display_name: str
    display_info: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CustomerListResponse(BaseModel):
    """Paginated customer list schema."""

    customers: list[CustomerResponse]
    total: int
    page: int
    limit: int
    pages: int

    class Config:
        from_attributes = True


class CustomerCountResponse(BaseModel):
    """Count response schema."""

    count: int


class DataIntegrityResponse(BaseModel):
    """Integrity check response schema."""

    customer_id: int | str
    valid: bool
    issues: list[str] = Field(default_factory=list)

    class Config:
        from_attributes = True
