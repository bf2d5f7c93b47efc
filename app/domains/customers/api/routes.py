"""
Customers API Routes

FastAPI router for customer endpoints. Domain exceptions raised by the
service are translated by app.api.exception_handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.config.settings import get_settings
from app.domains.customers.api.dependencies import get_customer_service
from app.domains.customers.api.schemas import (
    CustomerCountResponse,
    CustomerCreateRequest,
    CustomerListResponse,
    CustomerResponse,
    CustomerStatusRequest,
    CustomerUpdateRequest,
    DataIntegrityResponse,
)
from app.domains.customers.application.dto import CustomerFilters, CustomerSearchCriteria
from app.domains.customers.application.services import CustomerService
from app.domains.customers.domain.entities import UNSET, ContactInfoUpdate, CustomerDetails

settings = get_settings()

router = APIRouter(prefix="/customers", tags=["Customers"])

# Type alias for service dependency
CustomerServiceDep = Annotated[CustomerService, Depends(get_customer_service)]


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(request: CustomerCreateRequest, service: CustomerServiceDep):
    """Create a new customer."""
    customer = await service.create_customer(CustomerDetails(**request.model_dump()))
    return CustomerResponse.model_validate(customer)


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    service: CustomerServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.CUSTOMER_PAGE_SIZE_DEFAULT, ge=1, le=settings.CUSTOMER_PAGE_SIZE_MAX),
    search: str | None = Query(None, description="Digits also match the customer id"),
    id: int | None = Query(None, ge=1),
    fitter_id: int | None = Query(None, ge=1),
    name: str | None = None,
    email: str | None = None,
    country: str | None = None,
    city: str | None = None,
):
    """Paginated customer search."""
    result = await service.list_customers(
        CustomerSearchCriteria(
            page=page,
            limit=limit,
            search=search,
            id=id,
            fitter_id=fitter_id,
            name=name,
            email=email,
            country=country,
            city=city,
        )
    )
    return CustomerListResponse.model_validate(result)


@router.get("/all", response_model=list[CustomerResponse])
async def find_all_customers(
    service: CustomerServiceDep,
    fitter_id: int | None = Query(None, ge=1),
    country: str | None = None,
    city: str | None = None,
    is_active: bool | None = None,
):
    """Unpaginated listing with simple filters."""
    customers = await service.find_all(
        CustomerFilters(fitter_id=fitter_id, country=country, city=city, is_active=is_active)
    )
    return [CustomerResponse.model_validate(c) for c in customers]


@router.get("/without-fitter", response_model=list[CustomerResponse])
async def find_customers_without_fitter(service: CustomerServiceDep):
    """Customers that still need a fitter."""
    customers = await service.find_without_fitter()
    return [CustomerResponse.model_validate(c) for c in customers]


@router.get("/active", response_model=list[CustomerResponse])
async def find_active_customers(service: CustomerServiceDep):
    customers = await service.find_active()
    return [CustomerResponse.model_validate(c) for c in customers]


@router.get("/active/count", response_model=CustomerCountResponse)
async def count_active_customers(service: CustomerServiceDep):
    return CustomerCountResponse(count=await service.get_active_count())


@router.get("/fitter/{fitter_id}", response_model=list[CustomerResponse])
async def find_customers_by_fitter(service: CustomerServiceDep, fitter_id: int = Path(ge=1)):
    customers = await service.find_by_fitter(fitter_id)
    return [CustomerResponse.model_validate(c) for c in customers]


@router.get("/fitter/{fitter_id}/count", response_model=CustomerCountResponse)
async def count_customers_by_fitter(service: CustomerServiceDep, fitter_id: int = Path(ge=1)):
    return CustomerCountResponse(count=await service.get_customer_count_by_fitter(fitter_id))


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: str, service: CustomerServiceDep):
    """Get a customer by id."""
    customer = await service.get_customer(customer_id)
    return CustomerResponse.model_validate(customer)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(customer_id: str, request: CustomerUpdateRequest, service: CustomerServiceDep):
    """Partially update a customer; only fields present in the body change."""
    provided = request.model_dump(exclude_unset=True)
    fitter_id = provided.pop("fitter_id", UNSET)
    customer = await service.update_customer(
        customer_id,
        ContactInfoUpdate.from_mapping(provided),
        fitter_id=fitter_id,
    )
    return CustomerResponse.model_validate(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(customer_id: str, service: CustomerServiceDep):
    """Soft-delete a customer."""
    await service.remove_customer(customer_id)


@router.post("/{customer_id}/restore", response_model=CustomerResponse)
async def restore_customer(customer_id: str, service: CustomerServiceDep):
    customer = await service.restore_customer(customer_id)
    return CustomerResponse.model_validate(customer)


@router.post("/{customer_id}/status", response_model=CustomerResponse)
async def change_customer_status(customer_id: str, request: CustomerStatusRequest, service: CustomerServiceDep):
    customer = await service.change_status(customer_id, request.status)
    return CustomerResponse.model_validate(customer)


@router.post("/{customer_id}/assign-fitter/{fitter_id}", response_model=CustomerResponse)
async def assign_fitter(customer_id: str, fitter_id: int, service: CustomerServiceDep):
    customer = await service.assign_fitter(customer_id, fitter_id)
    return CustomerResponse.model_validate(customer)


@router.delete("/{customer_id}/fitter", response_model=CustomerResponse)
async def remove_fitter(customer_id: str, service: CustomerServiceDep):
    customer = await service.remove_fitter(customer_id)
    return CustomerResponse.model_validate(customer)


@router.get("/{customer_id}/integrity", response_model=DataIntegrityResponse)
async def validate_data_integrity(customer_id: str, service: CustomerServiceDep):
    report = await service.validate_data_integrity(customer_id)
    return DataIntegrityResponse.model_validate(report)


@router.get("/{customer_id}/order-eligibility", response_model=CustomerResponse)
async def validate_for_order(customer_id: str, service: CustomerServiceDep):
    """Check a customer can be used on a new order."""
    customer = await service.validate_for_order(customer_id)
    return CustomerResponse.model_validate(customer)
