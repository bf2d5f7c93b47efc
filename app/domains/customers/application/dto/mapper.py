"""
Customer DTO Mapper

Shapes Customer aggregates into transport DTOs.
"""

from app.domains.customers.application.dto import CustomerDTO, CustomerListDTO, CustomerPage
from app.domains.customers.domain.entities import Customer


class CustomerDTOMapper:
    """Converts aggregates into CustomerDTO instances."""

    def to_dto(self, customer: Customer) -> CustomerDTO:
        return CustomerDTO(
            id=customer.id.numeric_value if customer.id else None,
            name=customer.name,
            email=str(customer.email) if customer.email else None,
            horse_name=customer.horse_name,
            company=customer.company,
            address=customer.address,
            city=customer.city,
            state=customer.state,
            zipcode=customer.zipcode,
            country=customer.country,
            phone_no=customer.phone_no,
            cell_no=customer.cell_no,
            bank_account_number=customer.bank_account_number,
            fitter_id=customer.fitter_id,
            status=customer.status.value,
            deleted=customer.deleted,
            is_active=customer.is_active(),
            has_fitter=customer.has_fitter(),
            display_name=customer.display_name,
            display_info=customer.display_info,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )

    def to_dto_list(self, customers: list[Customer]) -> list[CustomerDTO]:
        return [self.to_dto(customer) for customer in customers]

    def to_list_dto(self, page: CustomerPage) -> CustomerListDTO:
        return CustomerListDTO(
            customers=self.to_dto_list(page.customers),
            total=page.total,
            page=page.page,
            limit=page.limit,
            pages=page.pages,
        )
