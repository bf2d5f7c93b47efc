"""
Customer Mapper

Converts between the Customer aggregate and CustomerModel rows.
"""

from datetime import UTC, datetime

from app.core.domain import utcnow
from app.domains.customers.domain.entities import DESCRIPTIVE_FIELDS, Customer, CustomerDetails
from app.domains.customers.domain.value_objects import CustomerId, CustomerStatus
from app.domains.customers.infrastructure.persistence.sqlalchemy.models import CustomerModel


class CustomerMapper:
    """
    Bidirectional Customer <-> CustomerModel conversion.

    The aggregate keeps a single lifecycle status; the row keeps both the
    ``status`` string and the legacy ``deleted`` flag, written together here.
    """

    @staticmethod
    def to_model(customer: Customer) -> CustomerModel:
        """Build a new row from an aggregate. The id is copied only when numeric."""
        model = CustomerModel()
        numeric_id = customer.id.numeric_value if customer.id else None
        if numeric_id is not None:
            model.id = numeric_id
        model.created_at = customer.created_at
        CustomerMapper.update_model(model, customer)
        return model

    @staticmethod
    def update_model(model: CustomerModel, customer: Customer) -> None:
        """Merge the aggregate's state onto an existing row (created_at is left alone)."""
        model.name = customer.name
        model.email = str(customer.email) if customer.email else None
        for field_name in DESCRIPTIVE_FIELDS:
            setattr(model, field_name, getattr(customer, field_name))
        model.fitter_id = customer.fitter_id
        model.status = customer.status.value
        model.updated_at = customer.updated_at
        model.version = customer.version

        if customer.deleted:
            model.deleted = 1
            if model.deleted_at is None:
                model.deleted_at = customer.updated_at or utcnow()
        else:
            model.deleted = 0
            model.deleted_at = None

    @staticmethod
    def to_domain(model: CustomerModel) -> Customer:
        """Rebuild the aggregate from a row, preserving lifecycle and timestamps."""
        details = CustomerDetails(
            name=model.name or "",
            email=model.email,
            fitter_id=model.fitter_id or None,
            **{field_name: getattr(model, field_name) for field_name in DESCRIPTIVE_FIELDS},
        )
        customer_id = CustomerId.from_number(model.id) if model.id is not None else CustomerId.generate()
        return Customer.reconstitute(
            customer_id,
            details,
            status=CustomerMapper.status_of(model),
            created_at=_as_datetime(model.created_at),
            updated_at=_as_datetime(model.updated_at),
            version=model.version or 0,
        )

    @staticmethod
    def to_domain_list(models: list[CustomerModel]) -> list[Customer]:
        return [CustomerMapper.to_domain(model) for model in models]

    @staticmethod
    def status_of(model: CustomerModel) -> CustomerStatus:
        """Read the lifecycle state; any deletion marker wins over the status column."""
        if model.deleted or model.deleted_at is not None:
            return CustomerStatus.DELETED
        if not model.status:
            return CustomerStatus.ACTIVE
        return CustomerStatus.from_string(model.status)


def _as_datetime(value: datetime | None) -> datetime:
    """Stored timestamps are UTC; some drivers return them without tzinfo."""
    if value is None:
        return utcnow()
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
