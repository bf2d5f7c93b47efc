"""
Customers SQLAlchemy Models

Database models for customers domain persistence.
"""

from sqlalchemy import Column, Index, Integer, String, Text, text

from app.domains.customers.domain.value_objects import CustomerStatus
from app.models.db.base import Base, SoftDeleteMixin, TimestampMixin, VersionMixin

# Name of the per-fitter email uniqueness index; matched when mapping IntegrityError
FITTER_EMAIL_UNIQUE_INDEX = "uq_customers_fitter_email"


class CustomerModel(Base, TimestampMixin, SoftDeleteMixin, VersionMixin):
    """SQLAlchemy model for Customer entity."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Identity and contact
    email = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False)
    horse_name = Column(String(255), nullable=True)
    company = Column(String(255), nullable=True)

    # Postal address
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    zipcode = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)

    # Phones and banking
    phone_no = Column(String(50), nullable=True)
    cell_no = Column(String(50), nullable=True)
    bank_account_number = Column(String(100), nullable=True)

    # Fitter reference by id (the fitters table lives in another bounded context)
    fitter_id = Column(Integer, nullable=True)

    status = Column(String(50), nullable=False, default=CustomerStatus.ACTIVE.value)

    __table_args__ = (
        Index("customer_name_index", "name"),
        Index("customer_email_index", "email"),
        Index("customer_fitter_index", "fitter_id"),
        Index(
            FITTER_EMAIL_UNIQUE_INDEX,
            "fitter_id",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<CustomerModel(id={self.id}, name='{self.name}', status='{self.status}')>"
