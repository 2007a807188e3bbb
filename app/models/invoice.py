"""Invoices and the customers they are billed to"""

from sqlalchemy import Column, String, Integer, Date, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel


class Customer(BaseModel):
    __tablename__ = "customers"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    image_url = Column(String(255), nullable=True)

    invoices = relationship("Invoice", back_populates="customer")

    def __repr__(self) -> str:
        return f"<Customer {self.name}>"


class Invoice(BaseModel):
    """
    A single invoice. Amount is stored in cents; status is a plain
    varchar holding one of InvoiceStatus.
    """
    __tablename__ = "invoices"

    customer_id = Column(
        UUID(as_uuid=True),
        ForeignKey("customers.id"),
        nullable=False,
        index=True
    )
    amount = Column(Integer, nullable=False)
    status = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)

    customer = relationship("Customer", back_populates="invoices")

    def __repr__(self) -> str:
        return f"<Invoice {self.id} ({self.status})>"
