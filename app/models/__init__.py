"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel
from app.models.enums import InvoiceStatus
from app.models.invoice import Customer, Invoice
from app.models.user import User


__all__ = [
    "BaseModel",
    "InvoiceStatus",
    "Customer",
    "Invoice",
    "User",
]
