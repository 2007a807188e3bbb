"""Form actions: the operations a dashboard form submits to."""

from app.actions.auth import authenticate
from app.actions.invoices import create_invoice, delete_invoice, update_invoice

__all__ = ["authenticate", "create_invoice", "delete_invoice", "update_invoice"]
