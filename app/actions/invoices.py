"""Invoice form actions"""

from datetime import date
from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.cache import revalidate_path
from app.core.exceptions import InvoiceActionError
from app.core.logging import get_logger
from app.core.navigation import commit_and_redirect
from app.schemas.invoice import InvoiceCreate, InvoiceUpdate, safe_parse, to_cents
from app.schemas.state import State
from app.services.invoice_service import InvoiceService

logger = get_logger(__name__)

# A malformed uuid never reaches the database; treat it like the store rejecting it
_STORE_ERRORS = (SQLAlchemyError, ValueError)


def _invoice_fields(form_data: Mapping[str, Any]) -> dict:
    return {
        "customerId": form_data.get("customerId"),
        "amount": form_data.get("amount"),
        "status": form_data.get("status"),
    }


async def create_invoice(
    db: AsyncSession, prev_state: Optional[State], form_data: Mapping[str, Any]
) -> State:
    """
    Validate and insert a new invoice dated today.

    Returns a State describing the failure; on success redirects to the
    invoice listing and never returns.
    """
    logger.info("Processing create_invoice")

    data, errors = safe_parse(InvoiceCreate, _invoice_fields(form_data))
    if errors:
        logger.warning("Validation failed for create_invoice", extra={"errors": errors})
        return State(errors=errors, message="Missing Fields. Failed to Create Invoice.")

    amount_in_cents = to_cents(data.amount)
    invoice_date = date.today().isoformat()

    try:
        await InvoiceService.create_invoice(
            db,
            customer_id=data.customer_id,
            amount_in_cents=amount_in_cents,
            status=data.status,
            invoice_date=invoice_date,
        )
    except _STORE_ERRORS:
        logger.error("Database error: failed to create invoice", exc_info=True)
        return State(message="Database Error: Failed to Create Invoice.")

    logger.info("Invoice created", extra={"customer_id": data.customer_id})
    commit_and_redirect(settings.INVOICES_PATH)


async def update_invoice(
    db: AsyncSession, prev_state: Optional[State], form_data: Mapping[str, Any]
) -> State:
    """
    Validate and update an existing invoice by the form's `id`.

    An id matching no row still counts as success.
    """
    invoice_id = form_data.get("id")
    if not invoice_id:
        return State(message="Invoice ID is missing", errors={"general": ["Invalid request"]})

    data, errors = safe_parse(InvoiceUpdate, _invoice_fields(form_data))
    if errors:
        logger.warning("Validation failed for update_invoice", extra={"errors": errors})
        return State(errors=errors, message="Missing Fields. Failed to Update Invoice.")

    amount_in_cents = to_cents(data.amount)

    try:
        await InvoiceService.update_invoice(
            db,
            invoice_id=invoice_id,
            customer_id=data.customer_id,
            amount_in_cents=amount_in_cents,
            status=data.status,
        )
    except _STORE_ERRORS:
        logger.error(
            "Database error: failed to update invoice",
            extra={"invoice_id": invoice_id},
            exc_info=True,
        )
        return State(
            message="Database Error: Failed to Update Invoice.",
            errors={"general": ["An error occurred"]},
        )

    commit_and_redirect(settings.INVOICES_PATH)


async def delete_invoice(db: AsyncSession, invoice_id: str) -> None:
    """Delete an invoice. Raises InvoiceActionError if the store fails."""
    try:
        await InvoiceService.delete_invoice(db, invoice_id)
    except _STORE_ERRORS as exc:
        logger.error(
            f"Database error: failed to delete invoice {invoice_id}",
            extra={"invoice_id": invoice_id},
            exc_info=True,
        )
        raise InvoiceActionError("Database Error: Failed to Delete Invoice.") from exc

    revalidate_path(settings.INVOICES_PATH)
