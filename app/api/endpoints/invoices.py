"""Dashboard invoice endpoints - form posts and the cached listing"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.actions import invoices as invoice_actions
from app.api import deps
from app.config import settings
from app.core.cache import view_cache
from app.schemas.auth import SessionUser
from app.schemas.invoice import CustomerField, InvoiceEditForm, InvoicePage
from app.schemas.state import State
from app.services.invoice_service import InvoiceService

router = APIRouter()


@router.get("/invoices", response_model=InvoicePage)
async def list_invoices(
    query: str = Query("", description="Filter by customer, amount, date or status"),
    page: int = Query(1, ge=1),
    current_user: SessionUser = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Invoice listing. Cached per query/page until an invoice is written."""
    variant = f"{query}|{page}"
    cached = view_cache.get(settings.INVOICES_PATH, variant)
    if cached is not None:
        return cached

    generation = view_cache.generation(settings.INVOICES_PATH)
    listing = InvoicePage(
        **await InvoiceService.list_invoices(
            db, query=query, page=page, per_page=settings.INVOICES_PER_PAGE
        )
    )
    view_cache.set(settings.INVOICES_PATH, listing, variant, generation=generation)
    return listing


@router.post("/invoices/create", response_model=State)
async def create_invoice(
    request: Request,
    current_user: SessionUser = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Create form. Redirects to the listing on success."""
    form = await request.form()
    return await invoice_actions.create_invoice(db, None, form)


@router.get("/invoices/{invoice_id}", response_model=InvoiceEditForm)
async def get_invoice(
    invoice_id: UUID,
    current_user: SessionUser = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Invoice values for the edit form, amount in dollars."""
    invoice = await InvoiceService.get_invoice_by_id(db, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return InvoiceEditForm(
        id=invoice.id,
        customer_id=invoice.customer_id,
        amount=invoice.amount / 100,
        status=invoice.status,
    )


@router.post("/invoices/{invoice_id}/edit", response_model=State)
async def update_invoice(
    invoice_id: str,
    request: Request,
    current_user: SessionUser = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Edit form. The path id is bound into the submitted fields."""
    form = dict(await request.form())
    form["id"] = invoice_id
    return await invoice_actions.update_invoice(db, None, form)


@router.post("/invoices/{invoice_id}/delete")
async def delete_invoice(
    invoice_id: str,
    current_user: SessionUser = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    await invoice_actions.delete_invoice(db, invoice_id)
    return RedirectResponse(settings.INVOICES_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/customers", response_model=list[CustomerField])
async def list_customers(
    current_user: SessionUser = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Customer options for the invoice form's select."""
    return await InvoiceService.list_customers(db)
