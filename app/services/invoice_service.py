"""Invoice Service - SQL statements against the invoices table"""

import math
from datetime import date
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import String, cast, delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.invoice import Customer, Invoice
from app.models.enums import InvoiceStatus


def format_currency(cents: int) -> str:
    """Format an amount in cents as US dollars, e.g. 155000 -> "$1,550.00"."""
    return f"${cents / 100:,.2f}"


def _filter_clause(query: str):
    pattern = f"%{query}%"
    return or_(
        Customer.name.ilike(pattern),
        Customer.email.ilike(pattern),
        cast(Invoice.amount, String).ilike(pattern),
        cast(Invoice.date, String).ilike(pattern),
        Invoice.status.ilike(pattern),
    )


class InvoiceService:
    """Each write issues exactly one statement and commits it."""

    @staticmethod
    async def create_invoice(
        db: AsyncSession,
        customer_id: str,
        amount_in_cents: int,
        status: InvoiceStatus,
        invoice_date: str,
    ) -> None:
        await db.execute(
            insert(Invoice).values(
                customer_id=UUID(customer_id),
                amount=amount_in_cents,
                status=status.value,
                date=date.fromisoformat(invoice_date),
            )
        )
        await db.commit()

    @staticmethod
    async def update_invoice(
        db: AsyncSession,
        invoice_id: str,
        customer_id: str,
        amount_in_cents: int,
        status: InvoiceStatus,
    ) -> Sequence[Any]:
        """
        Update an invoice in place. The date is never touched.

        Returns:
            The updated rows; empty when no invoice has that id
        """
        result = await db.execute(
            update(Invoice)
            .where(Invoice.id == UUID(invoice_id))
            .values(
                customer_id=UUID(customer_id),
                amount=amount_in_cents,
                status=status.value,
            )
            .returning(Invoice.id, Invoice.customer_id, Invoice.amount, Invoice.status, Invoice.date)
        )
        rows = result.all()
        await db.commit()
        return rows

    @staticmethod
    async def delete_invoice(db: AsyncSession, invoice_id: str) -> None:
        await db.execute(delete(Invoice).where(Invoice.id == UUID(invoice_id)))
        await db.commit()

    @staticmethod
    async def get_invoice_by_id(db: AsyncSession, invoice_id: UUID) -> Optional[Invoice]:
        result = await db.execute(select(Invoice).where(Invoice.id == invoice_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_invoices(
        db: AsyncSession,
        query: str = "",
        page: int = 1,
        per_page: int = 6,
    ) -> Dict[str, Any]:
        """
        Invoices joined with their customer, newest first.

        Args:
            query: Case-insensitive match on customer name/email, amount, date or status
            page: 1-based page number
            per_page: Rows per page

        Returns:
            {"invoices": [...], "page": page, "total_pages": n}
        """
        stmt = (
            select(
                Invoice.id,
                Invoice.customer_id,
                Invoice.amount,
                Invoice.date,
                Invoice.status,
                Customer.name,
                Customer.email,
                Customer.image_url,
            )
            .join(Customer, Invoice.customer_id == Customer.id)
        )
        count_stmt = (
            select(func.count())
            .select_from(Invoice)
            .join(Customer, Invoice.customer_id == Customer.id)
        )
        if query:
            stmt = stmt.where(_filter_clause(query))
            count_stmt = count_stmt.where(_filter_clause(query))

        result = await db.execute(
            stmt.order_by(Invoice.date.desc())
            .limit(per_page)
            .offset((page - 1) * per_page)
        )
        total = await db.scalar(count_stmt)

        out = []
        for row in result.all():
            out.append({
                "id": row.id,
                "customer_id": row.customer_id,
                "name": row.name,
                "email": row.email,
                "image_url": row.image_url,
                "date": row.date,
                "amount": format_currency(row.amount),
                "status": row.status,
            })
        return {
            "invoices": out,
            "page": page,
            "total_pages": math.ceil((total or 0) / per_page),
        }

    @staticmethod
    async def list_customers(db: AsyncSession) -> List[Customer]:
        result = await db.execute(select(Customer).order_by(Customer.name))
        return list(result.scalars().all())
