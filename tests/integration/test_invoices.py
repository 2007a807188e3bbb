"""Integration tests: dashboard invoice endpoints over HTTP with a mocked session."""

import asyncio

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from app.models.invoice import Customer, Invoice

INVOICE_ID = "2b6c1c2e-8d55-4f1c-9a3a-2a7a8c9f0d11"


def _page(rows=None):
    return {"invoices": rows or [], "page": 1, "total_pages": 0}


@pytest.mark.asyncio
async def test_dashboard_requires_session(async_client: AsyncClient):
    resp = await async_client.get("/dashboard/invoices")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_invoice_redirects_to_listing(
    async_client: AsyncClient, session_cookie: dict, customer_id: str, db
):
    resp = await async_client.post(
        "/dashboard/invoices/create",
        data={"customerId": customer_id, "amount": "15.50", "status": "paid"},
        cookies=session_cookie,
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/dashboard/invoices"
    assert db.execute.call_count == 1


@pytest.mark.asyncio
async def test_create_invoice_validation_state(
    async_client: AsyncClient, session_cookie: dict, db
):
    resp = await async_client.post(
        "/dashboard/invoices/create",
        data={"customerId": "", "amount": "15.50", "status": "paid"},
        cookies=session_cookie,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Missing Fields. Failed to Create Invoice."
    assert body["errors"]["customerId"] == ["Please select a customer."]
    assert not db.execute.called


@pytest.mark.asyncio
async def test_listing_cached_until_invoice_written(
    async_client: AsyncClient, session_cookie: dict, customer_id: str
):
    with patch(
        "app.api.endpoints.invoices.InvoiceService.list_invoices", new_callable=AsyncMock
    ) as mock_list:
        mock_list.return_value = _page()

        first = await async_client.get("/dashboard/invoices", cookies=session_cookie)
        second = await async_client.get("/dashboard/invoices", cookies=session_cookie)
        assert first.status_code == second.status_code == 200
        assert mock_list.await_count == 1

        await async_client.post(
            "/dashboard/invoices/create",
            data={"customerId": customer_id, "amount": "3", "status": "pending"},
            cookies=session_cookie,
        )
        await async_client.get("/dashboard/invoices", cookies=session_cookie)
        assert mock_list.await_count == 2


@pytest.mark.asyncio
async def test_listing_rows(async_client: AsyncClient, session_cookie: dict):
    row = {
        "id": uuid4(),
        "customer_id": uuid4(),
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": None,
        "date": date(2024, 6, 5),
        "amount": "$15.50",
        "status": "paid",
    }
    with patch(
        "app.api.endpoints.invoices.InvoiceService.list_invoices", new_callable=AsyncMock
    ) as mock_list:
        mock_list.return_value = {"invoices": [row], "page": 2, "total_pages": 3}
        resp = await async_client.get(
            "/dashboard/invoices", params={"query": "lee", "page": 2}, cookies=session_cookie
        )

    assert resp.status_code == 200
    body = resp.json()
    assert body["page"] == 2
    assert body["total_pages"] == 3
    assert body["invoices"][0]["amount"] == "$15.50"
    assert body["invoices"][0]["date"] == "2024-06-05"
    assert mock_list.call_args.kwargs["query"] == "lee"


@pytest.mark.asyncio
async def test_update_invoice_binds_path_id(
    async_client: AsyncClient, session_cookie: dict, customer_id: str
):
    with patch(
        "app.actions.invoices.InvoiceService.update_invoice", new_callable=AsyncMock
    ) as mock_update:
        resp = await async_client.post(
            f"/dashboard/invoices/{INVOICE_ID}/edit",
            data={"customerId": customer_id, "amount": "20", "status": "pending"},
            cookies=session_cookie,
        )

    assert resp.status_code == 303
    assert mock_update.call_args.kwargs["invoice_id"] == INVOICE_ID
    assert mock_update.call_args.kwargs["amount_in_cents"] == 2000


@pytest.mark.asyncio
async def test_update_invoice_database_error_state(
    async_client: AsyncClient, session_cookie: dict, customer_id: str, db
):
    db.execute.side_effect = SQLAlchemyError("timeout")
    resp = await async_client.post(
        f"/dashboard/invoices/{INVOICE_ID}/edit",
        data={"customerId": customer_id, "amount": "20", "status": "pending"},
        cookies=session_cookie,
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "errors": {"general": ["An error occurred"]},
        "message": "Database Error: Failed to Update Invoice.",
    }


@pytest.mark.asyncio
async def test_delete_invoice_redirects(async_client: AsyncClient, session_cookie: dict, db):
    resp = await async_client.post(
        f"/dashboard/invoices/{INVOICE_ID}/delete", cookies=session_cookie
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/dashboard/invoices"
    assert db.execute.call_count == 1


@pytest.mark.asyncio
async def test_delete_invoice_database_error(
    async_client: AsyncClient, session_cookie: dict, db
):
    db.execute.side_effect = SQLAlchemyError("connection closed")
    resp = await async_client.post(
        f"/dashboard/invoices/{INVOICE_ID}/delete", cookies=session_cookie
    )
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Database Error: Failed to Delete Invoice."}


@pytest.mark.asyncio
async def test_get_invoice_for_edit(async_client: AsyncClient, session_cookie: dict, db):
    invoice = Invoice(
        id=uuid4(), customer_id=uuid4(), amount=1550, status="paid", date=date(2024, 6, 5)
    )
    result = MagicMock()
    result.scalar_one_or_none.return_value = invoice
    db.execute.return_value = result

    resp = await async_client.get(f"/dashboard/invoices/{invoice.id}", cookies=session_cookie)

    assert resp.status_code == 200
    body = resp.json()
    assert body["amount"] == 15.5
    assert body["customerId"] == str(invoice.customer_id)
    assert body["status"] == "paid"


@pytest.mark.asyncio
async def test_get_invoice_not_found(async_client: AsyncClient, session_cookie: dict):
    resp = await async_client.get(f"/dashboard/invoices/{uuid4()}", cookies=session_cookie)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_customers(async_client: AsyncClient, session_cookie: dict):
    customers = [Customer(id=uuid4(), name="Amy Burns", email="amy@burns.com")]
    with patch(
        "app.api.endpoints.invoices.InvoiceService.list_customers", new_callable=AsyncMock
    ) as mock_list:
        mock_list.return_value = customers
        resp = await async_client.get("/dashboard/customers", cookies=session_cookie)

    assert resp.status_code == 200
    assert resp.json() == [{"id": str(customers[0].id), "name": "Amy Burns"}]


@pytest.mark.asyncio
async def test_listing_read_during_write_is_not_cached(
    async_client: AsyncClient, session_cookie: dict, customer_id: str
):
    started = asyncio.Event()
    release = asyncio.Event()
    calls = []

    async def _list_invoices(db, **kwargs):
        calls.append(kwargs)
        if len(calls) == 1:
            started.set()
            await release.wait()
            return _page()
        return {"invoices": [], "page": 1, "total_pages": 1}

    with patch(
        "app.api.endpoints.invoices.InvoiceService.list_invoices",
        new_callable=AsyncMock,
        side_effect=_list_invoices,
    ):
        in_flight = asyncio.create_task(
            async_client.get("/dashboard/invoices", cookies=session_cookie)
        )
        await started.wait()

        created = await async_client.post(
            "/dashboard/invoices/create",
            data={"customerId": customer_id, "amount": "3", "status": "pending"},
            cookies=session_cookie,
        )
        assert created.status_code == 303

        release.set()
        before_write = await in_flight
        after_write = await async_client.get("/dashboard/invoices", cookies=session_cookie)

    assert before_write.json()["total_pages"] == 0
    assert after_write.json()["total_pages"] == 1
    assert len(calls) == 2
