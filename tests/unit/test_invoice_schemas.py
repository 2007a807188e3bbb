"""Unit tests for invoice form schemas."""

import pytest

from app.models.enums import InvoiceStatus
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceForm,
    InvoiceUpdate,
    safe_parse,
    to_cents,
)


def _fields(**overrides):
    data = {"customerId": "c1", "amount": "15.50", "status": "paid"}
    data.update(overrides)
    return data


def test_invoice_create_valid():
    data, errors = safe_parse(InvoiceCreate, _fields())
    assert errors is None
    assert data.customer_id == "c1"
    assert data.amount == 15.5
    assert data.status == InvoiceStatus.PAID


def test_update_schema_has_same_rules():
    data, errors = safe_parse(InvoiceUpdate, _fields(status="pending"))
    assert errors is None
    assert data.status == InvoiceStatus.PENDING
    assert set(InvoiceUpdate.model_fields) == set(InvoiceCreate.model_fields)


def test_create_and_update_omit_server_fields():
    for schema in (InvoiceCreate, InvoiceUpdate):
        assert "id" not in schema.model_fields
        assert "date" not in schema.model_fields
    assert {"id", "date"} <= set(InvoiceForm.model_fields)


@pytest.mark.parametrize("customer_id", ["", None])
def test_customer_required(customer_id):
    data, errors = safe_parse(InvoiceCreate, _fields(customerId=customer_id))
    assert data is None
    assert errors["customerId"] == ["Please select a customer."]


@pytest.mark.parametrize("amount", ["0", "0.001", "-5", "", "abc", None, "inf"])
def test_amount_too_small_or_not_a_number(amount):
    data, errors = safe_parse(InvoiceCreate, _fields(amount=amount))
    assert data is None
    assert errors["amount"] == ["Amount must be greater than 0."]


def test_amount_minimum_accepted():
    data, errors = safe_parse(InvoiceCreate, _fields(amount="0.01"))
    assert errors is None
    assert data.amount == 0.01


@pytest.mark.parametrize("status", ["overdue", "PAID", "", None])
def test_invalid_status(status):
    data, errors = safe_parse(InvoiceCreate, _fields(status=status))
    assert data is None
    assert errors["status"] == ["Please select an invoice status."]


def test_all_field_errors_reported_together():
    _, errors = safe_parse(InvoiceCreate, {})
    assert set(errors) == {"customerId", "amount", "status"}


def test_full_schema_date_format():
    good, errors = safe_parse(InvoiceForm, _fields(id="inv-1", date="2024-06-05"))
    assert errors is None
    assert good.date == "2024-06-05"

    for bad_date in ("2024-6-5", "05-06-2024", "2024/06/05", "yesterday"):
        _, errors = safe_parse(InvoiceForm, _fields(id="inv-1", date=bad_date))
        assert errors["date"] == ["Invalid date format."]


def test_full_schema_requires_id():
    _, errors = safe_parse(InvoiceForm, _fields(id="", date="2024-06-05"))
    assert errors["id"] == ["Invalid invoice ID."]


@pytest.mark.parametrize(
    "amount,cents",
    [
        (15.5, 1550),
        (0.01, 1),
        (19.99, 1999),
        (0.29, 29),
        (1234.56, 123456),
        (0.125, 13),
        (0.025, 3),
    ],
)
def test_to_cents(amount, cents):
    assert to_cents(amount) == cents
