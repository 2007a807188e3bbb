"""Invoice form schemas and the shapes returned to the dashboard"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping, Any, Optional, Tuple, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.models.enums import InvoiceStatus

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

# Form field name -> message shown under that field
FIELD_MESSAGES: Dict[str, str] = {
    "id": "Invalid invoice ID.",
    "customerId": "Please select a customer.",
    "amount": "Amount must be greater than 0.",
    "status": "Please select an invoice status.",
    "date": "Invalid date format.",
}

FieldErrors = Dict[str, List[str]]
SchemaT = TypeVar("SchemaT", bound=BaseModel)


class InvoiceBase(BaseModel):
    customer_id: str = Field(..., alias="customerId", min_length=1)
    amount: float = Field(..., ge=0.01, allow_inf_nan=False)
    status: InvoiceStatus

    model_config = ConfigDict(populate_by_name=True)


class InvoiceForm(InvoiceBase):
    """Every invoice field, including the server-assigned id and date."""
    id: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN)


class InvoiceCreate(InvoiceBase):
    pass


class InvoiceUpdate(InvoiceBase):
    pass


def flatten_errors(exc: ValidationError) -> FieldErrors:
    """Collapse a ValidationError into form field -> list of messages."""
    errors: FieldErrors = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "general"
        message = FIELD_MESSAGES.get(field, error["msg"])
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def safe_parse(
    schema: Type[SchemaT], data: Mapping[str, Any]
) -> Tuple[Optional[SchemaT], Optional[FieldErrors]]:
    """
    Validate raw form values without raising.

    Returns:
        (model, None) on success, (None, field errors) on failure
    """
    try:
        return schema.model_validate(dict(data)), None
    except ValidationError as exc:
        return None, flatten_errors(exc)


def to_cents(amount: float) -> int:
    """Major currency units to an integer count of cents, half-cents rounded up"""
    cents = Decimal(str(amount)).scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


class CustomerField(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class InvoiceTableRow(BaseModel):
    """One row of the invoices listing, joined with its customer."""
    id: UUID
    customer_id: UUID
    name: str
    email: str
    image_url: Optional[str] = None
    date: date
    amount: str
    status: InvoiceStatus


class InvoiceEditForm(BaseModel):
    id: UUID
    customer_id: UUID = Field(..., alias="customerId")
    amount: float
    status: InvoiceStatus

    model_config = ConfigDict(populate_by_name=True)


class InvoicePage(BaseModel):
    invoices: List[InvoiceTableRow]
    page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
