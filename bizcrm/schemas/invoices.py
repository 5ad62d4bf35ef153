"""Invoice request/response schemas for API contracts."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from bizcrm.core.enums import DiscountType, InvoiceStatus, PaymentMethod
from bizcrm.invoicing import DiscountSpec, LineItem, TaxSpec

# Form inputs arrive as whatever the browser sent; the engine coerces them.
FormNumber = int | float | str | None


class LineItemPayload(BaseModel):
    description: str = Field(default="", max_length=500)
    quantity: FormNumber = 1
    rate: FormNumber = 0

    def to_line_item(self) -> LineItem:
        return LineItem.build(self.description, self.quantity, self.rate)


class DiscountPayload(BaseModel):
    type: DiscountType = DiscountType.PERCENTAGE
    value: FormNumber = 0

    def to_spec(self) -> DiscountSpec:
        return DiscountSpec(type=self.type.value, value=self.value)


class TaxPayload(BaseModel):
    percentage: FormNumber = 18

    def to_spec(self) -> TaxSpec:
        return TaxSpec(percentage=self.percentage)


class InvoicePreviewRequest(BaseModel):
    items: list[LineItemPayload] = Field(default_factory=list)
    discount: DiscountPayload = Field(default_factory=DiscountPayload)
    tax: TaxPayload | None = None


class InvoiceTotalsResponse(BaseModel):
    subtotal: int
    discount_amount: int
    taxable_amount: int
    tax_amount: int
    total: int


class InvoiceCreateRequest(BaseModel):
    client_name: str = Field(min_length=1, max_length=255)
    client_email: str | None = Field(default=None, max_length=320)
    client_phone: str | None = Field(default=None, max_length=40)
    client_address: str | None = Field(default=None, max_length=2000)
    lead_id: int | None = Field(default=None, ge=1)
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: date | None = None
    notes: str | None = Field(default=None, max_length=10000)
    items: list[LineItemPayload] = Field(default_factory=list)
    discount: DiscountPayload = Field(default_factory=DiscountPayload)
    tax: TaxPayload | None = None


class InvoiceUpdateRequest(BaseModel):
    client_name: str | None = Field(default=None, min_length=1, max_length=255)
    client_email: str | None = Field(default=None, max_length=320)
    client_phone: str | None = Field(default=None, max_length=40)
    client_address: str | None = Field(default=None, max_length=2000)
    status: InvoiceStatus | None = None
    due_date: date | None = None
    notes: str | None = Field(default=None, max_length=10000)
    items: list[LineItemPayload] | None = None
    discount: DiscountPayload | None = None
    tax: TaxPayload | None = None


class InvoiceItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    quantity: int
    rate: int
    amount: int


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str | None = None
    lead_id: int | None = None
    client_name: str
    client_email: str | None = None
    client_phone: str | None = None
    client_address: str | None = None
    status: str
    discount_type: str
    discount_value: int
    tax_percentage: int
    subtotal: int
    total: int
    amount_paid: int
    due_date: date | None = None
    notes: str | None = None
    items: list[InvoiceItemResponse] = Field(default_factory=list)
    created_at: datetime | None = None


class InvoiceSummaryResponse(BaseModel):
    total_revenue: int
    total_paid: int
    total_pending: int


class InvoiceListResponse(BaseModel):
    items: list[InvoiceResponse]
    summary: InvoiceSummaryResponse


class PaymentCreateRequest(BaseModel):
    amount: int = Field(ge=1)
    method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    reference: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=2000)
    paid_at: date | None = None


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_id: int
    amount: int
    method: str
    reference: str | None = None
    notes: str | None = None
    paid_at: date | None = None


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    rate: int
    is_active: bool
