"""Pydantic schema package for API contracts."""

from bizcrm.schemas.common import ErrorEnvelope
from bizcrm.schemas.invoices import (
    DiscountPayload,
    InvoiceCreateRequest,
    InvoiceItemResponse,
    InvoiceListResponse,
    InvoicePreviewRequest,
    InvoiceResponse,
    InvoiceSummaryResponse,
    InvoiceTotalsResponse,
    InvoiceUpdateRequest,
    LineItemPayload,
    PaymentCreateRequest,
    PaymentResponse,
    ServiceResponse,
    TaxPayload,
)
from bizcrm.schemas.pipeline import (
    DashboardResponse,
    FieldUpdateResponse,
    PipelineCardResponse,
    PipelineColumnResponse,
    PipelineMoveRequest,
    PipelineMoveResponse,
)

__all__ = [
    "DashboardResponse",
    "DiscountPayload",
    "ErrorEnvelope",
    "FieldUpdateResponse",
    "InvoiceCreateRequest",
    "InvoiceItemResponse",
    "InvoiceListResponse",
    "InvoicePreviewRequest",
    "InvoiceResponse",
    "InvoiceSummaryResponse",
    "InvoiceTotalsResponse",
    "InvoiceUpdateRequest",
    "LineItemPayload",
    "PaymentCreateRequest",
    "PaymentResponse",
    "PipelineCardResponse",
    "PipelineColumnResponse",
    "PipelineMoveRequest",
    "PipelineMoveResponse",
    "ServiceResponse",
    "TaxPayload",
]
