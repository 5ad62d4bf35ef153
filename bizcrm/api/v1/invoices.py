"""Invoice, payment and service-catalogue endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from bizcrm.core.config import get_config
from bizcrm.core.dependencies import get_invoice_service
from bizcrm.core.exceptions import NotFoundError, ValidationError
from bizcrm.invoicing import TaxSpec, compute_totals
from bizcrm.invoicing.pdf import render_invoice_pdf
from bizcrm.reporting import invoice_summary
from bizcrm.schemas.invoices import (
    InvoiceCreateRequest,
    InvoiceListResponse,
    InvoicePreviewRequest,
    InvoiceResponse,
    InvoiceSummaryResponse,
    InvoiceTotalsResponse,
    InvoiceUpdateRequest,
    PaymentCreateRequest,
    PaymentResponse,
    ServiceResponse,
    TaxPayload,
)
from bizcrm.services.invoice_service import InvoiceService, line_items_of

router = APIRouter(tags=["invoices"])


def _tax_spec(tax: TaxPayload | None) -> TaxSpec:
    if tax is None:
        return TaxSpec(percentage=get_config().DEFAULT_TAX_PERCENTAGE)
    return tax.to_spec()


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.post("/invoices/preview", response_model=InvoiceTotalsResponse)
def preview_totals(payload: InvoicePreviewRequest) -> InvoiceTotalsResponse:
    totals = compute_totals(
        [item.to_line_item() for item in payload.items],
        payload.discount.to_spec(),
        _tax_spec(payload.tax),
    )
    return InvoiceTotalsResponse(**totals.as_dict())


@router.get("/invoices", response_model=InvoiceListResponse)
def list_invoices(
    search: str = Query(default="", max_length=255),
    status_filter: str = Query(default="all", alias="status", max_length=40),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceListResponse:
    rows = service.list_invoices(search=search, status=status_filter)
    # Summary cards cover every invoice, not just the filtered page.
    summary = invoice_summary(service.list_invoices())
    return InvoiceListResponse(
        items=[InvoiceResponse.model_validate(row) for row in rows],
        summary=InvoiceSummaryResponse(
            total_revenue=summary.total_revenue,
            total_paid=summary.total_paid,
            total_pending=summary.total_pending,
        ),
    )


@router.post("/invoices", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def create_invoice(
    payload: InvoiceCreateRequest,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    fields = payload.model_dump(exclude={"client_name", "items", "discount", "tax"})
    fields["status"] = payload.status.value
    try:
        invoice = service.create_invoice(
            payload.client_name,
            [item.to_line_item() for item in payload.items],
            discount=payload.discount.to_spec(),
            tax=_tax_spec(payload.tax),
            **fields,
        )
    except ValidationError as exc:
        raise _http_error(exc) from exc
    return InvoiceResponse.model_validate(invoice)


@router.get("/invoices/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(invoice_id: int, service: InvoiceService = Depends(get_invoice_service)) -> InvoiceResponse:
    try:
        invoice = service.require_invoice(invoice_id)
    except NotFoundError as exc:
        raise _http_error(exc) from exc
    return InvoiceResponse.model_validate(invoice)


@router.get("/invoices/{invoice_id}/pdf", response_class=Response)
def download_invoice_pdf(invoice_id: int, service: InvoiceService = Depends(get_invoice_service)) -> Response:
    try:
        invoice = service.require_invoice(invoice_id)
    except NotFoundError as exc:
        raise _http_error(exc) from exc
    content = render_invoice_pdf(invoice, line_items_of(invoice), business_name=get_config().APP_NAME)
    filename = f"{invoice.invoice_number or invoice.id}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/invoices/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(
    invoice_id: int,
    payload: InvoiceUpdateRequest,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    fields = payload.model_dump(exclude={"items", "discount", "tax"}, exclude_unset=True)
    for required in ("client_name", "status"):
        if fields.get(required) is None:
            fields.pop(required, None)
    if payload.status is not None:
        fields["status"] = payload.status.value
    try:
        invoice = service.update_invoice(
            invoice_id,
            items=None if payload.items is None else [item.to_line_item() for item in payload.items],
            discount=None if payload.discount is None else payload.discount.to_spec(),
            tax=None if payload.tax is None else payload.tax.to_spec(),
            **fields,
        )
    except (NotFoundError, ValidationError) as exc:
        raise _http_error(exc) from exc
    return InvoiceResponse.model_validate(invoice)


@router.post(
    "/invoices/{invoice_id}/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_payment(
    invoice_id: int,
    payload: PaymentCreateRequest,
    service: InvoiceService = Depends(get_invoice_service),
) -> PaymentResponse:
    try:
        payment = service.record_payment(
            invoice_id,
            amount=payload.amount,
            method=payload.method.value,
            reference=payload.reference,
            notes=payload.notes,
            paid_at=payload.paid_at,
        )
    except (NotFoundError, ValidationError) as exc:
        raise _http_error(exc) from exc
    return PaymentResponse.model_validate(payment)


@router.get("/services", response_model=list[ServiceResponse])
def list_services(
    active_only: bool = Query(default=True),
    service: InvoiceService = Depends(get_invoice_service),
) -> list[ServiceResponse]:
    return [ServiceResponse.model_validate(row) for row in service.list_services(active_only=active_only)]
