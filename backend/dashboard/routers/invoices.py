from fastapi import APIRouter, Depends, Form, Query

from dashboard.config import settings
from dashboard.dependencies import get_mutations, get_queries, require_session
from dashboard.schemas.invoice import InvoiceListResponse, InvoiceResponse, LatestInvoice
from dashboard.services.mutation_service import DashboardMutations
from dashboard.services.query_service import DashboardQueries, RecordKind
from dashboard.utils.navigation import redirect_after_mutation

router = APIRouter(
    prefix="/invoices",
    tags=["invoices"],
    dependencies=[Depends(require_session)],
)


def _listing_path() -> str:
    return f"{settings.api_prefix}/invoices"


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    query: str = "",
    page: int = Query(1, ge=1, le=settings.max_page),
    queries: DashboardQueries = Depends(get_queries),
):
    return InvoiceListResponse(
        invoices=queries.list_filtered(RecordKind.INVOICES, query, page),
        total_pages=queries.count_filtered_pages(RecordKind.INVOICES, query),
        page=page,
        query=query,
    )


@router.get("/latest", response_model=list[LatestInvoice])
async def latest_invoices(queries: DashboardQueries = Depends(get_queries)):
    return queries.latest_invoices()


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(invoice_id: str, queries: DashboardQueries = Depends(get_queries)):
    return queries.get_invoice(invoice_id)


@router.post("")
async def create_invoice(
    customer_id: str | None = Form(None, alias="customerId"),
    amount: str | None = Form(None),
    status: str | None = Form(None),
    mutations: DashboardMutations = Depends(get_mutations),
):
    mutations.create_invoice({"customerId": customer_id, "amount": amount, "status": status})
    return redirect_after_mutation(_listing_path())


@router.post("/{invoice_id}")
async def update_invoice(
    invoice_id: str,
    customer_id: str | None = Form(None, alias="customerId"),
    amount: str | None = Form(None),
    status: str | None = Form(None),
    mutations: DashboardMutations = Depends(get_mutations),
):
    mutations.update_invoice(invoice_id, {"customerId": customer_id, "amount": amount, "status": status})
    return redirect_after_mutation(_listing_path())


@router.delete("/{invoice_id}")
async def delete_invoice(invoice_id: str, mutations: DashboardMutations = Depends(get_mutations)):
    return {"message": mutations.delete_invoice(invoice_id)}
