from fastapi import APIRouter, Depends

from dashboard.dependencies import get_queries, require_session
from dashboard.schemas.cards import InvoiceCards, ReviewCards
from dashboard.services.query_service import DashboardQueries, RecordKind

router = APIRouter(
    prefix="/cards",
    tags=["cards"],
    dependencies=[Depends(require_session)],
)


@router.get("/reviews", response_model=ReviewCards)
async def review_cards(queries: DashboardQueries = Depends(get_queries)):
    return queries.count_cards(RecordKind.REVIEWS)


@router.get("/invoices", response_model=InvoiceCards)
async def invoice_cards(queries: DashboardQueries = Depends(get_queries)):
    return queries.count_cards(RecordKind.INVOICES)
