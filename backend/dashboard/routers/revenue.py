from fastapi import APIRouter, Depends

from dashboard.dependencies import get_queries, require_session
from dashboard.schemas.revenue import RevenueRow
from dashboard.services.query_service import DashboardQueries

router = APIRouter(
    prefix="/revenue",
    tags=["revenue"],
    dependencies=[Depends(require_session)],
)


@router.get("", response_model=list[RevenueRow])
async def revenue(queries: DashboardQueries = Depends(get_queries)):
    return queries.fetch_revenue()
