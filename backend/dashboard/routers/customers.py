from fastapi import APIRouter, Depends

from dashboard.dependencies import get_queries, require_session
from dashboard.schemas.customer import AuthorRow, CustomerField
from dashboard.services.query_service import DashboardQueries

router = APIRouter(
    prefix="/customers",
    tags=["customers"],
    dependencies=[Depends(require_session)],
)


@router.get("", response_model=list[CustomerField])
async def list_customers(queries: DashboardQueries = Depends(get_queries)):
    return queries.list_customers()


@router.get("/authors", response_model=list[AuthorRow])
async def list_authors(query: str = "", queries: DashboardQueries = Depends(get_queries)):
    """Customers matching ``query`` by name or email, with their review counts."""
    return queries.list_filtered_customers(query)
