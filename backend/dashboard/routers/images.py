from fastapi import APIRouter, Depends, HTTPException

from dashboard.dependencies import get_queries, require_session
from dashboard.owners import owner_from_row
from dashboard.schemas.image import ImageResponse
from dashboard.services.query_service import DashboardQueries

router = APIRouter(
    prefix="/images",
    tags=["images"],
    dependencies=[Depends(require_session)],
)


@router.get("/{document_type}/{document_id}", response_model=list[ImageResponse])
async def list_images(document_type: str, document_id: str, queries: DashboardQueries = Depends(get_queries)):
    try:
        owner = owner_from_row(document_type, document_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return queries.list_images_for(owner)
