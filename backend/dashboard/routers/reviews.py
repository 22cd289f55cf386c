from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from dashboard.config import settings
from dashboard.dependencies import get_mutations, get_queries, require_session
from dashboard.owners import ReviewOwner
from dashboard.schemas.image import ImageResponse
from dashboard.schemas.review import ReviewListResponse, ReviewResponse
from dashboard.services.mutation_service import DashboardMutations, UploadedImage
from dashboard.services.query_service import DashboardQueries, RecordKind
from dashboard.utils.navigation import redirect_after_mutation

router = APIRouter(
    prefix="/reviews",
    tags=["reviews"],
    dependencies=[Depends(require_session)],
)


def _listing_path() -> str:
    return f"{settings.api_prefix}/reviews"


async def _read_upload(file: UploadFile | None) -> UploadedImage | None:
    # Browsers submit an empty part when no file was chosen.
    if file is None or not file.filename:
        return None

    max_bytes = settings.max_upload_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await file.read(1024 * 1024)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise HTTPException(status_code=413, detail=f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)

    content = b"".join(chunks)
    if not content:
        return None
    return UploadedImage(filename=file.filename, content_type=file.content_type, content=content)


@router.get("", response_model=ReviewListResponse)
async def list_reviews(
    query: str = "",
    page: int = Query(1, ge=1, le=settings.max_page),
    queries: DashboardQueries = Depends(get_queries),
):
    return ReviewListResponse(
        reviews=queries.list_filtered(RecordKind.REVIEWS, query, page),
        total_pages=queries.count_filtered_pages(RecordKind.REVIEWS, query),
        page=page,
        query=query,
    )


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: str, queries: DashboardQueries = Depends(get_queries)):
    return queries.get_review_with_images(review_id)


@router.get("/{review_id}/images", response_model=list[ImageResponse])
async def list_review_images(review_id: str, queries: DashboardQueries = Depends(get_queries)):
    return queries.list_images_for(ReviewOwner(review_id))


@router.post("")
async def create_review(
    customer_id: str | None = Form(None, alias="customerId"),
    title: str | None = Form(None),
    status: str | None = Form(None),
    text: str | None = Form(None),
    next_part_id: str | None = Form(None, alias="nextPartId"),
    images: UploadFile | None = File(None),
    mutations: DashboardMutations = Depends(get_mutations),
):
    upload = await _read_upload(images)
    mutations.create_review(
        {
            "customerId": customer_id,
            "title": title,
            "status": status,
            "text": text,
            "nextPartId": next_part_id,
        },
        upload,
    )
    return redirect_after_mutation(_listing_path())


@router.post("/{review_id}")
async def update_review(
    review_id: str,
    customer_id: str | None = Form(None, alias="customerId"),
    title: str | None = Form(None),
    status: str | None = Form(None),
    text: str | None = Form(None),
    next_part_id: str | None = Form(None, alias="nextPartId"),
    mutations: DashboardMutations = Depends(get_mutations),
):
    mutations.update_review(
        review_id,
        {
            "customerId": customer_id,
            "title": title,
            "status": status,
            "text": text,
            "nextPartId": next_part_id,
        },
    )
    return redirect_after_mutation(_listing_path())


@router.delete("/{review_id}")
async def delete_review(review_id: str, mutations: DashboardMutations = Depends(get_mutations)):
    return {"message": mutations.delete_review(review_id)}
