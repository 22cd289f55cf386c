from pydantic import BaseModel

from dashboard.schemas.image import ImageResponse


class ReviewRow(BaseModel):
    id: str
    customer_id: str
    title: str
    status: str
    created_at: str
    updated_at: str
    author_name: str
    email: str
    image_url: str


class ReviewListResponse(BaseModel):
    reviews: list[ReviewRow]
    total_pages: int
    page: int
    query: str


class ReviewResponse(ReviewRow):
    text: str | None
    next_part_id: str | None
    images: list[ImageResponse] = []
