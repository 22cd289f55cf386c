from pydantic import BaseModel


class CustomerField(BaseModel):
    id: str
    name: str


class AuthorRow(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    total_reviews: int
