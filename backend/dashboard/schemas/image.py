from pydantic import BaseModel


class ImageResponse(BaseModel):
    id: str
    document_id: str
    document_type: str
    url: str
