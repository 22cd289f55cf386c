from pydantic import BaseModel


class RevenueRow(BaseModel):
    month: str
    revenue: int
