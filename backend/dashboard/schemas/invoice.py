from pydantic import BaseModel


class InvoiceRow(BaseModel):
    id: str
    amount: int  # cents
    date: str
    status: str
    name: str
    email: str
    image_url: str


class InvoiceListResponse(BaseModel):
    invoices: list[InvoiceRow]
    total_pages: int
    page: int
    query: str


class InvoiceResponse(BaseModel):
    id: str
    customer_id: str
    amount: float  # dollars
    status: str


class LatestInvoice(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    amount: str
