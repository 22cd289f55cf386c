from pydantic import BaseModel


class ReviewCards(BaseModel):
    number_of_reviews: int
    number_of_authors: int


class InvoiceCards(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: str
    total_pending_invoices: str
