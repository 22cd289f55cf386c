"""Read side of the dashboard: filtered listings, lookups and summary cards.

Listings and page counts are built from the same filtered query so the
number of pages always agrees with what the pages contain.
"""
import enum
import logging
import math
from contextlib import contextmanager

from sqlalchemy import Text, case, cast, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from dashboard.config import settings
from dashboard.errors import NotFoundError, StorageError
from dashboard.models import Customer, Image, Invoice, Revenue, Review
from dashboard.owners import Owner, ReviewOwner
from dashboard.schemas.cards import InvoiceCards, ReviewCards
from dashboard.schemas.customer import AuthorRow, CustomerField
from dashboard.schemas.image import ImageResponse
from dashboard.schemas.invoice import InvoiceResponse, InvoiceRow, LatestInvoice
from dashboard.schemas.review import ReviewResponse, ReviewRow
from dashboard.schemas.revenue import RevenueRow
from dashboard.utils.formatting import format_currency, from_cents

logger = logging.getLogger(__name__)


class RecordKind(str, enum.Enum):
    INVOICES = "invoices"
    REVIEWS = "reviews"


MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@contextmanager
def _fetching(message: str):
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Database Error: %s (%s)", message, exc)
        raise StorageError(message) from exc


class DashboardQueries:
    def __init__(self, db: Session, page_size: int | None = None):
        self.db = db
        self.page_size = page_size or settings.items_per_page

    # ------------------------------------------------------------------
    # Filtered listings
    # ------------------------------------------------------------------

    def _filtered(self, kind: RecordKind, query: str) -> Query:
        pattern = f"%{query}%"
        match kind:
            case RecordKind.INVOICES:
                return (
                    self.db.query(
                        Invoice.id,
                        Invoice.amount,
                        Invoice.date,
                        Invoice.status,
                        Customer.name,
                        Customer.email,
                        Customer.image_url,
                    )
                    .join(Customer, Invoice.customer_id == Customer.id)
                    .filter(
                        or_(
                            Customer.name.ilike(pattern),
                            Customer.email.ilike(pattern),
                            cast(Invoice.amount, Text).ilike(pattern),
                            cast(Invoice.date, Text).ilike(pattern),
                            Invoice.status.ilike(pattern),
                        )
                    )
                )
            case RecordKind.REVIEWS:
                return (
                    self.db.query(
                        Review.id,
                        Review.customer_id,
                        Review.title,
                        Review.status,
                        Review.created_at,
                        Review.updated_at,
                        Customer.name.label("author_name"),
                        Customer.email,
                        Customer.image_url,
                    )
                    .join(Customer, Review.customer_id == Customer.id)
                    .filter(
                        or_(
                            Customer.name.ilike(pattern),
                            Customer.email.ilike(pattern),
                            cast(Review.created_at, Text).ilike(pattern),
                            cast(Review.updated_at, Text).ilike(pattern),
                            Review.title.ilike(pattern),
                            Review.status.ilike(pattern),
                        )
                    )
                )
        raise ValueError(f"Unsupported record kind: {kind!r}")

    def list_filtered(self, kind: RecordKind, query: str, page: int) -> list[InvoiceRow] | list[ReviewRow]:
        page = max(page, 1)
        if page > settings.max_page:
            return []
        offset = (page - 1) * self.page_size
        with _fetching(f"Failed to fetch {kind.value}."):
            q = self._filtered(kind, query)
            match kind:
                case RecordKind.INVOICES:
                    ordered = q.order_by(Invoice.date.desc(), Invoice.id.desc())
                    row_model = InvoiceRow
                case RecordKind.REVIEWS:
                    ordered = q.order_by(Review.updated_at.desc(), Review.id.desc())
                    row_model = ReviewRow
            rows = ordered.offset(offset).limit(self.page_size).all()
        return [row_model(**row._mapping) for row in rows]

    def count_filtered_pages(self, kind: RecordKind, query: str) -> int:
        with _fetching(f"Failed to fetch total number of {kind.value}."):
            total = self._filtered(kind, query).count()
        return math.ceil(total / self.page_size)

    # ------------------------------------------------------------------
    # Single records
    # ------------------------------------------------------------------

    def get_invoice(self, invoice_id: str) -> InvoiceResponse:
        with _fetching("Failed to fetch invoice."):
            invoice = self.db.query(Invoice).filter(Invoice.id == invoice_id).first()
        if not invoice:
            raise NotFoundError("Invoice not found")
        return InvoiceResponse(
            id=invoice.id,
            customer_id=invoice.customer_id,
            amount=from_cents(invoice.amount),
            status=invoice.status,
        )

    def get_review(self, review_id: str) -> ReviewResponse:
        with _fetching("Failed to fetch review by id."):
            row = (
                self.db.query(
                    Review.id,
                    Review.customer_id,
                    Review.title,
                    Review.status,
                    Review.created_at,
                    Review.updated_at,
                    Review.text,
                    Review.next_part_id,
                    Customer.name.label("author_name"),
                    Customer.email,
                    Customer.image_url,
                )
                .join(Customer, Review.customer_id == Customer.id)
                .filter(Review.id == review_id)
                .first()
            )
        if not row:
            raise NotFoundError("Review not found")
        return ReviewResponse(**row._mapping)

    def list_images_for(self, owner: Owner, limit: int | None = None) -> list[ImageResponse]:
        limit = limit or settings.images_limit
        with _fetching("Failed to fetch images."):
            images = (
                self.db.query(Image)
                .filter(Image.document_id == owner.id, Image.document_type == owner.document_type)
                .order_by(Image.id.desc())
                .limit(limit)
                .all()
            )
        return [
            ImageResponse(id=i.id, document_id=i.document_id, document_type=i.document_type, url=i.url)
            for i in images
        ]

    def get_review_with_images(self, review_id: str) -> ReviewResponse:
        review = self.get_review(review_id)
        review.images = self.list_images_for(ReviewOwner(review.id))
        return review

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    def list_customers(self) -> list[CustomerField]:
        with _fetching("Failed to fetch all customers."):
            rows = self.db.query(Customer.id, Customer.name).order_by(Customer.name.asc()).all()
        return [CustomerField(id=r.id, name=r.name) for r in rows]

    def list_filtered_customers(self, query: str) -> list[AuthorRow]:
        pattern = f"%{query}%"
        with _fetching("Failed to fetch reviews authors (customers) table."):
            rows = (
                self.db.query(
                    Customer.id,
                    Customer.name,
                    Customer.email,
                    Customer.image_url,
                    func.count(Review.id).label("total_reviews"),
                )
                .outerjoin(Review, Review.customer_id == Customer.id)
                .filter(or_(Customer.name.ilike(pattern), Customer.email.ilike(pattern)))
                .group_by(Customer.id, Customer.name, Customer.email, Customer.image_url)
                .order_by(Customer.name.asc())
                .all()
            )
        return [AuthorRow(**r._mapping) for r in rows]

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def fetch_revenue(self) -> list[RevenueRow]:
        """Monthly revenue in calendar order; unknown month labels sort last."""
        month_order = case({m: i for i, m in enumerate(MONTHS)}, value=Revenue.month, else_=len(MONTHS))
        with _fetching("Failed to fetch revenue data."):
            rows = self.db.query(Revenue).order_by(month_order, Revenue.month).all()
        return [RevenueRow(month=r.month, revenue=r.revenue) for r in rows]

    def latest_invoices(self, limit: int | None = None) -> list[LatestInvoice]:
        limit = limit or settings.latest_invoices_limit
        with _fetching("Failed to fetch the latest invoices."):
            rows = (
                self.db.query(
                    Invoice.id,
                    Invoice.amount,
                    Customer.name,
                    Customer.email,
                    Customer.image_url,
                )
                .join(Customer, Invoice.customer_id == Customer.id)
                .order_by(Invoice.date.desc(), Invoice.id.desc())
                .limit(limit)
                .all()
            )
        return [
            LatestInvoice(
                id=r.id,
                name=r.name,
                email=r.email,
                image_url=r.image_url,
                amount=format_currency(r.amount),
            )
            for r in rows
        ]

    def count_cards(self, kind: RecordKind) -> ReviewCards | InvoiceCards:
        match kind:
            case RecordKind.REVIEWS:
                with _fetching("Failed to fetch reviews card data."):
                    reviews = (
                        self.db.query(func.count(Review.id))
                        .filter(Review.status.in_(("published", "pending")))
                        .scalar()
                    )
                    authors = self.db.query(func.count(Customer.id)).scalar()
                return ReviewCards(number_of_reviews=reviews or 0, number_of_authors=authors or 0)
            case RecordKind.INVOICES:
                with _fetching("Failed to fetch card data."):
                    invoices = self.db.query(func.count(Invoice.id)).scalar()
                    customers = self.db.query(func.count(Customer.id)).scalar()
                    totals = self.db.query(
                        func.sum(case((Invoice.status == "paid", Invoice.amount), else_=0)).label("paid"),
                        func.sum(case((Invoice.status == "pending", Invoice.amount), else_=0)).label("pending"),
                    ).one()
                return InvoiceCards(
                    number_of_invoices=invoices or 0,
                    number_of_customers=customers or 0,
                    total_paid_invoices=format_currency(totals.paid),
                    total_pending_invoices=format_currency(totals.pending),
                )
        raise ValueError(f"Unsupported record kind: {kind!r}")

