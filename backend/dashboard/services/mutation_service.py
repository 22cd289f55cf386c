"""Write side of the dashboard: validated creates, updates and deletes."""
import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.errors import StorageError, ValidationFailed
from dashboard.models import Image, Invoice, Review
from dashboard.owners import Owner, ReviewOwner
from dashboard.schemas.forms import (
    INVOICE_FIELD_MESSAGES,
    REVIEW_FIELD_MESSAGES,
    InvoiceForm,
    ReviewForm,
    parse_form,
)
from dashboard.services.image_service import (
    FileStoreError,
    ImageStore,
    InvalidImage,
    normalize_image,
)
from dashboard.utils.formatting import to_cents, today

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    filename: str | None
    content_type: str | None
    content: bytes


class DashboardMutations:
    def __init__(self, db: Session, image_store: ImageStore):
        self.db = db
        self.image_store = image_store

    def _commit(self, message: str):
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Database Error: %s (%s)", message, exc)
            raise StorageError(f"Database Error: {message}") from exc

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    def create_invoice(self, form: dict) -> str:
        data = parse_form(
            InvoiceForm, form, INVOICE_FIELD_MESSAGES, "Missing Fields. Failed to Create Invoice."
        )
        invoice_id = str(uuid.uuid4())
        self.db.add(
            Invoice(
                id=invoice_id,
                customer_id=data.customer_id,
                amount=to_cents(data.amount),
                status=data.status,
                date=today(),
            )
        )
        self._commit("Failed to Create Invoice.")
        return invoice_id

    def update_invoice(self, invoice_id: str, form: dict):
        data = parse_form(
            InvoiceForm, form, INVOICE_FIELD_MESSAGES, "Missing Fields. Failed to Update Invoice."
        )
        try:
            self.db.query(Invoice).filter(Invoice.id == invoice_id).update(
                {
                    Invoice.customer_id: data.customer_id,
                    Invoice.amount: to_cents(data.amount),
                    Invoice.status: data.status,
                },
                synchronize_session=False,
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Database Error: Failed to Update Invoice. (%s)", exc)
            raise StorageError("Database Error: Failed to Update Invoice.") from exc
        self._commit("Failed to Update Invoice.")

    def delete_invoice(self, invoice_id: str) -> str:
        try:
            self.db.query(Invoice).filter(Invoice.id == invoice_id).delete(synchronize_session=False)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Database Error: Failed to Delete Invoice. (%s)", exc)
            raise StorageError("Database Error: Failed to Delete Invoice.") from exc
        self._commit("Failed to Delete Invoice.")
        return "Invoice has been deleted."

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def _store_upload(self, upload: UploadedImage) -> str | None:
        """Normalize and persist an upload, returning its URL.

        A write failure is logged and yields None: the review is still created,
        only without an image row.
        """
        try:
            image = normalize_image(upload.content, upload.content_type)
        except InvalidImage as exc:
            raise ValidationFailed(
                {"images": ["Please upload a valid image."]},
                "Invalid Image. Failed to Create Review.",
            ) from exc
        try:
            return self.image_store.save_image(image)
        except FileStoreError as exc:
            logger.warning("Review image not saved (%s): %s", upload.filename, exc)
            return None

    def attach_image(self, owner: Owner, url: str) -> Image:
        """Stage an image row for ``owner``; committed with the caller's transaction."""
        image = Image(
            id=str(uuid.uuid4()),
            document_id=owner.id,
            document_type=owner.document_type,
            url=url,
        )
        self.db.add(image)
        return image

    def create_review(self, form: dict, upload: UploadedImage | None = None) -> str:
        data = parse_form(
            ReviewForm, form, REVIEW_FIELD_MESSAGES, "Missing Fields. Failed to Create Review."
        )
        image_url = self._store_upload(upload) if upload and upload.content else None

        now = today()
        review_id = str(uuid.uuid4())
        self.db.add(
            Review(
                id=review_id,
                customer_id=data.customer_id,
                title=data.title,
                status=data.status,
                created_at=now,
                updated_at=now,
                next_part_id=data.next_part_id,
                text=data.text,
            )
        )
        if image_url:
            self.attach_image(ReviewOwner(review_id), image_url)

        try:
            self._commit("Failed to Create Review.")
        except StorageError:
            if image_url:
                self.image_store.remove(image_url)
            raise
        return review_id

    def update_review(self, review_id: str, form: dict):
        data = parse_form(
            ReviewForm, form, REVIEW_FIELD_MESSAGES, "Missing Fields. Failed to Update Review."
        )
        values = {
            Review.customer_id: data.customer_id,
            Review.title: data.title,
            Review.status: data.status,
            Review.text: data.text,
            Review.updated_at: today(),
        }
        if data.next_part_id is not None:
            values[Review.next_part_id] = data.next_part_id
        try:
            self.db.query(Review).filter(Review.id == review_id).update(values, synchronize_session=False)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Database Error: Failed to Update Review. (%s)", exc)
            raise StorageError("Database Error: Failed to Update Review.") from exc
        self._commit("Failed to Update Review.")

    def delete_review(self, review_id: str) -> str:
        owner = ReviewOwner(review_id)
        try:
            self.db.query(Image).filter(
                Image.document_id == owner.id,
                Image.document_type == owner.document_type,
            ).delete(synchronize_session=False)
            self.db.query(Review).filter(Review.id == review_id).delete(synchronize_session=False)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Database Error: Failed to Delete Review. (%s)", exc)
            raise StorageError("Database Error: Failed to Delete Review.") from exc
        self._commit("Failed to Delete Review.")
        return "Review has been deleted."
