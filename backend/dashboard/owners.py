"""Owners of image rows.

An image belongs to whatever record its ``(document_id, document_type)`` pair
points at. These variants carry that pair so callers can ``match`` on the
owner instead of comparing type strings.
"""
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class ReviewOwner:
    id: str
    document_type: ClassVar[str] = "review"


@dataclass(frozen=True)
class InvoiceOwner:
    id: str
    document_type: ClassVar[str] = "invoice"


Owner = ReviewOwner | InvoiceOwner

_OWNER_TYPES: dict[str, type[ReviewOwner] | type[InvoiceOwner]] = {
    ReviewOwner.document_type: ReviewOwner,
    InvoiceOwner.document_type: InvoiceOwner,
}


def owner_from_row(document_type: str, document_id: str) -> Owner:
    try:
        owner_cls = _OWNER_TYPES[document_type]
    except KeyError:
        raise ValueError(f"Unknown document type: {document_type!r}") from None
    return owner_cls(id=document_id)
