from decimal import Decimal
from typing import Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dashboard.errors import ValidationFailed
from dashboard.utils.formatting import to_cents

FormT = TypeVar("FormT", bound=BaseModel)

# Stored cents must fit a 64-bit SQLite INTEGER.
MAX_INVOICE_AMOUNT = Decimal("999999999999.99")


class InvoiceForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_INVOICE_AMOUNT)
    status: Literal["pending", "paid"]

    @field_validator("amount")
    @classmethod
    def _at_least_one_cent(cls, value: Decimal) -> Decimal:
        if to_cents(value) < 1:
            raise ValueError("amount rounds to zero cents")
        return value


INVOICE_FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


class ReviewForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    customer_id: str = Field(alias="customerId", min_length=1)
    title: str = Field(min_length=1, max_length=255)
    status: Literal["pending", "published", "archived"]
    text: str = Field(min_length=1)
    next_part_id: str | None = Field(default=None, alias="nextPartId")

    @field_validator("next_part_id", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


REVIEW_FIELD_MESSAGES = {
    "customerId": "Please select an author.",
    "title": "Please enter a title.",
    "status": "Please select a review status.",
    "text": "Please enter the review text.",
    "nextPartId": "Please select a valid next part.",
}


def parse_form(
    model: type[FormT],
    data: dict,
    field_messages: dict[str, str],
    message: str,
) -> FormT:
    """Validate a form payload, collecting one friendly message per failing field."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors: dict[str, list[str]] = {}
        for err in exc.errors():
            field = str(err["loc"][0]) if err["loc"] else "form"
            text = field_messages.get(field, err["msg"])
            messages = errors.setdefault(field, [])
            if text not in messages:
                messages.append(text)
        raise ValidationFailed(errors, message) from exc
