from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal


def today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> float:
    return cents / 100


def format_currency(cents: int | None) -> str:
    """Render an amount stored in cents as US dollars, e.g. ``$1,234.50``."""
    return f"${Decimal(cents or 0) / 100:,.2f}"
