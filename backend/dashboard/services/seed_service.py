"""Placeholder data for a fresh dashboard database.

Every row has a fixed id (month for revenue) so seeding twice leaves the
tables unchanged. Seeded image rows get placeholder PNGs in the upload
directory when an image store is given.
"""
import io
import logging

from PIL import Image as PILImage

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.errors import StorageError
from dashboard.models import Customer, Image, Invoice, Revenue, Review, User
from dashboard.owners import ReviewOwner
from dashboard.services.image_service import FileStoreError, ImageStore
from dashboard.utils.security import hash_password

logger = logging.getLogger(__name__)

USERS = [
    {
        "id": "410544b2-4001-4271-9855-fec4b6a6442a",
        "name": "User",
        "email": "user@nextmail.com",
        "password": "123456",
    },
]

CUSTOMERS = [
    {
        "id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
        "name": "Evil Rabbit",
        "email": "evil@rabbit.com",
        "image_url": "/customers/evil-rabbit.png",
    },
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "76d65c26-f784-44a2-ac19-586678f7c2f2",
        "name": "Michael Novotny",
        "email": "michael@novotny.com",
        "image_url": "/customers/michael-novotny.png",
    },
    {
        "id": "cc27c14a-0acf-4f4a-a6c9-d45682c144b9",
        "name": "Amy Burns",
        "email": "amy@burns.com",
        "image_url": "/customers/amy-burns.png",
    },
    {
        "id": "13d07535-c59e-4157-a011-f8d2ef4e0cbb",
        "name": "Balazs Orban",
        "email": "balazs@orban.com",
        "image_url": "/customers/balazs-orban.png",
    },
]

_C = [c["id"] for c in CUSTOMERS]

INVOICES = [
    {"id": "a1f0c3d2-0001-4b7e-9a10-000000000001", "customer_id": _C[0], "amount": 15795, "status": "pending", "date": "2022-12-06"},
    {"id": "a1f0c3d2-0002-4b7e-9a10-000000000002", "customer_id": _C[1], "amount": 20348, "status": "pending", "date": "2022-11-14"},
    {"id": "a1f0c3d2-0003-4b7e-9a10-000000000003", "customer_id": _C[4], "amount": 3040, "status": "paid", "date": "2022-10-29"},
    {"id": "a1f0c3d2-0004-4b7e-9a10-000000000004", "customer_id": _C[3], "amount": 44800, "status": "paid", "date": "2023-09-10"},
    {"id": "a1f0c3d2-0005-4b7e-9a10-000000000005", "customer_id": _C[5], "amount": 34577, "status": "pending", "date": "2023-08-05"},
    {"id": "a1f0c3d2-0006-4b7e-9a10-000000000006", "customer_id": _C[2], "amount": 54246, "status": "pending", "date": "2023-07-16"},
    {"id": "a1f0c3d2-0007-4b7e-9a10-000000000007", "customer_id": _C[0], "amount": 666, "status": "pending", "date": "2023-06-27"},
    {"id": "a1f0c3d2-0008-4b7e-9a10-000000000008", "customer_id": _C[3], "amount": 32545, "status": "paid", "date": "2023-06-09"},
    {"id": "a1f0c3d2-0009-4b7e-9a10-000000000009", "customer_id": _C[4], "amount": 1250, "status": "paid", "date": "2023-06-17"},
    {"id": "a1f0c3d2-0010-4b7e-9a10-000000000010", "customer_id": _C[5], "amount": 8546, "status": "paid", "date": "2023-06-07"},
    {"id": "a1f0c3d2-0011-4b7e-9a10-000000000011", "customer_id": _C[1], "amount": 500, "status": "paid", "date": "2023-08-19"},
    {"id": "a1f0c3d2-0012-4b7e-9a10-000000000012", "customer_id": _C[5], "amount": 8945, "status": "paid", "date": "2023-06-03"},
    {"id": "a1f0c3d2-0013-4b7e-9a10-000000000013", "customer_id": _C[2], "amount": 1000, "status": "paid", "date": "2022-06-05"},
]

# Part two is listed first: part one's next_part_id must already exist.
REVIEWS = [
    {
        "id": "b2e1d4c3-0002-4c8f-8b21-000000000002",
        "customer_id": _C[0],
        "title": "Alpine loop, part 2",
        "status": "published",
        "created_at": "2024-03-02",
        "updated_at": "2024-03-05",
        "next_part_id": None,
        "text": "The descent into the valley was the best part of the whole trip.",
    },
    {
        "id": "b2e1d4c3-0001-4c8f-8b21-000000000001",
        "customer_id": _C[0],
        "title": "Alpine loop, part 1",
        "status": "published",
        "created_at": "2024-03-01",
        "updated_at": "2024-03-04",
        "next_part_id": "b2e1d4c3-0002-4c8f-8b21-000000000002",
        "text": "Three days on the pass roads with a rented touring bike.",
    },
    {
        "id": "b2e1d4c3-0003-4c8f-8b21-000000000003",
        "customer_id": _C[1],
        "title": "City commuter after one year",
        "status": "pending",
        "created_at": "2024-04-11",
        "updated_at": "2024-04-11",
        "next_part_id": None,
        "text": "Reliable, cheap to run and easy to park.",
    },
    {
        "id": "b2e1d4c3-0004-4c8f-8b21-000000000004",
        "customer_id": _C[2],
        "title": "Coastal road trip",
        "status": "archived",
        "created_at": "2023-08-20",
        "updated_at": "2023-09-01",
        "next_part_id": None,
        "text": "Great views, too much traffic in August.",
    },
    {
        "id": "b2e1d4c3-0005-4c8f-8b21-000000000005",
        "customer_id": _C[3],
        "title": "Winter tyres compared",
        "status": "published",
        "created_at": "2024-01-15",
        "updated_at": "2024-01-20",
        "next_part_id": None,
        "text": "Grip on packed snow was the deciding factor.",
    },
    {
        "id": "b2e1d4c3-0006-4c8f-8b21-000000000006",
        "customer_id": _C[4],
        "title": "First track day",
        "status": "pending",
        "created_at": "2024-05-07",
        "updated_at": "2024-05-08",
        "next_part_id": None,
        "text": "Nervous start, brilliant finish.",
    },
]

IMAGES = [
    {
        "id": "c3f2e5d4-0001-4d90-9c32-000000000001",
        "document_id": REVIEWS[1]["id"],
        "document_type": ReviewOwner.document_type,
        "url": "/uploads/alpine-loop-1.png",
    },
    {
        "id": "c3f2e5d4-0002-4d90-9c32-000000000002",
        "document_id": REVIEWS[0]["id"],
        "document_type": ReviewOwner.document_type,
        "url": "/uploads/alpine-loop-2.png",
    },
]

REVENUE = [
    {"month": "Jan", "revenue": 2000},
    {"month": "Feb", "revenue": 1800},
    {"month": "Mar", "revenue": 2200},
    {"month": "Apr", "revenue": 2500},
    {"month": "May", "revenue": 2300},
    {"month": "Jun", "revenue": 3200},
    {"month": "Jul", "revenue": 3500},
    {"month": "Aug", "revenue": 3700},
    {"month": "Sep", "revenue": 2500},
    {"month": "Oct", "revenue": 2800},
    {"month": "Nov", "revenue": 3000},
    {"month": "Dec", "revenue": 4800},
]


def _insert_ignore(db: Session, model, rows: list[dict], key: str = "id") -> int:
    inserted = 0
    for row in rows:
        stmt = sqlite_insert(model).values(**row).on_conflict_do_nothing(index_elements=[key])
        inserted += db.execute(stmt).rowcount
    return inserted


def _placeholder_png() -> bytes:
    buf = io.BytesIO()
    PILImage.new("RGB", (320, 200), (226, 232, 240)).save(buf, format="PNG")
    return buf.getvalue()


def write_placeholder_images(image_store: ImageStore) -> int:
    """Write a PNG for every seeded image row whose file is missing."""
    written = 0
    content = None
    for image in IMAGES:
        if image_store.has(image["url"]):
            continue
        content = content or _placeholder_png()
        try:
            image_store.write(image["url"].rsplit("/", 1)[-1], content)
        except FileStoreError as exc:
            logger.warning("Could not write placeholder image %s: %s", image["url"], exc)
            continue
        written += 1
    return written


def seed_database(db: Session, image_store: ImageStore | None = None) -> dict[str, int]:
    """Load the placeholder rows in one transaction; returns rows inserted per table."""
    users = [{**u, "password": hash_password(u["password"])} for u in USERS]
    try:
        counts = {
            "users": _insert_ignore(db, User, users),
            "customers": _insert_ignore(db, Customer, CUSTOMERS),
            "invoices": _insert_ignore(db, Invoice, INVOICES),
            "reviews": _insert_ignore(db, Review, REVIEWS),
            "images": _insert_ignore(db, Image, IMAGES),
            "revenue": _insert_ignore(db, Revenue, REVENUE, key="month"),
        }
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Seeding failed, rolled back: %s", exc)
        raise StorageError("Failed to seed database.") from exc

    if image_store is not None:
        write_placeholder_images(image_store)

    logger.info("Seeded database: %s", counts)
    return counts
