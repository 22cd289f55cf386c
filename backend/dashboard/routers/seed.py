from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dashboard.database import get_db
from dashboard.dependencies import get_image_store
from dashboard.services.image_service import ImageStore
from dashboard.services.seed_service import seed_database

router = APIRouter(prefix="/seed", tags=["seed"])


@router.get("")
async def seed(db: Session = Depends(get_db), image_store: ImageStore = Depends(get_image_store)):
    inserted = seed_database(db, image_store)
    return {"message": "Database seeded successfully", "inserted": inserted}
