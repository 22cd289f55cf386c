from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from dashboard.config import settings
from dashboard.database import get_db
from dashboard.services.auth_service import auth_service
from dashboard.services.image_service import ImageStore
from dashboard.services.mutation_service import DashboardMutations
from dashboard.services.query_service import DashboardQueries


async def require_session(authorization: str = Header(...)):
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    token = authorization[7:]
    if not auth_service.validate_token(token):
        raise HTTPException(status_code=401, detail="Session expired or invalid")
    return token


def get_image_store() -> ImageStore:
    return ImageStore(settings.upload_dir, settings.uploads_url)


def get_queries(db: Session = Depends(get_db)) -> DashboardQueries:
    return DashboardQueries(db)


def get_mutations(
    db: Session = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
) -> DashboardMutations:
    return DashboardMutations(db, image_store)
