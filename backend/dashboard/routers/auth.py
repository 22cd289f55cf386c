from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dashboard.database import get_db
from dashboard.dependencies import require_session
from dashboard.schemas.auth import LoginRequest, LoginResponse
from dashboard.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(req: LoginRequest, db: Session = Depends(get_db)):
    return LoginResponse(**auth_service.authenticate(db, req.email, req.password))


@router.post("/logout")
async def logout(token: str = Depends(require_session)):
    auth_service.logout(token)
    return {"message": "Logged out"}
