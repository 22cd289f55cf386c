import logging
import time

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.config import settings
from dashboard.errors import AuthError
from dashboard.models.user import User
from dashboard.utils.security import generate_token, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password."
UNEXPECTED_ERROR = "Unexpected auth error."


class AuthService:
    def __init__(self):
        self._sessions: dict[str, float] = {}  # token -> expires_at

    def _cleanup_expired(self):
        now = time.time()
        self._sessions = {t: exp for t, exp in self._sessions.items() if exp > now}

    def authenticate(self, db: Session, email: str, password: str) -> dict:
        try:
            user = db.query(User).filter(User.email == email.strip().lower()).first()
        except SQLAlchemyError as exc:
            logger.error("Failed to fetch user: %s", exc)
            raise AuthError(UNEXPECTED_ERROR) from exc

        if not user or not verify_password(user.password, password):
            raise AuthError(INVALID_CREDENTIALS)

        token = generate_token()
        ttl = settings.session_ttl_seconds
        self._sessions[token] = time.time() + ttl
        return {"token": token, "expires_in_seconds": ttl}

    def validate_token(self, token: str) -> bool:
        self._cleanup_expired()
        return token in self._sessions

    def logout(self, token: str):
        self._sessions.pop(token, None)

    def clear(self):
        self._sessions.clear()


auth_service = AuthService()
