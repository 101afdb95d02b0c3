# utils/session_store.py
import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from db.database import SessionLocal
from models.base import utcnow
from models.user import User
from models.user_session import UserSession
from utils.errors import StorageError


class SessionStore:
    """
    Server-side login sessions. The client only holds the opaque token;
    identity and expiry live in the user_sessions table.
    """

    def __init__(self, lifetime_minutes: int = 480):
        self.lifetime = timedelta(minutes=lifetime_minutes)

    def init_app(self, app):
        app.extensions["session_store"] = self

    def create(self, user: User) -> str:
        token = secrets.token_urlsafe(32)
        now = utcnow()
        session = SessionLocal()
        try:
            session.add(UserSession(token=token, user_id=user.id, created_at=now, expires_at=now + self.lifetime))
            session.commit()
            return token
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError("Could not create session") from exc
        finally:
            session.close()

    def resolve(self, token: Optional[str]) -> Optional[User]:
        """Return the user behind a live session, or None. Expired rows are dropped."""
        if not token:
            return None
        session = SessionLocal()
        try:
            row = session.get(UserSession, token)
            if row is None:
                return None
            if row.is_expired():
                session.delete(row)
                session.commit()
                return None
            return row.user
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError("Could not read session") from exc
        finally:
            session.close()

    def destroy(self, token: Optional[str]) -> bool:
        if not token:
            return False
        session = SessionLocal()
        try:
            deleted = session.query(UserSession).filter(UserSession.token == token).delete()
            session.commit()
            return bool(deleted)
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError("Could not delete session") from exc
        finally:
            session.close()

    def purge_expired(self) -> int:
        session = SessionLocal()
        try:
            deleted = session.query(UserSession).filter(UserSession.expires_at <= utcnow()).delete()
            session.commit()
            return deleted
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError("Could not purge sessions") from exc
        finally:
            session.close()
