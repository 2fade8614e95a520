from typing import Optional

from mentorbook.db.base import LoginSessionModel
from mentorbook.domain.entities import LoginSession
from mentorbook.domain.interfaces import ISessionRepository

from .user_repo import as_utc


class SessionRepository(ISessionRepository):
    """Login markers stored in the ``login_sessions`` table."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get(self, user_id: str) -> Optional[LoginSession]:
        row = self.db.get(LoginSessionModel, user_id)
        if row is None:
            return None
        return LoginSession(
            user_id=row.user_id, role=row.role, logged_in_at=as_utc(row.logged_in_at)
        )

    def save(self, session: LoginSession) -> LoginSession:
        """Insert or replace the marker for this user."""
        try:
            self.db.merge(
                LoginSessionModel(
                    user_id=session.user_id,
                    role=session.role,
                    logged_in_at=session.logged_in_at,
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return session

    def delete(self, user_id: str) -> bool:
        row = self.db.get(LoginSessionModel, user_id)
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return True
