from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select

from mentorbook.db.base import UserModel
from mentorbook.domain.entities import ROLE_MENTOR
from mentorbook.domain.entities import User as DomainUser
from mentorbook.domain.interfaces import IUserRepository

from .sequence import insert_with_seq


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserRepository(IUserRepository):
    """Repository for User persistence operations.

    Maps between domain entities and database models; callers never see
    a SQLAlchemy object.
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, user_id: str) -> Optional[DomainUser]:
        """Get user by ID, returning domain entity."""
        db_user = self.db.get(UserModel, user_id)
        return self._to_domain(db_user) if db_user else None

    def get_by_username(self, username: str) -> Optional[DomainUser]:
        """Get the earliest-registered user with this username."""
        db_user = self.db.scalars(
            select(UserModel)
            .filter_by(username=username)
            .order_by(UserModel.seq)
            .limit(1)
        ).first()
        return self._to_domain(db_user) if db_user else None

    def get_mentors_by_expertise(self, expertise: str) -> List[DomainUser]:
        """Get all mentors with exactly this expertise, in registration order."""
        db_users = self.db.scalars(
            select(UserModel)
            .filter_by(role=ROLE_MENTOR, expertise=expertise)
            .order_by(UserModel.seq)
        ).all()
        return [self._to_domain(db_user) for db_user in db_users]

    def create(self, user: DomainUser) -> DomainUser:
        """Insert a new user from domain entity."""
        db_user = UserModel(
            id=user.id,
            username=user.username,
            password=user.password,
            role=user.role,
            expertise=user.expertise,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        insert_with_seq(self.db, db_user, UserModel)
        self.db.refresh(db_user)
        return self._to_domain(db_user)

    def _to_domain(self, db_user: UserModel) -> DomainUser:
        """Convert database model to domain entity."""
        return DomainUser(
            id=db_user.id,
            username=db_user.username,
            password=db_user.password,
            role=db_user.role,
            expertise=db_user.expertise,
            created_at=as_utc(db_user.created_at),
            updated_at=as_utc(db_user.updated_at),
        )
