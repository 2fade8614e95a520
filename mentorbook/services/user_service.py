import logging
import uuid
from typing import Callable, List, Optional

from mentorbook.core.clock import Clock, utc_now
from mentorbook.core.exceptions import NotFoundError
from mentorbook.core.security import PasswordHasher, PlaintextHasher
from mentorbook.domain.entities import EXPERTISE_TAGS, ROLES
from mentorbook.domain.entities import User as DomainUser
from mentorbook.domain.interfaces import IUserRepository
from mentorbook.schemas.dtos import RegisterRequest, SearchRequest

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


class UserService:
    """Application service for the user directory.

    Depends on the IUserRepository abstraction, so the same rules run over
    the in-memory store in tests and the SQL store in production.
    """

    def __init__(
        self,
        repo: IUserRepository,
        hasher: Optional[PasswordHasher] = None,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self.repo = repo
        self.hasher = hasher or PlaintextHasher()
        self.clock = clock
        self.id_factory = id_factory

    def register(self, request: RegisterRequest) -> DomainUser:
        """Register a new mentor or mentee.

        Business Rules:
        - A fresh id and creation timestamp are assigned
        - Usernames are not required to be unique
        - Role and expertise are stored as given; values outside the known
          sets are accepted and only logged
        """
        request.validate()
        if request.role not in ROLES or (
            request.expertise is not None and request.expertise not in EXPERTISE_TAGS
        ):
            logger.warning(
                "Registering user with unrecognized role or expertise",
                extra={
                    "context": {"role": request.role, "expertise": request.expertise}
                },
            )

        user = DomainUser(
            id=self.id_factory(),
            username=request.username,
            password=self.hasher.hash(request.password),
            role=request.role,
            expertise=request.expertise,
            created_at=self.clock(),
            updated_at=None,
        )
        created = self.repo.create(user)

        logger.info(
            "User registered",
            extra={
                "context": {
                    "user_id": created.id,
                    "role": created.role,
                    "expertise": created.expertise,
                }
            },
        )
        return created

    def get_user(self, user_id: str) -> DomainUser:
        """Get user by ID or raise NotFoundError."""
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def find_by_username(self, username: str) -> Optional[DomainUser]:
        """First registered user with this username, if any."""
        return self.repo.get_by_username(username)

    def search_mentors(self, request: SearchRequest) -> List[DomainUser]:
        """Find mentors by expertise tag, case-insensitively.

        Raises:
            NotFoundError: If no mentor has that expertise
        """
        request.validate()
        mentors = self.repo.get_mentors_by_expertise(request.expertise)
        if not mentors:
            raise NotFoundError("Mentor(s) not found")
        return mentors
