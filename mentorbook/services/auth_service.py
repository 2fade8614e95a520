import logging
from typing import Optional

from mentorbook.core.clock import Clock, utc_now
from mentorbook.core.exceptions import InvalidCredentialsError, UnauthorizedError
from mentorbook.core.security import PasswordHasher, PlaintextHasher
from mentorbook.domain.entities import LoginSession
from mentorbook.domain.entities import User as DomainUser
from mentorbook.domain.interfaces import ISessionRepository, IUserReader
from mentorbook.schemas.dtos import LoginRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Login/logout against the session registry.

    A session marker is keyed by user id. Logging in again simply replaces
    the marker; there is no expiry.
    """

    def __init__(
        self,
        user_repo: IUserReader,
        session_repo: ISessionRepository,
        hasher: Optional[PasswordHasher] = None,
        clock: Clock = utc_now,
    ) -> None:
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.hasher = hasher or PlaintextHasher()
        self.clock = clock

    def login(self, request: LoginRequest) -> DomainUser:
        """Authenticate by username and password and record a session marker.

        Raises:
            InvalidCredentialsError: For an unknown username or a wrong
                password alike
        """
        request.validate()

        user = self.user_repo.get_by_username(request.username)
        if user is None or not self.hasher.verify(request.password, user.password):
            logger.warning("Login failed")
            raise InvalidCredentialsError()

        self.session_repo.save(
            LoginSession(user_id=user.id, role=user.role, logged_in_at=self.clock())
        )
        logger.info("User logged in", extra={"context": {"user_id": user.id}})
        return user

    def logout(self, user_id: str) -> None:
        """Remove the user's session marker.

        Raises:
            UnauthorizedError: If the user has no active session
        """
        if not self.session_repo.delete(user_id):
            raise UnauthorizedError("User not logged in")
        logger.info("User logged out", extra={"context": {"user_id": user_id}})

    def get_session(self, user_id: str) -> Optional[LoginSession]:
        return self.session_repo.get(user_id)

    def is_logged_in(self, user_id: str) -> bool:
        return self.session_repo.get(user_id) is not None
