"""
Business logic for users.

``UserService`` sits between the routes and a ``UserRepository``. It is
mostly a pass-through; the only policy it adds is that inactive users
cannot have their details changed or their logins counted.
"""

import asyncio
import logging
from typing import Optional

from users_api.core.errors import DuplicateKeyError, InactiveSubjectError
from users_api.model.pagination import Page
from users_api.model.users import (
    CreateUserRequest,
    UpdateUserDetailsRequest,
    UpdateUserStatusRequest,
    User,
    UserStatus,
    UserUpdate,
)
from users_api.repositories.interface import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repository: UserRepository):
        self._repo = repository
        # serialises read-check-write sequences across concurrent requests
        self._lock = asyncio.Lock()

    async def count(self) -> int:
        return await self._repo.count()

    async def get_all(self, page_current: int, page_size: int) -> Page[User]:
        return await self._repo.get_all(page_current, page_size)

    async def get_by_username(self, username: str) -> Optional[User]:
        """Returns the user, or ``None`` when not found."""
        return await self._repo.get_by_username(username)

    async def create(self, payload: CreateUserRequest) -> User:
        """Creates a user.

        Raises ``DuplicateKeyError`` when the username is taken.
        """
        try:
            user = await self._repo.create(payload)
        except DuplicateKeyError:
            logger.warning("Rejected duplicate username %s", payload.username)
            raise
        logger.info("Created user %s", user.username)
        return user

    async def update_user_details(
        self, username: str, payload: UpdateUserDetailsRequest
    ) -> Optional[User]:
        """Updates first/last name.

        Returns ``None`` when not found; raises ``InactiveSubjectError`` when
        the user is inactive.
        """
        async with self._lock:
            target = await self._repo.get_by_username(username)
            if target is None:
                return None
            self._ensure_active(target)

            user = await self._repo.update(
                username,
                UserUpdate(first_name=payload.first_name, last_name=payload.last_name),
            )
        logger.info("Updated details of user %s", username)
        return user

    async def update_user_status(
        self, username: str, payload: UpdateUserStatusRequest
    ) -> Optional[User]:
        """Sets the status; any transition is allowed. ``None`` when not found."""
        async with self._lock:
            user = await self._repo.update(username, UserUpdate(status=payload.status))
        if user is not None:
            logger.info("Set status of user %s to %s", username, user.status.value)
        return user

    async def increase_logins_counter(self, username: str) -> Optional[User]:
        """Adds one login.

        Returns ``None`` when not found; raises ``InactiveSubjectError`` when
        the user is inactive.
        """
        async with self._lock:
            target = await self._repo.get_by_username(username)
            if target is None:
                return None
            self._ensure_active(target)

            user = await self._repo.update(
                username, UserUpdate(logins_counter=target.logins_counter + 1)
            )
        logger.info("User %s logged in (%d logins)", username, user.logins_counter)
        return user

    async def remove(self, username: str) -> bool:
        """Removes a user. Returns whether it existed."""
        removed = await self._repo.remove(username)
        if removed:
            logger.info("Removed user %s", username)
        return removed

    @staticmethod
    def _ensure_active(user: User) -> None:
        if user.status == UserStatus.INACTIVE:
            logger.warning("Rejected change on inactive user %s", user.username)
            raise InactiveSubjectError(user.username)
