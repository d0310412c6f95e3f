import logging
from typing import Dict, Optional

from users_api.core.errors import DuplicateKeyError, InvalidRangeError
from users_api.model.pagination import Page, page_count
from users_api.model.users import (
    CreateUserRequest,
    User,
    UserStatus,
    UserUpdate,
    utc_now_iso,
)
from users_api.repositories.interface import UserRepository

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepository):
    """Dict-Based Async Implementation of UserRepository Interface

    Records are kept in insertion order, which is also the order used for
    pagination. None of the methods await between reading and writing the
    store, so each call is atomic on the event loop.
    """

    def __init__(self):
        self._store: Dict[str, User] = {}

    async def get_all(self, page_current: int, page_size: int) -> Page[User]:
        if page_current < 1:
            raise InvalidRangeError("pageCurrent", page_current)
        if page_size < 1:
            raise InvalidRangeError("pageSize", page_size)

        users = list(self._store.values())
        offset = (page_current - 1) * page_size
        return Page[User](
            list=[user.model_copy(deep=True) for user in users[offset : offset + page_size]],
            page_current=page_current,
            page_size=page_size,
            page_count=page_count(len(users), page_size),
        )

    async def get_by_username(self, username: str) -> Optional[User]:
        user = self._store.get(username)
        if user is None:
            return None
        return user.model_copy(deep=True)

    async def create(self, payload: CreateUserRequest) -> User:
        if payload.username in self._store:
            raise DuplicateKeyError(payload.username)

        ts = utc_now_iso()
        user = User(
            username=payload.username,
            first_name=payload.first_name,
            last_name=payload.last_name,
            status=UserStatus.ACTIVE,
            logins_counter=0,
            creation_time=ts,
            last_update_time=ts,
        )
        self._store[user.username] = user
        logger.debug("Stored user %s", user.username)

        return user.model_copy(deep=True)

    async def update(self, username: str, payload: UserUpdate) -> Optional[User]:
        user = self._store.get(username)
        if user is None:
            return None

        if payload.first_name is not None:
            user.first_name = payload.first_name
        if payload.last_name is not None:
            user.last_name = payload.last_name
        if payload.status is not None:
            user.status = payload.status
        if payload.logins_counter is not None:
            user.logins_counter = payload.logins_counter

        # never move backwards, even if the wall clock does
        user.last_update_time = max(utc_now_iso(), user.last_update_time)

        return user.model_copy(deep=True)

    async def remove(self, username: str) -> bool:
        return self._store.pop(username, None) is not None

    async def clear_all(self) -> None:
        self._store.clear()

    async def count(self) -> int:
        return len(self._store)
