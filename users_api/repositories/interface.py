from abc import ABC, abstractmethod
from typing import Optional

from users_api.model.pagination import Page
from users_api.model.users import CreateUserRequest, User, UserUpdate


class UserRepository(ABC):
    """
    An Async Repository Interface
    This is a contract, not an implementation.
    Implementations must hand out independent copies of stored records
    and must not keep references to the payloads they receive.
    """

    @abstractmethod
    async def get_all(self, page_current: int, page_size: int) -> Page[User]: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def create(self, payload: CreateUserRequest) -> User: ...

    @abstractmethod
    async def update(self, username: str, payload: UserUpdate) -> Optional[User]: ...

    @abstractmethod
    async def remove(self, username: str) -> bool: ...

    @abstractmethod
    async def clear_all(self) -> None: ...

    @abstractmethod
    async def count(self) -> int: ...
