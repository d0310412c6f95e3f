from typing import Generic, List, TypeVar

from users_api.model.users import CamelModel

T = TypeVar("T")


class Page(CamelModel, Generic[T]):
    list: List[T]
    page_current: int
    page_size: int
    page_count: int


def page_count(total: int, page_size: int) -> int:
    return -(-total // page_size)
