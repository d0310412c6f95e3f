import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from users_api.core.config import Settings
from users_api.main import create_app
from users_api.repositories.user_repo import InMemoryUserRepository
from users_api.services.user_service import UserService


@pytest.fixture
def repo():
    return InMemoryUserRepository()


@pytest.fixture
def service(repo):
    return UserService(repo)


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def app(settings, repo):
    return create_app(settings=settings, repository=repo)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
