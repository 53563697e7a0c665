import pytest
from httpx import ASGITransport, AsyncClient

from shared.config.database import Base, build_engine
from shared.config.settings import JWTSettings, Settings
from shared.security import TokenService, TokenType

# Register every table on Base.metadata
from services.user_service import models as user_models  # noqa: F401
from services.catalog_service import models as catalog_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401

from services.user_service.main import create_user_app
from services.catalog_service.main import create_catalog_app
from services.order_service.main import create_order_app

TEST_JWT = JWTSettings(
    access_secret="test-access-secret",
    refresh_secret="test-refresh-secret",
    access_minutes=15,
    refresh_hours=1,
)


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt=TEST_JWT,
        env="test",
        bcrypt_rounds=4,
        metrics_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture
async def engine(settings):
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def token_service():
    return TokenService(TEST_JWT)


@pytest.fixture
def auth_headers(token_service):
    def make(user_id: int = 1):
        token = token_service.issue(user_id, TokenType.ACCESS).token
        return {"Authorization": f"Bearer {token}"}
    return make


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.fixture
async def user_app(settings, engine):
    return create_user_app(settings, engine)


@pytest.fixture
async def user_client(user_app):
    async with _client(user_app) as client:
        yield client


@pytest.fixture
async def catalog_client(settings, engine):
    async with _client(create_catalog_app(settings, engine)) as client:
        yield client


@pytest.fixture
async def order_client(settings, engine):
    async with _client(create_order_app(settings, engine)) as client:
        yield client
