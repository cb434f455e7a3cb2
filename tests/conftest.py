import os
import sys
import tempfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

# Settings are read at import time; tests always run against the mock providers.
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-subsentinel-tests")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["OTP_PROVIDER"] = "mock"
os.environ["MOCK_OTP_CODE"] = "123456"
os.environ["IDENTITY_PROVIDER"] = "mock"
os.environ["PAYMENT_PROVIDER"] = "mock"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="subsentinel-uploads-")
os.environ["LOG_JSON"] = "false"

from subsentinel.api.deps import get_providers  # noqa: E402
from subsentinel.db.session import enable_sqlite_foreign_keys, get_db  # noqa: E402
from subsentinel.integrations import Providers  # noqa: E402
from subsentinel.integrations.identity import MockIdentityVerifier  # noqa: E402
from subsentinel.integrations.otp import MockOTPProvider  # noqa: E402
from subsentinel.integrations.payments import MockCheckoutProvider  # noqa: E402
from subsentinel.integrations.storage import LocalBlobStore  # noqa: E402
from subsentinel.main import app  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-password-123"


@pytest.fixture(scope="function")
async def test_engine():
    """Fresh engine per test; in-memory SQLite shares one connection through StaticPool."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        enable_sqlite_foreign_keys(engine.sync_engine)
    else:
        engine = create_async_engine(TEST_DATABASE_URL)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
async def setup_database(test_engine):
    """Create tables for tests that need the database, and drop them after.

    Not autouse, so pure unit tests run without a database.
    """
    import subsentinel.models  # noqa: F401
    from subsentinel.models.base import Base

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session(test_engine, setup_database):
    """Provide test database session with fresh connection per test."""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a phone-authenticated test user."""
    from subsentinel.models.user import User
    from subsentinel.repositories.user import UserRepository

    return await UserRepository(db_session).create(User(phone="+15550000001"))


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """A second user for ownership tests."""
    from subsentinel.models.user import User
    from subsentinel.repositories.user import UserRepository

    return await UserRepository(db_session).create(User(phone="+15550000002"))


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    from subsentinel.core.security import create_user_token

    return {"Authorization": f"Bearer {create_user_token(test_user.id)}"}


@pytest.fixture
async def other_auth_headers(other_user):
    from subsentinel.core.security import create_user_token

    return {"Authorization": f"Bearer {create_user_token(other_user.id)}"}


@pytest.fixture
async def admin(db_session: AsyncSession):
    """Seed the default admin account."""
    from subsentinel.repositories.admin import AdminRepository
    from subsentinel.services.seed import seed_default_admin

    await seed_default_admin(db_session, ADMIN_USERNAME, ADMIN_PASSWORD)
    return await AdminRepository(db_session).get_by_username(ADMIN_USERNAME)


@pytest.fixture
async def admin_headers(admin):
    from subsentinel.core.security import create_admin_token

    return {"Authorization": f"Bearer {create_admin_token(admin.id)}"}


@pytest.fixture
async def seeded_categories(db_session: AsyncSession):
    """Seed the default categories and return them."""
    from subsentinel.repositories.category import CategoryRepository
    from subsentinel.services.seed import seed_default_categories

    await seed_default_categories(db_session)
    return await CategoryRepository(db_session).get_defaults()


@pytest.fixture
def identity_verifier() -> MockIdentityVerifier:
    return MockIdentityVerifier()


@pytest.fixture
def providers(tmp_path, identity_verifier) -> Providers:
    return Providers(
        otp=MockOTPProvider("123456"),
        identity=identity_verifier,
        checkout=MockCheckoutProvider(),
        blobs=LocalBlobStore(tmp_path / "uploads", "http://test"),
    )


@pytest.fixture
async def client(db_session: AsyncSession, providers: Providers):
    """Provide test client with database and provider overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_providers] = lambda: providers

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
