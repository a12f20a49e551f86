from __future__ import annotations

import os
from urllib.parse import urlparse

# app.main builds the app at import time, so settings must resolve first.
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from asgi_lifespan import LifespanManager  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402

from app.core.security import hash_password  # noqa: E402
from app.core.settings import Settings, get_settings  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.deps import get_db_session  # noqa: E402
from app.db.models.instructor_code import InstructorCode  # noqa: E402
from app.db.models.user import User, UserRole  # noqa: E402
from app.db.session import create_engine, create_sessionmaker  # noqa: E402
from app.main import create_app  # noqa: E402


TEST_JWT_SECRET = "test-jwt-secret"
TEST_PASSWORD = "password-1234"


def _get_test_database_url(tmp_dir) -> str:
    url = os.getenv("TEST_DATABASE_URL")
    if not url:
        return f"sqlite+aiosqlite:///{tmp_dir / 'routines_test.db'}"

    # Safety check: MUST be a test database
    parsed = urlparse(url)
    db_name = (parsed.path or "").lstrip("/")
    if not db_name.endswith("_test"):
        raise RuntimeError(
            f"Refusing to run tests on non-test database '{db_name}'. "
            "TEST_DATABASE_URL must end with '_test'."
        )
    return url


@pytest.fixture(scope="session")
def test_database_url(tmp_path_factory) -> str:
    return _get_test_database_url(tmp_path_factory.mktemp("db"))


@pytest.fixture
def test_settings(test_database_url: str) -> Settings:
    return Settings(database_url=test_database_url, jwt_secret=TEST_JWT_SECRET)


@pytest_asyncio.fixture
async def db_engine(test_database_url: str) -> AsyncEngine:
    engine = create_engine(test_database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def db_sessionmaker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(db_engine)


@pytest.fixture
def app(test_settings: Settings, db_sessionmaker: async_sessionmaker[AsyncSession]):
    app = create_app()

    async def override_db_session():
        async with db_sessionmaker() as session:
            yield session

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_db_session] = override_db_session
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with LifespanManager(app):
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest_asyncio.fixture
async def db_session(db_sessionmaker: async_sessionmaker[AsyncSession]) -> AsyncSession:
    async with db_sessionmaker() as session:
        yield session


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Insert a user directly; instructors get the given access code."""

    async def _make_user(
        email: str,
        *,
        role: UserRole = UserRole.INSTRUCTOR,
        first_name: str = "Test",
        last_name: str = "User",
        instructor: User | None = None,
        code: str | None = None,
    ) -> User:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(TEST_PASSWORD),
            role=role,
            instructor_id=instructor.id if instructor is not None else None,
        )
        db_session.add(user)
        await db_session.commit()
        if code is not None:
            db_session.add(InstructorCode(instructor_id=user.id, code=code))
            await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def login(client):
    async def _login(email: str) -> dict[str, str]:
        res = await client.post("/auth/login", json={"email": email, "password": TEST_PASSWORD})
        assert res.status_code == 200
        return {"Authorization": f"Bearer {res.json()['accessToken']}"}

    return _login
