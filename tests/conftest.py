"""
Pytest configuration and fixtures
"""
import itertools
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-clinic-admin-suite-0123456789")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient

from clinic_admin.core.security import create_access_token, hash_password
from clinic_admin.database import build_engine, build_sessionmaker, get_db, init_db
from clinic_admin.main import app
from clinic_admin.models.user import UserRole
from clinic_admin.services.record_store import RecordStore

TEST_PASSWORD = "Secure@Pass1"


@pytest.fixture(scope="function")
async def db_engine(tmp_path):
    """File-backed SQLite so separate sessions see each other's commits"""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}")
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return build_sessionmaker(db_engine)


@pytest.fixture(scope="function")
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
def store(db_session):
    return RecordStore(db_session)


@pytest.fixture(scope="function")
async def client(session_factory):
    """HTTP client against the app, one fresh session per request"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """
    Create a committed user; customers and doctors also get a profile

    Extra keyword arguments go to the profile row.
    """
    counter = itertools.count(1)

    async def _make_user(role=UserRole.CUSTOMER, full_name=None, email=None, phone=None, **profile):
        n = next(counter)
        username = f"{role.value}{n}"
        async with session_factory() as session:
            store = RecordStore(session)
            async with store.atomic():
                user = await store.add_user(
                    username=username,
                    email=email or f"{username}@clinic.com",
                    password_hash=hash_password(TEST_PASSWORD),
                    role=role,
                    full_name=full_name or f"Test {role.value.capitalize()} {n}",
                    phone=phone,
                )
                if role == UserRole.CUSTOMER:
                    await store.add_customer(user.id, **profile)
                elif role == UserRole.DOCTOR:
                    profile.setdefault("license_number", f"LIC-{n:04d}")
                    await store.add_doctor(user.id, **profile)
        return user

    return _make_user


def auth_headers(user) -> dict:
    token = create_access_token({"sub": str(user.id), "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
