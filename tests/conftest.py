"""
Achievement API - Test Configuration and Fixtures
"""
import os
from datetime import date
from typing import AsyncGenerator, Optional

import pytest
from faker import Faker
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set testing environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DOCUMENT_STORAGE_TYPE"] = "local"
os.environ["LOG_FORMAT"] = "console"
os.environ["SENTRY_DSN"] = ""

from achievehub.api import deps
from achievehub.core.security import create_access_token, get_password_hash
from achievehub.db.base import Base
from achievehub.main import app
from achievehub.models import Achievement, Institution, Profile
from achievehub.services.storage_service import LocalDocumentStorage, get_document_storage
from achievehub.utils.constants import Role, VerificationStatus

fake = Faker()

TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def test_engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def storage(tmp_path) -> LocalDocumentStorage:
    return LocalDocumentStorage(str(tmp_path / "documents"), "/api/v1/documents")


@pytest.fixture
async def client(db_session: AsyncSession, storage) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and storage overrides"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[get_document_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def create_institution(db: AsyncSession, name: Optional[str] = None) -> Institution:
    institution = Institution(
        name=name or f"{fake.company()} University",
        email_domain=fake.domain_name(),
    )
    db.add(institution)
    await db.commit()
    return institution


async def create_profile(
    db: AsyncSession,
    role: Role,
    institution: Optional[Institution] = None,
    full_name: Optional[str] = None,
    email: Optional[str] = None,
) -> Profile:
    profile = Profile(
        email=(email or fake.unique.email()).lower(),
        password_hash=get_password_hash(TEST_PASSWORD),
        full_name=full_name or fake.name(),
        role=role.value,
        is_active=True,
    )
    if role == Role.STUDENT and institution is not None:
        profile.institution_id = institution.id
    if role == Role.ADMIN and institution is not None:
        profile.admin_institutions = [institution]
    db.add(profile)
    await db.commit()
    await db.refresh(profile, ["institution", "admin_institutions"])
    return profile


async def create_achievement(
    db: AsyncSession,
    student: Profile,
    title: str = "Dean's List",
    category: str = "Academic Excellence",
    date_achieved: date = date(2024, 5, 1),
    status: VerificationStatus = VerificationStatus.PENDING,
    description: Optional[str] = None,
) -> Achievement:
    achievement = Achievement(
        student_id=student.id,
        title=title,
        description=description,
        category=category,
        date_achieved=date_achieved,
        verification_status=status.value,
    )
    db.add(achievement)
    await db.commit()
    return achievement


def auth_headers_for(profile: Profile) -> dict:
    """Generate authentication headers for a profile"""
    token = create_access_token({"sub": str(profile.id), "role": profile.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def institution(db_session: AsyncSession) -> Institution:
    return await create_institution(db_session, "University of Technology")


@pytest.fixture
async def student(db_session: AsyncSession, institution: Institution) -> Profile:
    return await create_profile(db_session, Role.STUDENT, institution, full_name="Jane Doe")


@pytest.fixture
async def admin(db_session: AsyncSession, institution: Institution) -> Profile:
    return await create_profile(db_session, Role.ADMIN, institution, full_name="Alan Admin")


@pytest.fixture
async def recruiter(db_session: AsyncSession) -> Profile:
    return await create_profile(db_session, Role.RECRUITER, full_name="Rita Recruiter")


@pytest.fixture
async def super_admin(db_session: AsyncSession) -> Profile:
    return await create_profile(db_session, Role.SUPER_ADMIN, full_name="Sam Super")


@pytest.fixture
def student_headers(student: Profile) -> dict:
    return auth_headers_for(student)


@pytest.fixture
def admin_headers(admin: Profile) -> dict:
    return auth_headers_for(admin)


@pytest.fixture
def recruiter_headers(recruiter: Profile) -> dict:
    return auth_headers_for(recruiter)


@pytest.fixture
def super_admin_headers(super_admin: Profile) -> dict:
    return auth_headers_for(super_admin)
