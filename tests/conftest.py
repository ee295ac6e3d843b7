"""Test configuration and fixtures."""

import os
import sys
import tempfile

# Settings are cached on first use, so the environment must be ready before any import
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="ats-logs-"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from ats_api.core.db import Base, get_db_session  # noqa: E402
from ats_api.core.security import (  # noqa: E402
    create_refresh_token,
    create_xsrf_token,
    hash_password,
)
from ats_api.main import app  # noqa: E402
from ats_api.models.candidate import Candidate, Interview, Process, Qualification  # noqa: E402
from ats_api.models.client import Client  # noqa: E402
from ats_api.models.enums import Contract, ProcessStatus  # noqa: E402
from ats_api.models.offer import Offer  # noqa: E402
from ats_api.models.user import User  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def test_db():
    """Create a test database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(test_db):
    """Create a test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db_session] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD


@pytest.fixture
def test_user(db_session) -> User:
    """A registered user whose password is ``TEST_PASSWORD``."""
    user = User(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password=hash_password(TEST_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user) -> dict[str, str]:
    """Cookie and XSRF header of a freshly issued token pair for ``test_user``."""
    xsrf_token = create_xsrf_token()
    refresh_token = create_refresh_token(test_user.id, xsrf_token)
    return {
        "cookie": f"Authorization={refresh_token.token}",
        "x-xsrf-token": xsrf_token.token,
    }


@pytest.fixture
def seeded(db_session, test_user):
    """A small hiring pipeline: two recruiters, two clients, three offers, two candidates."""
    grace = User(
        first_name="Grace",
        last_name="Hopper",
        email="grace@example.com",
        password=hash_password(TEST_PASSWORD),
    )
    db_session.add(grace)
    db_session.flush()

    acme = Client(name="Acme", phone="0102030405", account_manager=test_user)
    globex = Client(name="Globex Corp", phone="0607080910", account_manager=grace)
    db_session.add_all([acme, globex])
    db_session.flush()

    backend = Offer(
        job="Backend developer",
        annual_salary=45000,
        contract_type=Contract.PERMANENT.value,
        owner=acme,
        referrer=test_user,
    )
    intern = Offer(
        job="Data intern",
        annual_salary=12000,
        contract_type=Contract.INTERNSHIP.value,
        owner=acme,
        referrer=grace,
    )
    ops = Offer(
        job="Ops engineer",
        annual_salary=52000,
        contract_type=Contract.FIXED.value,
        owner=globex,
        referrer=None,
    )
    db_session.add_all([backend, intern, ops])
    db_session.flush()

    qualification = Qualification(rank=3)
    alice = Candidate(
        name="Alice Martin",
        email="alice@example.com",
        resume="10 years of Python",
        referrer=test_user,
        qualification=qualification,
    )
    bob = Candidate(name="Bob Durand", email="bob@example.org", resume="", referrer=grace)
    db_session.add_all([qualification, alice, bob])
    db_session.flush()

    db_session.add_all(
        [
            Process(candidate=alice, offer=backend, status=ProcessStatus.SELECTED.value),
            Process(candidate=bob, offer=ops),
            Interview(candidate=alice, recruiter=test_user, comments="Strong on SQL"),
        ]
    )
    db_session.commit()

    return {
        "users": {"ada": test_user, "grace": grace},
        "clients": {"acme": acme, "globex": globex},
        "offers": {"backend": backend, "intern": intern, "ops": ops},
        "candidates": {"alice": alice, "bob": bob},
    }
