"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite, foreign keys on)
- Seed companies and jobs
- FastAPI test client
- Admin and regular-user bearer tokens
"""

import os

# Must be set before jobboard.core.config is imported
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["JSON_LOGS"] = "false"

import pytest
from fastapi.testclient import TestClient

from jobboard.core.database import Base, SessionLocal, engine, get_db
from jobboard.core.security import create_access_token
from jobboard.crud import company as company_crud
from jobboard.crud import job as job_crud
from jobboard.models import Company, Job  # noqa: F401  Register tables on Base
from main import app


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded(db_session):
    """
    Three companies with one job each.

    c1/job1 has zero equity, c2/job2 and c3/job3 have positive equity.
    """
    for n in (1, 2, 3):
        company_crud.create(
            db_session,
            handle=f"c{n}",
            name=f"C{n}",
            description=f"Desc{n}",
            num_employees=n,
            logo_url=f"http://c{n}.img",
        )

    job_crud.create(db_session, title="job1", salary=100001, equity="0", company_handle="c1")
    job_crud.create(db_session, title="job2", salary=100002, equity="0.2", company_handle="c2")
    job_crud.create(db_session, title="job3", salary=100003, equity="0.3", company_handle="c3")
    return db_session


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": "admin", "is_admin": True})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    token = create_access_token({"sub": "u1", "is_admin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "hugger",
        "salary": 2000000,
        "equity": "0",
        "companyHandle": "c2",
    }
