"""
Tests for the company repository.
"""

import pytest

from jobboard.core.exceptions import (
    BadRequestError,
    DuplicateError,
    EmptyUpdateError,
    InvalidFieldError,
    NotFoundError,
)
from jobboard.crud import company as company_crud
from jobboard.crud import job as job_crud


class TestCompanyCreate:

    def test_create(self, db_session):
        company = company_crud.create(
            db_session,
            handle="new",
            name="New",
            description="New Description",
            num_employees=1,
            logo_url="http://new.img",
        )

        assert company == {
            "handle": "new",
            "name": "New",
            "description": "New Description",
            "numEmployees": 1,
            "logoUrl": "http://new.img",
        }

    def test_duplicate_handle(self, seeded):
        with pytest.raises(DuplicateError):
            company_crud.create(seeded, handle="c1", name="Other", description="x")

    def test_duplicate_name(self, seeded):
        with pytest.raises(DuplicateError):
            company_crud.create(seeded, handle="c9", name="C1", description="x")

        assert [c["handle"] for c in company_crud.get_all(seeded)] == ["c1", "c2", "c3"]


class TestCompanyRead:

    def test_get_all_ordered_by_name(self, seeded):
        companies = company_crud.get_all(seeded)
        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]

    def test_get_includes_jobs(self, seeded):
        company = company_crud.get(seeded, "c2")

        assert company["name"] == "C2"
        assert company["numEmployees"] == 2
        assert company["jobs"] == [{"title": "job2", "salary": 100002, "equity": "0.2"}]

    def test_get_not_found(self, seeded):
        with pytest.raises(NotFoundError):
            company_crud.get(seeded, "nope")


class TestCompanyUpdate:

    def test_update_translates_column_names(self, seeded):
        company = company_crud.update(seeded, "c1", {"numEmployees": 10, "logoUrl": None, "name": "New"})

        assert company == {
            "handle": "c1",
            "name": "New",
            "description": "Desc1",
            "numEmployees": 10,
            "logoUrl": None,
        }

    def test_update_not_found(self, seeded):
        with pytest.raises(NotFoundError):
            company_crud.update(seeded, "nope", {"name": "x"})

    def test_update_empty(self, seeded):
        with pytest.raises(EmptyUpdateError):
            company_crud.update(seeded, "c1", {})

    def test_handle_not_updatable(self, seeded):
        with pytest.raises(InvalidFieldError):
            company_crud.update(seeded, "c1", {"handle": "c9"})

    def test_required_fields_cannot_be_cleared(self, seeded):
        for field in ("name", "description"):
            with pytest.raises(BadRequestError):
                company_crud.update(seeded, "c1", {field: None})

        company = company_crud.get(seeded, "c1")
        assert company["name"] == "C1"
        assert company["description"] == "Desc1"

    def test_duplicate_name(self, seeded):
        with pytest.raises(DuplicateError):
            company_crud.update(seeded, "c2", {"name": "C1"})

    def test_keep_own_name(self, seeded):
        company = company_crud.update(seeded, "c1", {"name": "C1", "numEmployees": 5})

        assert company["name"] == "C1"
        assert company["numEmployees"] == 5


class TestCompanyRemove:

    def test_remove_cascades_to_jobs(self, seeded):
        company_crud.remove(seeded, "c1")

        with pytest.raises(NotFoundError):
            company_crud.get(seeded, "c1")
        with pytest.raises(NotFoundError):
            job_crud.get(seeded, "c1")

    def test_remove_not_found(self, seeded):
        with pytest.raises(NotFoundError):
            company_crud.remove(seeded, "nope")
