"""
Unit tests for the partial-update SQL helpers.
"""

import re

import pytest

from jobboard.core.database import bind_positional
from jobboard.core.exceptions import EmptyUpdateError, InvalidFieldError
from jobboard.helpers.sql import build_set_fragment, restrict_fields


class TestBuildSetFragment:
    """Tests for build_set_fragment"""

    def test_translates_mapped_names(self):
        fragment, values = build_set_fragment(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )

        assert fragment == '"first_name"=$1, "age"=$2'
        assert values == ["Aliya", 32]

    def test_single_field(self):
        fragment, values = build_set_fragment({"salary": 5}, {"salary": "salary", "equity": "equity"})

        assert fragment == '"salary"=$1'
        assert values == [5]

    def test_placeholders_match_values_in_order(self):
        fields = {"e": 5, "d": 4, "c": 3, "b": 2, "a": 1}
        fragment, values = build_set_fragment(fields, {})

        placeholders = re.findall(r"\$(\d+)", fragment)
        assert placeholders == ["1", "2", "3", "4", "5"]
        assert values == [5, 4, 3, 2, 1]
        assert fragment.split(", ")[0] == '"e"=$1'

    def test_values_never_interpolated(self):
        fragment, values = build_set_fragment({"name": "x'; DROP TABLE jobs; --"}, {})

        assert "DROP" not in fragment
        assert values == ["x'; DROP TABLE jobs; --"]

    def test_null_values_are_bound(self):
        fragment, values = build_set_fragment({"salary": None, "equity": None}, {})

        assert fragment == '"salary"=$1, "equity"=$2'
        assert values == [None, None]

    @pytest.mark.parametrize("name_map", [{}, {"salary": "salary"}, {"a": "b"}])
    def test_empty_fields_rejected(self, name_map):
        with pytest.raises(EmptyUpdateError) as exc_info:
            build_set_fragment({}, name_map)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "No data"


class TestRestrictFields:
    """Tests for restrict_fields"""

    def test_allowed_fields_pass_through_in_order(self):
        fields = restrict_fields({"equity": "0.5", "salary": 5}, {"salary", "equity"})
        assert list(fields) == ["equity", "salary"]

    def test_unknown_fields_rejected(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            restrict_fields({"salary": 5, "title": "x", "company_handle": "c9"}, {"salary", "equity"})

        assert exc_info.value.fields == ["company_handle", "title"]
        assert "title" in exc_info.value.message

    def test_empty_is_allowed_here(self):
        assert restrict_fields({}, {"salary"}) == {}


class TestBindPositional:
    """Tests for the $n -> named bind rewrite used by database.execute"""

    def test_rewrites_placeholders(self):
        statement, params = bind_positional(
            "UPDATE jobs SET \"salary\"=$1 WHERE company_handle = $2", [5, "c1"]
        )

        assert statement == "UPDATE jobs SET \"salary\"=:p1 WHERE company_handle = :p2"
        assert params == {"p1": 5, "p2": "c1"}

    def test_multi_digit_indexes(self):
        values = list(range(12))
        sql = ", ".join(f"${i}" for i in range(1, 13))
        statement, params = bind_positional(sql, values)

        assert statement.endswith(":p10, :p11, :p12")
        assert params["p12"] == 11
