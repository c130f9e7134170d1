"""Unit tests for query-string building and the ListQuery model."""

import pytest

from point_api.client import BaseApiClient
from point_api.models import ListQuery
from point_api.utils.query import handle_query_string, with_query


@pytest.mark.unit
class TestHandleQueryString:
    def test_falsy_values_are_dropped(self):
        query = {"a": 1, "b": 0, "c": "", "d": "x", "e": None, "f": False, "g": []}
        assert handle_query_string(query) == "a=1&d=x"

    def test_keys_keep_insertion_order(self):
        assert handle_query_string({"z": 1, "a": 2, "m": 3}) == "z=1&a=2&m=3"

    def test_values_are_form_encoded(self):
        assert handle_query_string({"_search": "a b&c"}) == "_search=a+b%26c"

    def test_sequences_are_comma_joined(self):
        assert handle_query_string({"_fields": ["id", "login"]}) == "_fields=id%2Clogin"

    def test_true_is_lowercase(self):
        assert handle_query_string({"active": True}) == "active=true"

    def test_none_and_empty_mapping(self):
        assert handle_query_string(None) == ""
        assert handle_query_string({}) == ""

    def test_exposed_on_client(self):
        assert BaseApiClient.handle_query_string({"_limit": 2}) == "_limit=2"


@pytest.mark.unit
class TestWithQuery:
    def test_empty_query_leaves_path(self):
        assert with_query("/users", {"_page": 0}) == "/users"

    def test_query_appended(self):
        assert with_query("/users", {"_limit": 2, "_page": 1}) == "/users?_limit=2&_page=1"


@pytest.mark.unit
class TestListQuery:
    def test_wire_names_and_joined_lists(self):
        query = ListQuery(limit=2, page=1, projection=["id", "login"], sort="-timeCreated")

        assert query.to_params() == {
            "_limit": 2,
            "_page": 1,
            "_fields": "id,login",
            "_sort": "-timeCreated",
        }

    def test_accepts_wire_names(self):
        query = ListQuery(_limit=5, _search="algebra")
        assert query.limit == 5
        assert query.search == "algebra"

    def test_filters_follow_declared_fields(self):
        query = ListQuery(limit=10, filters={"_from_timeCreated": "2024-01-01", "status": "new"})

        assert list(query.to_params()) == ["_limit", "_from_timeCreated", "status"]

    def test_model_renders_query_string(self):
        query = ListQuery(limit=2, page=1, projection="id,login", sort="-timeCreated")

        assert with_query("/users", query) == (
            "/users?_limit=2&_page=1&_fields=id%2Clogin&_sort=-timeCreated"
        )
