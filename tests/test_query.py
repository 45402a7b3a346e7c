"""
Tests for the Query-String Builder

The REST store expects:
- _sort/_order for ordering
- _limit/_page for pagination
- plain key=value pairs for filters
"""

import pytest

from bookgraph.errors import InvalidArgument
from bookgraph.services.query import MAX_PAGE_SIZE, build_query_string, split_order_by


class TestSplitOrderBy:
    def test_simple_field(self):
        assert split_order_by("title_asc") == ("title", "asc")

    def test_camel_case_field(self):
        assert split_order_by("createdAt_desc") == ("createdAt", "desc")

    def test_field_with_underscores_keeps_everything_before_last(self):
        assert split_order_by("published_on_desc") == ("published_on", "desc")

    def test_no_direction(self):
        assert split_order_by("name") == ("name", None)


class TestBuildQueryString:
    def test_empty_params(self):
        assert build_query_string({}) == ""

    def test_full_example(self):
        query = build_query_string(
            {"limit": 10, "page": 2, "order_by": "title_asc", "genre": "FANTASY"}
        )
        assert query == "?_sort=title&_order=asc&_limit=10&_page=2&genre=FANTASY"

    def test_page_defaults_to_one(self):
        assert build_query_string({"limit": 5, "page": None}) == "?_limit=5&_page=1"

    def test_missing_limit_leaves_page_size_to_the_store(self):
        assert build_query_string({"limit": None, "page": 3}) == "?_page=3"

    def test_filters_only_are_not_paginated(self):
        assert build_query_string({"bookId": 3, "userId": 1}) == "?bookId=3&userId=1"

    def test_none_filters_are_skipped(self):
        assert build_query_string({"genre": None, "title": "Mort"}) == "?title=Mort"

    def test_filter_values_are_encoded(self):
        assert build_query_string({"q": "Le Guin & co"}) == "?q=Le%20Guin%20%26%20co"

    def test_maximum_page_size_is_allowed(self):
        query = build_query_string({"limit": MAX_PAGE_SIZE, "page": 1})
        assert query == "?_limit=100&_page=1"

    def test_page_size_over_maximum_is_rejected(self):
        with pytest.raises(InvalidArgument) as exc_info:
            build_query_string({"limit": MAX_PAGE_SIZE + 1})

        assert exc_info.value.message == "Maximum of 100 results per page"
        assert exc_info.value.extensions == {"code": "BAD_USER_INPUT"}
