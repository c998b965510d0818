import pytest
from catalogue.search.params import MAX_PAGE_SIZE, QueryParameters, resolve_page_size
from catalogue.shared.errors import InvalidArgument


class TestParse:
    def test_reserved_keys_become_named_fields(self):
        params = QueryParameters.parse({"keyword": "shoe", "limit": "5", "page": "2", "color": "red"})

        assert params.keyword == "shoe"
        assert params.limit == "5"
        assert params.page == "2"
        assert params.filters == {"color": "red"}

    def test_empty_and_none_give_defaults(self):
        assert QueryParameters.parse({}) == QueryParameters()
        assert QueryParameters.parse(None) == QueryParameters()

    def test_parsed_parameters_pass_through(self):
        params = QueryParameters.parse({"color": "red"})
        assert QueryParameters.parse(params) is params

    def test_bracket_keys_fold_into_ranges(self):
        params = QueryParameters.parse({"price[gte]": "10", "price[lt]": "50"})
        assert params.filters == {"price": {"gte": "10", "lt": "50"}}

    def test_nested_mappings_are_kept(self):
        params = QueryParameters.parse({"price": {"gt": 100}})
        assert params.filters == {"price": {"gt": 100}}

    def test_nested_reserved_keys_are_not_stripped(self):
        params = QueryParameters.parse({"price[page]": "3", "page": "2"})

        assert params.page == "2"
        assert params.filters == {"price": {"page": "3"}}

    def test_bracketed_reserved_keys_are_dropped(self):
        params = QueryParameters.parse(
            {"page[gt]": "1", "keyword[x]": "a", "limit[lte]": "5", "color": "red"}
        )

        assert params.filters == {"color": "red"}
        assert params.page is None
        assert params.keyword is None
        assert params.limit is None

    def test_non_mapping_is_rejected(self):
        with pytest.raises(InvalidArgument):
            QueryParameters.parse(["keyword", "shoe"])

    def test_non_string_key_is_rejected(self):
        with pytest.raises(InvalidArgument):
            QueryParameters.parse({1: "x"})

    @pytest.mark.parametrize("key", ["price[gt", "price]gt[", "price[gt][x]", "[gt]"])
    def test_malformed_brackets_are_rejected(self, key):
        with pytest.raises(InvalidArgument):
            QueryParameters.parse({key: "1"})

    def test_exact_value_and_range_on_same_field_conflict(self):
        with pytest.raises(InvalidArgument) as exc_info:
            QueryParameters.parse({"price": "5", "price[gt]": "1"})
        assert "price" in exc_info.value.messages


class TestResolvePageSize:
    def test_missing_limit_uses_default(self):
        assert resolve_page_size(QueryParameters(), 10) == 10
        assert resolve_page_size(QueryParameters(limit=""), 10) == 10

    def test_integer_string_is_converted(self):
        assert resolve_page_size(QueryParameters(limit="25"), 10) == 25

    def test_large_limit_is_capped(self):
        assert resolve_page_size(QueryParameters(limit="5000"), 10) == MAX_PAGE_SIZE

    def test_unparseable_limit_is_passed_through(self):
        assert resolve_page_size(QueryParameters(limit="lots"), 10) == "lots"

    def test_non_positive_limit_is_passed_through_for_rejection(self):
        assert resolve_page_size(QueryParameters(limit="0"), 10) == 0
        assert resolve_page_size(QueryParameters(limit="-5"), 10) == -5
