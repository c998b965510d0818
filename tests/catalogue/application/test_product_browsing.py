"""Application tests for catalogue browsing over the repository."""

import json

import pytest
from catalogue.product.browsing import get_product, list_all_products, list_products, list_vendor_products
from catalogue.product.creation import CreateProduct
from catalogue.shared.errors import InvalidArgument, NotFound
from protean.utils.globals import current_domain

CATALOGUE = [
    ("Trail Running Shoe", 120.0, "Footwear", 4, "seller-a"),
    ("Road Running Shoe", 90.0, "Footwear", 0, "seller-a"),
    ("Rain Jacket", 150.0, "Outerwear", 7, "seller-b"),
    ("Wool Socks", 15.0, "Footwear", 40, "seller-b"),
]


def _seed(rows):
    ids = {}
    for name, price, category, stock, seller in rows:
        command = CreateProduct(
            name=name,
            description=f"{name} description",
            price=price,
            category=category,
            stock=stock,
            seller_id=seller,
            images=json.dumps([f"https://example.com/{name}.jpg"]),
        )
        ids[name] = current_domain.process(command, asynchronous=False)
    return ids


@pytest.fixture()
def seeded():
    return _seed(CATALOGUE)


def _names(page):
    return sorted(p.name for p in page.items)


class TestListProducts:
    def test_no_parameters(self, seeded):
        page = list_products({})

        assert page.count == 4
        assert page.matched == 4
        assert page.page_number == 1
        assert page.page_size == 10
        assert page.total_pages == 1
        assert len(page.items) == 4

    def test_keyword_is_case_insensitive(self, seeded):
        page = list_products({"keyword": "RUNNING"})

        assert _names(page) == ["Road Running Shoe", "Trail Running Shoe"]
        assert page.count == 4
        assert page.matched == 2

    def test_exact_filter(self, seeded):
        assert _names(list_products({"category": "Outerwear"})) == ["Rain Jacket"]

    def test_range_filter_from_bracket_keys(self, seeded):
        page = list_products({"price[gte]": "90", "price[lt]": "150"})
        assert _names(page) == ["Road Running Shoe", "Trail Running Shoe"]

    def test_integer_field_range(self, seeded):
        assert _names(list_products({"stock[gt]": "5"})) == ["Rain Jacket", "Wool Socks"]

    def test_keyword_and_filters_combine(self, seeded):
        assert _names(list_products({"keyword": "shoe", "stock[gte]": "1"})) == ["Trail Running Shoe"]

    def test_pagination(self, seeded):
        first = list_products({"limit": "3"})
        second = list_products({"limit": "3", "page": "2"})

        assert len(first.items) == 3
        assert len(second.items) == 1
        assert second.page_number == 2
        assert second.total_pages == 2
        assert {p.id for p in first.items}.isdisjoint({p.id for p in second.items})

    def test_page_past_the_end_is_empty(self, seeded):
        page = list_products({"page": "9"})

        assert page.items == []
        assert page.matched == 4

    def test_non_numeric_page_falls_back_to_first(self, seeded):
        assert list_products({"page": "first"}).page_number == 1

    def test_unknown_field_matches_nothing(self, seeded):
        page = list_products({"color": "red"})

        assert page.items == []
        assert page.matched == 0
        assert page.count == 4

    def test_bracketed_reserved_key_is_not_a_filter(self, seeded):
        page = list_products({"page[gt]": "1"})

        assert page.matched == 4
        assert len(page.items) == 4

    def test_unsupported_operator_is_ignored(self, seeded):
        assert list_products({"price[ne]": "15"}).matched == 4

    def test_invalid_numeric_operand(self, seeded):
        with pytest.raises(InvalidArgument):
            list_products({"price[gt]": "cheap"})

    @pytest.mark.parametrize("limit", ["0", "-3", "ten"])
    def test_invalid_limit(self, seeded, limit):
        with pytest.raises(InvalidArgument):
            list_products({"limit": limit})


class TestListVendorProducts:
    def test_scoped_to_vendor(self, seeded):
        page = list_vendor_products("seller-b", {})

        assert _names(page) == ["Rain Jacket", "Wool Socks"]
        assert page.count == 2

    def test_vendor_scope_with_filters(self, seeded):
        page = list_vendor_products("seller-a", {"price[lt]": "100"})

        assert _names(page) == ["Road Running Shoe"]
        assert page.count == 2
        assert page.matched == 1


class TestSingleAndAll:
    def test_get_product(self, seeded):
        assert get_product(seeded["Rain Jacket"]).name == "Rain Jacket"

    def test_get_missing_product(self):
        with pytest.raises(NotFound):
            get_product("missing")

    def test_list_all_products(self, seeded):
        assert sorted(p.name for p in list_all_products()) == sorted(row[0] for row in CATALOGUE)


class TestKeywordWildcards:
    @pytest.fixture()
    def punctuated(self, seeded):
        return _seed(
            [
                ("100% Wool Socks", 18.0, "Footwear", 12, "seller-b"),
                ("snake_case Mug", 9.0, "Kitchen", 3, "seller-a"),
            ]
        )

    def test_percent_matches_literally(self, punctuated):
        page = list_products({"keyword": "%"})

        assert _names(page) == ["100% Wool Socks"]
        assert page.matched == 1

    def test_underscore_matches_literally(self, punctuated):
        assert _names(list_products({"keyword": "_"})) == ["snake_case Mug"]

    def test_percent_inside_a_term(self, punctuated):
        assert _names(list_products({"keyword": "100% wool"})) == ["100% Wool Socks"]
