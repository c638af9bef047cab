"""Tests for the naming transforms (schemascaffold.naming).

Covers:
- pascal/camel/snake/kebab casing, including acronyms and digits
- decapitalize and its idempotence over pascal_case
- suffix-rule pluralization and caller-supplied overrides
- route names and the per-collection name set
"""

from __future__ import annotations

import pytest

from schemascaffold.naming import (
    CollectionNames,
    camel_case,
    decapitalize,
    json_field_name,
    kebab_case,
    pascal_case,
    pluralize,
    route_name,
    snake_case,
    split_words,
)

pytestmark = pytest.mark.unit

IDENTIFIERS = [
    "order",
    "Order",
    "order_item",
    "order-item",
    "OrderItem",
    "orderItem",
    "HTTPServer",
    "user_names",
    "v2Api",
    "a",
    "ORDER",
]


class TestSplitWords:
    def test_separators(self):
        assert split_words("order_item-line item") == ["order", "item", "line", "item"]

    def test_case_boundaries(self):
        assert split_words("OrderItem") == ["Order", "Item"]

    def test_acronym(self):
        assert split_words("HTTPServer") == ["HTTP", "Server"]

    def test_digits(self):
        assert split_words("v2Api") == ["v", "2", "Api"]


class TestPascalCase:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("order", "Order"),
            ("order_item", "OrderItem"),
            ("order-item", "OrderItem"),
            ("orderItem", "OrderItem"),
            ("OrderItem", "OrderItem"),
            ("HTTPServer", "HttpServer"),
            ("ORDER", "Order"),
        ],
    )
    def test_values(self, value, expected):
        assert pascal_case(value) == expected

    @pytest.mark.parametrize("value", IDENTIFIERS)
    def test_idempotent(self, value):
        once = pascal_case(value)
        assert pascal_case(once) == once


class TestDecapitalize:
    def test_lowers_first_letter_only(self):
        assert decapitalize("OrderItem") == "orderItem"

    def test_empty(self):
        assert decapitalize("") == ""

    @pytest.mark.parametrize("value", IDENTIFIERS)
    def test_decapitalize_of_pascal_is_stable(self, value):
        once = decapitalize(pascal_case(value))
        twice = decapitalize(pascal_case(once))
        assert once == twice
        assert decapitalize(once) == once


class TestOtherCases:
    def test_camel_case(self):
        assert camel_case("placed_at") == "placedAt"
        assert camel_case("PlacedAt") == "placedAt"

    def test_json_field_name(self):
        assert json_field_name("id") == "id"
        assert json_field_name("created_at") == "createdAt"
        assert json_field_name("placedAt") == "placedAt"

    def test_snake_case(self):
        assert snake_case("OrderItem") == "order_item"
        assert snake_case("order-item") == "order_item"
        assert snake_case("HTTPServer") == "http_server"

    def test_kebab_case(self):
        assert kebab_case("OrderItem") == "order-item"
        assert kebab_case("order_item") == "order-item"


class TestPluralize:
    @pytest.mark.parametrize(
        "word, expected",
        [
            ("Order", "Orders"),
            ("Address", "Addresses"),
            ("Box", "Boxes"),
            ("Match", "Matches"),
            ("Wish", "Wishes"),
            ("Quiz", "Quizes"),
            ("Category", "Categories"),
            ("Day", "Days"),
            ("OrderItem", "OrderItems"),
            ("order_item", "order_items"),
            ("SalesCategory", "SalesCategories"),
        ],
    )
    def test_suffix_rules(self, word, expected):
        assert pluralize(word) == expected

    def test_empty(self):
        assert pluralize("") == ""

    def test_all_caps_suffix(self):
        assert pluralize("URL") == "URLS"

    def test_irregular_without_override_uses_heuristic(self):
        assert pluralize("Person") == "Persons"

    def test_override(self):
        overrides = {"person": "people"}
        assert pluralize("Person", overrides) == "People"
        assert pluralize("person", overrides) == "people"

    def test_override_applies_to_last_word(self):
        assert pluralize("SalesPerson", {"Person": "People"}) == "SalesPeople"

    def test_override_not_applied_to_other_words(self):
        assert pluralize("PersonRecord", {"person": "people"}) == "PersonRecords"


class TestRouteName:
    def test_simple(self):
        assert route_name("Order") == "orders"

    def test_multi_word(self):
        assert route_name("order_item") == "order-items"
        assert route_name("OrderItem") == "order-items"

    def test_with_override(self):
        assert route_name("Person", {"person": "people"}) == "people"


class TestCollectionNames:
    def test_derive(self):
        names = CollectionNames.derive("order_item")
        assert names.name == "OrderItem"
        assert names.name_decap == "orderItem"
        assert names.name_plural == "OrderItems"
        assert names.name_plural_decap == "orderItems"
        assert names.json == "order_item"
        assert names.json_plural == "order_items"
        assert names.route == "order-items"

    def test_same_for_every_spelling(self):
        assert CollectionNames.derive("order_item") == CollectionNames.derive("OrderItem")

    def test_rederiving_from_name_is_idempotent(self):
        first = CollectionNames.derive("line_item")
        assert CollectionNames.derive(first.name) == first

    def test_overrides(self):
        names = CollectionNames.derive("Person", {"person": "people"})
        assert names.name_plural == "People"
        assert names.json_plural == "people"
        assert names.route == "people"
