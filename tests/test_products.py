"""Tests for the category-scoped product listing."""

import math

from catalog_api.models.category import Category
from catalog_api.models.product import Product


def _names(response):
    return [item["name"] for item in response.json()["data"]]


def _get(client, **params):
    response = client.get("/api/products", params=params)
    assert response.status_code == 200
    return response


def test_lists_all_products_without_filter(client):
    body = _get(client).json()

    assert body["pagination"] == {"page": 1, "limit": 10, "total": 6, "totalPages": 1}
    assert [p["name"] for p in body["data"]] == [
        "Coffee",
        "Corn Chips",
        "Lemon Soda",
        "Orange Juice",
        "Potato Chips",
        "Tea",
    ]


def test_ancestor_category_includes_descendant_products(client):
    response = _get(client, categoryId="2")

    assert _names(response) == ["Corn Chips", "Potato Chips"]


def test_root_category_includes_whole_subtree(client):
    assert _names(_get(client, categoryId="1")) == ["Coffee", "Lemon Soda", "Orange Juice", "Tea"]
    assert _names(_get(client, categoryId="5")) == ["Lemon Soda", "Orange Juice"]


def test_leaf_category(client):
    assert _names(_get(client, categoryId="4")) == ["Coffee", "Tea"]


def test_comma_separated_and_repeated_ids(client):
    comma = _get(client, categoryId="4,8")
    repeated = client.get("/api/products?categoryId=4&categoryId=8")

    assert _names(comma) == ["Coffee", "Corn Chips", "Potato Chips", "Tea"]
    assert _names(repeated) == _names(comma)


def test_overlapping_selection_does_not_duplicate(client):
    body = _get(client, categoryId="1,3,6").json()

    assert body["pagination"]["total"] == 4


def test_path_prefix_requires_separator(client, db):
    db.add(Category(id=10, name="Other", parent_id=None, path="/10", level=0))
    db.add(Product(id=7, name="Stray", category_id=10))
    db.commit()

    assert "Stray" not in _names(_get(client, categoryId="1"))
    assert _names(_get(client, categoryId="10")) == ["Stray"]


def test_unknown_category_returns_nothing(client):
    body = _get(client, categoryId="999").json()

    assert body["data"] == []
    assert body["pagination"]["total"] == 0
    assert body["pagination"]["totalPages"] == 0


def test_keyword_is_case_insensitive_substring(client):
    assert _names(_get(client, keyword="cof")) == ["Coffee"]
    assert _names(_get(client, keyword="CHIPS")) == ["Corn Chips", "Potato Chips"]


def test_keyword_and_category_combine(client):
    assert _names(_get(client, categoryId="1", keyword="o")) == [
        "Coffee",
        "Lemon Soda",
        "Orange Juice",
    ]


def test_product_fields(client):
    potato = next(
        p for p in _get(client, categoryId="8").json()["data"] if p["name"] == "Potato Chips"
    )

    assert potato["id"] == 5
    assert potato["categoryId"] == 8
    assert potato["categoryName"] == "Chips"
    assert potato["categoryPath"] == "/2/7/8"
    assert potato["description"] is None
    assert "createdAt" in potato and "updatedAt" in potato
    assert potato["attributeValues"] == [
        {"attributeId": 3, "attributeName": "Size", "value": "Large"},
        {"attributeId": 4, "attributeName": "Weight", "value": "150"},
    ]


def test_product_without_values_has_empty_list(client):
    tea = next(p for p in _get(client, categoryId="4").json()["data"] if p["name"] == "Tea")

    assert tea["attributeValues"] == []


def test_sort_by_category_name(client):
    response = _get(client, sortBy="category")

    # Chips, Flavoured Drinks, Hot Drinks; ties by id
    assert [p["id"] for p in response.json()["data"]] == [5, 6, 1, 2, 3, 4]


def test_sort_desc(client):
    assert _names(_get(client, sortOrder="desc"))[0] == "Tea"


def test_invalid_sort_falls_back_to_name(client):
    assert _names(_get(client, sortBy="price", sortOrder="up")) == _names(_get(client))


def test_pagination(client):
    first = _get(client, limit="4").json()
    second = _get(client, limit="4", page="2").json()
    beyond = _get(client, limit="4", page="3").json()

    assert first["pagination"]["totalPages"] == math.ceil(6 / 4)
    assert len(first["data"]) == 4
    assert len(second["data"]) == 2
    assert beyond["data"] == []

    all_ids = [p["id"] for p in _get(client, limit="6").json()["data"]]
    assert [p["id"] for p in first["data"] + second["data"]] == all_ids
