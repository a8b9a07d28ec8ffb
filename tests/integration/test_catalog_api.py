import base64
import pytest
from unittest.mock import MagicMock

@pytest.fixture
def products(monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr("storefront.products.service.repository", fake)
    return fake

@pytest.fixture
def categories(monkeypatch):
    fake = MagicMock()
    monkeypatch.setattr("storefront.categories.service.repository", fake)
    return fake

def test_create_category_requires_admin(client):
    r = client.post("/api/v1/category/create-category", json={"name": "Books"})
    assert r.status_code == 401

def test_create_category(admin_client, categories):
    categories.get_category_by_name.return_value = None
    categories.create_category.side_effect = lambda data: dict(data, id="c1")
    r = admin_client.post("/api/v1/category/create-category", json={"name": "Books"})
    assert r.status_code == 201
    assert r.json()["category"] == {"id": "c1", "name": "Books", "slug": "books"}

def test_get_categories(client, categories):
    categories.list_categories.return_value = [{"id": "c1", "name": "Books", "slug": "books"}]
    r = client.get("/api/v1/category/get-category")
    assert r.status_code == 200
    assert r.json()["message"] == "All Categories List"

def test_create_product_multipart(admin_client, products):
    products.create_product.side_effect = lambda data: {"id": "p1", "name": data["name"], "slug": data["slug"]}
    r = admin_client.post(
        "/api/v1/product/create-product",
        data={"name": "Laptop", "description": "Fast", "price": "999", "category": "c1", "quantity": "2", "shipping": "1"},
        files={"photo": ("laptop.png", b"png-bytes", "image/png")},
    )
    assert r.status_code == 201
    assert r.json()["products"] == {"id": "p1", "name": "Laptop", "slug": "laptop"}
    row = products.create_product.call_args.args[0]
    assert base64.b64decode(row["photo"]) == b"png-bytes"

def test_create_product_without_photo(admin_client, products):
    r = admin_client.post("/api/v1/product/create-product", data={"name": "Laptop"})
    assert r.status_code == 500
    assert r.json() == {"error": "Photo is Required and should be less then 1mb"}
    products.create_product.assert_not_called()

def test_product_photo(client, products):
    products.get_product_photo.return_value = {"photo": base64.b64encode(b"img").decode(), "photo_content_type": "image/jpeg"}
    r = client.get("/api/v1/product/product-photo/p1")
    assert r.status_code == 200
    assert r.content == b"img"
    assert r.headers["content-type"] == "image/jpeg"

def test_product_count_and_list(client, products):
    products.count_products.return_value = 8
    products.list_products_page.return_value = [{"id": "p1"}]
    assert client.get("/api/v1/product/product-count").json() == {"success": True, "total": 8}
    assert client.get("/api/v1/product/product-list/2").json() == {"success": True, "products": [{"id": "p1"}]}
    products.list_products_page.assert_called_once_with(2)

def test_product_filters(client, products):
    products.filter_products.return_value = []
    r = client.post("/api/v1/product/product-filters", json={"checked": ["c1"], "radio": [0, 19.99]})
    assert r.status_code == 200
    products.filter_products.assert_called_once_with(["c1"], [0, 19.99])

def test_search(client, products):
    products.search_products.return_value = [{"id": "p1", "name": "Laptop"}]
    r = client.get("/api/v1/product/search/lap")
    assert r.json() == {"success": True, "results": [{"id": "p1", "name": "Laptop"}]}

def test_product_category_not_found(client, monkeypatch):
    monkeypatch.setattr("storefront.products.service.categories_repository.get_category_by_slug", lambda slug: None)
    r = client.get("/api/v1/product/product-category/unknown")
    assert r.status_code == 404
    assert r.json()["message"] == "Category not found"

def test_health(client):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/health/rate-limit").json()["enabled"] is False
