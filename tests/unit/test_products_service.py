import base64
import pytest
from unittest.mock import MagicMock

from storefront.products import service
from storefront.products.service import PHOTO_REQUIRED, ProductForm, ProductPhoto

FORM = ProductForm(name="Laptop Pro", description="Fast", price="999.5", category="c1", quantity="3", shipping="true")
PHOTO = ProductPhoto(b"\x89PNG....", "image/png")

@pytest.fixture
def repo(monkeypatch):
    fake = MagicMock()
    fake.create_product.side_effect = lambda data: {k: v for k, v in data.items() if k != "photo"}
    monkeypatch.setattr(service, "repository", fake)
    return fake

def test_validation_order():
    assert service.validate_product_form(ProductForm(), None) == PHOTO_REQUIRED
    assert service.validate_product_form(ProductForm(), PHOTO) == "Name is Required"
    assert service.validate_product_form(ProductForm(name="n"), PHOTO) == "Description is Required"
    assert service.validate_product_form(ProductForm(name="n", description="d"), PHOTO) == "Price is Required"
    assert service.validate_product_form(ProductForm(name="n", description="d", price="1"), PHOTO) == "Category is Required"
    assert service.validate_product_form(ProductForm(name="n", description="d", price="1", category="c"), PHOTO) == "Quantity is Required"
    assert service.validate_product_form(FORM, ProductPhoto(b"")) == PHOTO_REQUIRED
    assert service.validate_product_form(FORM, ProductPhoto(b"x" * 1_000_001)) == PHOTO_REQUIRED
    assert service.validate_product_form(FORM, ProductPhoto(b"x" * 1_000_000)) is None

def test_create_product_stores_photo_base64(repo):
    status, body = service.create_product(FORM, PHOTO)

    assert status == 201
    assert body["message"] == "Product Created Successfully"
    row = repo.create_product.call_args.args[0]
    assert row["slug"] == "laptop-pro"
    assert row["price"] == 999.5
    assert row["quantity"] == 3
    assert row["shipping"] is True
    assert base64.b64decode(row["photo"]) == PHOTO.data
    assert row["photo_content_type"] == "image/png"

def test_create_product_validation_is_500(repo):
    assert service.create_product(ProductForm(), PHOTO) == (500, {"error": "Name is Required"})
    repo.create_product.assert_not_called()

def test_update_unknown_product(repo):
    repo.update_product.return_value = None
    status, body = service.update_product("p404", FORM, PHOTO)
    assert (status, body["message"]) == (404, "Product not found")

def test_delete_product(repo):
    repo.delete_product.return_value = None
    assert service.delete_product("p404")[0] == 404
    repo.delete_product.return_value = {"id": "p1"}
    assert service.delete_product("p1") == (200, {"success": True, "message": "Product Deleted Successfully"})

def test_get_product_photo_decodes(repo):
    repo.get_product_photo.return_value = {"photo": base64.b64encode(b"img").decode(), "photo_content_type": "image/jpeg"}
    assert service.get_product_photo("p1") == ProductPhoto(b"img", "image/jpeg")
    repo.get_product_photo.return_value = None
    assert service.get_product_photo("p1") is None

def test_related_products(repo):
    repo.related_products.return_value = []
    status, body = service.related_products("p1", "c1")
    assert body == {"success": True, "message": "No related products found", "products": []}
    assert service.related_products("", "c1")[0] == 400

def test_products_by_category(monkeypatch, repo):
    categories = MagicMock()
    categories.get_category_by_slug.return_value = None
    monkeypatch.setattr(service, "categories_repository", categories)
    assert service.products_by_category("unknown") == (404, {"success": False, "message": "Category not found"})

    categories.get_category_by_slug.return_value = {"id": "c1", "slug": "books"}
    repo.products_in_category.return_value = [{"id": "p1"}]
    status, body = service.products_by_category("books")
    assert status == 200
    repo.products_in_category.assert_called_once_with("c1")

def test_list_errors_use_400(repo):
    repo.count_products.side_effect = Exception("boom")
    status, body = service.count_products()
    assert (status, body["message"]) == (400, "Error in product count")
