"""
Couche service du catalogue produits.

- Valide les champs du formulaire multipart dans l'ordre attendu par le client
- Stocke la photo en base64 avec son type MIME
- Les prix du catalogue ne sont pas relus lors du paiement (le total vient du panier)
Chaque fonction renvoie (status_code, body) pour la vue.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import base64
import logging

from storefront.config import PRODUCT_PHOTO_MAX_BYTES
from storefront.products import repository
from storefront.categories import repository as categories_repository
from storefront.utils.slugs import slugify

logger = logging.getLogger(__name__)

Result = Tuple[int, Dict[str, Any]]

PHOTO_REQUIRED = "Photo is Required and should be less then 1mb"

@dataclass(frozen=True)
class ProductPhoto:
    data: bytes
    content_type: Optional[str] = None

@dataclass
class ProductForm:
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[str] = None
    shipping: Optional[str] = None

def _error(message: str, exc: Exception, status_code: int = 500) -> Result:
    return status_code, {"success": False, "message": message, "error": str(exc)}

def validate_product_form(form: ProductForm, photo: Optional[ProductPhoto]) -> Optional[str]:
    """Retourne le premier message d'erreur, ou None si le formulaire est complet."""
    if photo is None:
        return PHOTO_REQUIRED
    for value, message in (
        (form.name, "Name is Required"),
        (form.description, "Description is Required"),
        (form.price, "Price is Required"),
        (form.category, "Category is Required"),
        (form.quantity, "Quantity is Required"),
    ):
        if not value:
            return message
    if not photo.data or len(photo.data) > PRODUCT_PHOTO_MAX_BYTES:
        return PHOTO_REQUIRED
    return None

def _product_row(form: ProductForm, photo: ProductPhoto) -> Dict[str, Any]:
    now = datetime.now(timezone.utc).isoformat()
    return {
        "name": form.name,
        "slug": slugify(form.name),
        "description": form.description,
        "price": float(form.price),
        "category": form.category,
        "quantity": int(form.quantity),
        "shipping": (form.shipping or "").strip().lower() in ("1", "true", "yes"),
        "photo": base64.b64encode(photo.data).decode("ascii"),
        "photo_content_type": photo.content_type or "application/octet-stream",
        "updated_at": now,
    }

def create_product(form: ProductForm, photo: Optional[ProductPhoto]) -> Result:
    error = validate_product_form(form, photo)
    if error:
        return 500, {"error": error}
    try:
        product = repository.create_product(_product_row(form, photo))
        return 201, {"success": True, "message": "Product Created Successfully", "products": product}
    except Exception as e:
        logger.exception("Erreur création produit name=%s", form.name)
        return _error("Error in creating product", e)

def update_product(product_id: str, form: ProductForm, photo: Optional[ProductPhoto]) -> Result:
    if not product_id:
        return 400, {"success": False, "message": "Product ID is required"}
    error = validate_product_form(form, photo)
    if error:
        return 500, {"error": error}
    try:
        product = repository.update_product(product_id, _product_row(form, photo))
        if not product:
            return 404, {"success": False, "message": "Product not found"}
        return 201, {"success": True, "message": "Product Updated Successfully", "products": product}
    except Exception as e:
        logger.exception("Erreur mise à jour produit id=%s", product_id)
        return _error("Error in updating product", e)

def list_products() -> Result:
    try:
        products = repository.list_latest_products()
        return 200, {"success": True, "counTotal": len(products), "message": "All Products", "products": products}
    except Exception as e:
        logger.exception("Erreur lecture produits")
        return _error("Error in getting products", e)

def get_product(slug: str) -> Result:
    try:
        product = repository.get_product_by_slug(slug)
        return 200, {"success": True, "message": "Single Product Fetched", "product": product}
    except Exception as e:
        logger.exception("Erreur lecture produit slug=%s", slug)
        return _error("Error while getting single product", e)

def get_product_photo(product_id: str) -> Optional[ProductPhoto]:
    """Décode la photo stockée; None si le produit ou sa photo n'existe pas. Les erreurs store sont propagées."""
    row = repository.get_product_photo(product_id)
    if not row or not row.get("photo"):
        return None
    return ProductPhoto(base64.b64decode(row["photo"]), row.get("photo_content_type"))

def delete_product(product_id: str) -> Result:
    if not product_id:
        return 400, {"success": False, "message": "Product ID is required"}
    try:
        if not repository.delete_product(product_id):
            return 404, {"success": False, "message": "Product not found"}
        return 200, {"success": True, "message": "Product Deleted Successfully"}
    except Exception as e:
        logger.exception("Erreur suppression produit id=%s", product_id)
        return _error("Error while deleting product", e)

def filter_products(checked: List[str], radio: List[float]) -> Result:
    try:
        return 200, {"success": True, "products": repository.filter_products(checked or [], radio or [])}
    except Exception as e:
        logger.exception("Erreur filtrage produits")
        return _error("Error While Filtering Products", e, status_code=400)

def count_products() -> Result:
    try:
        return 200, {"success": True, "total": repository.count_products()}
    except Exception as e:
        logger.exception("Erreur comptage produits")
        return _error("Error in product count", e, status_code=400)

def list_products_page(page: int) -> Result:
    try:
        return 200, {"success": True, "products": repository.list_products_page(max(page, 1))}
    except Exception as e:
        logger.exception("Erreur pagination produits page=%s", page)
        return _error("Error in per page ctrl", e, status_code=400)

def search_products(keyword: str) -> Result:
    try:
        return 200, {"success": True, "results": repository.search_products(keyword)}
    except Exception as e:
        logger.exception("Erreur recherche produits keyword=%s", keyword)
        return _error("Error In Search Product API", e, status_code=400)

def related_products(product_id: str, category_id: str) -> Result:
    if not product_id or not category_id:
        return 400, {"success": False, "message": "Product ID and Category ID are required"}
    try:
        products = repository.related_products(product_id, category_id)
        if not products:
            return 200, {"success": True, "message": "No related products found", "products": []}
        return 200, {"success": True, "products": products}
    except Exception as e:
        logger.exception("Erreur produits similaires pid=%s cid=%s", product_id, category_id)
        return _error("Error while getting related products", e)

def products_by_category(slug: str) -> Result:
    if not slug:
        return 400, {"success": False, "message": "Category slug is required"}
    try:
        category = categories_repository.get_category_by_slug(slug)
        if not category:
            return 404, {"success": False, "message": "Category not found"}
        products = repository.products_in_category(category["id"])
        return 200, {"success": True, "category": category, "products": products}
    except Exception as e:
        logger.exception("Erreur produits par catégorie slug=%s", slug)
        return _error("Error while getting products", e)
