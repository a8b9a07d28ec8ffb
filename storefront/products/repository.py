"""Accès aux données (Supabase) pour la table products.
Colonnes: id, name, slug, description, price, category (fk categories.id), quantity, shipping,
photo (base64), photo_content_type, created_at, updated_at.
Les listes n'incluent jamais la photo; elle est servie par get_product_photo.
"""
from typing import Any, Dict, List, Optional
import logging
from storefront.config import PRODUCTS_PER_PAGE
from storefront.infra.supabase_client import get_supabase, get_service_supabase

logger = logging.getLogger(__name__)

# category:categories(...) remplace l'id de catégorie par la ligne complète
PRODUCT_COLUMNS = (
    "id, name, slug, description, price, quantity, shipping, created_at, updated_at, "
    "category:categories(id, name, slug)"
)

def _rows(res) -> List[dict]:
    rows = getattr(res, "data", None) or []
    return rows if isinstance(rows, list) else []

def _first(res) -> Optional[dict]:
    rows = _rows(res)
    return rows[0] if rows else None

def _without_photo(row: Optional[dict]) -> Optional[dict]:
    if row is None:
        return None
    return {k: v for k, v in row.items() if k not in ("photo", "photo_content_type")}

def list_latest_products(limit: int = 12) -> List[dict]:
    res = (
        get_supabase()
        .table("products")
        .select(PRODUCT_COLUMNS)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return _rows(res)

def get_product_by_slug(slug: str) -> Optional[dict]:
    res = get_supabase().table("products").select(PRODUCT_COLUMNS).eq("slug", slug).limit(1).execute()
    return _first(res)

def get_product_photo(product_id: str) -> Optional[dict]:
    res = (
        get_supabase()
        .table("products")
        .select("photo, photo_content_type")
        .eq("id", product_id)
        .limit(1)
        .execute()
    )
    return _first(res)

def create_product(data: Dict[str, Any]) -> dict:
    try:
        res = get_service_supabase().table("products").insert(data).execute()
    except Exception:
        logger.exception("products.repository.create_product failed name=%s", data.get("name"))
        raise
    return _without_photo(_first(res) or dict(data))

def update_product(product_id: str, data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = get_service_supabase().table("products").update(data).eq("id", product_id).execute()
    except Exception:
        logger.exception("products.repository.update_product failed id=%s", product_id)
        raise
    return _without_photo(_first(res))

def delete_product(product_id: str) -> Optional[dict]:
    try:
        res = get_service_supabase().table("products").delete().eq("id", product_id).execute()
    except Exception:
        logger.exception("products.repository.delete_product failed id=%s", product_id)
        raise
    return _without_photo(_first(res))

def filter_products(category_ids: List[str], price_range: List[float]) -> List[dict]:
    query = get_supabase().table("products").select(PRODUCT_COLUMNS)
    if category_ids:
        query = query.in_("category", category_ids)
    if len(price_range) >= 2:
        query = query.gte("price", price_range[0]).lte("price", price_range[1])
    return _rows(query.execute())

def count_products() -> int:
    res = get_supabase().table("products").select("id", count="exact").execute()
    return getattr(res, "count", None) or 0

def list_products_page(page: int, per_page: int = PRODUCTS_PER_PAGE) -> List[dict]:
    start = (page - 1) * per_page
    res = (
        get_supabase()
        .table("products")
        .select(PRODUCT_COLUMNS)
        .order("created_at", desc=True)
        .range(start, start + per_page - 1)
        .execute()
    )
    return _rows(res)

def _quote_filter_value(value: str) -> str:
    # Valeur entre guillemets: virgules, points et parenthèses ne découpent plus le filtre or=(...)
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'

def search_products(keyword: str) -> List[dict]:
    # imatch: expression régulière insensible à la casse (PostgREST ~*)
    quoted = _quote_filter_value(keyword)
    res = (
        get_supabase()
        .table("products")
        .select(PRODUCT_COLUMNS)
        .or_(f"name.imatch.{quoted},description.imatch.{quoted}")
        .execute()
    )
    return _rows(res)

def related_products(product_id: str, category_id: str, limit: int = 3) -> List[dict]:
    res = (
        get_supabase()
        .table("products")
        .select(PRODUCT_COLUMNS)
        .eq("category", category_id)
        .neq("id", product_id)
        .limit(limit)
        .execute()
    )
    return _rows(res)

def products_in_category(category_id: str) -> List[dict]:
    res = get_supabase().table("products").select(PRODUCT_COLUMNS).eq("category", category_id).execute()
    return _rows(res)
