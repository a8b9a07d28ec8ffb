"""Accès aux données (Supabase) pour la table categories: id, name, slug.
Lectures via le client anon, écritures via service-role. Les erreurs sont propagées.
"""
from typing import Any, Dict, List, Optional
import logging
from storefront.infra.supabase_client import get_supabase, get_service_supabase

logger = logging.getLogger(__name__)

def _first(res) -> Optional[dict]:
    rows = getattr(res, "data", None) or []
    return rows[0] if isinstance(rows, list) and rows else None

def list_categories() -> List[dict]:
    res = get_supabase().table("categories").select("*").order("name").execute()
    return res.data or []

def get_category_by_slug(slug: str) -> Optional[dict]:
    res = get_supabase().table("categories").select("*").eq("slug", slug).limit(1).execute()
    return _first(res)

def get_category_by_name(name: str) -> Optional[dict]:
    res = get_supabase().table("categories").select("*").eq("name", name).limit(1).execute()
    return _first(res)

def create_category(data: Dict[str, Any]) -> dict:
    try:
        res = get_service_supabase().table("categories").insert(data).execute()
    except Exception:
        logger.exception("categories.repository.create_category failed data=%s", data)
        raise
    return _first(res) or dict(data)

def update_category(category_id: str, data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = get_service_supabase().table("categories").update(data).eq("id", category_id).execute()
    except Exception:
        logger.exception("categories.repository.update_category failed id=%s", category_id)
        raise
    return _first(res)

def delete_category(category_id: str) -> Optional[dict]:
    try:
        res = get_service_supabase().table("categories").delete().eq("id", category_id).execute()
    except Exception:
        logger.exception("categories.repository.delete_category failed id=%s", category_id)
        raise
    return _first(res)
