"""Couche d'accès aux données (Supabase) pour les comptes: table users.
Colonnes: id, name, email, password (hash bcrypt), phone, address, answer, role (0 = client, 1 = admin), created_at.
Les lectures passent par la clé de service (la colonne password n'est pas exposée au client anon).
Les erreurs Supabase sont journalisées puis propagées: l'appelant décide du code HTTP.
"""
from typing import Any, Dict, Optional
import logging
from storefront.infra.supabase_client import get_service_supabase

logger = logging.getLogger(__name__)

def _first(res) -> Optional[dict]:
    rows = getattr(res, "data", None) or []
    return rows[0] if isinstance(rows, list) and rows else None

def get_user_by_email(email: str) -> Optional[dict]:
    if not email:
        return None
    try:
        res = get_service_supabase().table("users").select("*").eq("email", email).limit(1).execute()
    except Exception:
        logger.exception("auth.repository.get_user_by_email failed email=%s", email)
        raise
    return _first(res)

def get_user_by_id(user_id: str) -> Optional[dict]:
    if not user_id:
        return None
    try:
        res = get_service_supabase().table("users").select("*").eq("id", user_id).limit(1).execute()
    except Exception:
        logger.exception("auth.repository.get_user_by_id failed id=%s", user_id)
        raise
    return _first(res)

def get_user_by_email_and_answer(email: str, answer: str) -> Optional[dict]:
    try:
        res = (
            get_service_supabase()
            .table("users")
            .select("*")
            .eq("email", email)
            .eq("answer", answer)
            .limit(1)
            .execute()
        )
    except Exception:
        logger.exception("auth.repository.get_user_by_email_and_answer failed email=%s", email)
        raise
    return _first(res)

def create_user(data: Dict[str, Any]) -> dict:
    try:
        res = get_service_supabase().table("users").insert(data).execute()
    except Exception:
        logger.exception("auth.repository.create_user failed email=%s", data.get("email"))
        raise
    return _first(res) or dict(data)

def update_user(user_id: str, data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = get_service_supabase().table("users").update(data).eq("id", user_id).execute()
    except Exception:
        logger.exception("auth.repository.update_user failed id=%s", user_id)
        raise
    return _first(res)
