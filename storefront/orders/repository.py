from typing import Any, Dict, List, Optional
from storefront.infra.supabase_client import get_service_supabase

# buyer:users(name) remplace l'id acheteur par {name} (équivalent d'un populate)
ORDER_COLUMNS = "id, products, payment, status, created_at, updated_at, buyer:users(name)"

def fetch_buyer_orders(buyer_id: str) -> List[dict]:
    """Commandes d'un acheteur, plus récentes d'abord."""
    res = (
        get_service_supabase()
        .table("orders")
        .select(ORDER_COLUMNS)
        .eq("buyer", buyer_id)
        .order("created_at", desc=True)
        .execute()
    )
    return res.data or []

def fetch_all_orders(limit: int = 100) -> List[dict]:
    """Toutes les commandes (admin), plus récentes d'abord."""
    res = (
        get_service_supabase()
        .table("orders")
        .select(ORDER_COLUMNS)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return res.data or []

def update_order(order_id: str, data: Dict[str, Any]) -> Optional[dict]:
    res = (
        get_service_supabase()
        .table("orders")
        .update(data)
        .eq("id", order_id)
        .execute()
    )
    rows = getattr(res, "data", None) or []
    return rows[0] if isinstance(rows, list) and rows else None
