"""
Accès aux données pour la feature 'payments' (table orders).
Contrairement aux lectures catalogue, les erreurs d'écriture ne sont pas absorbées:
une commande non persistée après débit doit remonter jusqu'à l'appelant.
"""
from typing import Any, Dict
import logging
import storefront.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

# module storefront.payments.repository
def insert_order(order: Dict[str, Any]) -> Dict[str, Any]:
    """Insère une commande via service-role et renvoie la ligne créée."""
    try:
        res = (
            supabase_client.get_service_supabase()
            .table("orders")
            .insert(order)
            .execute()
        )
    except Exception:
        logger.exception("payments.repository.insert_order failed buyer=%s", order.get("buyer"))
        raise
    rows = getattr(res, "data", None) or []
    return rows[0] if isinstance(rows, list) and rows else dict(order)
