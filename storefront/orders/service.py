"""Couche service des commandes: consultation acheteur/admin et workflow de statut.
Seul le champ `status` (et updated_at) d'une commande évolue après sa création.
"""
from datetime import datetime, timezone
from typing import Any, List, Optional
import logging

from fastapi import HTTPException

from storefront.orders import repository
from storefront.orders.models import OrderStatus

logger = logging.getLogger(__name__)

def list_buyer_orders(buyer_id: str) -> List[dict]:
    return repository.fetch_buyer_orders(buyer_id)

def list_all_orders() -> List[dict]:
    return repository.fetch_all_orders()

def update_order_status(order_id: Optional[str], status: Any) -> Optional[dict]:
    """Change le statut d'une commande.
    - 400 si order_id/status manquant ou si le statut n'appartient pas à OrderStatus
    - Retourne la ligne mise à jour (None si la commande n'existe pas)
    """
    if not order_id:
        raise HTTPException(status_code=400, detail="Order ID is required")
    if not status:
        raise HTTPException(status_code=400, detail="Status is required")
    if status not in OrderStatus.values():
        raise HTTPException(status_code=400, detail="Invalid order status")

    logger.info("orders.status order=%s status=%s", order_id, status)
    return repository.update_order(order_id, {
        "status": status,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    })
