"""
Cas d'usage 'payments': orchestre validation panier, passerelle et persistance.

Machine d'états par tentative de paiement:
  Received -> Validated -> Charging -> Settled -> Persisted
Sorties en échec (toutes terminales, aucune relance):
  RejectedInput, GatewayDeclined, GatewayError, PersistenceFailed
PersistenceFailed est le seul état où l'argent a déjà été débité sans commande enregistrée;
il est journalisé en CRITICAL mais ni annulé ni rejoué.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List
import logging

from storefront.orders.models import OrderStatus
from . import cart as cart_logic
from . import repository
from .errors import (
    CartValidationError,
    OrderPersistenceError,
    PaymentGatewayError,
    TransactionDeclinedError,
)
from .gateway import TransactionResult

logger = logging.getLogger(__name__)


class PaymentState(str, Enum):
    RECEIVED = "Received"
    VALIDATED = "Validated"
    CHARGING = "Charging"
    SETTLED = "Settled"
    PERSISTED = "Persisted"
    REJECTED_INPUT = "RejectedInput"
    GATEWAY_DECLINED = "GatewayDeclined"
    GATEWAY_ERROR = "GatewayError"
    PERSISTENCE_FAILED = "PersistenceFailed"


def _transition(buyer_id: str, state: PaymentState, **extra: Any) -> None:
    level = logging.INFO
    if state in (PaymentState.REJECTED_INPUT, PaymentState.GATEWAY_DECLINED, PaymentState.GATEWAY_ERROR):
        level = logging.WARNING
    elif state is PaymentState.PERSISTENCE_FAILED:
        level = logging.CRITICAL
    logger.log(level, "payments.state buyer=%s state=%s %s", buyer_id, state.value, extra or "")


def finalize_order(cart: List[Dict[str, Any]], transaction: TransactionResult, buyer_id: str) -> Dict[str, Any]:
    """
    Enregistre la commande après un débit réussi.
    - products: panier tel que soumis (pas de relecture catalogue)
    - payment: résultat de transaction tel quel
    - Toute erreur du store devient OrderPersistenceError; le débit n'est pas annulé.
    """
    now = datetime.now(timezone.utc).isoformat()
    order = {
        "products": cart,
        "payment": transaction.to_dict(),
        "buyer": buyer_id,
        "status": OrderStatus.NOT_PROCESS.value,
        "created_at": now,
        "updated_at": now,
    }
    try:
        return repository.insert_order(order)
    except Exception as e:
        raise OrderPersistenceError(str(e), original=e)


async def process_payment(*, nonce: Any, cart: Any, buyer_id: str, gateway) -> Dict[str, Any]:
    """
    Enchaîne validate_and_total -> gateway.charge -> finalize_order.
    Lève l'erreur de la première étape en échec (CartValidationError, PaymentGatewayError,
    TransactionDeclinedError, OrderPersistenceError); renvoie {"ok": True} sinon.
    """
    _transition(buyer_id, PaymentState.RECEIVED)
    try:
        priced = cart_logic.validate_and_total(nonce, cart)
    except CartValidationError as e:
        _transition(buyer_id, PaymentState.REJECTED_INPUT, reason=e.message)
        raise
    _transition(buyer_id, PaymentState.VALIDATED, total=priced.total, items=priced.item_count)

    _transition(buyer_id, PaymentState.CHARGING)
    try:
        transaction = await gateway.charge(priced.total, nonce)
    except TransactionDeclinedError as e:
        _transition(buyer_id, PaymentState.GATEWAY_DECLINED, reason=e.message)
        raise
    except PaymentGatewayError as e:
        _transition(buyer_id, PaymentState.GATEWAY_ERROR, reason=e.message)
        raise
    _transition(buyer_id, PaymentState.SETTLED, transaction_id=transaction.transaction_id)

    try:
        finalize_order(list(cart), transaction, buyer_id)
    except OrderPersistenceError as e:
        _transition(
            buyer_id,
            PaymentState.PERSISTENCE_FAILED,
            transaction_id=transaction.transaction_id,
            amount=priced.total,
            reason=e.message,
        )
        raise
    _transition(buyer_id, PaymentState.PERSISTED, transaction_id=transaction.transaction_id)
    return {"ok": True}
