"""
Adaptateur Braintree: centralise les appels à la passerelle de paiement.
Le SDK est bloquant; chaque appel est exécuté une seule fois dans un thread
et attendu, ce qui donne une issue unique par requête (succès, refus ou erreur).
"""
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import braintree
from fastapi import HTTPException, Request
from starlette.concurrency import run_in_threadpool

from storefront import config
from .errors import PaymentGatewayError, TransactionDeclinedError

logger = logging.getLogger(__name__)

TRANSACTION_FAILED = "Transaction failed"

_ENVIRONMENTS = {
    "sandbox": braintree.Environment.Sandbox,
    "production": braintree.Environment.Production,
}

# module storefront.payments.gateway
@dataclass(frozen=True)
class TransactionResult:
    success: bool
    transaction_id: Optional[str] = None
    status: Optional[str] = None
    amount: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_braintree(cls, result: Any) -> "TransactionResult":
        transaction = getattr(result, "transaction", None)
        amount = getattr(transaction, "amount", None)
        return cls(
            success=bool(getattr(result, "is_success", False)),
            transaction_id=getattr(transaction, "id", None),
            status=getattr(transaction, "status", None),
            amount=str(amount) if amount is not None else None,
            message=getattr(result, "message", None),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BraintreePaymentGateway:
    """
    Enveloppe un braintree.BraintreeGateway construit au démarrage (voir build_gateway).
    Injecté dans les vues via la dépendance get_payment_gateway; remplaçable en tests.
    """

    def __init__(self, gateway: braintree.BraintreeGateway):
        self._gateway = gateway

    async def generate_client_token(self) -> str:
        try:
            return await run_in_threadpool(self._gateway.client_token.generate, {})
        except Exception as e:
            logger.exception("payments.gateway.generate_client_token failed")
            raise PaymentGatewayError(str(e), original=e)

    async def charge(self, total: float, nonce: str) -> TransactionResult:
        """
        Soumet une vente avec règlement immédiat.
        - Erreur SDK/transport -> PaymentGatewayError (texte brut de l'erreur)
        - result.is_success faux -> TransactionDeclinedError(result.message ou "Transaction failed")
        """
        params = {
            "amount": total,
            "payment_method_nonce": nonce,
            "options": {"submit_for_settlement": True},
        }
        try:
            result = await run_in_threadpool(self._gateway.transaction.sale, params)
        except Exception as e:
            logger.exception("payments.gateway.charge transport error amount=%s", total)
            raise PaymentGatewayError(str(e), original=e)

        if not result or not getattr(result, "is_success", False):
            message = getattr(result, "message", None) or TRANSACTION_FAILED
            logger.warning("payments.gateway.charge declined amount=%s message=%s", total, message)
            raise TransactionDeclinedError(message)

        return TransactionResult.from_braintree(result)


def build_gateway(
    environment: Optional[str] = None,
    merchant_id: Optional[str] = None,
    public_key: Optional[str] = None,
    private_key: Optional[str] = None,
) -> BraintreePaymentGateway:
    """Construit la passerelle de production depuis la configuration (appelé une fois par le lifespan)."""
    environment = environment or config.BRAINTREE_ENVIRONMENT
    merchant_id = merchant_id or config.BRAINTREE_MERCHANT_ID
    public_key = public_key or config.BRAINTREE_PUBLIC_KEY
    private_key = private_key or config.BRAINTREE_PRIVATE_KEY
    if not (merchant_id and public_key and private_key):
        raise RuntimeError("Configuration Braintree incomplète (BRAINTREE_MERCHANT_ID/PUBLIC_KEY/PRIVATE_KEY)")
    env = _ENVIRONMENTS.get((environment or "").lower())
    if env is None:
        raise RuntimeError(f"BRAINTREE_ENVIRONMENT inconnu: {environment}")
    gateway = braintree.BraintreeGateway(
        braintree.Configuration(
            environment=env,
            merchant_id=merchant_id,
            public_key=public_key,
            private_key=private_key,
        )
    )
    return BraintreePaymentGateway(gateway)


def get_payment_gateway(request: Request) -> BraintreePaymentGateway:
    """
    Dépendance FastAPI: renvoie la passerelle construite par le lifespan (app.state.payment_gateway).
    Construite à la demande si le lifespan n'a pas pu le faire (config absente au démarrage).
    """
    gateway = getattr(request.app.state, "payment_gateway", None)
    if gateway is None:
        try:
            gateway = build_gateway()
        except Exception as e:
            logger.error("payments.gateway unavailable: %s", e)
            raise HTTPException(status_code=500, detail=str(e))
        request.app.state.payment_gateway = gateway
    return gateway
