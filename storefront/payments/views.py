from typing import Any, Dict

from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import JSONResponse

from storefront.utils.security import require_user
from storefront.utils.rate_limit import optional_rate_limit
from storefront.payments import service as payments_service
from storefront.payments.errors import PaymentError
from storefront.payments.gateway import BraintreePaymentGateway, get_payment_gateway

router = APIRouter(prefix="/api/v1/product/braintree", tags=["Payments API"])

# module storefront.payments.views
@router.post("/token")
async def braintree_token(gateway: BraintreePaymentGateway = Depends(get_payment_gateway)):
    """
    Génère un client token Braintree pour le widget de paiement (Drop-in).
    - Pas d'authentification requise
    - 200 {clientToken, success} ou 500 avec l'erreur brute de la passerelle
    """
    try:
        token = await gateway.generate_client_token()
    except PaymentError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return JSONResponse({"clientToken": token, "success": True})

@router.post("/payment", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def braintree_payment(
    request: Request,
    user: Dict[str, Any] = Depends(require_user),
    gateway: BraintreePaymentGateway = Depends(get_payment_gateway),
):
    """
    Débite le panier de l'acheteur authentifié puis enregistre la commande.
    - Entrée JSON: { "nonce": "<nonce Braintree>", "cart": [ {"_id": ..., "price": <number>, ...}, ... ] }
    - 400: nonce manquant, panier vide, prix absent/non numérique/négatif (passerelle jamais appelée)
    - 500: erreur transport, transaction refusée, écriture commande échouée après débit
    - 200: {"ok": true}
    """
    try:
        body = await request.json()
    except Exception:
        body = None
    if not isinstance(body, dict):
        body = {}

    try:
        return await payments_service.process_payment(
            nonce=body.get("nonce"),
            cart=body.get("cart"),
            buyer_id=user.get("_id"),
            gateway=gateway,
        )
    except PaymentError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
