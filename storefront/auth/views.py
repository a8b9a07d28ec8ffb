from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from storefront.utils.security import require_user, require_admin
from storefront.utils.rate_limit import optional_rate_limit
from storefront.orders import service as orders_service
from .models import (
    ForgotPasswordRequest,
    LoginRequest,
    OrderStatusRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)
from .service import (
    register as svc_register,
    login as svc_login,
    forgot_password as svc_forgot_password,
    update_profile as svc_update_profile,
)

logger = logging.getLogger(__name__)

# --- API Router (/api/v1/auth) ---

api_router = APIRouter(prefix="/api/v1/auth", tags=["Auth API"])

def _error_body(message: str, error: Any) -> Dict[str, Any]:
    return {"success": False, "message": message, "error": str(error)}

@api_router.post("/register", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def api_register(req: RegisterRequest):
    """Inscription (201 en cas de succès, 400/409/500 sinon)."""
    result = svc_register(req)
    return JSONResponse(result.to_body(), status_code=result.status_code)

@api_router.post("/login", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def api_login(req: LoginRequest):
    """Point d'entrée de connexion (API JSON).
    - Applique un rate limit (5 requêtes par 60 secondes via la dépendance).
    - Retourne {success, message, user, token}; le token est à renvoyer dans l'en-tête Authorization.
    """
    result = svc_login(req)
    return JSONResponse(result.to_body(), status_code=result.status_code)

@api_router.post("/forgot-password")
def api_forgot_password(req: ForgotPasswordRequest):
    result = svc_forgot_password(req)
    return JSONResponse(result.to_body(), status_code=result.status_code)

@api_router.get("/test")
def api_test(_: dict = Depends(require_admin)):
    return "Protected Routes"

@api_router.get("/user-auth")
def api_user_auth(_: dict = Depends(require_user)):
    return {"ok": True}

@api_router.get("/admin-auth")
def api_admin_auth(_: dict = Depends(require_admin)):
    return {"ok": True}

@api_router.put("/profile")
def api_update_profile(req: ProfileUpdateRequest, user: dict = Depends(require_user)):
    result = svc_update_profile(user.get("_id"), req)
    if not result.success:
        return JSONResponse(result.to_body(), status_code=result.status_code)
    return {"success": True, "message": result.message, "updatedUser": result.user}

# --- Commandes (délèguent au module orders) ---

@api_router.get("/orders")
def api_orders(user: dict = Depends(require_user)):
    try:
        return orders_service.list_buyer_orders(user.get("_id"))
    except Exception as e:
        logger.exception("Erreur lecture commandes acheteur")
        return JSONResponse(_error_body("Error WHile Geting Orders", e), status_code=500)

@api_router.get("/all-orders")
def api_all_orders(_: dict = Depends(require_admin)):
    try:
        return orders_service.list_all_orders()
    except Exception as e:
        logger.exception("Erreur lecture commandes (admin)")
        return JSONResponse(_error_body("Error While Getting Orders", e), status_code=500)

@api_router.put("/order-status/{order_id}")
def api_order_status(order_id: str, req: OrderStatusRequest, _: dict = Depends(require_admin)):
    try:
        return orders_service.update_order_status(order_id, req.status)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur mise à jour statut commande id=%s", order_id)
        return JSONResponse(_error_body("Error While Updating Order", e), status_code=500)
