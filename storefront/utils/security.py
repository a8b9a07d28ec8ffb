from fastapi import Request, HTTPException, Depends
from typing import Dict, Any
import logging
import jwt

from storefront.utils.tokens import decode_token

logger = logging.getLogger(__name__)

ADMIN_ROLE = 1

def extract_token(request: Request) -> str:
    """Accepte `Authorization: Bearer <jwt>` ou le jeton brut dans l'en-tête."""
    auth_header = (request.headers.get("Authorization") or "").strip()
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip()
    return auth_header

def get_current_user(request: Request) -> Dict[str, Any]:
    if not request.headers.get("Authorization"):
        raise HTTPException(status_code=401, detail="Access denied. No token provided")

    token = extract_token(request)
    try:
        claims = decode_token(token)
    except jwt.PyJWTError as e:
        logger.info("security.get_current_user rejected token: %s", e)
        raise HTTPException(status_code=401, detail="Invalid token")
    if not claims.get("_id"):
        raise HTTPException(status_code=401, detail="Invalid token")
    return claims

def require_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return user

def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """
    Vérifie le rôle admin contre la table users (le jeton ne porte que `_id`).
    - 401 si l'identité est absente, 404 si l'utilisateur n'existe plus, 401 si role != 1.
    """
    user_id = (user or {}).get("_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="User not authenticated")

    from storefront.auth import repository as users_repository
    try:
        record = users_repository.get_user_by_id(user_id)
    except Exception:
        logger.exception("security.require_admin lookup failed user_id=%s", user_id)
        raise HTTPException(status_code=500, detail="Error in admin middleware")

    if not record:
        raise HTTPException(status_code=404, detail="User not found")
    if record.get("role") != ADMIN_ROLE:
        raise HTTPException(status_code=401, detail="Unauthorized Access")
    return user
