"""
Émission et vérification des jetons de session (JWT HS256).
Les claims portent l'identité de l'utilisateur sous la clé `_id`.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
import jwt

from storefront.config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRES_DAYS

def _secret() -> str:
    if not JWT_SECRET:
        raise RuntimeError("JWT_SECRET manquant")
    return JWT_SECRET

def issue_token(user_id: str, expires_in: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "_id": str(user_id),
        "iat": now,
        "exp": now + (expires_in or timedelta(days=JWT_EXPIRES_DAYS)),
    }
    return jwt.encode(claims, _secret(), algorithm=JWT_ALGORITHM)

def decode_token(token: str) -> Dict[str, Any]:
    """Vérifie signature + expiration; lève jwt.PyJWTError en cas d'échec."""
    return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
