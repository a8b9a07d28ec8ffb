from typing import Optional, Dict, Any
import logging
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Champs optionnels: la validation (et ses messages) est faite par le service, dans l'ordre attendu par le client
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    answer: Optional[str] = None

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None
    answer: Optional[str] = None
    new_password: Optional[str] = Field(default=None, alias="newPassword")

    model_config = {"populate_by_name": True}

class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    answer: Optional[str] = None

class OrderStatusRequest(BaseModel):
    status: Optional[str] = None


class AuthResponse:
    def __init__(
        self,
        success: bool,
        status_code: int = 200,
        message: Optional[str] = None,
        user: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ):
        self.success = success
        self.status_code = status_code
        self.message = message
        self.user = user
        self.token = token

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": self.success, "message": self.message}
        if self.user is not None:
            body["user"] = self.user
        if self.token is not None:
            body["token"] = self.token
        return body

def public_user(row: Dict[str, Any] | None) -> Dict[str, Any]:
    """Projection publique d'une ligne users (jamais le hash ni la réponse secrète)."""
    row = row or {}
    return {
        "_id": row.get("id"),
        "name": row.get("name"),
        "email": row.get("email"),
        "phone": row.get("phone"),
        "address": row.get("address"),
        "role": row.get("role", 0),
    }

def fail(status_code: int, message: str) -> AuthResponse:
    return AuthResponse(False, status_code=status_code, message=message)

def handle_exception(action: str, message: str) -> AuthResponse:
    logger.exception(f"Erreur {action}")
    return AuthResponse(False, status_code=500, message=message)
