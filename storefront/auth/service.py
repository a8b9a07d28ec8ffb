import re

from storefront.auth import repository
from storefront.auth.models import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    fail,
    handle_exception,
    public_user,
)
from storefront.utils.passwords import hash_password, compare_password
from storefront.utils.tokens import issue_token

EMAIL_PATTERN = re.compile(r".@.+")
PROFILE_PASSWORD_MIN_LENGTH = 6

# --- Cas d'usage Auth exposés ---

def register(req: RegisterRequest) -> AuthResponse:
    """Inscription:
    - Champs requis, dans l'ordre: name, email (format), password, phone, address, answer (400)
    - Email déjà utilisé: 409
    - Stocke le hash bcrypt, jamais le mot de passe en clair
    """
    required = [
        (req.name, "Name is Required"),
        (req.email, "Email is Required"),
    ]
    for value, message in required:
        if not value:
            return fail(400, message)
    if not EMAIL_PATTERN.search(req.email):
        return fail(400, "Invalid Email")
    for value, message in [
        (req.password, "Password is Required"),
        (req.phone, "Phone no is Required"),
        (req.address, "Address is Required"),
        (req.answer, "Answer is Required"),
    ]:
        if not value:
            return fail(400, message)

    try:
        if repository.get_user_by_email(req.email):
            return fail(409, "Already Register please login")
        row = repository.create_user({
            "name": req.name,
            "email": req.email,
            "phone": req.phone,
            "address": req.address,
            "password": hash_password(req.password),
            "answer": req.answer,
        })
        return AuthResponse(True, status_code=201, message="User Register Successfully", user=public_user(row))
    except Exception:
        return handle_exception("register", "Error in Registration")

def login(req: LoginRequest) -> AuthResponse:
    """Connexion:
    - 401 si email/mot de passe absent, email inconnu ou mot de passe invalide
    - Succès: profil public + JWT (claim _id)
    """
    if not req.email or not req.password:
        return fail(401, "Invalid email or password")
    try:
        user = repository.get_user_by_email(req.email)
        if not user:
            return fail(401, "Email is not registered")
        if not compare_password(req.password, user.get("password")):
            return fail(401, "Invalid Password")
        token = issue_token(user["id"])
        return AuthResponse(True, message="login successfully", user=public_user(user), token=token)
    except Exception:
        return handle_exception("login", "Error in login")

def forgot_password(req: ForgotPasswordRequest) -> AuthResponse:
    """Réinitialisation par question secrète: (email, answer) doivent correspondre à un compte."""
    if not req.email:
        return fail(400, "Email is required")
    if not req.answer:
        return fail(400, "Answer is required")
    if not req.new_password:
        return fail(400, "New Password is required")
    try:
        user = repository.get_user_by_email_and_answer(req.email, req.answer)
        if not user:
            return fail(401, "Wrong Email Or Answer")
        repository.update_user(user["id"], {"password": hash_password(req.new_password)})
        return AuthResponse(True, message="Password Reset Successfully")
    except Exception:
        return handle_exception("forgot_password", "Something went wrong")

def update_profile(user_id: str, req: ProfileUpdateRequest) -> AuthResponse:
    """Mise à jour du profil:
    - Mot de passe requis (>= 6 caractères) et re-haché
    - Les autres champs absents gardent leur valeur stockée
    """
    if not req.password or len(req.password) < PROFILE_PASSWORD_MIN_LENGTH:
        return fail(400, "Password is required and 6 character long")
    try:
        current = repository.get_user_by_id(user_id) or {}
        updated = repository.update_user(user_id, {
            "name": req.name or current.get("name"),
            "answer": req.answer or current.get("answer"),
            "email": req.email or current.get("email"),
            "password": hash_password(req.password),
            "phone": req.phone or current.get("phone"),
            "address": req.address or current.get("address"),
        })
        return AuthResponse(True, message="Profile Updated Successfully", user=public_user(updated) if updated else None)
    except Exception:
        return handle_exception("update_profile", "Error While Update profile")
