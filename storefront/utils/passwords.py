"""
Hachage des mots de passe (bcrypt, salé).
- hash_password: hash one-way avec un coût configurable (BCRYPT_ROUNDS)
- compare_password: vérification d'un mot de passe en clair contre un hash stocké
"""
import logging
import bcrypt

from storefront.config import BCRYPT_ROUNDS

logger = logging.getLogger(__name__)

def _check_plain(password) -> str:
    if password is None:
        raise ValueError("Password cannot be null or undefined")
    if password == "":
        raise ValueError("Password cannot be empty")
    return str(password)

def hash_password(password) -> str:
    try:
        password_str = _check_plain(password)
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_str.encode("utf-8"), salt).decode("utf-8")
    except Exception as e:
        logger.error("Error hashing password: %s", e)
        raise

def compare_password(password, hashed_password) -> bool:
    try:
        if password is None:
            raise ValueError("Password cannot be null or undefined")
        if hashed_password is None:
            raise ValueError("Hashed password cannot be null or undefined")
        password_str = _check_plain(password)
        return bcrypt.checkpw(password_str.encode("utf-8"), str(hashed_password).encode("utf-8"))
    except Exception as e:
        logger.error("Error comparing passwords: %s", e)
        raise
