# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale de l'API storefront.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, Braintree, JWT)
- Expose la sécurité HTTP (CORS/hosts, HSTS) et les réglages du hachage
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _int_env(name: str, default: int) -> int:
    try:
        return int(_clean_env(os.getenv(name)) or default)
    except ValueError:
        return default

# Supabase: URLs et clés (anon pour les lectures, service pour les écritures)
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or "")
SUPABASE_ANON = _clean_env(os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# Braintree: passerelle de paiement (sandbox par défaut)
BRAINTREE_ENVIRONMENT = _clean_env(os.getenv("BRAINTREE_ENVIRONMENT") or "sandbox").lower()
BRAINTREE_MERCHANT_ID = _clean_env(os.getenv("BRAINTREE_MERCHANT_ID") or "")
BRAINTREE_PUBLIC_KEY = _clean_env(os.getenv("BRAINTREE_PUBLIC_KEY") or "")
BRAINTREE_PRIVATE_KEY = _clean_env(os.getenv("BRAINTREE_PRIVATE_KEY") or "")

# Jetons de session (JWT HS256) et hachage des mots de passe
JWT_SECRET = _clean_env(os.getenv("JWT_SECRET") or "")
JWT_ALGORITHM = "HS256"
JWT_EXPIRES_DAYS = _int_env("JWT_EXPIRES_DAYS", 7)
BCRYPT_ROUNDS = _int_env("BCRYPT_ROUNDS", 10)

# Sécurité HTTP
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

# Limites catalogue
PRODUCT_PHOTO_MAX_BYTES = 1_000_000
PRODUCTS_PER_PAGE = 6
