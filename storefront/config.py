# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose la devise, l'URL du service d'intention de paiement et ses délais
- Sélectionne le fournisseur de paiement (mock ou Stripe en mode test)
- Normalise CORS/hosts et les limites de débit du checkout
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _float_env(name: str, default: str) -> float:
    try:
        return float(_clean_env(os.getenv(name, default)) or default)
    except ValueError:
        return float(default)

def _int_env(name: str, default: str) -> int:
    try:
        return int(_clean_env(os.getenv(name, default)) or default)
    except ValueError:
        return int(default)

# Devise des montants envoyés au service d'intention (unités mineures)
STORE_CURRENCY = _clean_env(os.getenv("STORE_CURRENCY") or "eur").lower()

# Service d'intention de paiement (externe, opaque)
PAYMENT_INTENT_URL = _clean_env(
    os.getenv("PAYMENT_INTENT_URL") or "http://127.0.0.1:8000/api/create-payment-intent"
)
INTENT_TIMEOUT_SECONDS = _float_env("INTENT_TIMEOUT_SECONDS", "5")
INTENT_MAX_ATTEMPTS = max(1, _int_env("INTENT_MAX_ATTEMPTS", "3"))
INTENT_BACKOFF_SECONDS = _float_env("INTENT_BACKOFF_SECONDS", "0.2")
INTENT_BACKOFF_MAX_SECONDS = _float_env("INTENT_BACKOFF_MAX_SECONDS", "2")

# Confirmation: délai dur côté fournisseur
CONFIRM_TIMEOUT_SECONDS = _float_env("CONFIRM_TIMEOUT_SECONDS", "15")

# Fournisseur de paiement: "mock" (démo) ou "stripe" (mode test)
PAYMENT_PROVIDER = _clean_env(os.getenv("PAYMENT_PROVIDER") or "mock").lower()
MOCK_CONFIRM_DELAY_SECONDS = _float_env("MOCK_CONFIRM_DELAY_SECONDS", "2")

# Stripe: clés publiques/privées (mode test uniquement)
STRIPE_PUBLIC_KEY = _clean_env(os.getenv("STRIPE_PUBLIC_KEY") or "")
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")

# Limite de débit sur le démarrage du checkout
CHECKOUT_RATE_LIMIT_TIMES = _int_env("CHECKOUT_RATE_LIMIT_TIMES", "10")
CHECKOUT_RATE_LIMIT_SECONDS = _int_env("CHECKOUT_RATE_LIMIT_SECONDS", "60")
