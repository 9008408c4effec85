from typing import Any, Dict
from urllib.parse import urlparse

from storefront import config
from storefront.payments import stripe_client

def health_payments_info(provider_name: str) -> Dict[str, Any]:
    """
    État de la configuration paiement (sans appel réseau).
    - intent_host: hôte du service d'intention (jamais l'URL complète avec query)
    - stripe_configured: clé secrète présente ou non
    """
    parsed = urlparse(config.PAYMENT_INTENT_URL)
    return {
        "provider": provider_name,
        "currency": config.STORE_CURRENCY,
        "intent_host": parsed.hostname,
        "intent_path": parsed.path,
        "intent_timeout_seconds": config.INTENT_TIMEOUT_SECONDS,
        "intent_max_attempts": config.INTENT_MAX_ATTEMPTS,
        "confirm_timeout_seconds": config.CONFIRM_TIMEOUT_SECONDS,
        "stripe_configured": stripe_client.is_configured(),
        "stripe_public_key": bool(config.STRIPE_PUBLIC_KEY),
    }
