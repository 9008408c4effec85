"""
Adaptateur Stripe (mode test): centralise la configuration et les appels PaymentIntent.
"""
import logging
from typing import Any, Dict, Optional

import stripe

from storefront import config

logger = logging.getLogger(__name__)

# module storefront.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY si disponible.
    - En absence de clé, les appels Stripe échoueront côté SDK (ex: No API key provided).
    """
    if config.STRIPE_SECRET_KEY:
        stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe

def is_configured() -> bool:
    return bool(config.STRIPE_SECRET_KEY)

def intent_id_from_secret(client_secret: str) -> str:
    """pi_123_secret_abc -> pi_123 (le secret client embarque l'id de l'intention)."""
    return (client_secret or "").split("_secret_", 1)[0]

def create_payment_intent(*, amount: int, currency: str, metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Crée un PaymentIntent Stripe.
    - amount: unités mineures (centimes)
    - metadata: ex {"items": "[...]"} tronqué par l'appelant
    Retour: dict intent incluant "id" et "client_secret".
    """
    require_stripe()
    intent = stripe.PaymentIntent.create(
        amount=amount,
        currency=currency,
        metadata=metadata or {},
        payment_method_types=["card"],
    )
    return dict(intent)

def confirm_payment_intent(intent_id: str, *, payment_method: str, receipt_email: Optional[str] = None) -> Dict[str, Any]:
    """
    Confirme un PaymentIntent avec une méthode de paiement de test (ex: pm_card_visa).
    Retour: dict intent incluant "status" ("succeeded", "requires_action", ...).
    """
    require_stripe()
    params: Dict[str, Any] = {"payment_method": payment_method}
    if receipt_email:
        params["receipt_email"] = receipt_email
    intent = stripe.PaymentIntent.confirm(intent_id, **params)
    return dict(intent)
