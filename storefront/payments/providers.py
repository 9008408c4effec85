"""
Surface de collecte du paiement (fournisseur externe, opaque).

Tout fournisseur reçoit le jeton d'autorisation + la saisie validée.
Succès: un PaymentOutcome. Échec: CardError, ValidationError ou UnexpectedError.

- MockPaymentProvider: démo sans réseau, les numéros de test Stripe décident du résultat
- StripePaymentProvider: PaymentIntent.confirm en mode test (méthodes pm_card_*)
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import stripe

from storefront import config
from . import stripe_client
from .errors import CardError, UnexpectedError, ValidationError
from .models import PaymentDetails, PaymentMethod, PaymentOutcome

logger = logging.getLogger(__name__)

# Cartes de test -> méthode de paiement Stripe équivalente
TEST_CARD_PAYMENT_METHODS: Dict[str, str] = {
    "4242424242424242": "pm_card_visa",
    "5555555555554444": "pm_card_mastercard",
    "4000000000000002": "pm_card_chargeDeclined",
    "4000000000009995": "pm_card_chargeDeclinedInsufficientFunds",
    "4000000000000119": "pm_card_chargeDeclinedProcessingError",
}

DECLINED_CARDS: Dict[str, str] = {
    "4000000000000002": "Votre carte a été refusée.",
    "4000000000009995": "Fonds insuffisants sur votre carte.",
}
PROCESSING_ERROR_CARDS = {"4000000000000119"}

# module storefront.payments.providers
class PaymentProvider(ABC):
    """Chaque fournisseur de paiement doit implémenter cette interface."""

    name = "abstract"

    @abstractmethod
    async def confirm(self, client_secret: str, method: PaymentMethod, details: PaymentDetails) -> PaymentOutcome:
        """Confirme l'autorisation; lève une CheckoutError classée en cas d'échec."""


class MockPaymentProvider(PaymentProvider):
    name = "mock"

    def __init__(self, delay: Optional[float] = None):
        self.delay = config.MOCK_CONFIRM_DELAY_SECONDS if delay is None else delay

    async def confirm(self, client_secret: str, method: PaymentMethod, details: PaymentDetails) -> PaymentOutcome:
        # Simule le temps de traitement du fournisseur
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        if method == PaymentMethod.CARD:
            number = details.card_number
            if number in DECLINED_CARDS:
                raise CardError(DECLINED_CARDS[number])
            if number in PROCESSING_ERROR_CARDS:
                raise UnexpectedError("Une erreur inattendue est survenue.")
        reference = "ch_demo_" + stripe_client.intent_id_from_secret(client_secret).replace("pi_", "", 1)
        return PaymentOutcome.success(provider_reference=reference)


class StripePaymentProvider(PaymentProvider):
    """
    Confirmation côté serveur en mode test.
    - Carte uniquement: les numéros bruts ne sont jamais envoyés, on les mappe
      vers les méthodes de test (pm_card_visa, pm_card_chargeDeclined, ...)
    - details.payment_method (jeton fourni par le front) prime sur le mapping
    """
    name = "stripe"

    async def confirm(self, client_secret: str, method: PaymentMethod, details: PaymentDetails) -> PaymentOutcome:
        if method != PaymentMethod.CARD:
            raise ValidationError("Méthode de paiement non prise en charge par Stripe.")
        payment_method = details.payment_method or TEST_CARD_PAYMENT_METHODS.get(details.card_number)
        if not payment_method:
            raise ValidationError("Carte non reconnue en mode test.", fields={"card_number": "Carte de test inconnue"})

        intent_id = stripe_client.intent_id_from_secret(client_secret)
        try:
            intent = await asyncio.to_thread(
                stripe_client.confirm_payment_intent,
                intent_id,
                payment_method=payment_method,
                receipt_email=details.email or None,
            )
        except stripe.CardError as e:
            raise CardError(e.user_message or "Votre carte a été refusée.") from e
        except stripe.InvalidRequestError as e:
            logger.warning("payments.stripe.invalid_request intent=%s error=%s", intent_id, e)
            raise ValidationError(e.user_message or "Requête de paiement invalide.") from e
        except stripe.StripeError as e:
            logger.exception("payments.stripe.error intent=%s", intent_id)
            raise UnexpectedError(e.user_message or "Une erreur inattendue est survenue.") from e

        status = intent.get("status") or ""
        if status == "succeeded":
            return PaymentOutcome.success(provider_reference=intent.get("id"))
        logger.warning("payments.stripe.unexpected_status intent=%s status=%s", intent_id, status)
        raise UnexpectedError(f"Statut de paiement inattendu: {status}")


def build_provider(name: Optional[str] = None) -> PaymentProvider:
    """Instancie le fournisseur configuré (PAYMENT_PROVIDER)."""
    name = (name or config.PAYMENT_PROVIDER or "mock").lower()
    if name == "stripe":
        if not stripe_client.is_configured():
            logger.warning("payments.provider stripe demandé sans STRIPE_SECRET_KEY")
        return StripePaymentProvider()
    if name != "mock":
        raise ValueError(f"Fournisseur de paiement inconnu: {name}")
    return MockPaymentProvider()
