"""
Module 'payments' (feature-first): point d'entrée public.
Réunit montants, validation de saisie, client d'intention, fournisseurs et erreurs.
"""

from .amounts import to_minor_units, format_amount
from .errors import (
    CheckoutError,
    ValidationError,
    CardError,
    UnexpectedError,
    NetworkError,
    CheckoutBusyError,
    InvalidTransitionError,
)
from .models import (
    PaymentMethod,
    FailureReason,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentDetails,
    PaymentOutcome,
)
from .validation import validate_payment_details, format_card_number, format_expiry_date, sanitize_cvc
from .intent_client import IntentClient, make_fallback_secret
from .providers import PaymentProvider, MockPaymentProvider, StripePaymentProvider, build_provider

__all__ = [
    # amounts
    "to_minor_units",
    "format_amount",
    # errors
    "CheckoutError",
    "ValidationError",
    "CardError",
    "UnexpectedError",
    "NetworkError",
    "CheckoutBusyError",
    "InvalidTransitionError",
    # models
    "PaymentMethod",
    "FailureReason",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    "PaymentDetails",
    "PaymentOutcome",
    # validation
    "validate_payment_details",
    "format_card_number",
    "format_expiry_date",
    "sanitize_cvc",
    # intent
    "IntentClient",
    "make_fallback_secret",
    # providers
    "PaymentProvider",
    "MockPaymentProvider",
    "StripePaymentProvider",
    "build_provider",
]
