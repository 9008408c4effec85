"""
Contrats d'échange avec les services de paiement externes.
- PaymentIntentRequest/Response: durée de vie limitée à une tentative de checkout
- PaymentDetails: saisie utilisateur (carte, wallet ou redirection)
- PaymentOutcome: autorisation acceptée renvoyée par la surface de collecte
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

# module storefront.payments.models
class PaymentMethod(str, Enum):
    CARD = "card"
    DIGITAL_WALLET = "digital_wallet"
    REDIRECT = "redirect"


class FailureReason(str, Enum):
    CARD_ERROR = "card_error"
    VALIDATION_ERROR = "validation_error"
    UNEXPECTED_ERROR = "unexpected_error"
    USER_CANCELLED = "user_cancelled"


@dataclass(frozen=True)
class PaymentIntentRequest:
    amount: int                      # unités mineures (centimes)
    currency: str
    items: List[Dict[str, Any]] = field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {"amount": self.amount, "currency": self.currency, "items": list(self.items)}


@dataclass(frozen=True)
class PaymentIntentResponse:
    client_secret: str
    is_fallback: bool = False


class PaymentDetails(BaseModel):
    """
    Saisie du formulaire de paiement. Tous les champs sont optionnels ici:
    la validation métier (validate_payment_details) décide selon la méthode.
    """
    email: str = ""
    cardholder_name: str = ""
    card_number: str = ""
    expiry: str = ""
    cvc: str = ""
    wallet: str = ""
    return_url: str = ""
    payment_method: Optional[str] = None


@dataclass(frozen=True)
class PaymentOutcome:
    """Autorisation acceptée par le fournisseur. Les refus sont levés (CheckoutError)."""
    succeeded: bool
    message: str = ""
    provider_reference: Optional[str] = None

    @classmethod
    def success(cls, provider_reference: Optional[str] = None, message: str = "Paiement réussi !") -> "PaymentOutcome":
        return cls(True, message, provider_reference)
