"""
Taxonomie des erreurs du checkout.
- ValidationError: champ requis manquant/mal formé, local et rejouable sur place
- CardError: refus du fournisseur, terminal pour la tentative
- UnexpectedError: échec fournisseur non catégorisé
- NetworkError: service d'intention injoignable, toujours masqué par le jeton de repli
"""
from typing import Dict, Optional

# module storefront.payments.errors
class CheckoutError(Exception):
    reason = "unexpected_error"

    def __init__(self, message: str = "", reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if reason:
            self.reason = reason

class ValidationError(CheckoutError):
    reason = "validation_error"

    def __init__(self, message: str = "Veuillez remplir tous les champs requis.", fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.fields: Dict[str, str] = dict(fields or {})

class CardError(CheckoutError):
    reason = "card_error"

class UnexpectedError(CheckoutError):
    reason = "unexpected_error"

class NetworkError(CheckoutError):
    reason = "network_error"

class CheckoutBusyError(CheckoutError):
    reason = "checkout_in_progress"

class InvalidTransitionError(CheckoutError):
    reason = "invalid_transition"
