"""
Module 'checkout': machine à états d'une tentative de paiement, paramétrée par
la méthode de paiement (carte, wallet, redirection).
"""

from .states import CheckoutState, CheckoutFailure
from .orchestrator import CheckoutOrchestrator

__all__ = ["CheckoutState", "CheckoutFailure", "CheckoutOrchestrator"]
