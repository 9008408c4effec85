"""
Orchestrateur de checkout: une tentative à la fois, de la demande d'intention
jusqu'à un résultat terminal (succeeded | failed).

idle -> requesting_intent -> collecting_payment -> confirming -> {succeeded | failed}

- Les seules suspensions sont l'appel d'intention et l'appel de confirmation.
- start() pendant une tentative en cours est refusé (CheckoutBusyError).
- cancel() est coopératif: l'appel réseau en vol n'est pas interrompu, mais sa
  réponse tardive est ignorée (numéro de tentative + état vérifiés au retour).
- L'orchestrateur ne touche jamais au panier: l'appelant applique la
  post-condition (vider + fermer) sur succès, éventuellement via on_success.
"""
import asyncio
import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from storefront import config
from storefront.cart.models import CartSnapshot
from storefront.payments.amounts import format_amount, to_minor_units
from storefront.payments.errors import (
    CheckoutBusyError,
    CheckoutError,
    InvalidTransitionError,
    ValidationError,
)
from storefront.payments.intent_client import IntentClient
from storefront.payments.models import (
    FailureReason,
    PaymentDetails,
    PaymentIntentRequest,
    PaymentMethod,
    PaymentOutcome,
)
from storefront.payments.providers import PaymentProvider
from storefront.payments.validation import validate_payment_details
from .states import (
    CANCELLABLE_STATES,
    IN_FLIGHT_STATES,
    RETRYABLE_IN_PLACE,
    CheckoutFailure,
    CheckoutState,
)

logger = logging.getLogger(__name__)

_REASONS = {r.value: r for r in FailureReason}

# module storefront.checkout.orchestrator
class CheckoutOrchestrator:
    def __init__(
        self,
        intent_client: IntentClient,
        provider: PaymentProvider,
        *,
        method: PaymentMethod = PaymentMethod.CARD,
        currency: Optional[str] = None,
        confirm_timeout: Optional[float] = None,
        on_success: Optional[Callable[[], Any]] = None,
    ):
        self.intent_client = intent_client
        self.provider = provider
        self.method = PaymentMethod(method)
        self.currency = (currency or config.STORE_CURRENCY).lower()
        self.confirm_timeout = config.CONFIRM_TIMEOUT_SECONDS if confirm_timeout is None else confirm_timeout
        self.on_success = on_success

        self.state = CheckoutState.IDLE
        self.attempt = 0
        self.amount: Optional[int] = None
        self.failure: Optional[CheckoutFailure] = None
        self.outcome: Optional[PaymentOutcome] = None
        self.is_fallback_token = False
        self._client_secret: Optional[str] = None
        self._details: Optional[PaymentDetails] = None
        self._confirm_in_flight: Optional[int] = None

    # --- Lecture ---
    @property
    def client_secret(self) -> Optional[str]:
        return self._client_secret

    @property
    def in_flight(self) -> bool:
        return self.state in IN_FLIGHT_STATES

    def matches(self, snapshot: CartSnapshot) -> bool:
        """Vrai si le montant du panier est toujours celui autorisé par la tentative."""
        return self.amount is not None and to_minor_units(snapshot.total) == self.amount

    def status(self) -> Dict[str, Any]:
        """État public de la tentative (le secret client n'est jamais exposé)."""
        return {
            "state": self.state.value,
            "attempt": self.attempt,
            "method": self.method.value,
            "amount": self.amount,
            "currency": self.currency,
            "amount_display": format_amount(Decimal(self.amount) / 100, self.currency) if self.amount is not None else None,
            "fallback_token": self.is_fallback_token,
            "failure": self.failure.to_dict() if self.failure else None,
            "provider_reference": self.outcome.provider_reference if self.outcome else None,
        }

    # --- Transitions ---
    async def start(self, snapshot: CartSnapshot, method: Optional[PaymentMethod] = None) -> Dict[str, Any]:
        """
        Démarre une tentative à partir d'un instantané du panier.
        - Refusé si une tentative est en cours (CheckoutBusyError)
        - Panier vide: ValidationError, aucun appel réseau
        - Échec du service d'intention: jeton de repli, on continue quand même
        """
        if self.in_flight:
            raise CheckoutBusyError("Un paiement est déjà en cours.")
        if snapshot.is_empty:
            raise ValidationError("Le panier est vide.", fields={"cart": "Ajoutez au moins un produit"})

        self.attempt += 1
        attempt = self.attempt
        self._reset_attempt()
        if method is not None:
            self.method = PaymentMethod(method)
        self.amount = to_minor_units(snapshot.total)
        self.state = CheckoutState.REQUESTING_INTENT
        logger.info("checkout.start attempt=%s amount=%s currency=%s items=%s", attempt, self.amount, self.currency, len(snapshot.items))

        request = PaymentIntentRequest(amount=self.amount, currency=self.currency, items=snapshot.line_items())
        try:
            response = await self.intent_client.create_intent(request)
        except Exception:
            # Le client d'intention ne lève pas sur erreur réseau: ici c'est un bug
            logger.exception("checkout.start.error attempt=%s", attempt)
            if attempt == self.attempt:
                self.state = CheckoutState.IDLE
            raise

        if attempt != self.attempt or self.state != CheckoutState.REQUESTING_INTENT:
            logger.info("checkout.discarded attempt=%s stage=intent", attempt)
            return self.status()
        self._client_secret = response.client_secret
        self.is_fallback_token = response.is_fallback
        if response.is_fallback:
            logger.warning("checkout.intent_fallback attempt=%s (jeton non autoritatif)", attempt)
        self.state = CheckoutState.COLLECTING_PAYMENT
        return self.status()

    def collect(self, details: PaymentDetails, method: Optional[PaymentMethod] = None) -> Dict[str, Any]:
        """
        Enregistre la saisie du client (ou un autre moyen de paiement).
        - Validation locale uniquement: en cas d'échec, ValidationError et on reste
          en collecting_payment, sans aucun appel réseau
        - Succès: passage en confirming
        """
        if self.state != CheckoutState.COLLECTING_PAYMENT:
            raise InvalidTransitionError(f"Saisie impossible depuis l'état {self.state.value}.")
        chosen = PaymentMethod(method) if method is not None else self.method
        try:
            normalized = validate_payment_details(chosen, details)
        except ValidationError as e:
            logger.info("checkout.collect.invalid attempt=%s fields=%s", self.attempt, sorted(e.fields))
            raise
        self.method = chosen
        self._details = normalized
        self.state = CheckoutState.CONFIRMING
        logger.info("checkout.collect attempt=%s method=%s", self.attempt, chosen.value)
        return self.status()

    async def confirm(self) -> Dict[str, Any]:
        """
        Confirme l'autorisation auprès du fournisseur (délai dur confirm_timeout).
        Chaque appel aboutit à exactement un état terminal: succeeded ou failed classé.
        - Un seul appel fournisseur par tentative: un second confirm() pendant
          l'attente lève CheckoutBusyError (cancel() reste possible)
        - Une réponse arrivée après cancel() (ou une autre tentative) est ignorée:
          le statut renvoyé porte alors discarded=True et décrit la tentative courante
        """
        if self.state != CheckoutState.CONFIRMING:
            raise InvalidTransitionError(f"Confirmation impossible depuis l'état {self.state.value}.")
        attempt = self.attempt
        if self._confirm_in_flight == attempt:
            raise CheckoutBusyError("La confirmation de ce paiement est déjà en cours.")
        self._confirm_in_flight = attempt
        outcome: Optional[PaymentOutcome] = None
        failure: Optional[CheckoutFailure] = None
        try:
            outcome = await asyncio.wait_for(
                self.provider.confirm(self._client_secret or "", self.method, self._details or PaymentDetails()),
                timeout=self.confirm_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("checkout.confirm.timeout attempt=%s timeout=%s", attempt, self.confirm_timeout)
            failure = CheckoutFailure(FailureReason.UNEXPECTED_ERROR, "Le fournisseur de paiement ne répond pas.")
        except CheckoutError as e:
            reason = _REASONS.get(e.reason, FailureReason.UNEXPECTED_ERROR)
            failure = CheckoutFailure(reason, e.message or "Le paiement a échoué.")
        except Exception as e:
            logger.exception("checkout.confirm.error attempt=%s", attempt)
            failure = CheckoutFailure(FailureReason.UNEXPECTED_ERROR, f"Une erreur inattendue est survenue: {e}")
        finally:
            if self._confirm_in_flight == attempt:
                self._confirm_in_flight = None

        if attempt != self.attempt or self.state != CheckoutState.CONFIRMING:
            logger.info("checkout.discarded attempt=%s stage=confirm succeeded=%s", attempt, failure is None)
            return {**self.status(), "discarded": True}

        self._details = None
        if failure is not None:
            self.failure = failure
            self.state = CheckoutState.FAILED
            logger.info("checkout.failed attempt=%s reason=%s", attempt, failure.reason.value)
            return {**self.status(), "discarded": False}

        self.outcome = outcome
        self.state = CheckoutState.SUCCEEDED
        logger.info("checkout.succeeded attempt=%s amount=%s fallback_token=%s", attempt, self.amount, self.is_fallback_token)
        if self.on_success is not None:
            self.on_success()
        return {**self.status(), "discarded": False}

    def cancel(self) -> Dict[str, Any]:
        """Abandon par le client depuis collecting_payment ou confirming."""
        if self.state not in CANCELLABLE_STATES:
            raise InvalidTransitionError(f"Annulation impossible depuis l'état {self.state.value}.")
        self.state = CheckoutState.FAILED
        self.failure = CheckoutFailure(FailureReason.USER_CANCELLED, "Paiement annulé.")
        self._details = None
        logger.info("checkout.cancelled attempt=%s", self.attempt)
        return self.status()

    async def retry(self, snapshot: CartSnapshot) -> Dict[str, Any]:
        """
        Nouvelle tentative après un échec.
        - Carte refusée / saisie invalide avec un vrai jeton: retour en
          collecting_payment avec le même jeton
        - Sinon (annulation, erreur inattendue, jeton de repli): nouveau start()
        """
        if self.state != CheckoutState.FAILED:
            raise InvalidTransitionError(f"Nouvelle tentative impossible depuis l'état {self.state.value}.")
        reusable = (
            self.failure is not None
            and self.failure.reason in RETRYABLE_IN_PLACE
            and self._client_secret
            and not self.is_fallback_token
            and self.matches(snapshot)
        )
        if reusable:
            self.failure = None
            self.state = CheckoutState.COLLECTING_PAYMENT
            logger.info("checkout.retry attempt=%s mode=in_place", self.attempt)
            return self.status()
        logger.info("checkout.retry attempt=%s mode=new_intent", self.attempt)
        return await self.start(snapshot)

    # --- Interne ---
    def _reset_attempt(self) -> None:
        self.failure = None
        self.outcome = None
        self.is_fallback_token = False
        self._client_secret = None
        self._details = None
