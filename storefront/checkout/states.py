from dataclasses import dataclass
from enum import Enum

from storefront.payments.models import FailureReason

# module storefront.checkout.states
class CheckoutState(str, Enum):
    IDLE = "idle"
    REQUESTING_INTENT = "requesting_intent"
    COLLECTING_PAYMENT = "collecting_payment"
    CONFIRMING = "confirming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Une tentative dans l'un de ces états bloque tout nouveau start()
IN_FLIGHT_STATES = frozenset({
    CheckoutState.REQUESTING_INTENT,
    CheckoutState.COLLECTING_PAYMENT,
    CheckoutState.CONFIRMING,
})

CANCELLABLE_STATES = frozenset({CheckoutState.COLLECTING_PAYMENT, CheckoutState.CONFIRMING})

# Échecs pour lesquels le jeton d'autorisation reste utilisable
RETRYABLE_IN_PLACE = frozenset({FailureReason.CARD_ERROR, FailureReason.VALIDATION_ERROR})


@dataclass(frozen=True)
class CheckoutFailure:
    reason: FailureReason
    message: str

    def to_dict(self) -> dict:
        return {"reason": self.reason.value, "message": self.message}
