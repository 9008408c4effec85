from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from storefront import config
from storefront.cart.store import CartStore
from storefront.checkout.orchestrator import CheckoutOrchestrator
from storefront.checkout.states import CheckoutState
from storefront.dependencies import get_cart_store, get_orchestrator
from storefront.payments.models import PaymentDetails, PaymentMethod
from storefront.utils.rate_limit import optional_rate_limit

router = APIRouter(prefix="/api/v1/checkout", tags=["Checkout API"])

class StartRequest(BaseModel):
    method: Optional[PaymentMethod] = None

class CollectRequest(PaymentDetails):
    method: Optional[PaymentMethod] = None

# module storefront.checkout.views
@router.get("")
def get_checkout_status(orchestrator: CheckoutOrchestrator = Depends(get_orchestrator)) -> Dict[str, Any]:
    return orchestrator.status()

@router.post(
    "/start",
    dependencies=[Depends(optional_rate_limit(times=config.CHECKOUT_RATE_LIMIT_TIMES, seconds=config.CHECKOUT_RATE_LIMIT_SECONDS))],
)
async def start_checkout(
    body: Optional[StartRequest] = None,
    cart: CartStore = Depends(get_cart_store),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """
    Démarre une tentative sur l'instantané courant du panier.
    - Entrée JSON optionnelle: { "method": "card" | "digital_wallet" | "redirect" }
    - 409 si une tentative est déjà en cours, 422 si le panier est vide
    - Le service d'intention injoignable ne bloque pas: fallback_token=true dans la réponse
    """
    snapshot = cart.snapshot()
    return await orchestrator.start(snapshot, method=body.method if body else None)

@router.post("/collect")
def collect_payment(body: CollectRequest, orchestrator: CheckoutOrchestrator = Depends(get_orchestrator)) -> Dict[str, Any]:
    """
    Enregistre la saisie de paiement (validation locale, aucun appel réseau).
    - 422 avec le détail par champ si un champ requis manque
    """
    details = PaymentDetails(**body.model_dump(exclude={"method"}))
    return orchestrator.collect(details, method=body.method)

@router.post("/confirm")
async def confirm_payment(
    cart: CartStore = Depends(get_cart_store),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """
    Confirme le paiement auprès du fournisseur.
    - Succès: le panier est vidé puis fermé (post-condition appliquée ici, pas par l'orchestrateur)
    - Échec: état failed avec la raison classée; le panier reste intact
    - Réponse tardive d'une tentative annulée ou remplacée (discarded): panier intact
    - 409 si le panier a changé depuis start (montant autorisé différent)
      ou si une confirmation est déjà en cours pour cette tentative
    """
    if orchestrator.state == CheckoutState.CONFIRMING and not orchestrator.matches(cart.snapshot()):
        raise HTTPException(status_code=409, detail="Le panier a changé depuis le début du paiement: annulez puis relancez.")
    status = await orchestrator.confirm()
    if not status["discarded"] and status["state"] == CheckoutState.SUCCEEDED.value:
        cart.clear_and_close()
    return {**status, "cart": cart.snapshot().to_dict()}

@router.post("/cancel")
def cancel_checkout(orchestrator: CheckoutOrchestrator = Depends(get_orchestrator)) -> Dict[str, Any]:
    return orchestrator.cancel()

@router.post("/retry")
async def retry_checkout(
    cart: CartStore = Depends(get_cart_store),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Relance après échec: même jeton si la carte a été refusée, sinon nouvelle intention."""
    return await orchestrator.retry(cart.snapshot())
