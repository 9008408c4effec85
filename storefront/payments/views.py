import asyncio
import json
import logging
import time
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront import config
from storefront.payments import stripe_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Payments API"])

# module storefront.payments.views
@router.post("/create-payment-intent")
async def create_payment_intent(request: Request):
    """
    Service d'intention de paiement (démonstration).
    - Entrée JSON: { "amount": <int centimes>, "currency": "eur", "items": [{name, quantity, price}] }
    - PAYMENT_PROVIDER=stripe + clé: crée un vrai PaymentIntent en mode test
    - Sinon: fabrique un secret de démonstration pi_demo_<ms>_secret_demo
    - Réponse: {"clientSecret": "..."}; 400 si montant/devise invalides
    """
    try:
        body = await request.json()
    except Exception:
        raise HTTPException(status_code=400, detail="Corps JSON invalide")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Corps JSON invalide")

    amount = body.get("amount")
    currency = str(body.get("currency") or "").strip().lower()
    items: List[Dict[str, Any]] = body.get("items") or []
    if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
        raise HTTPException(status_code=400, detail="Montant invalide")
    if not currency:
        raise HTTPException(status_code=400, detail="Devise manquante")

    if config.PAYMENT_PROVIDER == "stripe" and stripe_client.is_configured():
        metadata = {"items": json.dumps(items)[:500]}
        intent = await asyncio.to_thread(
            stripe_client.create_payment_intent, amount=amount, currency=currency, metadata=metadata
        )
        logger.info("payments.intent.created provider=stripe id=%s amount=%s", intent.get("id"), amount)
        return JSONResponse({"clientSecret": intent.get("client_secret")})

    now_ms = int(time.time() * 1000)
    payment_intent = {
        "id": f"pi_demo_{now_ms}",
        "client_secret": f"pi_demo_{now_ms}_secret_demo",
        "amount": amount,
        "currency": currency,
        "status": "requires_payment_method",
        "created": now_ms // 1000,
    }
    logger.info("payments.intent.created provider=demo id=%s amount=%s items=%s", payment_intent["id"], amount, len(items))
    return JSONResponse({"clientSecret": payment_intent["client_secret"]})
