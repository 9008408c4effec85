"""
Client du service d'intention de paiement (externe, opaque).

POST {amount, currency, items} -> {clientSecret}.
En cas d'échec (transport, timeout, statut non 2xx, réponse sans clientSecret),
un jeton de repli local est synthétisé pour que la démo continue.
Ce repli masque une erreur: il est marqué is_fallback=True et journalisé
en warning sous payments.intent.fallback, jamais confondu avec un vrai jeton.
"""
import logging
import time
from typing import Optional

import httpx

from storefront import config
from storefront.utils.retry import retry_async
from .errors import NetworkError
from .models import PaymentIntentRequest, PaymentIntentResponse

logger = logging.getLogger(__name__)

FALLBACK_PREFIX = "pi_fallback_"

# module storefront.payments.intent_client
def make_fallback_secret() -> str:
    """Jeton non autoritatif; son préfixe le distingue des secrets émis par le service."""
    return f"{FALLBACK_PREFIX}{int(time.time() * 1000)}_secret_local"


class _RetryableStatus(Exception):
    """Statut 5xx: le service a répondu mais peut se rétablir."""


class IntentClient:
    def __init__(
        self,
        url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        backoff: Optional[float] = None,
        backoff_max: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or config.PAYMENT_INTENT_URL
        self.timeout = config.INTENT_TIMEOUT_SECONDS if timeout is None else timeout
        self.max_attempts = config.INTENT_MAX_ATTEMPTS if max_attempts is None else max_attempts
        self.backoff = config.INTENT_BACKOFF_SECONDS if backoff is None else backoff
        self.backoff_max = config.INTENT_BACKOFF_MAX_SECONDS if backoff_max is None else backoff_max
        self._transport = transport

    async def _post_once(self, request: PaymentIntentRequest) -> str:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.url, json=request.to_json())
        if response.status_code >= 500:
            raise _RetryableStatus(f"HTTP {response.status_code}")
        if response.status_code >= 400:
            raise NetworkError(f"HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError:
            raise NetworkError("Réponse non JSON")
        secret = (data or {}).get("clientSecret") if isinstance(data, dict) else None
        if not secret:
            raise NetworkError("Réponse sans clientSecret")
        return str(secret)

    async def create_intent(self, request: PaymentIntentRequest) -> PaymentIntentResponse:
        """
        Demande un jeton d'autorisation pour le montant donné.
        - Retry borné avec backoff sur erreurs transport et 5xx
        - Ne lève jamais: tout échec final bascule sur le jeton de repli
        """
        try:
            secret = await retry_async(
                lambda: self._post_once(request),
                max_attempts=self.max_attempts,
                initial_delay=self.backoff,
                max_delay=self.backoff_max,
                exceptions=(httpx.TransportError, _RetryableStatus),
                label="payments.intent.retry",
            )
        except (httpx.HTTPError, httpx.InvalidURL, _RetryableStatus, NetworkError) as e:
            fallback = make_fallback_secret()
            logger.warning(
                "payments.intent.fallback reason=%s amount=%s currency=%s url=%s",
                str(e) or type(e).__name__, request.amount, request.currency, self.url,
            )
            return PaymentIntentResponse(client_secret=fallback, is_fallback=True)
        logger.info("payments.intent.ok amount=%s currency=%s", request.amount, request.currency)
        return PaymentIntentResponse(client_secret=secret, is_fallback=False)
