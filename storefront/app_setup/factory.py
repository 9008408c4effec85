"""
Factory d'application recommandée pour les entrypoints (ex: storefront.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional

from fastapi import FastAPI

from storefront import __version__
from storefront.cart.store import CartStore
from storefront.catalog.repository import Catalog, default_catalog
from storefront.checkout.orchestrator import CheckoutOrchestrator
from storefront.payments.intent_client import IntentClient
from storefront.payments.providers import PaymentProvider, build_provider
from .exceptions import register_exception_handlers
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_no_cache_middleware, register_security_middleware
from .routers import register_routers

def register_state(
    app: FastAPI,
    *,
    catalog: Optional[Catalog] = None,
    cart: Optional[CartStore] = None,
    intent_client: Optional[IntentClient] = None,
    provider: Optional[PaymentProvider] = None,
) -> None:
    """
    Crée les objets possédés par l'application (un seul panier par processus).
    Les vues y accèdent via storefront.dependencies, jamais via un global de module.
    """
    app.state.catalog = catalog or default_catalog()
    app.state.cart = cart or CartStore()
    app.state.orchestrator = CheckoutOrchestrator(
        intent_client=intent_client or IntentClient(),
        provider=provider or build_provider(),
    )
    app.state.rate_limit_enabled = False

def create_app(
    *,
    catalog: Optional[Catalog] = None,
    cart: Optional[CartStore] = None,
    intent_client: Optional[IntentClient] = None,
    provider: Optional[PaymentProvider] = None,
) -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - l'état possédé (catalogue, panier, orchestrateur)
      - middlewares de base, sécurité, no-cache
      - gestionnaires d'exceptions
      - tous les routers (API, intention de démonstration, health)
    Les collaborateurs peuvent être injectés (tests, autre fournisseur).
    """
    app = FastAPI(title="Storefront API", version=__version__, lifespan=lifespan)
    register_state(app, catalog=catalog, cart=cart, intent_client=intent_client, provider=provider)
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_no_cache_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
