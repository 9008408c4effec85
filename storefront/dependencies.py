"""
Dépendances FastAPI vers les objets possédés par l'application (app.state).
Pas d'état global implicite: la factory crée catalogue, panier et orchestrateur,
les vues les récupèrent ici.
"""
from fastapi import Request

from storefront.catalog.repository import Catalog
from storefront.cart.store import CartStore
from storefront.checkout.orchestrator import CheckoutOrchestrator

# module storefront.dependencies
def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog

def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart

def get_orchestrator(request: Request) -> CheckoutOrchestrator:
    return request.app.state.orchestrator
