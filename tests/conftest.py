import os

# Pas de Redis en tests: le lifespan saute l'init du rate limiter
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import json
from typing import Any, Callable, Dict, Generator, List

import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.app_setup.factory import create_app
from storefront.cart.store import CartStore
from storefront.catalog.models import Product
from storefront.payments.intent_client import IntentClient
from storefront.payments.providers import MockPaymentProvider

INTENT_URL = "http://intent.test/api/create-payment-intent"

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)
        elif "/tests/functional/" in nodeid or nodeid.startswith("tests/functional/"):
            item.add_marker(pytest.mark.functional)

@pytest.fixture
def product_a() -> Product:
    return Product(id="A", name="Produit A", price="29.99", images=["a.jpg"], category="posture")

@pytest.fixture
def product_b() -> Product:
    return Product(id="B", name="Produit B", price="49.99", images=["b.jpg"], category="wellness")

@pytest.fixture
def intent_calls() -> List[Dict[str, Any]]:
    """Corps JSON reçus par le faux service d'intention."""
    return []

@pytest.fixture
def make_intent_client(intent_calls) -> Callable[..., IntentClient]:
    """
    Fabrique un IntentClient branché sur un httpx.MockTransport.
    handler(request) -> httpx.Response; par défaut renvoie un clientSecret valide.
    """
    def _default(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"clientSecret": "pi_test_123_secret_abc"})

    def _make(handler: Callable[[httpx.Request], httpx.Response] = _default, **kwargs) -> IntentClient:
        def _recording(request: httpx.Request) -> httpx.Response:
            intent_calls.append(json.loads(request.content or b"{}"))
            return handler(request)
        kwargs.setdefault("backoff", 0)
        kwargs.setdefault("max_attempts", 3)
        return IntentClient(INTENT_URL, transport=httpx.MockTransport(_recording), **kwargs)

    return _make

@pytest.fixture
def cart() -> CartStore:
    return CartStore()

@pytest.fixture
def app(make_intent_client, cart):
    return create_app(cart=cart, intent_client=make_intent_client(), provider=MockPaymentProvider(delay=0))

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

VALID_CARD = {
    "email": "client@example.com",
    "cardholder_name": "Jeanne Martin",
    "card_number": "4242 4242 4242 4242",
    "expiry": "12/30",
    "cvc": "123",
}

@pytest.fixture
def valid_card() -> Dict[str, str]:
    return dict(VALID_CARD)
