"""Endpoints API du panier.
- Lecture de l'instantané {items, is_open, total}.
- Mutations: ajout, quantité, suppression, vidage, bascule d'affichage.
- Chaque réponse renvoie l'instantané cohérent issu de la mutation.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from storefront.cart.store import CartStore
from storefront.catalog.repository import Catalog
from storefront.dependencies import get_cart_store, get_catalog

router = APIRouter(prefix="/api/v1/cart", tags=["Cart API"])

class AddItemRequest(BaseModel):
    product_id: str

class QuantityRequest(BaseModel):
    quantity: int

# module storefront.cart.views
@router.get("")
def get_cart(cart: CartStore = Depends(get_cart_store)) -> Dict[str, Any]:
    return cart.snapshot().to_dict()

@router.post("/items")
def add_item(
    body: AddItemRequest,
    cart: CartStore = Depends(get_cart_store),
    catalog: Catalog = Depends(get_catalog),
) -> Dict[str, Any]:
    """
    Ajoute un produit du catalogue au panier.
    - 404 si l'identifiant n'existe pas dans le catalogue
    """
    product = catalog.get_product(body.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Produit introuvable")
    return cart.add(product).to_dict()

@router.put("/items/{product_id}")
def update_quantity(product_id: str, body: QuantityRequest, cart: CartStore = Depends(get_cart_store)) -> Dict[str, Any]:
    """
    Fixe la quantité d'une ligne. quantity <= 0 supprime la ligne,
    un identifiant absent du panier ne crée rien.
    """
    return cart.set_quantity(product_id, body.quantity).to_dict()

@router.delete("/items/{product_id}")
def remove_item(product_id: str, cart: CartStore = Depends(get_cart_store)) -> Dict[str, Any]:
    return cart.remove(product_id).to_dict()

@router.delete("")
def clear_cart(cart: CartStore = Depends(get_cart_store)) -> Dict[str, Any]:
    return cart.clear().to_dict()

@router.post("/toggle")
def toggle_cart(cart: CartStore = Depends(get_cart_store)) -> Dict[str, Any]:
    return cart.toggle_visibility().to_dict()
