"""
Types du panier: lignes (produit + quantité) et instantané en lecture seule.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from storefront.catalog.models import Product

# module storefront.cart.models
@dataclass(frozen=True)
class CartEntry:
    """Ligne de panier. product est emprunté au catalogue; quantity >= 1."""
    product: Product
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CartSnapshot:
    """
    Vue cohérente du panier à un instant donné.
    - items: lignes dans l'ordre d'ajout
    - total: toujours recalculé depuis items par le store, jamais modifié à part
    """
    items: Tuple[CartEntry, ...]
    is_open: bool
    total: Decimal

    @property
    def item_count(self) -> int:
        return sum(e.quantity for e in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def line_items(self) -> List[Dict[str, Any]]:
        """
        Lignes transmises au service d'intention pour audit côté backend.
        Format: [{name, quantity, price}], price en float comme le front d'origine.
        """
        return [
            {"name": e.product.name, "quantity": e.quantity, "price": float(e.product.price)}
            for e in self.items
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [
                {
                    "product_id": e.product.id,
                    "name": e.product.name,
                    "price": float(e.product.price),
                    "image": e.product.images[0],
                    "quantity": e.quantity,
                    "subtotal": float(e.subtotal),
                }
                for e in self.items
            ],
            "is_open": self.is_open,
            "total": float(self.total),
            "item_count": self.item_count,
        }
