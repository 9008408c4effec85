"""
Logique panier pure (pas de paiement, pas de persistance).

Le store est la seule source de vérité de ce que le client veut acheter.
Chaque mutation recalcule le total sous verrou: un lecteur ne voit jamais
une liste de lignes associée au total d'une autre mutation.
"""
import logging
import threading
from dataclasses import replace
from decimal import Decimal
from typing import List, Optional

from storefront.catalog.models import Product
from .models import CartEntry, CartSnapshot

logger = logging.getLogger(__name__)

# module storefront.cart.store
class CartStore:
    def __init__(self):
        self._lock = threading.RLock()
        self._entries: List[CartEntry] = []
        self._is_open = False
        self._total = Decimal("0")

    # --- Lecture ---
    def snapshot(self) -> CartSnapshot:
        with self._lock:
            return CartSnapshot(items=tuple(self._entries), is_open=self._is_open, total=self._total)

    @property
    def total(self) -> Decimal:
        with self._lock:
            return self._total

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._is_open

    # --- Mutations ---
    def add(self, product: Product) -> CartSnapshot:
        """
        Ajoute un produit.
        - Présent: quantité +1 (jamais de doublon par identifiant)
        - Absent: nouvelle ligne en fin de panier, quantité 1
        """
        with self._lock:
            idx = self._index_of(product.id)
            if idx is None:
                self._entries.append(CartEntry(product=product, quantity=1))
            else:
                entry = self._entries[idx]
                self._entries[idx] = replace(entry, quantity=entry.quantity + 1)
            self._recompute()
            logger.debug("cart.add product_id=%s total=%s", product.id, self._total)
            return self.snapshot()

    def remove(self, product_id: str) -> CartSnapshot:
        """Supprime la ligne du produit; sans effet si absente."""
        with self._lock:
            idx = self._index_of(product_id)
            if idx is not None:
                del self._entries[idx]
            self._recompute()
            logger.debug("cart.remove product_id=%s found=%s", product_id, idx is not None)
            return self.snapshot()

    def set_quantity(self, product_id: str, quantity: int) -> CartSnapshot:
        """
        Fixe la quantité d'une ligne existante.
        - quantity <= 0: équivaut à remove
        - ligne absente: sans effet (ne crée jamais de ligne)
        """
        with self._lock:
            if quantity <= 0:
                return self.remove(product_id)
            idx = self._index_of(product_id)
            if idx is not None:
                self._entries[idx] = replace(self._entries[idx], quantity=int(quantity))
            self._recompute()
            logger.debug("cart.set_quantity product_id=%s quantity=%s found=%s", product_id, quantity, idx is not None)
            return self.snapshot()

    def clear(self) -> CartSnapshot:
        """Vide le panier; la visibilité n'est pas modifiée."""
        with self._lock:
            self._entries = []
            self._recompute()
            logger.debug("cart.clear")
            return self.snapshot()

    def toggle_visibility(self) -> CartSnapshot:
        with self._lock:
            self._is_open = not self._is_open
            return self.snapshot()

    def clear_and_close(self) -> CartSnapshot:
        """
        Post-condition d'un paiement réussi: vider puis fermer en une seule mutation.
        """
        with self._lock:
            self.clear()
            if self._is_open:
                self.toggle_visibility()
            logger.info("cart.cleared_after_checkout")
            return self.snapshot()

    # --- Interne ---
    def _index_of(self, product_id: Optional[str]) -> Optional[int]:
        for i, e in enumerate(self._entries):
            if e.product.id == product_id:
                return i
        return None

    def _recompute(self) -> None:
        self._total = sum((e.subtotal for e in self._entries), Decimal("0"))
