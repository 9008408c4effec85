"""
Module 'cart': store en mémoire possédé par l'application et ses types.
"""

from .models import CartEntry, CartSnapshot
from .store import CartStore

__all__ = ["CartEntry", "CartSnapshot", "CartStore"]
