"""
Module 'catalog': produits immuables servis depuis un catalogue statique.
"""

from .models import Product
from .repository import Catalog, default_catalog

__all__ = ["Product", "Catalog", "default_catalog"]
