"""Endpoints API du catalogue (lecture seule).
- Listing avec filtre optionnel par catégorie.
- Détail d'un produit: 404 si introuvable.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from storefront.catalog.models import product_to_dict
from storefront.catalog.repository import Catalog
from storefront.dependencies import get_catalog

router = APIRouter(prefix="/api/v1/products", tags=["Catalog API"])

@router.get("")
def list_products(category: Optional[str] = None, catalog: Catalog = Depends(get_catalog)) -> Dict[str, Any]:
    return {"items": [product_to_dict(p) for p in catalog.list_products(category)]}

@router.get("/categories")
def list_categories(catalog: Catalog = Depends(get_catalog)) -> Dict[str, Any]:
    return {"categories": catalog.list_categories()}

@router.get("/{product_id}")
def get_product(product_id: str, catalog: Catalog = Depends(get_catalog)) -> Dict[str, Any]:
    """Récupère un produit par son identifiant.
    - 404 si introuvable.
    """
    product = catalog.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Produit introuvable")
    return product_to_dict(product)
