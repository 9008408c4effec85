"""
Catalogue statique (pas de DB): produits de posture et bien-être.
Les instances Product sont partagées par référence avec le panier, jamais copiées.
"""
from typing import Dict, Iterable, List, Optional

from .models import Product

# module storefront.catalog.repository
_PRODUCTS: List[Dict] = [
    {
        "id": "posture-corrector",
        "name": "Correcteur de posture",
        "price": "29.99",
        "images": [
            "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=800",
            "https://images.unsplash.com/photo-1544367567-0f2fcb009e0b?w=800",
        ],
        "description": "Maintien léger et réglable pour redresser le dos au quotidien.",
        "benefits": ["Soulage le haut du dos", "Invisible sous les vêtements", "Taille ajustable"],
        "category": "posture",
    },
    {
        "id": "ergonomic-cushion",
        "name": "Coussin ergonomique",
        "price": "49.99",
        "images": ["https://images.unsplash.com/photo-1586023492125-27b2c045efd7?w=800"],
        "description": "Mousse à mémoire de forme pour une assise alignée au bureau.",
        "benefits": ["Réduit la pression lombaire", "Housse lavable"],
        "category": "posture",
    },
    {
        "id": "lumbar-support",
        "name": "Support lombaire",
        "price": "39.99",
        "images": ["https://images.unsplash.com/photo-1555041469-a586c61ea9bc?w=800"],
        "description": "Soutien du bas du dos pour chaise de bureau ou siège auto.",
        "benefits": ["Sangle de fixation", "Maille respirante"],
        "category": "posture",
    },
    {
        "id": "massage-ball-set",
        "name": "Kit de balles de massage",
        "price": "19.99",
        "images": ["https://images.unsplash.com/photo-1600881333168-2ef49b341f30?w=800"],
        "description": "Trois densités pour relâcher les tensions musculaires.",
        "benefits": ["Récupération après effort", "Format voyage"],
        "category": "wellness",
    },
    {
        "id": "yoga-mat",
        "name": "Tapis de yoga",
        "price": "59.99",
        "images": ["https://images.unsplash.com/photo-1601925260368-ae2f83cf8b7f?w=800"],
        "description": "Tapis antidérapant 6 mm pour étirements et renforcement.",
        "benefits": ["Antidérapant", "Sans PVC", "Sangle de transport incluse"],
        "category": "wellness",
    },
]


class Catalog:
    """
    Accès en lecture au catalogue.
    - Conserve l'ordre d'insertion pour le listing et les catégories.
    - Refuse les identifiants en double à la construction.
    """

    def __init__(self, products: Iterable[Product]):
        self._by_id: Dict[str, Product] = {}
        for p in products:
            if p.id in self._by_id:
                raise ValueError(f"Identifiant produit en double: {p.id}")
            self._by_id[p.id] = p

    def list_products(self, category: Optional[str] = None) -> List[Product]:
        items = list(self._by_id.values())
        if category:
            items = [p for p in items if p.category == category]
        return items

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._by_id.get(str(product_id or "").strip())

    def list_categories(self) -> List[str]:
        seen: List[str] = []
        for p in self._by_id.values():
            if p.category and p.category not in seen:
                seen.append(p.category)
        return seen


def default_catalog() -> Catalog:
    """Construit le catalogue de la boutique à partir des données statiques."""
    return Catalog(Product(**row) for row in _PRODUCTS)
