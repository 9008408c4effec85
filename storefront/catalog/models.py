from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# module storefront.catalog.models
class Product(BaseModel):
    """
    Produit du catalogue (immuable).
    - price: prix unitaire TTC en euros, jamais négatif
    - images: au moins une référence, la première sert de vignette
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    price: Decimal = Field(ge=0)
    images: List[str] = Field(min_length=1)
    description: str = ""
    benefits: List[str] = Field(default_factory=list)
    category: str = ""

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_decimal(cls, v):
        # Les floats passent par str() pour éviter 29.989999...
        if isinstance(v, float):
            return Decimal(str(v))
        return v

def product_to_dict(product: Product) -> dict:
    """Forme JSON publique d'un produit (prix en float, comme le front l'attend)."""
    return {
        "id": product.id,
        "name": product.name,
        "price": float(product.price),
        "images": list(product.images),
        "description": product.description,
        "benefits": list(product.benefits),
        "category": product.category,
    }
