from decimal import Decimal, ROUND_HALF_UP
from typing import Union

# module storefront.payments.amounts
def to_minor_units(total: Union[Decimal, float, int, str]) -> int:
    """
    Convertit un total en euros vers des unités mineures (centimes).
    - Arrondi au centime le plus proche, demi vers le haut (109.975 -> 10998)
    - Les floats passent par str() pour éviter les artefacts binaires
    """
    if isinstance(total, float):
        total = str(total)
    amount = (Decimal(total) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(amount)

def format_amount(total: Union[Decimal, float], currency: str = "eur") -> str:
    """Affichage court d'un montant (€109.97)."""
    symbol = "€" if currency.lower() == "eur" else currency.upper() + " "
    return f"{symbol}{Decimal(str(total)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"
