"""
Logique panier pure (pas de passerelle, pas de DB).
Décide si un panier soumis par le client peut être débité, et calcule le total.
"""
import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from .errors import CartValidationError

NONCE_REQUIRED = "Payment method nonce is required"
CART_EMPTY = "Cart is empty, cannot process payment"
PRICE_MISSING = "Price is missing in cart"
PRICE_NOT_NUMERIC = "Invalid price in cart, prices must be numeric"
PRICE_NEGATIVE = "Invalid price in cart, prices must be non-negative"

# module storefront.payments.cart
@dataclass(frozen=True)
class CartTotal:
    total: float
    item_count: int


def is_numeric_price(value: Any) -> bool:
    # Seuls int/float finis sont acceptés: "10" est refusé au même titre que "abc"
    # bool est une sous-classe d'int: exclu explicitement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def cart_items(cart: Any) -> Sequence[Any]:
    """Lignes du panier; un panier qui n'est pas une liste (objet, chaîne...) est rejeté."""
    if isinstance(cart, (list, tuple)):
        return cart
    raise CartValidationError(PRICE_MISSING)


def validate_and_total(nonce: Any, cart: Any) -> CartTotal:
    """
    Valide (nonce, panier) puis renvoie le total à débiter.
    - Ordre des contrôles: nonce, panier vide, prix absent, prix non numérique, prix négatif.
      Chaque contrôle parcourt tout le panier avant le suivant; le premier échec lève CartValidationError.
    - Total: somme arithmétique des prix, sans arrondi.
    - Fonction pure: aucun effet de bord, le panier n'est pas modifié.
    """
    if not nonce:
        raise CartValidationError(NONCE_REQUIRED)

    if not cart:
        raise CartValidationError(CART_EMPTY)

    items = cart_items(cart)

    for item in items:
        if not isinstance(item, Mapping) or "price" not in item:
            raise CartValidationError(PRICE_MISSING)

    for item in items:
        if not is_numeric_price(item["price"]):
            raise CartValidationError(PRICE_NOT_NUMERIC)

    for item in items:
        if item["price"] < 0:
            raise CartValidationError(PRICE_NEGATIVE)

    total = 0
    for item in items:
        total += item["price"]
    return CartTotal(total=total, item_count=len(items))
