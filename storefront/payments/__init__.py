"""
Module 'payments' (feature-first): point d'entrée public.
Réunit validation panier, adaptateur Braintree, persistance des commandes et orchestration.
"""

from .cart import CartTotal, validate_and_total
from .errors import (
    PaymentError,
    CartValidationError,
    PaymentGatewayError,
    TransactionDeclinedError,
    OrderPersistenceError,
)
from .gateway import TransactionResult, BraintreePaymentGateway, build_gateway, get_payment_gateway
from .repository import insert_order
from .service import PaymentState, finalize_order, process_payment

__all__ = [
    # cart
    "CartTotal",
    "validate_and_total",
    # errors
    "PaymentError",
    "CartValidationError",
    "PaymentGatewayError",
    "TransactionDeclinedError",
    "OrderPersistenceError",
    # gateway
    "TransactionResult",
    "BraintreePaymentGateway",
    "build_gateway",
    "get_payment_gateway",
    # repository
    "insert_order",
    # services
    "PaymentState",
    "finalize_order",
    "process_payment",
]
