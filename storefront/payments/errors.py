"""
Taxonomie d'erreurs du flux de paiement.
- CartValidationError: faute du client (400), la passerelle n'est jamais appelée
- PaymentGatewayError / TransactionDeclinedError: service externe (500), aucune commande créée
- OrderPersistenceError: écriture en base échouée après débit (500), non compensée
"""

class PaymentError(Exception):
    status_code = 500

    def __init__(self, message: str, original: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original = original

    def __str__(self) -> str:
        return self.message


class CartValidationError(PaymentError):
    status_code = 400


class PaymentGatewayError(PaymentError):
    """Erreur transport/SDK: `message` est le texte brut de l'erreur d'origine."""


class TransactionDeclinedError(PaymentError):
    pass


class OrderPersistenceError(PaymentError):
    pass
