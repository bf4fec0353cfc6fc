"""Error types raised by the store core"""


class StoreError(Exception):
    """Base class for all store errors"""


class ValidationError(StoreError):
    """Invalid cart input or unmet order precondition"""


class EmptyCartError(ValidationError):
    """Order placement attempted with nothing in the cart"""

    def __init__(self, message: str = "Cannot place an order with an empty cart"):
        super().__init__(message)


class OrderInProgressError(ValidationError):
    """A session already has an active order"""


class InvalidStockError(ValidationError):
    """Stock value is negative or not an integer"""


class NotFoundError(StoreError):
    """Unknown product, session or order"""


class ProviderError(StoreError):
    """Message provider could not produce text"""
