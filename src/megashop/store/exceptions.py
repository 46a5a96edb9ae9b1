"""Store domain exceptions."""


class StoreError(Exception):
    """Base class for store errors."""


class InsufficientStockError(StoreError):
    """Requested quantity exceeds the product's stock."""

    def __init__(self, product, requested):
        self.product = product
        self.requested = requested
        super().__init__(f"Not enough stock for {product.name}. Available: {product.stock}")


class ProductUnavailableError(StoreError):
    """A product in the cart no longer exists."""


class OrderImportError(StoreError):
    """The uploaded orders CSV cannot be imported."""
