"""
Outfit engine exceptions.

Only invalid input is surfaced to users as an error. Missing rules and
empty candidate pools are normal results, and retrieval failures are
absorbed per slot by the fallback cascade.
"""


class OutfitEngineError(Exception):
    """Base class for outfit engine errors."""
    pass


class InvalidInputError(OutfitEngineError):
    """Raised when a request is rejected before any slot is processed."""
    pass


class BaseProductNotFoundError(InvalidInputError):
    """Raised when the base product id does not exist in the catalog."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class RetrievalError(OutfitEngineError):
    """Raised when a catalog query errors or exceeds the request budget."""
    pass
