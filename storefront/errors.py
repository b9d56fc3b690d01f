# storefront/errors.py
# Domain errors. The HTTP layer turns these into HTTPException responses.


class StorefrontError(Exception):
    """Base class for every storefront domain error."""


class RemoteFetchFailed(StorefrontError):
    """Remote product list could not be fetched, parsed, or was empty."""


class CorruptPersistedState(StorefrontError):
    """A stored value could not be decoded."""


class DuplicateOrInvalidProduct(StorefrontError):
    """Raised by Catalog.add when the code is taken or the fields are invalid."""


class ProductNotFound(StorefrontError):
    def __init__(self, code):
        super().__init__(f"product not found: {code}")
        self.code = code


class EmptyCart(StorefrontError):
    """Checkout attempted on a cart with no lines."""


class InvalidQuantity(StorefrontError, ValueError):
    """Quantities must be plain integers."""
