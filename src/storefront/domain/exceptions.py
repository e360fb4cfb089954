"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Each class carries the status code and the public message used when the
error crosses back to a shopper. ``str(exc)`` may hold more detail and is
meant for server-side logs only.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 500
    public_message = "Internal error"

    def __init__(
        self,
        message: str | None = None,
        *,
        public_message: str | None = None,
    ) -> None:
        if public_message is not None:
            self.public_message = public_message
        super().__init__(message or self.public_message)


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    status_code = 400
    public_message = "Invalid request"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404
    public_message = "Not found"


# ---------------------------------------------------------------------------
# Checkout request errors
# ---------------------------------------------------------------------------


class MalformedRequestError(ValidationError):
    """The request body could not be parsed into the expected shape."""

    public_message = "Invalid request body"


class UnsupportedMediaTypeError(ValidationError):
    status_code = 415
    public_message = "Content-Type must be application/json"


class EmptyCartError(ValidationError):
    public_message = "No items in cart"


class TooManyItemsError(ValidationError):

    def __init__(self, limit: int) -> None:
        super().__init__(public_message=f"Too many items (max {limit})")


class InvalidItemError(ValidationError):
    """A line item failed sanitization or bounds checks."""

    public_message = "Invalid item in cart"


class InvalidSelectionError(ValidationError):
    """A fabric or lining choice does not match the product."""


class UnknownProductError(EntityNotFoundError):
    """A line item references a product that is missing or inactive."""

    status_code = 400

    def __init__(self, product_ref: str) -> None:
        self.product_ref = product_ref
        super().__init__(public_message=f"Invalid product: {product_ref}")


class InsufficientStockError(ValidationError):
    """More units were requested than the product has in stock."""

    def __init__(self, product_ref: str, available: int) -> None:
        self.product_ref = product_ref
        self.available = available
        if available <= 0:
            message = f"Out of stock: {product_ref}"
        else:
            message = f"Only {available} of {product_ref} in stock"
        super().__init__(public_message=message)


class WebhookVerificationError(ValidationError):
    """A payment webhook was unsigned or its signature did not verify."""

    public_message = "Invalid signature"


# ---------------------------------------------------------------------------
# Server-side errors
# ---------------------------------------------------------------------------


class ConfigurationError(DomainException):
    """Required server configuration (credentials, URLs) is missing."""

    public_message = "Server configuration error"


class PaymentGatewayError(DomainException):
    """The payment processor rejected or failed a request."""

    public_message = "Failed to create checkout session"


class CatalogUnavailableError(DomainException):
    """The catalog backing store could not be reached or answered badly."""

    public_message = "Failed to fetch products"


class LedgerUnavailableError(DomainException):
    """The processed-order ledger could not be read or written."""

    public_message = "Failed to record order"
