"""Custom exceptions for bean-match."""


class BeanMatchError(Exception):
    """Base exception for bean-match."""

    pass


class PayloadError(BeanMatchError):
    """Raised when an input file cannot be read or validated."""

    pass


class IngestionError(BeanMatchError):
    """Raised when extracted bag info is missing required fields."""

    pass


class CatalogError(BeanMatchError):
    """Raised when the catalog store fails to read or write."""

    pass
