"""Exceptions raised by the catalog search core."""


class CatalogSearchError(Exception):
    """Base class for catalog search errors."""


class CatalogFetchError(CatalogSearchError):
    """Raised when the upstream catalog API cannot deliver a snapshot."""


class CatalogUnavailableError(CatalogSearchError):
    """Raised when a refresh fails and no snapshot has ever been loaded.

    Attributes:
        cause: The underlying refresh failure
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ControllerClosedError(CatalogSearchError):
    """Raised when a query is submitted to a closed query controller."""
