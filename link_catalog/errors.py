# link_catalog/errors.py


class LinkCatalogError(Exception):
    """Base error for all link catalog failures."""


class DocumentFetchError(LinkCatalogError):
    """Raised when the tracked README cannot be fetched or decoded."""


class CatalogNotFoundError(LinkCatalogError):
    """Raised when the dates pass finds no persisted catalog."""


class FetchError(LinkCatalogError):
    """Raised by the HTTP client on transport errors or bad statuses."""

    def __init__(self, url: str, message: str, status: int | None = None):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.status = status
