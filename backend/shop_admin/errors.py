from typing import Optional


class RepositoryError(Exception):
    """A call to the product repository failed (timeout, network, non-2xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProductNotFound(RepositoryError):
    """The referenced product, comment or image does not exist."""

    def __init__(self, resource_id: str, message: Optional[str] = None):
        super().__init__(message or f"Not found: {resource_id}", status_code=404)
        self.resource_id = resource_id
