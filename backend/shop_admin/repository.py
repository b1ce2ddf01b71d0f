"""
Client for the shop's product REST API.

`ProductRepository` is the contract the edit engine and the admin routes
depend on; `HttpProductRepository` binds it to the REST API with requests.
Tests substitute any object with the same methods.
"""
import logging
import math
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests

from .errors import ProductNotFound, RepositoryError
from .models import (
    NewImage,
    Product,
    ProductCoreFields,
    ProductFilter,
    SimilarPair,
    SimilarProduct,
)

logger = logging.getLogger(__name__)


class ProductRepository(Protocol):
    def get_product(self, product_id: str) -> Product: ...

    def delete_comment(self, comment_id: str) -> None: ...

    def remove_images(self, image_ids: Sequence[str]) -> None: ...

    def add_images(self, product_id: str, images: Sequence[NewImage]) -> None: ...

    def set_thumbnail(self, product_id: str, new_thumbnail_id: str) -> None: ...

    def remove_similar_links(self, ids: Sequence[str]) -> None: ...

    def add_similar_links(self, pairs: Sequence[SimilarPair]) -> None: ...

    def patch_core_fields(self, product_id: str, fields: ProductCoreFields) -> None: ...


def _json_safe(value: Any) -> Any:
    # JSON has no NaN or Infinity literal; the shop API receives null instead.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class HttpProductRepository:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, resource_id: Optional[str] = None, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise RepositoryError(f"{method} {url} failed: {exc}") from exc

        if resp.status_code == 404 and resource_id is not None:
            raise ProductNotFound(resource_id)
        if not resp.ok:
            raise RepositoryError(
                f"{method} {url} returned {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return None

    # --- reads ---

    def list_products(self) -> List[Product]:
        data = self._request("GET", "/products")
        return [Product.model_validate(row) for row in data or []]

    def search_products(self, product_filter: ProductFilter) -> List[Product]:
        data = self._request("GET", "/products/search", params=product_filter.to_params())
        return [Product.model_validate(row) for row in data or []]

    def get_product(self, product_id: str) -> Product:
        data = self._request("GET", f"/products/{product_id}", resource_id=product_id)
        if not data:
            raise ProductNotFound(product_id)
        return Product.model_validate(data)

    def get_similar_products(self, product_id: str) -> List[SimilarProduct]:
        data = self._request("GET", f"/products/similar/{product_id}")
        return [SimilarProduct.model_validate(row) for row in data or []]

    def get_available_for_similar(self, product_id: str) -> List[Product]:
        data = self._request("GET", f"/products/available-for-similar/{product_id}")
        return [Product.model_validate(row) for row in data or []]

    # --- product lifecycle ---

    def create_product(self, fields: ProductCoreFields) -> Product:
        body = {k: _json_safe(v) for k, v in fields.model_dump(exclude_none=True).items()}
        data = self._request("POST", "/products", json=body)
        return Product.model_validate(data)

    def remove_product(self, product_id: str) -> None:
        self._request("DELETE", f"/products/{product_id}", resource_id=product_id)

    # --- mutations used by the edit engine ---

    def delete_comment(self, comment_id: str) -> None:
        self._request("DELETE", f"/comments/{comment_id}", resource_id=comment_id)

    def remove_images(self, image_ids: Sequence[str]) -> None:
        self._request("POST", "/products/remove-images", json=list(image_ids))

    def add_images(self, product_id: str, images: Sequence[NewImage]) -> None:
        body: Dict[str, Any] = {
            "productId": product_id,
            "images": [image.model_dump() for image in images],
        }
        self._request("POST", "/products/add-images", json=body)

    def set_thumbnail(self, product_id: str, new_thumbnail_id: str) -> None:
        self._request(
            "POST",
            f"/products/update-thumbnail/{product_id}",
            resource_id=product_id,
            json={"newThumbnailId": new_thumbnail_id},
        )

    def remove_similar_links(self, ids: Sequence[str]) -> None:
        self._request("DELETE", "/products/similar", json=list(ids))

    def add_similar_links(self, pairs: Sequence[SimilarPair]) -> None:
        self._request("POST", "/products/similar", json=[p.model_dump(by_alias=True) for p in pairs])

    def patch_core_fields(self, product_id: str, fields: ProductCoreFields) -> None:
        body = fields.model_dump(exclude_none=True)
        # price is always sent, NaN and Infinity included (as null).
        body["price"] = _json_safe(fields.price)
        self._request("PATCH", f"/products/{product_id}", json=body)
