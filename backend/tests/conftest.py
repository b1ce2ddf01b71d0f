"""Shared fixtures: an in-memory product repository and a configured environment."""

import os
from typing import Dict, List, Optional, Tuple

import pytest

os.environ.setdefault("PRODUCT_API_URL", "http://shop.test/api")

from shop_admin.errors import ProductNotFound, RepositoryError  # noqa: E402
from shop_admin.models import Product, ProductComment, ProductImage  # noqa: E402


class FakeRepository:
    """Records every call; methods named in `failures` raise RepositoryError."""

    def __init__(self, products: Optional[Dict[str, Product]] = None, failures=(), missing_comments=()):
        self.products = products or {}
        self.failures = set(failures)
        self.missing_comments = set(missing_comments)
        self.calls: List[Tuple] = []

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failures:
            raise RepositoryError(f"{name} exploded", status_code=500)

    def called(self, name) -> List[Tuple]:
        return [call for call in self.calls if call[0] == name]

    def get_product(self, product_id):
        self._record("get_product", product_id)
        if product_id not in self.products:
            raise ProductNotFound(product_id)
        return self.products[product_id]

    def delete_comment(self, comment_id):
        self._record("delete_comment", comment_id)
        if comment_id in self.missing_comments:
            raise ProductNotFound(comment_id)

    def remove_images(self, image_ids):
        self._record("remove_images", list(image_ids))

    def add_images(self, product_id, images):
        self._record("add_images", product_id, list(images))

    def set_thumbnail(self, product_id, new_thumbnail_id):
        self._record("set_thumbnail", product_id, new_thumbnail_id)

    def remove_similar_links(self, ids):
        self._record("remove_similar_links", list(ids))

    def add_similar_links(self, pairs):
        self._record("add_similar_links", list(pairs))

    def patch_core_fields(self, product_id, fields):
        self._record("patch_core_fields", product_id, fields)


def make_product(product_id="p1", thumbnail_id: Optional[str] = "i0") -> Product:
    images = [ProductImage(id="i1", url="http://x/i1.png", product_id=product_id)]
    thumbnail = None
    if thumbnail_id:
        thumbnail = ProductImage(id=thumbnail_id, url="http://x/thumb.png", main=True, product_id=product_id)
        images.insert(0, thumbnail)
    return Product(
        id=product_id,
        title="Old",
        description="Old description",
        price=50.0,
        thumbnail=thumbnail,
        images=images,
        comments=[ProductComment(id="c1", product_id=product_id, name="Ann", email="a@x.test", body="Nice")],
    )


@pytest.fixture
def product_with_thumbnail():
    return make_product(thumbnail_id="i0")


@pytest.fixture
def product_without_thumbnail():
    return make_product(thumbnail_id=None)


@pytest.fixture
def fake_repo(product_with_thumbnail):
    return FakeRepository({"p1": product_with_thumbnail})
