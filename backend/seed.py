#!/usr/bin/env python
"""
Seed script to create a demo product through the shop API for local smoke tests.
"""
from __future__ import annotations

import argparse
import sys

from shop_admin.edit import apply_edit
from shop_admin.models import EditPayload, ProductCoreFields
from shop_admin.repository_client import get_repository


def seed(with_images: bool = True):
    repo = get_repository()
    product = repo.create_product(
        ProductCoreFields(
            title="Demo Jacket",
            description="Lightweight demo jacket for seeding.",
            price=120.0,
        )
    )

    payload = EditPayload(
        title=product.title,
        description=product.description,
        price=str(product.price),
    )
    if with_images:
        # First URL becomes the thumbnail since a fresh product has none.
        payload.new_images = (
            "https://demo.brand.test/products/demo-item.jpg,"
            "https://demo.brand.test/products/demo-item-back.jpg"
        )
    outcome = apply_edit(repo, product.id, payload)

    print(f"Seeded demo product {product.id} (all steps ok: {outcome.all_succeeded})")
    return product.id


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a demo product through the shop API.")
    parser.add_argument("--no-images", action="store_true", help="Skip attaching demo images.")
    args = parser.parse_args()
    try:
        seed(with_images=not args.no_images)
    except Exception as exc:
        print(
            "Seed failed:",
            exc,
            "\nCommon fixes:",
            "\n- Ensure .env has a real PRODUCT_API_URL (not the placeholder)."
            "\n- Verify the shop API is running and reachable.",
            file=sys.stderr,
        )
        sys.exit(1)
