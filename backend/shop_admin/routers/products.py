import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel

from ..config import get_settings
from ..edit import Outcome, apply_edit
from ..errors import ProductNotFound, RepositoryError
from ..models import (
    EditPayload,
    Product,
    ProductCoreFields,
    ProductCreatePayload,
    ProductFilter,
    SimilarProduct,
)
from ..normalize import parse_price
from ..repository import HttpProductRepository
from ..repository_client import get_repository

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_repository() -> HttpProductRepository:
    try:
        return get_repository()
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Product repository initialization failed",
        ) from exc


def _bad_gateway(exc: RepositoryError) -> HTTPException:
    logger.error("Product API error: %s", exc)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Product API error: {exc}",
    )


class ProductView(BaseModel):
    item: Product
    similar_products: List[SimilarProduct]
    available_products: List[Product]


@router.get("/", response_model=List[Product])
def list_products(repo: HttpProductRepository = Depends(_get_repository)):
    try:
        return repo.list_products()
    except RepositoryError as exc:
        raise _bad_gateway(exc) from exc


@router.get("/search", response_model=List[Product])
def search_products(
    title: Optional[str] = None,
    description: Optional[str] = None,
    price_from: Optional[str] = Query(default=None, alias="priceFrom"),
    price_to: Optional[str] = Query(default=None, alias="priceTo"),
    repo: HttpProductRepository = Depends(_get_repository),
):
    product_filter = ProductFilter(
        title=title, description=description, price_from=price_from, price_to=price_to
    )
    try:
        return repo.search_products(product_filter)
    except RepositoryError as exc:
        raise _bad_gateway(exc) from exc


@router.post("/create", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreatePayload,
    repo: HttpProductRepository = Depends(_get_repository),
):
    fields = ProductCoreFields(
        title=payload.title,
        description=payload.description,
        price=parse_price(payload.price),
    )
    try:
        created = repo.create_product(fields)
    except RepositoryError as exc:
        raise _bad_gateway(exc) from exc
    logger.info("Created product %s", created.id)
    return created


@router.get("/{product_id}", response_model=ProductView)
def get_product(product_id: str, repo: HttpProductRepository = Depends(_get_repository)):
    """
    Product with its similar products and the products that can still be
    linked as similar.
    """
    try:
        product = repo.get_product(product_id)
        similar = repo.get_similar_products(product_id)
        available = repo.get_available_for_similar(product_id)
    except ProductNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"id": product_id}) from exc
    except RepositoryError as exc:
        raise _bad_gateway(exc) from exc
    return ProductView(item=product, similar_products=similar, available_products=available)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_product(product_id: str, repo: HttpProductRepository = Depends(_get_repository)):
    try:
        repo.remove_product(product_id)
    except ProductNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"id": product_id}) from exc
    except RepositoryError as exc:
        raise _bad_gateway(exc) from exc
    logger.info("Removed product %s", product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Kept for the old admin links, which remove through a plain GET.
@router.get("/remove-product/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_product_legacy(product_id: str, repo: HttpProductRepository = Depends(_get_repository)):
    return remove_product(product_id, repo)


@router.post("/save/{product_id}", response_model=Outcome)
def save_product(
    product_id: str,
    payload: EditPayload,
    response: Response,
    repo: HttpProductRepository = Depends(_get_repository),
):
    """
    Apply an edit submission. Returns the per-step outcome; 207 when some
    steps failed (the steps that succeeded stay applied).
    """
    try:
        outcome = apply_edit(repo, product_id, payload, max_workers=get_settings().edit_max_workers)
    except ProductNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"id": product_id}) from exc
    except RepositoryError as exc:
        raise _bad_gateway(exc) from exc
    if not outcome.all_succeeded:
        response.status_code = status.HTTP_207_MULTI_STATUS
    return outcome
