from typing import List

from ..models import EditPayload, NewImage, Product, ProductCoreFields, SimilarPair
from ..normalize import parse_new_image_urls, parse_price
from .steps import (
    AddImages,
    AddSimilarLinks,
    PatchCoreFields,
    ReconciliationStep,
    RemoveComments,
    RemoveImages,
    RemoveSimilarLinks,
    SetThumbnail,
)


def plan(snapshot: Product, payload: EditPayload) -> List[ReconciliationStep]:
    """
    Turn an edit submission into the ordered list of repository mutations.

    Thumbnail decisions are made against `snapshot` as it was before the edit,
    even when an earlier step in the same plan removes the current thumbnail.
    The order below is fixed and does not depend on the payload.
    """
    product_id = snapshot.id
    current_thumbnail_id = snapshot.thumbnail.id if snapshot.thumbnail else None
    steps: List[ReconciliationStep] = []

    if payload.comments_to_remove:
        steps.append(RemoveComments(tuple(payload.comments_to_remove)))

    if payload.images_to_remove:
        steps.append(RemoveImages(tuple(payload.images_to_remove)))

    urls = parse_new_image_urls(payload.new_images)
    if urls:
        images = [NewImage(url=url, main=False) for url in urls]
        if snapshot.thumbnail is None:
            images[0].main = True
        steps.append(AddImages(product_id, tuple(images)))

    if payload.main_image and payload.main_image != current_thumbnail_id:
        steps.append(SetThumbnail(product_id, payload.main_image))

    if payload.similar_to_remove:
        steps.append(RemoveSimilarLinks(tuple(payload.similar_to_remove)))

    if payload.similar_to_add:
        pairs = tuple(
            SimilarPair(product_id=product_id, similar_id=similar_id)
            for similar_id in payload.similar_to_add
        )
        steps.append(AddSimilarLinks(pairs))

    steps.append(
        PatchCoreFields(
            product_id,
            ProductCoreFields(
                title=payload.title,
                description=payload.description,
                price=parse_price(payload.price),
            ),
        )
    )
    return steps
