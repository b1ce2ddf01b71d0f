import logging

from ..errors import ProductNotFound, RepositoryError
from ..models import EditPayload, Product
from ..repository import ProductRepository
from .executor import execute
from .outcome import Outcome, summarize
from .planner import plan

logger = logging.getLogger(__name__)


def load_snapshot(repository: ProductRepository, product_id: str) -> Product:
    """Read the product aggregate once. Failures here abort the whole edit."""
    try:
        snapshot = repository.get_product(product_id)
    except ProductNotFound:
        logger.warning("Product %s not found, nothing to edit", product_id)
        raise
    except RepositoryError:
        logger.exception("Snapshot load failed for product %s", product_id)
        raise
    logger.info(
        "Loaded snapshot for product %s (thumbnail=%s, images=%d, comments=%d)",
        product_id,
        snapshot.thumbnail.id if snapshot.thumbnail else None,
        len(snapshot.images),
        len(snapshot.comments),
    )
    return snapshot


def apply_edit(
    repository: ProductRepository,
    product_id: str,
    payload: EditPayload,
    max_workers: int = 8,
) -> Outcome:
    """
    Apply one edit submission to a product.

    Only a failed snapshot load is fatal (ProductNotFound or RepositoryError
    propagates and nothing is written). Step failures end up in the returned
    Outcome.
    """
    snapshot = load_snapshot(repository, product_id)
    steps = plan(snapshot, payload)
    logger.info("Planned %d steps for product %s: %s", len(steps), product_id, [s.kind.value for s in steps])

    results = execute(repository, steps, max_workers=max_workers)
    outcome = summarize(results, product_id=product_id)
    if outcome.all_succeeded:
        logger.info("Edit of product %s completed", product_id)
    else:
        logger.error(
            "Edit of product %s completed with errors in %s",
            product_id,
            [kind.value for kind in outcome.failed_steps],
        )
    return outcome
