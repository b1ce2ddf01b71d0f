"""
Runs a reconciliation plan against the product repository.

Every step is attempted. A failing step is logged and recorded, and the next
step runs anyway; nothing already applied is rolled back. Comment deletions
fan out concurrently and are joined before the next step; everything else is
strictly sequential.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Sequence

from ..repository import ProductRepository
from .outcome import ExecutionState, StepResult
from .steps import (
    AddImages,
    AddSimilarLinks,
    PatchCoreFields,
    ReconciliationStep,
    RemoveComments,
    RemoveImages,
    RemoveSimilarLinks,
    SetThumbnail,
    StepKind,
)

logger = logging.getLogger(__name__)


class StepFailed(Exception):
    pass


class PlanExecutor:
    def __init__(self, repository: ProductRepository, max_workers: int = 8):
        self.repository = repository
        self.max_workers = max_workers
        self.state = ExecutionState.PENDING
        self._handlers: Dict[StepKind, Callable] = {
            StepKind.REMOVE_COMMENTS: self._remove_comments,
            StepKind.REMOVE_IMAGES: self._remove_images,
            StepKind.ADD_IMAGES: self._add_images,
            StepKind.SET_THUMBNAIL: self._set_thumbnail,
            StepKind.REMOVE_SIMILAR_LINKS: self._remove_similar_links,
            StepKind.ADD_SIMILAR_LINKS: self._add_similar_links,
            StepKind.PATCH_CORE_FIELDS: self._patch_core_fields,
        }

    def run(self, steps: Sequence[ReconciliationStep]) -> List[StepResult]:
        if self.state is not ExecutionState.PENDING:
            raise RuntimeError(f"Executor already used (state={self.state.value})")
        self.state = ExecutionState.RUNNING

        results: List[StepResult] = []
        for step in steps:
            logger.debug("Running step %s", step.kind.value)
            try:
                self._handlers[step.kind](step)
            except Exception as exc:
                logger.warning("Step %s failed: %s", step.kind.value, exc, exc_info=True)
                results.append(StepResult(step.kind, error=str(exc) or type(exc).__name__))
            else:
                results.append(StepResult(step.kind))

        failed = any(not r.succeeded for r in results)
        self.state = ExecutionState.COMPLETED_WITH_ERRORS if failed else ExecutionState.COMPLETED
        return results

    def _remove_comments(self, step: RemoveComments):
        workers = max(1, min(self.max_workers, len(step.comment_ids)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                comment_id: pool.submit(self.repository.delete_comment, comment_id)
                for comment_id in step.comment_ids
            }
        # Leaving the pool waits for every deletion, failed or not.
        errors = []
        for comment_id, future in futures.items():
            exc = future.exception()
            if exc is not None:
                errors.append(f"{comment_id}: {exc}")
        if errors:
            raise StepFailed(
                f"{len(errors)} of {len(step.comment_ids)} comment deletions failed ({'; '.join(errors)})"
            )

    def _remove_images(self, step: RemoveImages):
        self.repository.remove_images(list(step.image_ids))

    def _add_images(self, step: AddImages):
        self.repository.add_images(step.product_id, list(step.images))

    def _set_thumbnail(self, step: SetThumbnail):
        self.repository.set_thumbnail(step.product_id, step.new_thumbnail_id)

    def _remove_similar_links(self, step: RemoveSimilarLinks):
        self.repository.remove_similar_links(list(step.ids))

    def _add_similar_links(self, step: AddSimilarLinks):
        self.repository.add_similar_links(list(step.pairs))

    def _patch_core_fields(self, step: PatchCoreFields):
        self.repository.patch_core_fields(step.product_id, step.fields)


def execute(repository: ProductRepository, steps: Sequence[ReconciliationStep], max_workers: int = 8) -> List[StepResult]:
    return PlanExecutor(repository, max_workers=max_workers).run(steps)
