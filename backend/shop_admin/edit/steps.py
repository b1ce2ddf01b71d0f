"""
The mutations an edit submission can turn into.

Each step carries everything needed to run it on its own; steps commit
independently at the repository, there is no transaction spanning them.
"""
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple, Union

from ..models import NewImage, ProductCoreFields, SimilarPair


class StepKind(str, Enum):
    REMOVE_COMMENTS = "remove_comments"
    REMOVE_IMAGES = "remove_images"
    ADD_IMAGES = "add_images"
    SET_THUMBNAIL = "set_thumbnail"
    REMOVE_SIMILAR_LINKS = "remove_similar_links"
    ADD_SIMILAR_LINKS = "add_similar_links"
    PATCH_CORE_FIELDS = "patch_core_fields"


@dataclass(frozen=True)
class RemoveComments:
    kind: ClassVar[StepKind] = StepKind.REMOVE_COMMENTS
    comment_ids: Tuple[str, ...]


@dataclass(frozen=True)
class RemoveImages:
    kind: ClassVar[StepKind] = StepKind.REMOVE_IMAGES
    image_ids: Tuple[str, ...]


@dataclass(frozen=True)
class AddImages:
    kind: ClassVar[StepKind] = StepKind.ADD_IMAGES
    product_id: str
    images: Tuple[NewImage, ...]


@dataclass(frozen=True)
class SetThumbnail:
    kind: ClassVar[StepKind] = StepKind.SET_THUMBNAIL
    product_id: str
    new_thumbnail_id: str


@dataclass(frozen=True)
class RemoveSimilarLinks:
    kind: ClassVar[StepKind] = StepKind.REMOVE_SIMILAR_LINKS
    ids: Tuple[str, ...]


@dataclass(frozen=True)
class AddSimilarLinks:
    kind: ClassVar[StepKind] = StepKind.ADD_SIMILAR_LINKS
    pairs: Tuple[SimilarPair, ...]


@dataclass(frozen=True)
class PatchCoreFields:
    kind: ClassVar[StepKind] = StepKind.PATCH_CORE_FIELDS
    product_id: str
    fields: ProductCoreFields


ReconciliationStep = Union[
    RemoveComments,
    RemoveImages,
    AddImages,
    SetThumbnail,
    RemoveSimilarLinks,
    AddSimilarLinks,
    PatchCoreFields,
]
