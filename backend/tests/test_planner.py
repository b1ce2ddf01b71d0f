"""Tests for turning an edit submission into reconciliation steps."""

from shop_admin.edit import StepKind, plan
from shop_admin.edit.steps import (
    AddImages,
    AddSimilarLinks,
    PatchCoreFields,
    RemoveComments,
    RemoveImages,
    RemoveSimilarLinks,
    SetThumbnail,
)
from shop_admin.models import EditPayload, NewImage, SimilarPair


def _kinds(steps):
    return [step.kind for step in steps]


def test_empty_payload_only_patches_core_fields(product_with_thumbnail):
    steps = plan(product_with_thumbnail, EditPayload())
    assert _kinds(steps) == [StepKind.PATCH_CORE_FIELDS]


def test_empty_collections_are_skipped(product_with_thumbnail):
    payload = EditPayload.model_validate(
        {"commentsToRemove": [], "imagesToRemove": [], "similarToRemove": [], "similarToAdd": [], "newImages": " , "}
    )
    assert _kinds(plan(product_with_thumbnail, payload)) == [StepKind.PATCH_CORE_FIELDS]


def test_empty_string_id_fields_are_skipped(product_with_thumbnail):
    payload = EditPayload.model_validate(
        {"commentsToRemove": "", "imagesToRemove": "", "similarToRemove": "", "similarToAdd": ""}
    )
    assert _kinds(plan(product_with_thumbnail, payload)) == [StepKind.PATCH_CORE_FIELDS]


class TestDefaultThumbnail:
    def test_first_new_image_becomes_thumbnail_when_none_exists(self, product_without_thumbnail):
        payload = EditPayload.model_validate({"newImages": "u1,u2"})
        step = plan(product_without_thumbnail, payload)[0]
        assert isinstance(step, AddImages)
        assert [(image.url, image.main) for image in step.images] == [("u1", True), ("u2", False)]

    def test_no_default_when_thumbnail_exists(self, product_with_thumbnail):
        payload = EditPayload.model_validate({"newImages": "u1\r\nu2,u3"})
        step = plan(product_with_thumbnail, payload)[0]
        assert [image.main for image in step.images] == [False, False, False]

    def test_decision_uses_pre_edit_snapshot(self, product_with_thumbnail):
        # Removing the current thumbnail in the same edit does not make the
        # new image the default: the snapshot still has a thumbnail.
        payload = EditPayload.model_validate({"imagesToRemove": "i0", "newImages": "u1"})
        steps = plan(product_with_thumbnail, payload)
        assert steps[1] == AddImages("p1", (NewImage(url="u1", main=False),))


class TestSetThumbnail:
    def test_included_when_different(self, product_with_thumbnail):
        steps = plan(product_with_thumbnail, EditPayload.model_validate({"mainImage": "i1"}))
        assert steps[0] == SetThumbnail("p1", "i1")

    def test_excluded_when_equal(self, product_with_thumbnail):
        steps = plan(product_with_thumbnail, EditPayload.model_validate({"mainImage": "i0"}))
        assert StepKind.SET_THUMBNAIL not in _kinds(steps)

    def test_excluded_when_absent(self, product_without_thumbnail):
        steps = plan(product_without_thumbnail, EditPayload())
        assert StepKind.SET_THUMBNAIL not in _kinds(steps)

    def test_included_when_product_has_no_thumbnail(self, product_without_thumbnail):
        steps = plan(product_without_thumbnail, EditPayload.model_validate({"mainImage": "i1"}))
        assert steps[0] == SetThumbnail("p1", "i1")


def test_similar_links_are_directed_from_edited_product(product_with_thumbnail):
    payload = EditPayload.model_validate({"similarToRemove": "s1", "similarToAdd": ["p8", "p9"]})
    steps = plan(product_with_thumbnail, payload)
    assert steps[0] == RemoveSimilarLinks(("s1",))
    assert steps[1] == AddSimilarLinks(
        (SimilarPair(product_id="p1", similar_id="p8"), SimilarPair(product_id="p1", similar_id="p9"))
    )


def test_scenario_full_edit(product_with_thumbnail):
    payload = EditPayload.model_validate(
        {
            "title": "New",
            "description": "D",
            "price": "100",
            "commentsToRemove": "c1",
            "imagesToRemove": ["i1", "i2"],
            "newImages": "http://x/1.png",
            "mainImage": "i3",
            "similarToAdd": ["p9"],
        }
    )
    steps = plan(product_with_thumbnail, payload)

    assert _kinds(steps) == [
        StepKind.REMOVE_COMMENTS,
        StepKind.REMOVE_IMAGES,
        StepKind.ADD_IMAGES,
        StepKind.SET_THUMBNAIL,
        StepKind.ADD_SIMILAR_LINKS,
        StepKind.PATCH_CORE_FIELDS,
    ]
    assert steps[0] == RemoveComments(("c1",))
    assert steps[1] == RemoveImages(("i1", "i2"))
    assert steps[2] == AddImages("p1", (NewImage(url="http://x/1.png", main=False),))
    assert steps[3] == SetThumbnail("p1", "i3")
    assert steps[4] == AddSimilarLinks((SimilarPair(product_id="p1", similar_id="p9"),))
    patch = steps[5]
    assert isinstance(patch, PatchCoreFields)
    assert (patch.fields.title, patch.fields.description, patch.fields.price) == ("New", "D", 100.0)


def test_scenario_only_new_image_without_thumbnail(product_without_thumbnail):
    payload = EditPayload.model_validate({"title": "", "description": "", "price": "", "newImages": "u1"})
    steps = plan(product_without_thumbnail, payload)

    assert steps[0] == AddImages("p1", (NewImage(url="u1", main=True),))
    patch = steps[1]
    assert len(steps) == 2
    assert (patch.fields.title, patch.fields.description) == ("", "")
    assert patch.fields.price == 0.0
