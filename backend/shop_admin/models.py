from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .normalize import normalize_identifier_field


# Wire shapes follow the shop API, which serves camelCase keys.
class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


# --- images ---
# At most one image per product has main=True (the thumbnail).
class ProductImage(WireModel):
    id: str
    url: str
    main: bool = False
    product_id: Optional[str] = Field(default=None, alias="productId")


# --- comments ---
class ProductComment(WireModel):
    id: str
    product_id: Optional[str] = Field(default=None, alias="productId")
    name: Optional[str] = None
    email: Optional[str] = None
    body: Optional[str] = None


# --- products ---
class Product(WireModel):
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    thumbnail: Optional[ProductImage] = None
    images: List[ProductImage] = Field(default_factory=list)
    comments: List[ProductComment] = Field(default_factory=list)


# --- similar links ---
# Directed: product_id -> similar_id. No reciprocal row is written.
class SimilarPair(WireModel):
    product_id: str = Field(alias="productId")
    similar_id: str = Field(alias="similarId")


class SimilarProduct(WireModel):
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    thumbnail: Optional[ProductImage] = None


class NewImage(WireModel):
    url: str
    main: bool = False


class ProductCoreFields(WireModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None


# Form fields may arrive as a single id or a list of ids; they are
# normalized to a list as soon as the payload is validated.
IdentifierList = Annotated[List[str], BeforeValidator(normalize_identifier_field)]


class EditPayload(WireModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    main_image: Optional[str] = Field(default=None, alias="mainImage")
    new_images: Optional[str] = Field(default=None, alias="newImages")
    comments_to_remove: IdentifierList = Field(default_factory=list, alias="commentsToRemove")
    images_to_remove: IdentifierList = Field(default_factory=list, alias="imagesToRemove")
    similar_to_remove: IdentifierList = Field(default_factory=list, alias="similarToRemove")
    similar_to_add: IdentifierList = Field(default_factory=list, alias="similarToAdd")


class ProductCreatePayload(WireModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None


class ProductFilter(WireModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price_from: Optional[Union[float, str]] = Field(default=None, alias="priceFrom")
    price_to: Optional[Union[float, str]] = Field(default=None, alias="priceTo")

    def to_params(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
