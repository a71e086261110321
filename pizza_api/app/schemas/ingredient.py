"""
Pydantic schemas for pizza ingredients.

An ingredient has a display ``name``, a ``slug`` chosen by the admin
(used to derive the names of its image files), a ``price`` and a
``category`` from a closed set.  The stored record references two
uploaded images by file name: the full ``image`` used for the pizza
preview and a small ``thumbnail`` for the order form.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

SLUG_PATTERN = r"^[A-Za-z0-9_-]+$"


class IngredientCategory(str, Enum):
    vegetables = "vegetables"
    sauces = "sauces"
    meat = "meat"
    cheese = "cheese"


class IngredientCreate(BaseModel):
    """Fields required to create or update an ingredient."""

    name: str = Field(..., min_length=1, description="Display name", examples=["Огурец"])
    slug: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=SLUG_PATTERN,
        description="Secondary identifier used to name the image files",
        examples=["cucumber"],
    )
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Ingredient price", examples=[100])
    category: IngredientCategory


# Updates replace the same set of fields and are validated identically.
IngredientUpdate = IngredientCreate


class Ingredient(IngredientCreate):
    """A stored ingredient as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str = Field(..., description="Generated identifier", examples=["d5fE_asz"])
    image_path: str = Field(..., alias="image", examples=["cucumber.jpg"])
    thumbnail_path: str = Field(..., alias="thumbnail", examples=["cucumber-thumb.jpg"])

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
