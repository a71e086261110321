"""
Ingredient endpoints for API v1.

Listing and retrieving ingredients is public.  Creating, updating and
deleting require the admin bearer token obtained from
``/admin-auth/login``.  Create and update accept ``multipart/form-data``
with the text fields ``name``, ``slug``, ``price`` and ``category`` and
the files ``image`` and ``thumbnail``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from pizza_api.app.api.deps import get_ingredient_service
from pizza_api.app.core.security import get_current_admin
from pizza_api.app.schemas.auth import StatusMessage
from pizza_api.app.schemas.ingredient import Ingredient
from pizza_api.app.services.ingredient_service import IngredientService, UploadedFile

router = APIRouter()


async def _read_upload(upload: Optional[UploadFile]) -> Optional[UploadedFile]:
    # Browsers send an empty part with no file name when nothing was chosen
    if upload is None or not upload.filename:
        return None
    return UploadedFile(filename=upload.filename, content=await upload.read())


def _form_fields(name, slug, price, category) -> dict:
    fields = {"name": name, "slug": slug, "price": price, "category": category}
    return {key: value for key, value in fields.items() if value is not None}


@router.get("", response_model=List[Ingredient], summary="List all ingredients")
async def list_ingredients(
    service: IngredientService = Depends(get_ingredient_service),
) -> List[Ingredient]:
    return await service.list()


@router.get("/{ingredient_id}", response_model=Ingredient, summary="Get one ingredient")
async def get_ingredient(
    ingredient_id: str,
    service: IngredientService = Depends(get_ingredient_service),
) -> Ingredient:
    """Return a single ingredient or HTTP 404."""
    ingredient = await service.get(ingredient_id)
    if ingredient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return ingredient


@router.post(
    "",
    response_model=Ingredient,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new ingredient",
)
async def create_ingredient(
    name: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    admin=Depends(get_current_admin),
    service: IngredientService = Depends(get_ingredient_service),
) -> Ingredient:
    """Create an ingredient and store its two images (admin only).

    Missing or invalid fields yield HTTP 422.
    """
    return await service.create(
        _form_fields(name, slug, price, category),
        await _read_upload(image),
        await _read_upload(thumbnail),
    )


@router.put("/{ingredient_id}", response_model=Ingredient, summary="Update an ingredient")
async def update_ingredient(
    ingredient_id: str,
    name: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    admin=Depends(get_current_admin),
    service: IngredientService = Depends(get_ingredient_service),
) -> Ingredient:
    """Replace an ingredient's fields (admin only).

    The files are optional; omitted ones keep their current image.
    """
    ingredient = await service.update(
        ingredient_id,
        _form_fields(name, slug, price, category),
        await _read_upload(image),
        await _read_upload(thumbnail),
    )
    if ingredient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return ingredient


@router.delete("/{ingredient_id}", response_model=StatusMessage, summary="Delete an ingredient")
async def delete_ingredient(
    ingredient_id: str,
    admin=Depends(get_current_admin),
    service: IngredientService = Depends(get_ingredient_service),
) -> StatusMessage:
    """Delete an ingredient (admin only)."""
    deleted = await service.delete(ingredient_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return StatusMessage(status=True, message="Success")
