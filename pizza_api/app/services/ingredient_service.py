"""
Service layer for the ingredient catalog.

Ingredients live in the ``ingredients`` collection of the record
store.  Each one owns two uploaded images named after its slug:
``<slug>.<ext>`` for the pizza preview and ``<slug>-thumb.<ext>`` for
the order form thumbnail, where ``<ext>`` is taken from the original
upload name.  Images are written before the record is stored; if a
write fails nothing is inserted, although an image written earlier in
the same call is left on disk.

By default images are never removed: changing a slug leaves the files
under the old name behind, and deleting an ingredient keeps its
files.  With ``remove_stale_uploads`` enabled those orphans are
deleted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from pizza_api.app.core.errors import ValidationError, validation_error_from
from pizza_api.app.core.ids import generate_id
from pizza_api.app.core.store import INGREDIENTS, RecordStore
from pizza_api.app.core.uploads import UploadStorage
from pizza_api.app.schemas.ingredient import Ingredient, IngredientCreate, IngredientUpdate

IngredientInput = Union[IngredientCreate, Dict[str, Any]]


@dataclass
class UploadedFile:
    """An uploaded file as received from the client."""

    filename: str
    content: bytes

    @property
    def extension(self) -> str:
        name = (self.filename or "").rsplit("/", 1)[-1]
        if "." not in name.strip("."):
            raise ValidationError(f"Uploaded file {self.filename!r} has no extension")
        ext = name.rsplit(".", 1)[-1].lower()
        if not ext.isalnum():
            raise ValidationError(f"Uploaded file {self.filename!r} has an invalid extension")
        return ext


def image_file_name(slug: str, upload: UploadedFile) -> str:
    return f"{slug}.{upload.extension}"


def thumbnail_file_name(slug: str, upload: UploadedFile) -> str:
    return f"{slug}-thumb.{upload.extension}"


def _parse(data: IngredientInput) -> IngredientCreate:
    try:
        return IngredientCreate.model_validate(data)
    except PydanticValidationError as exc:
        raise validation_error_from(exc) from exc


class IngredientService:
    """CRUD operations for ingredients and their image files."""

    def __init__(
        self,
        store: RecordStore,
        uploads: UploadStorage,
        remove_stale_uploads: bool = False,
    ) -> None:
        self.store = store
        self.uploads = uploads
        self.remove_stale_uploads = remove_stale_uploads

    async def list(self) -> List[Ingredient]:
        return [Ingredient.model_validate(r) for r in self.store.list_all(INGREDIENTS)]

    async def get(self, ingredient_id: str) -> Optional[Ingredient]:
        """Retrieve a single ingredient, ``None`` if the id is unknown."""
        record = self.store.find_by_id(INGREDIENTS, ingredient_id)
        if record is None:
            return None
        return Ingredient.model_validate(record)

    async def create(
        self,
        data: IngredientInput,
        image: Optional[UploadedFile],
        thumbnail: Optional[UploadedFile],
    ) -> Ingredient:
        """Validate the fields, store both images and insert the record.

        Raises ``ValidationError`` for bad fields or missing uploads and
        ``StorageError`` when an image cannot be written; in both cases
        no record is inserted.
        """
        logger = logging.getLogger(__name__)
        payload = _parse(data)
        if image is None or thumbnail is None:
            raise ValidationError("Both image and thumbnail files are required")
        image_name = image_file_name(payload.slug, image)
        thumb_name = thumbnail_file_name(payload.slug, thumbnail)

        self.uploads.save(image_name, image.content)
        self.uploads.save(thumb_name, thumbnail.content)

        ingredient = Ingredient(
            id=generate_id(),
            image_path=image_name,
            thumbnail_path=thumb_name,
            **payload.model_dump(),
        )
        self.store.insert(INGREDIENTS, ingredient.to_record())
        logger.info("Created ingredient %s (%s)", ingredient.id, ingredient.slug)
        return ingredient

    async def update(
        self,
        ingredient_id: str,
        data: IngredientInput,
        image: Optional[UploadedFile] = None,
        thumbnail: Optional[UploadedFile] = None,
    ) -> Optional[Ingredient]:
        """Replace the fields of an ingredient and optionally its images.

        Returns ``None`` without touching any file when the id is
        unknown.  A supplied image is written under the name derived
        from the (possibly new) slug; an omitted one keeps its current
        file.
        """
        logger = logging.getLogger(__name__)
        current_record = self.store.find_by_id(INGREDIENTS, ingredient_id)
        if current_record is None:
            return None
        current = Ingredient.model_validate(current_record)
        payload: IngredientUpdate = _parse(data)

        image_name = current.image_path
        thumb_name = current.thumbnail_path
        if image is not None:
            image_name = image_file_name(payload.slug, image)
        if thumbnail is not None:
            thumb_name = thumbnail_file_name(payload.slug, thumbnail)
        if image is not None:
            self.uploads.save(image_name, image.content)
        if thumbnail is not None:
            self.uploads.save(thumb_name, thumbnail.content)

        patch = payload.model_dump(mode="json")
        patch["image"] = image_name
        patch["thumbnail"] = thumb_name
        record = self.store.update_by_id(INGREDIENTS, ingredient_id, patch)
        if record is None:
            # Deleted between the lookup and the update
            return None
        if self.remove_stale_uploads:
            self._remove_files(
                name
                for name, replacement in (
                    (current.image_path, image_name),
                    (current.thumbnail_path, thumb_name),
                )
                if name != replacement
            )
        logger.info("Updated ingredient %s", ingredient_id)
        return Ingredient.model_validate(record)

    async def delete(self, ingredient_id: str) -> bool:
        """Delete an ingredient.  Returns ``False`` if the id is unknown."""
        logger = logging.getLogger(__name__)
        record = self.store.find_by_id(INGREDIENTS, ingredient_id)
        if record is None:
            return False
        deleted = self.store.delete_by_id(INGREDIENTS, ingredient_id)
        if deleted:
            logger.info("Deleted ingredient %s", ingredient_id)
            if self.remove_stale_uploads:
                self._remove_files(
                    record[key] for key in ("image", "thumbnail") if record.get(key)
                )
        return deleted

    def _remove_files(self, names) -> None:
        for name in names:
            # Another ingredient may still use the file if slugs collide
            if self._is_referenced(name):
                continue
            self.uploads.remove(name)

    def _is_referenced(self, file_name: str) -> bool:
        return any(
            file_name in (r.get("image"), r.get("thumbnail"))
            for r in self.store.list_all(INGREDIENTS)
        )
