from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Tuple

from pydantic import ValidationError

from app.core.errors import CategoryNotFoundError, CategoryValidationError, StorageError
from app.models.category import DEFAULT_COLOR, Category, CategoryFile

logger = logging.getLogger(__name__)

NAME_REQUIRED = "Category name is required"
NAME_INVALID = "Category name must be a non-empty string"
NAME_TAKEN = "Category with this name already exists"
NOT_FOUND = "Category not found"


class CategoryStore:
    """File-backed category collection.

    The whole file is read once when the store is created and rewritten in
    full after every mutation, under one lock. A missing or corrupt file
    starts an empty collection. Failed writes are logged and otherwise
    ignored, so the file may lag behind memory.
    """

    def __init__(self, storage_path: Path | str) -> None:
        self._path = Path(storage_path)
        self._lock = threading.Lock()
        try:
            self._categories, self._next_id = self._read_file()
        except StorageError as exc:
            logger.error("Error loading categories: %s", exc)
            self._categories, self._next_id = [], 1

    @property
    def next_id(self) -> int:
        return self._next_id

    def list(self) -> List[Category]:
        with self._lock:
            return list(self._categories)

    def get(self, category_id: int) -> Category:
        with self._lock:
            return self._categories[self._index_of(category_id)]

    def create(self, name: Any, description: str | None = None, color: str | None = None) -> Category:
        if not isinstance(name, str) or not name.strip():
            raise CategoryValidationError(NAME_REQUIRED)
        cleaned = name.strip()

        with self._lock:
            self._ensure_unique(cleaned)
            timestamp = _utcnow_iso()
            category = Category(
                id=self._next_id,
                name=cleaned,
                description=description or "",
                color=color or DEFAULT_COLOR,
                created_at=timestamp,
                updated_at=timestamp,
            )
            self._next_id += 1
            self._categories.append(category)
            self._write_file()

        logger.info("Created category %d (%s)", category.id, category.name)
        return category

    def update(self, category_id: int, **changes: Any) -> Category:
        """Apply any of ``name``, ``description`` and ``color`` to a category."""

        with self._lock:
            index = self._index_of(category_id)
            updates: dict[str, Any] = {}

            if "name" in changes:
                name = changes["name"]
                if not isinstance(name, str) or not name.strip():
                    raise CategoryValidationError(NAME_INVALID)
                updates["name"] = name.strip()
                self._ensure_unique(updates["name"], exclude_id=category_id)
            if "description" in changes:
                updates["description"] = changes["description"] or ""
            if "color" in changes:
                updates["color"] = changes["color"] or DEFAULT_COLOR

            updates["updated_at"] = _utcnow_iso()
            category = self._categories[index].model_copy(update=updates)
            self._categories[index] = category
            self._write_file()

        logger.info("Updated category %d", category_id)
        return category

    def delete(self, category_id: int) -> Category:
        with self._lock:
            category = self._categories.pop(self._index_of(category_id))
            self._write_file()

        logger.info("Deleted category %d (%s)", category.id, category.name)
        return category

    def _index_of(self, category_id: int) -> int:
        for index, category in enumerate(self._categories):
            if category.id == category_id:
                return index
        raise CategoryNotFoundError(NOT_FOUND)

    def _ensure_unique(self, name: str, *, exclude_id: int | None = None) -> None:
        folded = name.casefold()
        for category in self._categories:
            if category.id != exclude_id and category.name.casefold() == folded:
                raise CategoryValidationError(NAME_TAKEN)

    def _read_file(self) -> Tuple[List[Category], int]:
        if not self._path.is_file():
            return [], 1
        try:
            payload = CategoryFile.model_validate(json.loads(self._path.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise StorageError(f"{self._path}: {exc}") from exc
        return list(payload.categories), payload.next_id

    def _write_file(self) -> None:
        payload = {
            "categories": [category.to_payload() for category in self._categories],
            "nextId": self._next_id,
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Error saving categories to %s: %s", self._path, exc)


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
