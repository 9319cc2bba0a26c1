from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from app.models.category import CategoryCreate, CategoryUpdate
from app.services.category_store import CategoryStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_category_store(request: Request) -> CategoryStore:
    """Return the store attached to the running application."""

    return request.app.state.category_store


@router.get("/categories")
def list_categories(store: CategoryStore = Depends(get_category_store)) -> Dict[str, Any]:
    categories = store.list()
    return {
        "success": True,
        "data": [category.to_payload() for category in categories],
        "count": len(categories),
    }


@router.get("/categories/{category_id}")
def get_category(category_id: int, store: CategoryStore = Depends(get_category_store)) -> Dict[str, Any]:
    return {"success": True, "data": store.get(category_id).to_payload()}


@router.post("/categories", status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    store: CategoryStore = Depends(get_category_store),
) -> Dict[str, Any]:
    category = store.create(payload.name, description=payload.description, color=payload.color)
    return {
        "success": True,
        "data": category.to_payload(),
        "message": "Category created successfully",
    }


@router.put("/categories/{category_id}")
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    store: CategoryStore = Depends(get_category_store),
) -> Dict[str, Any]:
    category = store.update(category_id, **payload.model_dump(exclude_unset=True))
    return {
        "success": True,
        "data": category.to_payload(),
        "message": "Category updated successfully",
    }


@router.delete("/categories/{category_id}")
def delete_category(category_id: int, store: CategoryStore = Depends(get_category_store)) -> Dict[str, Any]:
    category = store.delete(category_id)
    return {
        "success": True,
        "data": category.to_payload(),
        "message": "Category deleted successfully",
    }
