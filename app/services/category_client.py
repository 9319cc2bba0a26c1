from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from app.core.config import settings
from app.models.category import Category

logger = logging.getLogger(__name__)


class CategoryServiceError(RuntimeError):
    """Raised when the categories service rejects a request or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CategoryClient:
    """Small HTTP client for the categories API used by the Streamlit page."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.categories_api_url).rstrip("/")
        self._client = http_client or httpx.Client(
            timeout=settings.http_timeout if timeout is None else timeout
        )

    def list(self) -> List[Category]:
        payload = self._request("GET", "/categories")
        return [Category.model_validate(item) for item in payload.get("data", [])]

    def get(self, category_id: int) -> Category:
        payload = self._request("GET", f"/categories/{category_id}")
        return Category.model_validate(payload["data"])

    def create(self, name: str, description: str = "", color: str | None = None) -> Category:
        body: Dict[str, Any] = {"name": name, "description": description}
        if color:
            body["color"] = color
        payload = self._request("POST", "/categories", json=body)
        return Category.model_validate(payload["data"])

    def update(self, category_id: int, **changes: Any) -> Category:
        payload = self._request("PUT", f"/categories/{category_id}", json=changes)
        return Category.model_validate(payload["data"])

    def delete(self, category_id: int) -> Category:
        payload = self._request("DELETE", f"/categories/{category_id}")
        return Category.model_validate(payload["data"])

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Categories request %s %s failed: %s", method, url, exc)
            raise CategoryServiceError(
                "Error connecting to server. Make sure the server is running."
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise CategoryServiceError(
                f"Unexpected response from categories service (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from exc

        if not response.is_success or not payload.get("success"):
            message = payload.get("error") or f"Request failed with HTTP {response.status_code}"
            raise CategoryServiceError(message, status_code=response.status_code)
        return payload
