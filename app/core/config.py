from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _int_or_default(value: Optional[str], default: int) -> int:
    cleaned = _strip_or_none(value)
    if cleaned is None:
        return default
    try:
        return int(cleaned)
    except ValueError:
        raise RuntimeError(f"Expected an integer setting, got {cleaned!r}") from None


def _float_or_default(value: Optional[str], default: float) -> float:
    cleaned = _strip_or_none(value)
    if cleaned is None:
        return default
    try:
        return float(cleaned)
    except ValueError:
        raise RuntimeError(f"Expected a numeric setting, got {cleaned!r}") from None


def _is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


class Settings:

    def __init__(self) -> None:
        survey_source = _strip_or_none(os.getenv("SURVEY_SOURCE")) or "app/data/survey-data.json"
        if _is_url(survey_source):
            self.survey_source = survey_source
        else:
            self.survey_source = str(Path(survey_source).expanduser().resolve())

        categories_path = _strip_or_none(os.getenv("CATEGORIES_DATA_PATH")) or "app/data/categories-data.json"
        self.categories_data_path = Path(categories_path).expanduser().resolve()

        api_url = _strip_or_none(os.getenv("CATEGORIES_API_URL")) or "http://localhost:3000/api"
        self.categories_api_url = api_url.rstrip("/")

        self.api_host = _strip_or_none(os.getenv("API_HOST")) or "0.0.0.0"
        self.api_port = _int_or_default(os.getenv("API_PORT") or os.getenv("PORT"), 3000)

        origins = _strip_or_none(os.getenv("ALLOWED_ORIGINS")) or "*"
        self.allowed_origins: List[str] = [origin.strip() for origin in origins.split(",") if origin.strip()]

        self.log_level = (_strip_or_none(os.getenv("LOG_LEVEL")) or "INFO").upper()
        self.http_timeout = _float_or_default(os.getenv("HTTP_TIMEOUT"), 10.0)


settings = Settings()
