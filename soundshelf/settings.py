#!/usr/bin/env python
"""
Centralized configuration schema for the library server.

Merges defaults from config.Config with runtime overrides and normalizes
paths and limits so the rest of the app can trust them.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import Config


class AppSettings(BaseModel):
    """Application-wide settings for storage, uploads and CORS."""

    model_config = ConfigDict(extra="ignore")

    # Storage
    data_file: str
    upload_dir: str
    public_dir: Optional[str] = None

    # Uploads
    max_upload_files: int = 20
    max_content_length: Optional[int] = None

    cors_allowed_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("data_file", "upload_dir", "public_dir")
    @classmethod
    def _absolute_path(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return value
        return os.path.abspath(os.path.expanduser(value))

    @field_validator("max_upload_files", mode="before")
    @classmethod
    def _coerce_max_upload_files(cls, value: object) -> int:
        try:
            count = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 20
        return max(1, count)

    @field_validator("max_content_length", mode="before")
    @classmethod
    def _coerce_max_content_length(cls, value: object) -> Optional[int]:
        try:
            size = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        return size if size > 0 else None

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _normalize_origins(cls, value: Optional[object]) -> List[str]:
        if value is None:
            return ["*"]
        if isinstance(value, str):
            tokens = [token.strip() for token in value.split(",")]
        else:
            tokens = [str(token).strip() for token in value]  # type: ignore[union-attr]
        return [token for token in tokens if token] or ["*"]


def load_app_settings(overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "data_file": Config.DATA_FILE,
        "upload_dir": Config.UPLOAD_DIR,
        "public_dir": Config.PUBLIC_DIR,
        "max_upload_files": Config.MAX_UPLOAD_FILES,
        "max_content_length": Config.MAX_CONTENT_LENGTH,
        "cors_allowed_origins": Config.CORS_ALLOWED_ORIGINS,
    }
    if overrides:
        data.update(overrides)
    return AppSettings.model_validate(data)


__all__ = [
    "AppSettings",
    "load_app_settings",
]
