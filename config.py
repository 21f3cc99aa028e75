#!/usr/bin/env python
# config.py
import os
from typing import List

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'soundshelf-dev-secret'

    # Library storage: one JSON document plus a directory of uploaded audio
    DATA_FILE = os.environ.get('SOUNDSHELF_DATA_FILE') or os.path.join(basedir, 'data', 'db.json')
    UPLOAD_DIR = os.environ.get('SOUNDSHELF_UPLOAD_DIR') or os.path.join(basedir, 'data', 'uploads')

    # Prebuilt browser player, served when the directory exists
    PUBLIC_DIR = os.environ.get('SOUNDSHELF_PUBLIC_DIR') or os.path.join(basedir, 'public')

    # Uploads
    MAX_UPLOAD_FILES = _get_int('MAX_UPLOAD_FILES', 20)
    # Flask request body cap in bytes; 0 disables the cap
    MAX_CONTENT_LENGTH = _get_int('MAX_CONTENT_LENGTH', 0)

    # CORS for /api/*
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', '*')

    # Runtime behavior
    # Turn Flask debug on/off from env; default off to avoid noisy console
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)

    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = _get_int('PORT', 3000)
