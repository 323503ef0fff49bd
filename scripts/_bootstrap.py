"""Shared setup for operator scripts: repo root on sys.path, .env, settings, logging."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv  # noqa: E402

from config import get_settings_module  # noqa: E402

from src.biometric_sync.biometric_sync.common.logging_config import setup_logging  # noqa: E402
from src.biometric_sync.biometric_sync.container import Container, build_container_from_settings  # noqa: E402


def load_settings():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    return settings


def load_container() -> Container:
    return build_container_from_settings(load_settings())
