from __future__ import annotations

import importlib
import logging
from typing import Optional

import httpx
from dotenv import load_dotenv

from .config import get_settings_module
from .container import Container, build_container
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_container(*, transport: Optional[httpx.AsyncBaseTransport] = None) -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if getattr(settings, "DEBUG", False):
        logger.debug("settings=%s api=%s", settings_module, getattr(settings, "API_BASE_URL"))

    return build_container(settings=settings, transport=transport)
