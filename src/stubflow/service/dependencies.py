"""Service dependency factories."""
from __future__ import annotations

import logging
from functools import lru_cache

from stubflow.sdk.client import Client
from stubflow.sdk.config import ClientConfig
from stubflow.sdk.errors import ConfigError

from .config import load_service_config


@lru_cache(maxsize=1)
def get_client() -> Client:
    cfg = load_service_config()
    if not cfg.api_model_path:
        raise ConfigError("STUBFLOW_API_MODEL must point at an API model file")
    return Client(cfg.api_model_path, config=ClientConfig(stub_responses=True))


def get_logger() -> logging.Logger:
    logger = logging.getLogger("stubflow.service")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(load_service_config().log_level.upper())
    return logger
