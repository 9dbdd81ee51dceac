"""Service configuration (environment-backed)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ServiceConfig:
    api_model_path: Optional[str]
    log_level: str


def load_service_config() -> ServiceConfig:
    return ServiceConfig(
        api_model_path=os.environ.get("STUBFLOW_API_MODEL"),
        log_level=os.environ.get("STUBFLOW_LOG_LEVEL", "INFO"),
    )
