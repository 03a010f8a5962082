"""
Notes Client — Configuration & Base URL Resolution
===================================================

What:  Decides which backend the client talks to.
How:   The first non-empty value wins:
         1. runtime config — a JSON document mounted at deploy time (for
            example from a Kubernetes ConfigMap) or a mapping passed in
            directly, key MIP_BACKEND_URL
         2. environment — MIP_BACKEND_URL, read by pydantic-settings
         3. ""          — same-origin relative paths
       A relative result (``""`` or ``"/api"``) is joined to the client's
       origin; an absolute URL is used unchanged.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

BACKEND_URL_KEY = "MIP_BACKEND_URL"


class ClientSettings(BaseSettings):
    """Client settings loaded from environment variables (or .env)."""

    mip_backend_url: str = Field(default="", description="Backend base URL fixed at build/deploy time")
    mip_runtime_config_path: str = Field(
        default="runtime-config.json",
        description="JSON file injected at runtime; may override the backend URL",
    )
    mip_origin: str = Field(
        default="http://localhost:8080",
        description="Origin that relative base URLs resolve against",
    )
    mip_request_timeout: float = Field(default=10.0, gt=0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_runtime_config(path: str) -> Mapping[str, Any]:
    """
    Read the runtime config document.

    A missing file is the normal case (nothing injected) and yields {}.
    An unreadable or non-object document is logged and ignored so that the
    lower-priority sources still apply.
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring runtime config %s: %s", config_path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring runtime config %s: expected a JSON object", config_path)
        return {}
    return data


def resolve_base_url(
    runtime_config: Optional[Mapping[str, Any]] = None,
    settings: Optional[ClientSettings] = None,
) -> str:
    """
    Return the configured backend base, possibly relative, without trailing slash.

    Args:
        runtime_config: Injected config; when None it is loaded from
                        settings.mip_runtime_config_path.
        settings:       Client settings; defaults to a fresh ClientSettings().
    """
    settings = settings or ClientSettings()
    if runtime_config is None:
        runtime_config = load_runtime_config(settings.mip_runtime_config_path)

    runtime_value = runtime_config.get(BACKEND_URL_KEY)
    if runtime_value:
        return str(runtime_value).rstrip("/")
    if settings.mip_backend_url:
        return settings.mip_backend_url.rstrip("/")
    return ""


def is_absolute(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def join_origin(origin: str, base_url: str) -> str:
    """Anchor a relative base at the origin; absolute bases pass through."""
    if is_absolute(base_url):
        return base_url.rstrip("/")
    base = base_url.strip("/")
    origin = origin.rstrip("/")
    return f"{origin}/{base}" if base else origin
