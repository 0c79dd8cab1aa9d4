from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

SEPARATOR = "*" * 70

_TRUTHY = ("1", "true", "True")


def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip() in _TRUTHY


@dataclass(frozen=True)
class ITConfig:
    base_url: str
    port: str
    tenant_port: str

    @staticmethod
    def load(strict: bool = False) -> "ITConfig":
        """
        Read HOST_IP / PORT / PORT_TENANT_ID from the environment.

        Missing values become "" and end up as malformed URLs, unless
        `strict` is set, in which case a missing value raises.
        """
        def req(k: str) -> str:
            v = os.getenv(k)
            if not v:
                if strict:
                    raise RuntimeError(f"Missing required env var for ITConfig: {k}")
                return ""
            return v

        return ITConfig(
            base_url="http://" + req("HOST_IP"),
            port=req("PORT"),
            tenant_port=req("PORT_TENANT_ID"),
        )


@dataclass(frozen=True)
class ITCredentials:
    username: str
    password: str
    project: str
    domain: str

    @staticmethod
    def load() -> "ITCredentials":
        return ITCredentials(
            username=os.getenv("OS_USERNAME", "admin"),
            password=os.getenv("OS_PASSWORD", ""),
            project=os.getenv("OS_PROJECT_NAME", "admin"),
            domain=os.getenv("OS_USER_DOMAIN_NAME", "Default"),
        )


_INSTANCE: Optional[ITConfig] = None
_LOCK = threading.Lock()


def log_separator() -> None:
    logger.info(SEPARATOR)


def get_instance() -> ITConfig:
    """Process-wide config, read from the environment on first call only."""
    global _INSTANCE
    log_separator()

    cfg = _INSTANCE
    if cfg is not None:
        return cfg

    with _LOCK:
        if _INSTANCE is None:
            _INSTANCE = ITConfig.load(strict=env_flag("IT_STRICT_CONFIG"))
            logger.info("[IT] loaded ITConfig base_url=%s port=%r tenant_port=%r",
                        _INSTANCE.base_url, _INSTANCE.port, _INSTANCE.tenant_port)
        return _INSTANCE
