"""Unified configuration schema for folder_mirror.

Defines Pydantic models for the YAML config structure with dedicated
sections for mirror tuning and logging.  Paths and the interval are
positional CLI arguments and are not part of the file schema.

Usage:
    from folder_mirror.config_schema import build_config

    raw = load_hierarchical_config()
    unified = build_config(raw)
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

from .sync.fingerprint import is_supported_algorithm

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class MirrorConfig(BaseModel):
    """Mirror pass settings.

    All fields have defaults so an absent section is valid.
    """

    digest: str = Field(
        default="sha256",
        description="hashlib algorithm used to fingerprint files",
    )
    chunk_size: int = Field(
        default=65536,
        ge=1,
        le=64 * 1024 * 1024,
        description="Bytes read per chunk when fingerprinting",
    )
    dry_run: bool = Field(
        default=False,
        description="Record planned changes without touching the replica",
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    model_config = {"frozen": True}

    @field_validator("digest")
    @classmethod
    def _known_digest(cls, value: str) -> str:
        value = value.lower()
        if not is_supported_algorithm(value):
            raise ValueError(f"unsupported digest algorithm '{value}'")
        return value


class LoggingConfig(BaseModel):
    """Diagnostic logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional diagnostic log file path.
        format: "text" or "json".
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")
    format: str = Field(default="text", pattern="^(text|json)$")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level unified configuration.

    Every section has sensible defaults, so ``UnifiedConfig()``
    (zero-config) is always valid.
    """

    mirror: MirrorConfig = Field(default_factory=MirrorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Factory function
# ---------------------------------------------------------------------------


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the raw dict returned by
    ``load_hierarchical_config()``.

    Missing sections get their defaults.

    Args:
        raw_data: Merged configuration dictionary.

    Returns:
        Validated ``UnifiedConfig`` instance.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig(**raw_data)
