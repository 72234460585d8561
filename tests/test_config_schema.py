"""Tests for the unified config schema (MirrorConfig, LoggingConfig,
UnifiedConfig) and the build_config() factory.
"""

import pytest
from pydantic import ValidationError

from folder_mirror.config_schema import (
    LoggingConfig,
    MirrorConfig,
    UnifiedConfig,
    build_config,
)

# ---------------------------------------------------------------------------
# UnifiedConfig tests
# ---------------------------------------------------------------------------


class TestUnifiedConfig:
    def test_defaults(self):
        config = UnifiedConfig()
        assert config.mirror.digest == "sha256"
        assert config.mirror.chunk_size == 65536
        assert config.mirror.dry_run is False
        assert config.logging.level == "INFO"
        assert config.logging.file is None
        assert config.logging.format == "text"

    def test_unknown_sections_ignored(self):
        config = UnifiedConfig(**{"mirror": {"digest": "md5"}, "future": {}})
        assert config.mirror.digest == "md5"
        assert not hasattr(config, "future")

    def test_frozen_model_prevents_mutation(self):
        config = UnifiedConfig()
        with pytest.raises(ValidationError):
            config.mirror = MirrorConfig()  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class TestMirrorConfig:
    def test_digest_normalized_to_lowercase(self):
        assert MirrorConfig(digest="SHA256").digest == "sha256"

    def test_unknown_digest_rejected(self):
        with pytest.raises(ValidationError, match="unsupported digest"):
            MirrorConfig(digest="crc32")

    def test_shake_digest_rejected(self):
        with pytest.raises(ValidationError):
            MirrorConfig(digest="shake_128")

    @pytest.mark.parametrize("size", [0, -1, 64 * 1024 * 1024 + 1])
    def test_chunk_size_bounds(self, size):
        with pytest.raises(ValidationError):
            MirrorConfig(chunk_size=size)


class TestLoggingConfig:
    def test_json_format_accepted(self):
        assert LoggingConfig(format="json").format == "json"

    def test_bad_format_rejected(self):
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")


# ---------------------------------------------------------------------------
# build_config()
# ---------------------------------------------------------------------------


class TestBuildConfig:
    def test_empty_dict(self):
        assert build_config({}) == UnifiedConfig()

    def test_partial_sections(self):
        config = build_config(
            {"mirror": {"dry_run": True}, "logging": {"level": "DEBUG"}}
        )
        assert config.mirror.dry_run is True
        assert config.mirror.digest == "sha256"
        assert config.logging.level == "DEBUG"

    def test_invalid_section_raises(self):
        with pytest.raises(ValidationError):
            build_config({"mirror": {"chunk_size": "lots"}})
