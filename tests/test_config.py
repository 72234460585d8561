"""Tests for folder_mirror.config: runtime config loading and validation.

NOT to be confused with test_config_loader.py (hierarchical YAML config)
or test_config_schema.py (Pydantic models).  This tests validate_config()
and load_config() with CLI, env var, and YAML fallback precedence.
"""

import threading

import pytest

from folder_mirror.config import Config, load_config, validate_config

ENV_KEYS = (
    "FOLDER_MIRROR_DIGEST",
    "FOLDER_MIRROR_CHUNK_SIZE",
    "FOLDER_MIRROR_DRY_RUN",
    "FOLDER_MIRROR_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def _load(**kwargs) -> Config:
    return load_config("source", "replica", "sync.log", 10, **kwargs)


# -------------------------------------------------------------------------
# validate_config()
# -------------------------------------------------------------------------


class TestValidateConfig:
    def test_valid_config(self):
        validate_config(Config("source", "replica", "sync.log", 1))

    def test_zero_interval(self):
        with pytest.raises(ValueError, match="greater than zero"):
            validate_config(Config("source", "replica", "sync.log", 0))

    def test_digest_normalized(self):
        config = Config("source", "replica", "sync.log", 1, digest=" MD5 ")
        validate_config(config)
        assert config.digest == "md5"

    def test_unknown_digest(self):
        config = Config("source", "replica", "sync.log", 1, digest="nope")
        with pytest.raises(ValueError, match="Invalid digest"):
            validate_config(config)

    def test_bad_chunk_size(self):
        config = Config("source", "replica", "sync.log", 1, chunk_size=0)
        with pytest.raises(ValueError, match="chunk size"):
            validate_config(config)

    @pytest.mark.parametrize(
        "source, replica",
        [
            ("data", "data"),
            ("data", "data/replica"),
            ("backup/data", "backup"),
        ],
    )
    def test_overlapping_paths_rejected(self, source, replica):
        with pytest.raises(ValueError, match="must not contain each other"):
            validate_config(Config(source, replica, "sync.log", 1))

    def test_sibling_prefix_is_not_overlap(self):
        validate_config(Config("data", "data2", "sync.log", 1))

    def test_interval_too_long_for_a_wait(self):
        config = Config("source", "replica", "sync.log", 99999999999999999)
        with pytest.raises(ValueError, match="must be at most"):
            validate_config(config)

    def test_longest_interval_accepted(self):
        longest = int(threading.TIMEOUT_MAX)
        validate_config(Config("source", "replica", "sync.log", longest))

    @pytest.mark.parametrize(
        "log_file, label",
        [
            ("replica/sync.log", "replica"),
            ("replica/logs/sync.log", "replica"),
            ("source/sync.log", "source"),
            ("./source/../replica/sync.log", "replica"),
        ],
    )
    def test_log_inside_mirrored_tree_rejected(self, log_file, label):
        config = Config("source", "replica", log_file, 1)
        with pytest.raises(
            ValueError, match=f"must not be inside the {label} directory"
        ):
            validate_config(config)

    def test_log_next_to_replica_accepted(self):
        validate_config(Config("source", "replica", "replica.log", 1))


# -------------------------------------------------------------------------
# load_config()
# -------------------------------------------------------------------------


class TestLoadConfig:
    def test_defaults(self):
        config = _load()
        assert config.source == "source"
        assert config.interval == 10
        assert config.digest == "sha256"
        assert config.chunk_size == 65536
        assert config.dry_run is False
        assert config.debug is False

    def test_env_overrides_fallback(self, monkeypatch):
        monkeypatch.setenv("FOLDER_MIRROR_DIGEST", "sha1")
        config = _load(yaml_fallbacks={"digest": "md5"})
        assert config.digest == "sha1"

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("FOLDER_MIRROR_DIGEST", "sha1")
        assert _load(digest="md5").digest == "md5"

    def test_fallback_used_when_no_env(self):
        config = _load(yaml_fallbacks={"digest": "md5", "chunk_size": 4096})
        assert config.digest == "md5"
        assert config.chunk_size == 4096

    def test_chunk_size_from_env(self, monkeypatch):
        monkeypatch.setenv("FOLDER_MIRROR_CHUNK_SIZE", "1024")
        assert _load().chunk_size == 1024

    def test_chunk_size_env_not_a_number(self, monkeypatch):
        monkeypatch.setenv("FOLDER_MIRROR_CHUNK_SIZE", "big")
        with pytest.raises(ValueError, match="FOLDER_MIRROR_CHUNK_SIZE"):
            _load()

    @pytest.mark.parametrize("value", ["true", "1", "yes", "ON"])
    def test_dry_run_env_truthy(self, monkeypatch, value):
        monkeypatch.setenv("FOLDER_MIRROR_DRY_RUN", value)
        assert _load().dry_run is True

    def test_env_false_beats_fallback(self, monkeypatch):
        monkeypatch.setenv("FOLDER_MIRROR_DEBUG", "false")
        assert _load(yaml_fallbacks={"debug": True}).debug is False

    def test_cli_flag_beats_env_false(self, monkeypatch):
        monkeypatch.setenv("FOLDER_MIRROR_DRY_RUN", "0")
        assert _load(dry_run=True).dry_run is True

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError):
            _load(digest="not-a-hash")
