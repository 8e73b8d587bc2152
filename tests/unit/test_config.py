"""
Runtime Configuration Tests
Tests for hashtree/config/runtime.py and hashtree/config/log.py
"""
import logging

import pytest

from hashtree.config import (
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
    setup_logging,
)
from hashtree.merkle import MerkleTree
from hashtree.schemas.errors import ConfigurationException


class TestDefaults:
    def test_defaults(self):
        config = RuntimeConfig()

        assert config.hashing.algorithm == "sha3_256"
        assert config.logging.level == "WARNING"
        assert config.logging.log_file is None

    def test_to_dict(self):
        assert RuntimeConfig().to_dict() == {
            "hashing": {"algorithm": "sha3_256"},
            "logging": {"level": "WARNING", "log_file": None},
        }

    def test_only_known_sections(self):
        with pytest.raises(TypeError):
            RuntimeConfig(extra={"owner": "test"})

        assert RuntimeConfig.from_dict(RuntimeConfig().to_dict()) == RuntimeConfig()


class TestValidation:
    def test_unsupported_algorithm(self):
        with pytest.raises(ConfigurationException) as exc_info:
            HashingConfig(algorithm="md5")

        assert exc_info.value.details["field_path"] == "hashing.algorithm"

    def test_text_encoding_not_configurable(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"hashing": {"text_encoding": "latin-1"}})

    def test_unknown_log_level(self):
        with pytest.raises(ConfigurationException):
            LoggingConfig(level="LOUD")

    def test_algorithm_normalized(self):
        assert HashingConfig(algorithm="SHA256").algorithm == "sha256"

    def test_unknown_key(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"hashing": {"colour": "blue"}})


class TestLoading:
    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"hashing": {"algorithm": "blake2b"}})

        assert config.hashing.algorithm == "blake2b"
        assert config.logging.level == "WARNING"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "sha512")
        monkeypatch.setenv("HASHTREE_LOG_LEVEL", "debug")

        config = RuntimeConfig.from_env()

        assert config.hashing.algorithm == "sha512"
        assert config.logging.level == "DEBUG"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "hashtree.yaml"
        path.write_text(
            "hashing:\n"
            "  algorithm: sha3_512\n"
            "logging:\n"
            "  level: INFO\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.hashing.algorithm == "sha3_512"
        assert config.logging.level == "INFO"

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path).hashing.algorithm == "sha3_256"

    def test_from_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_with_env_overrides(self, monkeypatch):
        base = RuntimeConfig.from_dict({"hashing": {"algorithm": "sha256"}, "logging": {"level": "ERROR"}})
        monkeypatch.setenv("HASHTREE_LOG_FILE", "hashtree.log")

        config = base.with_env_overrides()

        assert config.hashing.algorithm == "sha256"
        assert config.logging.level == "ERROR"
        assert config.logging.log_file == "hashtree.log"
        assert base.logging.log_file is None

    def test_with_no_env_overrides_returns_self(self):
        config = RuntimeConfig()

        assert config.with_env_overrides() is config


class TestDefaultConfig:
    def test_default_config_cached(self):
        assert get_default_config() is get_default_config()

    def test_set_default_config_changes_tree_algorithm(self):
        set_default_config(RuntimeConfig.from_dict({"hashing": {"algorithm": "sha256"}}))

        tree = MerkleTree("a")

        assert tree.algorithm == "sha256"

    def test_env_drives_default_config(self, monkeypatch):
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "blake2s")
        set_default_config(None)

        assert MerkleTree("a").algorithm == "blake2s"

    def test_tree_keeps_algorithm_after_default_changes(self):
        tree = MerkleTree("a")
        set_default_config(RuntimeConfig.from_dict({"hashing": {"algorithm": "sha512"}}))

        tree.insert("b")

        assert tree.algorithm == "sha3_256"
        assert len(tree.get_hash()) == 32

    def test_tree_membership_survives_config_changes(self, monkeypatch):
        tree = MerkleTree("héllo")
        tree.insert("wörld")
        root = tree.get_hash()

        monkeypatch.setenv("HASHTREE_TEXT_ENCODING", "latin-1")
        set_default_config(RuntimeConfig.from_dict({"hashing": {"algorithm": "sha512"}}))

        assert tree.contains("héllo")
        assert tree.contains("wörld")
        assert tree.get_proof_tree_for("héllo").verify_root_hash(root)


class TestSetupLogging:
    def test_setup_logging_writes_file(self, tmp_path):
        root = logging.getLogger()
        saved_handlers = root.handlers[:]
        saved_level = root.level
        log_file = tmp_path / "hashtree.log"

        try:
            setup_logging("DEBUG", str(log_file))
            logging.getLogger("hashtree.merkle.merkle_tree").debug("hello from test")
            for handler in root.handlers:
                handler.flush()

            assert "hello from test" in log_file.read_text()
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
