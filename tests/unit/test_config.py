import logging
from pathlib import Path

import pytest

from kb_export.config import ExportConfig


def test_defaults():
    config = ExportConfig()
    assert config.export_root == Path("./exports")
    assert config.log_level == "INFO"
    assert config.logging_level == logging.INFO
    assert config.timeout == 30.0
    assert config.page_size == 100


def test_from_env_reads_values_and_skips_empty():
    config = ExportConfig.from_env({
        "KB_EXPORT_DIR": "/tmp/kb",
        "KB_EXPORT_LOG_LEVEL": "debug",
        "KB_EXPORT_TIMEOUT": "",
    })
    assert config.export_root == Path("/tmp/kb")
    assert config.log_level == "DEBUG"
    assert config.timeout == 30.0


def test_from_env_uses_process_environment(monkeypatch):
    monkeypatch.setenv("KB_EXPORT_TIMEOUT", "5")
    monkeypatch.delenv("KB_EXPORT_DIR", raising=False)
    monkeypatch.delenv("KB_EXPORT_LOG_LEVEL", raising=False)
    assert ExportConfig.from_env().timeout == 5.0


def test_invalid_values_rejected():
    with pytest.raises(ValueError, match="Invalid log level"):
        ExportConfig(log_level="LOUD")
    with pytest.raises(ValueError, match="KB_EXPORT_TIMEOUT"):
        ExportConfig.from_env({"KB_EXPORT_TIMEOUT": "soon"})
    with pytest.raises(ValueError, match="Timeout must be positive"):
        ExportConfig(timeout=0)


def test_with_overrides():
    base = ExportConfig()
    assert base.with_overrides() is base
    changed = base.with_overrides(export_root="out", log_level="warning")
    assert changed.export_root == Path("out")
    assert changed.log_level == "WARNING"
