"""Tests for settings loading and precedence."""

import pytest
from pydantic import ValidationError

from litweb.core.config import Settings

pytestmark = pytest.mark.unit


def test_defaults():
    settings = Settings()
    assert settings.SOURCE_ENCODING == "utf-8"
    assert settings.STRICT_CHUNKS is False
    assert settings.TARGET_DIR is None
    assert settings.WEAVE_SUFFIX == ".html"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LITWEB_TARGET_DIR", "build")
    monkeypatch.setenv("LITWEB_STRICT_CHUNKS", "1")
    settings = Settings()
    assert settings.TARGET_DIR == "build"
    assert settings.STRICT_CHUNKS is True


def test_yaml_config_file(tmp_path):
    cfg = tmp_path / "litweb.yaml"
    cfg.write_text("TARGET_DIR: out\nskip_unchanged: false\nunknown_key: 1\n")
    settings = Settings.load_config(str(cfg))
    assert settings.TARGET_DIR == "out"
    assert settings.SKIP_UNCHANGED is False


def test_toml_config_file(tmp_path):
    cfg = tmp_path / "litweb.toml"
    cfg.write_text('WEAVE_SUFFIX = ".htm"\n')
    assert Settings.load_config(str(cfg)).WEAVE_SUFFIX == ".htm"


def test_env_beats_config_file(tmp_path, monkeypatch):
    cfg = tmp_path / "litweb.yaml"
    cfg.write_text("TARGET_DIR: from-file\n")
    monkeypatch.setenv("LITWEB_TARGET_DIR", "from-env")
    assert Settings.load_config(str(cfg)).TARGET_DIR == "from-env"


def test_auto_discovery(tmp_path, monkeypatch):
    (tmp_path / ".litweb.yml").write_text("STRICT_CHUNKS: true\n")
    monkeypatch.chdir(tmp_path)
    assert Settings.load_config().STRICT_CHUNKS is True


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Settings.load_config(str(tmp_path / "absent.yaml"))


def test_unknown_encoding_rejected(monkeypatch):
    monkeypatch.setenv("LITWEB_SOURCE_ENCODING", "utf-9")
    with pytest.raises(ValidationError, match="unknown encoding"):
        Settings()


@pytest.mark.parametrize("suffix", ["html", ".", "./x"])
def test_weave_suffix_needs_leading_dot(suffix):
    with pytest.raises(ValidationError):
        Settings(WEAVE_SUFFIX=suffix)


def test_encoding_aliases_accepted():
    assert Settings(SOURCE_ENCODING="latin-1").SOURCE_ENCODING == "latin-1"
