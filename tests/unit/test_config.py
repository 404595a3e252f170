"""Tests for configuration loading."""

from catprobe.config import load_config
from catprobe.constants import DEFAULT_KEY
from catprobe.contracts import TokenTransport
from catprobe.transports import HeaderBinding, get_binding
from catprobe.worker import Worker


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "catprobe.yaml"
    config_path.write_text(
        """
token:
  ttl: 60
  token_type: header
  issuer: tester
session:
  max_iterations: 3
  sleep: 0
"""
    )
    monkeypatch.setenv("CATPROBE_CONFIG", str(config_path))

    config = load_config()
    assert config.token.ttl == 60
    assert config.token.token_type is TokenTransport.HEADER
    assert config.token.issuer == "tester"
    assert config.token.key == DEFAULT_KEY
    assert config.session.max_iterations == 3
    assert config.session.sleep == 0
    assert config.session.strict_content_length is False


def test_defaults_when_file_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("CATPROBE_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("CATPROBE_KEY", raising=False)
    monkeypatch.delenv("CATPROBE_ISSUER", raising=False)
    monkeypatch.delenv("CATPROBE_TOKEN_TYPE", raising=False)

    config = load_config()
    assert config.token.ttl == 20
    assert config.token.token_type is TokenTransport.COOKIE
    assert config.token.issuer == "eyevinn"
    assert config.session.max_iterations == 5
    assert config.session.sleep == 4000


def test_env_overrides_file(tmp_path, monkeypatch):
    config_path = tmp_path / "catprobe.yaml"
    config_path.write_text("token:\n  issuer: from-file\n")
    monkeypatch.setenv("CATPROBE_ISSUER", "from-env")
    monkeypatch.setenv("CATPROBE_KEY", "00ff")
    monkeypatch.setenv("CATPROBE_TOKEN_TYPE", "cookie-as-query")

    config = load_config(str(config_path))
    assert config.token.issuer == "from-env"
    assert config.token.key == "00ff"
    assert config.token.token_type is TokenTransport.COOKIE_AS_QUERY


def test_worker_uses_config(tmp_path, monkeypatch):
    config_path = tmp_path / "catprobe.yaml"
    config_path.write_text(
        """
token:
  token_type: header
  ttl: 30
session:
  max_iterations: 2
  sleep: 100
  strict_content_length: true
"""
    )
    monkeypatch.setenv("CATPROBE_CONFIG", str(config_path))
    monkeypatch.delenv("CATPROBE_TOKEN_TYPE", raising=False)

    worker = Worker.from_config("https://cdn.example.com/live/index.m3u8", load_config())
    assert worker.token_type is TokenTransport.HEADER
    assert worker.ttl == 30
    assert worker.max_iterations == 2
    assert worker.sleep == 100
    assert worker.strict_content_length is True
    assert isinstance(get_binding(worker.token_type), HeaderBinding)
