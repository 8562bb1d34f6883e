"""
Unit tests for server configuration.
"""

import pytest

from minihttp.config import ServerConfig


class TestServerConfig:

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.backlog == 10
        assert config.buffer_size == 4096
        assert config.timeout is None
        assert config.read_full_body is False
        config.validate()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HTTP_HOST", "127.0.0.1")
        monkeypatch.setenv("HTTP_PORT", "3000")
        monkeypatch.setenv("HTTP_BACKLOG", "64")
        monkeypatch.setenv("HTTP_BUFFER_SIZE", "8192")
        monkeypatch.setenv("HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("HTTP_LOG_LEVEL", "DEBUG")

        config = ServerConfig.from_env()

        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.backlog == 64
        assert config.buffer_size == 8192
        assert config.timeout == 2.5
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("HTTP_HOST", "HTTP_PORT", "HTTP_BACKLOG", "HTTP_BUFFER_SIZE",
                     "HTTP_TIMEOUT", "HTTP_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        assert ServerConfig.from_env() == ServerConfig()

    def test_from_env_bad_number_names_variable(self, monkeypatch):
        monkeypatch.setenv("HTTP_PORT", "abc")

        with pytest.raises(ValueError, match="HTTP_PORT"):
            ServerConfig.from_env()

    def test_port_zero_is_valid(self):
        ServerConfig(port=0).validate()

    @pytest.mark.parametrize("kwargs", [
        {"port": -1},
        {"port": 70000},
        {"backlog": 0},
        {"buffer_size": 10},
        {"timeout": 0},
        {"accept_timeout": 0},
        {"max_request_size": 100},
        {"log_level": "CHATTY"},
    ])
    def test_validate_rejects(self, kwargs):
        with pytest.raises(ValueError):
            ServerConfig(**kwargs).validate()
