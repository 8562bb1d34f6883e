"""
Unit tests for the demo handlers and the CLI entry point.
"""

import json
from unittest import mock

import pytest

from minihttp.__main__ import main
from minihttp.handlers import about, api_data, home, register_demo_routes
from minihttp.http import Router
from minihttp.server import HTTPServer


class TestDemoHandlers:

    def test_home_links_every_route(self):
        page = home({})

        for path in ('href="/"', 'href="/about"', 'href="/api/data"'):
            assert path in page

    def test_about(self):
        assert "<h1>About This Server</h1>" in about({"Host": "x"})

    def test_api_data_is_json(self):
        payload = json.loads(api_data({}))

        assert payload["status"] == "success"
        assert payload["data"]["version"] == "1.0"
        assert payload["data"]["timestamp"].isdigit()

    def test_register_demo_routes(self):
        router = register_demo_routes(Router())

        assert [route.path for route in router.routes()] == ["/", "/about", "/api/data"]
        assert router.lookup("/api/data").content_type == "application/json"
        assert router.lookup("/about").content_type == "text/html"

    def test_register_demo_routes_on_server(self, config):
        server = HTTPServer(config)

        assert register_demo_routes(server) is server
        assert server.router.lookup("/api/data").content_type == "application/json"
        assert len(server.router) == 3


class TestMain:

    def test_registers_demo_and_starts(self):
        with mock.patch.object(HTTPServer, "start", return_value=True) as start:
            assert main(["--host", "127.0.0.1", "--port", "0"]) == 0

        start.assert_called_once()

    def test_no_demo(self, capsys):
        with mock.patch.object(HTTPServer, "start", return_value=True):
            main(["--no-demo", "--port", "0"])

        assert "/about" not in capsys.readouterr().out

    def test_setup_failure_exit_code(self):
        with mock.patch.object(HTTPServer, "start", return_value=False):
            assert main(["--port", "0"]) == 1

    def test_keyboard_interrupt_stops(self):
        with mock.patch.object(HTTPServer, "start", side_effect=KeyboardInterrupt), \
                mock.patch.object(HTTPServer, "stop") as stop:
            assert main(["--port", "0"]) == 0

        stop.assert_called_once()

    def test_invalid_port_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--port", "99999"])

        assert exc_info.value.code == 2

    def test_bad_environment_is_usage_error(self, monkeypatch, capsys):
        monkeypatch.setenv("HTTP_PORT", "abc")

        with pytest.raises(SystemExit) as exc_info:
            main(["--port", "0"])

        assert exc_info.value.code == 2
        assert "HTTP_PORT" in capsys.readouterr().err
