import logging
import sys
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

import pytest


@contextmanager
def _fresh_main():
    """Import main with its import-time logging and patching hooks mocked out."""
    with (
        patch(
            "context_bank_mcp._logging.setup_logging", MagicMock()
        ) as setup_logging_mock,
        patch(
            "context_bank_mcp._logging.setup_global_exception_logging", MagicMock()
        ) as setup_global_exception_logging_mock,
        patch(
            "context_bank_mcp._monkeypatch.monkeypatch_uvicorn_exception_handling",
            MagicMock(),
        ) as monkeypatch_uvicorn_mock,
    ):
        sys.modules.pop("context_bank_mcp.context_bank_server.main", None)
        import context_bank_mcp.context_bank_server.main as mod

        yield mod
        setup_logging_mock.assert_called_once()
        setup_global_exception_logging_mock.assert_called_once()
        monkeypatch_uvicorn_mock.assert_called_once()


class DummyServer:
    name = "dummy"

    def __init__(self):
        self.calls = []

    def run(self, transport=None):
        self.calls.append(transport)


@pytest.mark.parametrize("transport", ["stdio", "sse", "streamable-http"])
def test_run_server(transport):
    with _fresh_main() as mod:
        server = DummyServer()
        with (
            patch.object(mod, "mcp_server", server),
            patch.object(mod, "_LOGGER", logging.getLogger("dummy")),
        ):
            mod.run_server(transport)
        assert server.calls == [transport]


def test_run_server_logs_stop_on_error():
    with _fresh_main() as mod:
        server = MagicMock()
        server.name = "dummy"
        server.run.side_effect = KeyboardInterrupt
        logger = MagicMock()
        with (
            patch.object(mod, "mcp_server", server),
            patch.object(mod, "_LOGGER", logger),
        ):
            with pytest.raises(KeyboardInterrupt):
                mod.run_server("stdio")
        assert "stopped" in logger.info.call_args[0][0]


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["prog"], "stdio"),
        (["prog", "-t", "sse"], "sse"),
        (["prog", "--transport", "streamable-http"], "streamable-http"),
    ],
)
def test_main_invokes_run_server(argv, expected):
    with _fresh_main() as mod:
        called = {}
        with (
            patch.object(
                mod, "run_server", lambda transport: called.setdefault("transport", transport)
            ),
            patch("sys.argv", argv),
        ):
            mod.main()
        assert called["transport"] == expected


def test_main_rejects_unknown_transport():
    with _fresh_main() as mod:
        with (
            patch.object(mod, "run_server", MagicMock()) as run_server_mock,
            patch("sys.argv", ["prog", "-t", "websocket"]),
        ):
            with pytest.raises(SystemExit):
                mod.main()
        run_server_mock.assert_not_called()
