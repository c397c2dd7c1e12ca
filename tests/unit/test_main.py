"""Unit tests for the server entry point."""

from unittest.mock import MagicMock, patch

import scholarsight.main as main_module


class TestMain:
    """Tests for main()."""

    def test_serves_single_app_from_environment(self) -> None:
        """API and dashboard share one server bound from HOST and PORT."""
        app = MagicMock()
        with (
            patch.dict("os.environ", {"HOST": "127.0.0.1", "PORT": "9100", "LOG_LEVEL": "debug"}),
            patch.object(main_module, "build_app", return_value=app) as build_app,
            patch.object(main_module.uvicorn, "run") as run,
        ):
            main_module.main()

        build_app.assert_called_once_with()
        run.assert_called_once_with(app, host="127.0.0.1", port=9100, log_level="debug")

    def test_defaults_to_port_8000(self) -> None:
        with (
            patch.dict("os.environ", {}, clear=True),
            patch.object(main_module, "build_app", return_value=MagicMock()),
            patch.object(main_module.uvicorn, "run") as run,
        ):
            main_module.main()

        kwargs = run.call_args.kwargs
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 8000
        assert kwargs["log_level"] == "info"
