"""Tests for the logging module."""

from loguru import logger

from tintswitch.logger import _state, add_tui_sink, enable_console, get_logger, remove_tui_sink


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_bound_logger(self) -> None:
        bound = get_logger("test_module")
        assert bound is not None
        for method in ("debug", "info", "warning", "error", "exception"):
            assert hasattr(bound, method)

    def test_binds_name(self) -> None:
        records: list[dict] = []

        def sink(message: object) -> None:
            records.append(message.record)  # type: ignore[attr-defined]

        sink_id = add_tui_sink(sink, level="DEBUG")
        try:
            get_logger("tintswitch.example").info("bound message")
        finally:
            remove_tui_sink(sink_id)

        assert any(record["extra"].get("name") == "tintswitch.example" for record in records)


class TestTuiSink:
    """Tests for add_tui_sink and remove_tui_sink."""

    def test_sink_receives_messages(self) -> None:
        received: list[str] = []

        def sink(message: object) -> None:
            received.append(str(message))

        sink_id = add_tui_sink(sink, level="DEBUG")
        logger.info("Test message for sink")
        remove_tui_sink(sink_id)

        assert any("Test message for sink" in line for line in received)

    def test_level_filter(self) -> None:
        received: list[str] = []

        def sink(message: object) -> None:
            received.append(str(message))

        sink_id = add_tui_sink(sink, level="WARNING")
        logger.info("too quiet")
        logger.warning("loud enough")
        remove_tui_sink(sink_id)

        assert not any("too quiet" in line for line in received)
        assert any("loud enough" in line for line in received)

    def test_removed_sink_receives_nothing(self) -> None:
        received: list[str] = []

        def sink(message: object) -> None:
            received.append(str(message))

        sink_id = add_tui_sink(sink, level="DEBUG")
        remove_tui_sink(sink_id)
        logger.info("Message after sink removed")

        assert received == []


class TestConsoleHandler:
    """Tests for the stderr handler used by CLI commands."""

    def test_initially_absent(self) -> None:
        assert hasattr(_state, "console_handler_id")

    def test_enable_replaces_previous_handler(self) -> None:
        first = enable_console("ERROR")
        second = enable_console("ERROR")
        try:
            assert first != second
            assert _state.console_handler_id == second
        finally:
            logger.remove(second)
            _state.console_handler_id = None

    def test_tui_sink_removes_console_handler(self) -> None:
        enable_console("ERROR")

        def sink(message: object) -> None:
            pass

        sink_id = add_tui_sink(sink)
        try:
            assert _state.console_handler_id is None
        finally:
            remove_tui_sink(sink_id)
