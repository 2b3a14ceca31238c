"""Tests for the log buffer and console listener."""

from datetime import datetime

from autoshake.core.logging import (
    LogBuffer,
    LogEntry,
    Logger,
    LogLevel,
    console_listener,
)


class TestLogBuffer:
    """Tests for LogBuffer."""

    def test_keeps_most_recent_entries(self) -> None:
        logger = Logger(LogBuffer(max_size=3))
        for i in range(5):
            logger.info(f"msg {i}")

        messages = [e.message for e in logger.buffer.get_all()]
        assert messages == ["msg 2", "msg 3", "msg 4"]

    def test_get_recent(self) -> None:
        logger = Logger(LogBuffer())
        for i in range(4):
            logger.info(str(i))
        assert [e.message for e in logger.buffer.get_recent(2)] == ["2", "3"]
        assert len(logger.buffer.get_recent(10)) == 4

    def test_listener_receives_entries(self) -> None:
        buffer = LogBuffer()
        received: list[LogEntry] = []
        buffer.add_listener(received.append)

        Logger(buffer).warning("careful")

        assert len(received) == 1
        assert received[0].level == LogLevel.WARNING

    def test_removed_listener_is_silent(self) -> None:
        buffer = LogBuffer()
        received: list[LogEntry] = []
        buffer.add_listener(received.append)
        buffer.remove_listener(received.append)

        Logger(buffer).info("x")

        assert received == []

    def test_broken_listener_does_not_raise(self) -> None:
        buffer = LogBuffer()

        def broken(entry: LogEntry) -> None:
            raise RuntimeError("listener down")

        buffer.add_listener(broken)
        Logger(buffer).error("still logged")

        assert len(buffer) == 1


class TestLogger:
    """Tests for Logger."""

    def test_state_tag(self) -> None:
        logger = Logger(LogBuffer())
        logger.state_change("Idle", "Sampling")
        entry = logger.info("sampling")
        assert entry.state == "Sampling"

    def test_exception_includes_type(self) -> None:
        entry = Logger(LogBuffer()).exception("cycle failed", OSError("no screen"))
        assert entry.level == LogLevel.ERROR
        assert entry.message == "cycle failed: OSError: no screen"

    def test_format(self) -> None:
        entry = LogEntry(
            timestamp=datetime(2024, 1, 1, 12, 34, 56),
            level=LogLevel.INFO,
            message="hello",
            state="Cooldown",
        )
        assert entry.format() == "[12:34:56] [INFO] [Cooldown] hello"

    def test_format_without_state(self) -> None:
        entry = LogEntry(datetime(2024, 1, 1, 1, 2, 3), LogLevel.DEBUG, "x")
        assert entry.format() == "[01:02:03] [DEBUG] x"


class TestConsoleListener:
    """Tests for console_listener()."""

    def test_filters_below_min_level(self) -> None:
        lines: list[str] = []
        buffer = LogBuffer()
        buffer.add_listener(console_listener(LogLevel.INFO, lines.append))
        logger = Logger(buffer)

        logger.debug("hidden")
        logger.info("shown")
        logger.error("also shown")

        assert len(lines) == 2
        assert lines[0].endswith("shown")
        assert "[ERROR]" in lines[1]
