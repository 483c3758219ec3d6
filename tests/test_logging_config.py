# tests/test_logging_config.py
"""
Tests for the logging configuration (component_2).

Covers:
- StructuredLogger and extra rendering
- PerformanceLogger timing
- setup_logging() file handlers
"""

import logging

import pytest

from component_2_logging_config import (
    DEFAULT_LOG_FILE_NAME,
    ERROR_LOG_FILE_NAME,
    PERFORMANCE_LOG_FILE_NAME,
    PERFORMANCE_LOGGER_NAME,
    PerformanceLogger,
    RadixLogFormatter,
    StructuredLogger,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_logging():
    """Fixture: Restores root and performance logger state after setup_logging()"""
    root_logger = logging.getLogger()
    perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
    root_state = (list(root_logger.handlers), root_logger.level)
    perf_state = (list(perf_logger.handlers), perf_logger.level, perf_logger.propagate)

    yield

    for logger in (root_logger, perf_logger):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    handlers, level = root_state
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    handlers, level, propagate = perf_state
    for handler in handlers:
        perf_logger.addHandler(handler)
    perf_logger.setLevel(level)
    perf_logger.propagate = propagate


def make_record(message, **extra_info):
    record = logging.LogRecord(
        "radix.test", logging.INFO, __file__, 1, message, None, None
    )
    if extra_info:
        record.extra_info = extra_info
    return record


class TestFormatter:
    """Tests for RadixLogFormatter"""

    def test_format_with_extra(self):
        """Test: extra_info is appended as key=value pairs"""
        formatter = RadixLogFormatter(use_colors=False)

        line = formatter.format(make_record("Rebased", from_base=10, to_base=2))

        assert "[INFO    ] [radix.test] Rebased | from_base=10 | to_base=2" in line

    def test_format_without_extra(self):
        """Test: Records without extra_info are unchanged"""
        formatter = RadixLogFormatter(use_colors=False)

        assert formatter.format(make_record("Plain")).endswith("[radix.test] Plain")

    def test_extra_disabled(self):
        """Test: include_extra=False drops the extra fields"""
        formatter = RadixLogFormatter(use_colors=False, include_extra=False)

        assert "base=10" not in formatter.format(make_record("Parsed", base=10))

    def test_colors(self):
        """Test: Colored output is wrapped in ANSI codes"""
        formatter = RadixLogFormatter(use_colors=True)
        line = formatter.format(make_record("Colored"))

        assert line.startswith(RadixLogFormatter.COLORS["INFO"])
        assert line.endswith(RadixLogFormatter.COLORS["RESET"])


class TestStructuredLogger:
    """Tests for get_logger()"""

    def test_get_logger(self):
        """Test: get_logger() wraps the named logger"""
        logger = get_logger("radix.test")

        assert isinstance(logger, StructuredLogger)
        assert logger.logger.name == "radix.test"

    def test_extra_becomes_extra_info(self, caplog):
        """Test: extra= is stored as extra_info on the record"""
        logger = get_logger("radix.test")

        with caplog.at_level(logging.DEBUG, logger="radix.test"):
            logger.debug("Division finished", extra={"precision": 10})

        assert caplog.records[-1].extra_info == {"precision": 10}

    def test_log_exception(self, caplog):
        """Test: Exceptions are logged with traceback and context"""
        logger = get_logger("radix.test")

        try:
            raise ValueError("bad digit")
        except ValueError as e:
            with caplog.at_level(logging.ERROR, logger="radix.test"):
                logger.log_exception(e, "Parsing failed", text="1x")

        record = caplog.records[-1]
        assert "Parsing failed: ValueError: bad digit" in record.getMessage()
        assert "Traceback" in record.getMessage()
        assert record.extra_info == {"text": "1x"}


class TestPerformanceLogger:
    """Tests for the timing context manager"""

    def test_duration(self):
        """Test: The duration is measured"""
        with PerformanceLogger(get_logger("radix.test"), "Sum", digits=3) as perf:
            sum(range(1000))

        assert perf.duration_ms is not None
        assert perf.duration_ms >= 0

    def test_exceptions_propagate(self):
        """Test: Exceptions inside the block are not swallowed"""
        with pytest.raises(ZeroDivisionError):
            with PerformanceLogger(logging.getLogger("radix.test"), "Failing"):
                1 / 0

    def test_performance_record(self, caplog):
        """Test: Successful blocks log to the performance logger"""
        with caplog.at_level(logging.INFO, logger=PERFORMANCE_LOGGER_NAME):
            with PerformanceLogger(get_logger("radix.test"), "Power", workers=4):
                pass

        records = [r for r in caplog.records if r.name == PERFORMANCE_LOGGER_NAME]
        assert records
        assert records[-1].extra_info["workers"] == 4
        assert "duration_ms" in records[-1].extra_info


class TestSetupLogging:
    """Tests for setup_logging()"""

    def test_creates_log_files(self, tmp_path, restore_logging):
        """Test: Main, error and performance logs are written to log_dir"""
        setup_logging(console_level=logging.CRITICAL, log_dir=tmp_path)

        get_logger("radix.test").error("Something failed")
        with PerformanceLogger(get_logger("radix.test"), "Timed"):
            pass
        for handler in logging.getLogger().handlers:
            handler.flush()
        for handler in logging.getLogger(PERFORMANCE_LOGGER_NAME).handlers:
            handler.flush()

        assert "Something failed" in (tmp_path / DEFAULT_LOG_FILE_NAME).read_text(encoding="utf-8")
        assert "Something failed" in (tmp_path / ERROR_LOG_FILE_NAME).read_text(encoding="utf-8")
        assert "Timed" in (tmp_path / PERFORMANCE_LOG_FILE_NAME).read_text(encoding="utf-8")

    def test_repeated_setup(self, tmp_path, restore_logging):
        """Test: Repeated setup does not duplicate handlers"""
        setup_logging(console_level=logging.CRITICAL, log_dir=tmp_path)
        count = len(logging.getLogger().handlers)
        setup_logging(console_level=logging.CRITICAL, log_dir=tmp_path)

        assert len(logging.getLogger().handlers) == count

    def test_without_performance_log(self, tmp_path, restore_logging):
        """Test: The performance logger gets no handler when disabled"""
        setup_logging(
            console_level=logging.CRITICAL,
            log_dir=tmp_path,
            enable_performance_logging=False,
        )

        assert logging.getLogger(PERFORMANCE_LOGGER_NAME).handlers == []
