"""
component_2_logging_config.py

Central logging system for the radix arithmetic engine.
Provides structured logging with different log levels and formatting.

Features:
- Console and file based logging
- Structured formatting with timestamps and component names
- Performance tracking for expensive calculations
- Contextual logging information via ``extra``

The engine never configures logging on import; applications call
setup_logging() once, libraries only call get_logger().

Usage:
    from component_2_logging_config import get_logger

    logger = get_logger(__name__)
    logger.debug("Division finished", extra={"base": 10, "precision": 10})
"""

import logging
import logging.handlers
import sys
import traceback
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, Literal, MutableMapping, Optional, Tuple, Type

LOG_DIR: Path = Path("logs")

DEFAULT_LOG_FILE_NAME: str = "radix.log"
ERROR_LOG_FILE_NAME: str = "radix_errors.log"
PERFORMANCE_LOG_FILE_NAME: str = "radix_performance.log"

PERFORMANCE_LOGGER_NAME: str = "radix.performance"

CONSOLE_LOG_LEVEL: int = logging.INFO
FILE_LOG_LEVEL: int = logging.DEBUG


class RadixLogFormatter(logging.Formatter):
    """
    Formatter for structured log output.
    Optionally colors console output.
    """

    COLORS: Dict[str, str] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = False, include_extra: bool = True) -> None:
        self.use_colors: bool = use_colors
        self.include_extra: bool = include_extra

        # [TIMESTAMP] [LEVEL] [COMPONENT] MESSAGE
        fmt = "[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_message = super().format(record)

        if self.include_extra and hasattr(record, "extra_info"):
            extra_str = " | ".join(f"{k}={v}" for k, v in record.extra_info.items())
            if extra_str:
                log_message += f" | {extra_str}"

        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            log_message = f"{color}{log_message}{reset}"

        return log_message


class PerformanceLogger:
    """
    Context manager for timing expensive calculations.

    Usage:
        with PerformanceLogger(logger, "Concurrent exponentiation", workers=4):
            power = strategy.execute(base, exponent).result
    """

    def __init__(self, logger: Any, operation_name: str, **context: Any) -> None:
        # Accepts plain loggers and StructuredLogger adapters
        self.logger: logging.Logger = getattr(logger, "logger", logger)
        self.operation_name: str = operation_name
        self.context: Dict[str, Any] = context
        self.start_time: Optional[datetime] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = datetime.now()
        self.logger.debug(
            f"START: {self.operation_name}", extra={"extra_info": self.context}
        )
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> Literal[False]:
        assert (
            self.start_time is not None
        ), "PerformanceLogger was not entered correctly"
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        self.duration_ms = duration_ms

        if exc_type is None:
            self.logger.debug(
                f"END: {self.operation_name} (duration: {duration_ms:.2f}ms)",
                extra={"extra_info": {**self.context, "duration_ms": duration_ms}},
            )

            perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
            perf_logger.info(
                f"{self.operation_name}: {duration_ms:.2f}ms",
                extra={"extra_info": {**self.context, "duration_ms": duration_ms}},
            )
        else:
            self.logger.debug(
                f"FAILED: {self.operation_name} (duration: {duration_ms:.2f}ms)",
                extra={
                    "extra_info": {
                        **self.context,
                        "duration_ms": duration_ms,
                        "error": str(exc_val),
                    }
                },
            )

        return False


class StructuredLogger(logging.LoggerAdapter):
    """
    Logger adapter that renders structured extra information.
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        # 'extra' dict is stored as 'extra_info' on the LogRecord
        extra = kwargs.get("extra", {})
        if extra:
            kwargs["extra"] = {"extra_info": extra}
        return msg, kwargs

    def log_exception(self, exc: BaseException, message: str = "", **context: Any) -> None:
        """
        Logs an exception with its full traceback and context.
        """
        tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        self.error(
            f"{message}: {type(exc).__name__}: {str(exc)}\n{tb_str}", extra=context
        )


def setup_logging(
    console_level: int = CONSOLE_LOG_LEVEL,
    file_level: int = FILE_LOG_LEVEL,
    log_dir: Optional[Path] = None,
    enable_performance_logging: bool = True,
) -> None:
    """
    Configures the global logging system.

    Args:
        console_level: Log level for console output
        file_level: Log level for file output
        log_dir: Directory for the log files (default: ./logs)
        enable_performance_logging: Enables the separate performance log
    """
    directory = Path(log_dir) if log_dir is not None else LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # filtering happens per handler

    # Prevents duplicate handlers on repeated setup
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(RadixLogFormatter(use_colors=True, include_extra=True))
    root_logger.addHandler(console_handler)

    file_path = directory / DEFAULT_LOG_FILE_NAME
    file_handler = logging.handlers.RotatingFileHandler(
        file_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"  # 10 MB
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(RadixLogFormatter(use_colors=False, include_extra=True))
    root_logger.addHandler(file_handler)

    error_handler = logging.handlers.RotatingFileHandler(
        directory / ERROR_LOG_FILE_NAME,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(RadixLogFormatter(use_colors=False, include_extra=True))
    root_logger.addHandler(error_handler)

    perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
    for handler in list(perf_logger.handlers):
        perf_logger.removeHandler(handler)
        handler.close()

    if enable_performance_logging:
        perf_logger.setLevel(logging.INFO)
        perf_logger.propagate = False

        perf_handler = logging.handlers.RotatingFileHandler(
            directory / PERFORMANCE_LOG_FILE_NAME,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        perf_handler.setFormatter(
            RadixLogFormatter(use_colors=False, include_extra=True)
        )
        perf_logger.addHandler(perf_handler)

    logger = get_logger("radix.logging_config")
    logger.info(
        "Logging initialized",
        extra={
            "console_level": logging.getLevelName(console_level),
            "file_level": logging.getLevelName(file_level),
            "log_file": str(file_path),
            "performance_logging": enable_performance_logging,
        },
    )


def get_logger(name: str) -> StructuredLogger:
    """
    Creates a structured logger for a component.

    Args:
        name: Name of the component (usually __name__)

    Returns:
        StructuredLogger instance

    Example:
        logger = get_logger(__name__)
        logger.debug("Rebased number", extra={"from_base": 10, "to_base": 2})
    """
    base_logger = logging.getLogger(name)
    return StructuredLogger(base_logger, {})
