import logging
import sys

_PACKAGE_LOGGER = "todo_service"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the package logger. Safe to call repeatedly."""
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if getattr(package_logger, "_todo_logging_configured", False):
        package_logger.setLevel(log_level)
        for handler in package_logger.handlers:
            handler.setLevel(log_level)
        return

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(logging.Formatter(_FORMAT))

    package_logger.setLevel(log_level)
    package_logger.addHandler(stream_handler)
    package_logger._todo_logging_configured = True
