"""Logging infrastructure with ledger context."""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

from .exceptions import ConfigError


def _close_handlers(logger: logging.Logger) -> None:
    """Close and detach the handlers a previous configuration installed."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class LedgerContextFilter(logging.Filter):
    """Add ledger file context to log records."""

    def __init__(self):
        super().__init__()
        self.ledger: Optional[str] = None

    def filter(self, record):
        """Add ledger name to record."""
        record.ledger = self.ledger or "-"
        return True


class BillsLogger:
    """Centralized logging manager.

    Two loggers are configured: ``bills`` for diagnostics (stderr and an
    optional rotating file) and ``bills.report`` for the report itself
    (stdout, no prefix).
    """

    def __init__(
        self,
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 5
    ):
        self.ledger_filter = LedgerContextFilter()
        plain = logging.Formatter("%(message)s")

        # Diagnostics logger
        self.logger = logging.getLogger("bills")
        self.logger.setLevel(log_level.upper())
        _close_handlers(self.logger)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(plain)
        self.logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file).expanduser()
            try:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = RotatingFileHandler(
                    log_path,
                    maxBytes=max_file_size_mb * 1024 * 1024,
                    backupCount=backup_count,
                    encoding="utf-8"
                )
            except OSError as e:
                raise ConfigError(f"Unable to open log file {log_path}: {e}")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] [ledger:%(ledger)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            file_handler.addFilter(self.ledger_filter)
            self.logger.addHandler(file_handler)

        # Report logger writes bare lines to stdout
        self.report_logger = logging.getLogger("bills.report")
        self.report_logger.setLevel(logging.INFO)
        _close_handlers(self.report_logger)
        self.report_logger.propagate = False

        report_handler = logging.StreamHandler(sys.stdout)
        report_handler.setFormatter(plain)
        self.report_logger.addHandler(report_handler)

    def set_ledger_context(self, ledger: Optional[str]):
        """Set current ledger file for logging."""
        self.ledger_filter.ledger = ledger

    def get_logger(self) -> logging.Logger:
        """Get the diagnostics logger."""
        return self.logger

    def get_report_logger(self) -> logging.Logger:
        """Get the report logger."""
        return self.report_logger


# Global logger instance
_logger_instance: Optional[BillsLogger] = None


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> logging.Logger:
    """(Re)configure the global logger instance from settings."""
    global _logger_instance
    _logger_instance = BillsLogger(log_level, log_file, max_file_size_mb, backup_count)
    return _logger_instance.get_logger()


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = BillsLogger(log_level)
    return _logger_instance.get_logger()


def get_report_logger() -> logging.Logger:
    """Get the report logger, creating the global instance if needed."""
    get_logger()
    return _logger_instance.get_report_logger()


def set_ledger_context(ledger: Optional[str]):
    """Set ledger context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_ledger_context(ledger)
