"""
Structured logging for lifespan.

Wraps the standard logging module with console/file outputs, keyword
context rendered as JSON, and counters describing the predictions made
in this process.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks how many predictions were made and which causes came out on top.
    """

    def __init__(
        self,
        name: str = "lifespan",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        self.metrics = {
            "predictions": 0,
            "warnings": 0,
            "causes": {},
            "defaults_applied": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"lifespan_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self.metrics["warnings"] += 1
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    def record_prediction(self, top_cause: str, defaults: Iterable[str] = ()):
        """Count a prediction, its winning cause and any defaulted fields."""
        self.metrics["predictions"] += 1
        causes = self.metrics["causes"]
        causes[top_cause] = causes.get(top_cause, 0) + 1
        applied = self.metrics["defaults_applied"]
        for field in defaults:
            applied[field] = applied.get(field, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics with each cause's share of predictions."""
        metrics_copy = {
            **self.metrics,
            "causes": dict(self.metrics["causes"]),
            "defaults_applied": dict(self.metrics["defaults_applied"]),
        }
        total = metrics_copy["predictions"]
        metrics_copy["cause_share"] = {
            cause: round(count / total, 3)
            for cause, count in metrics_copy["causes"].items()
        } if total else {}
        return metrics_copy

    def log_metrics_summary(self):
        metrics = self.get_metrics()

        self.info("=== Prediction Session Metrics ===")
        self.info(f"Predictions: {metrics['predictions']}")
        self.info(f"Warnings: {metrics['warnings']}")

        if metrics["causes"]:
            self.info("Top causes:")
            for cause, count in sorted(metrics["causes"].items(), key=lambda kv: -kv[1]):
                share = metrics["cause_share"][cause] * 100
                self.info(f"  {cause}: {count} ({share:.1f}%)")

        if metrics["defaults_applied"]:
            self.info("Defaults applied:")
            for field, count in metrics["defaults_applied"].items():
                self.info(f"  {field}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "lifespan",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
