"""
Google Maps POI Scraper - Logging Module

JSON-formatted structured logging with separate log files for the
scrape flow, errors, and operations.

Author: washdb-bot
Date: 2025-11-18
"""

import logging
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from logging.handlers import RotatingFileHandler


class GmapsScraperLogger:
    """
    Logging system for Google Maps POI extraction.

    Creates 3 separate log files:
    - gmaps_scrape.log: Navigation, field resolution, tab activation
    - gmaps_errors.log: Errors and exceptions only
    - gmaps_operations.log: Operation start/finish
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        """
        Initialize the logger with separate log files.

        Args:
            log_dir: Directory to store log files (default: logs/)
            level: Level name for the main scrape log
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        scrape_level = getattr(logging, str(level).upper(), logging.INFO)

        self.scrape_logger = self._setup_logger("gmaps_scrape", "gmaps_scrape.log", level=scrape_level)
        self.error_logger = self._setup_logger("gmaps_errors", "gmaps_errors.log", level=logging.ERROR)
        self.ops_logger = self._setup_logger("gmaps_operations", "gmaps_operations.log")

        # Track current operation context
        self.current_context: Dict[str, Any] = {}

    def _setup_logger(
        self,
        name: str,
        filename: str,
        level: int = logging.INFO,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5
    ) -> logging.Logger:
        """Set up a logger with rotating file handler."""
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(handler)

        return logger

    def set_context(self, **kwargs):
        """
        Set context for subsequent log messages.

        Example:
            logger.set_context(url="https://www.google.com/maps/place/...")
        """
        self.current_context.update(kwargs)

    def clear_context(self):
        """Clear the current logging context."""
        self.current_context = {}

    def _format_log_data(self, message: str, extra_data: Optional[Dict] = None) -> str:
        """Format log data as JSON with context."""
        log_data = {
            "timestamp": datetime.now().isoformat(),
            "message": message,
            **self.current_context
        }

        if extra_data:
            log_data.update(extra_data)

        return json.dumps(log_data, default=str)

    # Navigation

    def navigation_attempt(self, url: str, attempt: int, max_attempts: int):
        """Log a navigation attempt."""
        data = {"url": url, "attempt": attempt, "max_attempts": max_attempts}
        self.scrape_logger.info(self._format_log_data("Navigation attempt", data))

    def navigation_retry(self, url: str, attempt: int, error: Exception, wait_seconds: float):
        """Log a failed attempt that will be retried."""
        data = {
            "url": url,
            "attempt": attempt,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "wait_seconds": wait_seconds
        }
        self.scrape_logger.warning(self._format_log_data("Navigation failed, retrying", data))

    def page_loaded(self, url: str, load_time_ms: int, attempts: int = 1):
        """Log successful page load."""
        data = {"url": url, "load_time_ms": load_time_ms, "attempts": attempts}
        self.scrape_logger.info(self._format_log_data("Page loaded successfully", data))

    def navigation_failed(self, url: str, attempts: int, error: Optional[Exception]):
        """Log navigation giving up."""
        data = {"url": url, "attempts": attempts}
        if error is not None:
            data.update({
                "error_type": type(error).__name__,
                "error_message": str(error)
            })
        msg = self._format_log_data("Navigation failed", data)
        self.error_logger.error(msg)
        self.scrape_logger.error(msg)

    # Field extraction

    def field_resolved(self, field_name: str, locator: str, position: int):
        """Log which locator produced a field value."""
        data = {"field_name": field_name, "locator": locator, "position": position}
        self.scrape_logger.debug(self._format_log_data("Field resolved", data))

    def field_absent(self, field_name: str, tried: int):
        """Log a field whose locator chain was exhausted."""
        data = {"field_name": field_name, "locators_tried": tried}
        self.scrape_logger.info(self._format_log_data("Field absent", data))

    def locator_error(self, field_name: str, locator: str, error: Exception):
        """Log an error raised while evaluating a single locator."""
        data = {
            "field_name": field_name,
            "locator": locator,
            "error_type": type(error).__name__,
            "error_message": str(error)
        }
        self.scrape_logger.debug(self._format_log_data("Locator error", data))

    # Tabs and subsections

    def tab_activated(self, label: str, locator: str):
        """Log a tab activation."""
        data = {"tab": label, "locator": locator}
        self.scrape_logger.info(self._format_log_data("Tab activated", data))

    def tab_absent(self, label: str, tried: int):
        """Log a tab that could not be found."""
        data = {"tab": label, "locators_tried": tried}
        self.scrape_logger.warning(self._format_log_data("Tab not found", data))

    def subsections_extracted(self, pattern: str, titles: List[str]):
        """Log the subsections extracted from a group."""
        data = {"pattern": pattern, "titles": titles, "count": len(titles)}
        self.scrape_logger.info(self._format_log_data("Subsections extracted", data))

    def poi_scraped(self, title: str, fields_extracted: List[str], duration_seconds: float):
        """Log successful record assembly."""
        data = {
            "title": title,
            "fields_extracted": fields_extracted,
            "field_count": len(fields_extracted),
            "duration_seconds": round(duration_seconds, 2)
        }
        self.scrape_logger.info(self._format_log_data("POI scraped", data))

    # Error Logging

    def error(self, message: str, error: Exception = None, context: Dict = None):
        """
        Log an error with full context.

        Args:
            message: Error description
            error: Exception object (if available)
            context: Additional context data
        """
        data = {"error_type": "general"}
        if error:
            data.update({
                "exception_type": type(error).__name__,
                "exception_message": str(error)
            })
        if context:
            data.update(context)

        msg = self._format_log_data(message, data)
        self.error_logger.error(msg)
        self.scrape_logger.error(msg)

    # Operations Logging

    def operation_started(self, operation: str, parameters: Dict = None):
        """Log start of an operation."""
        data = {"operation": operation}
        if parameters:
            data["parameters"] = parameters
        self.ops_logger.info(self._format_log_data("Operation started", data))

    def operation_completed(self, operation: str, result: str = "success"):
        """Log completion of an operation."""
        data = {"operation": operation, "result": result}
        self.ops_logger.info(self._format_log_data("Operation completed", data))

    # Utility methods

    def info(self, message: str, extra_data: Dict = None):
        """General info logging."""
        self.scrape_logger.info(self._format_log_data(message, extra_data))

    def warning(self, message: str, extra_data: Dict = None):
        """General warning logging."""
        self.scrape_logger.warning(self._format_log_data(message, extra_data))

    def debug(self, message: str, extra_data: Dict = None):
        """Debug logging."""
        self.scrape_logger.debug(self._format_log_data(message, extra_data))


def get_logger(log_dir: str = "logs", level: str = "INFO") -> GmapsScraperLogger:
    """
    Get a GmapsScraperLogger instance.

    Args:
        log_dir: Directory for log files
        level: Level name for the main scrape log

    Returns:
        GmapsScraperLogger instance
    """
    return GmapsScraperLogger(log_dir=log_dir, level=level)
