#!/usr/bin/env python3
"""
Istari Logging System
Rotating file log plus a quiet rich console handler for warnings and errors
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler


class IstariLogger:
    """Centralized logging system for Istari"""

    _instance = None
    _initialized = False

    DEFAULT_DIRECTORY = ".istari/logs"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if IstariLogger._initialized:
            return

        self.console = Console(stderr=True)
        self.logger = logging.getLogger("istari")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self.logger.handlers.clear()

        self.logs_dir = Path(self.DEFAULT_DIRECTORY)
        self.file_handler = self._build_file_handler(self.logs_dir)
        self.logger.addHandler(self.file_handler)

        # The menu owns the terminal, so only warnings and above reach it
        self.console_handler = RichHandler(console=self.console, show_level=True, show_time=True)
        self.console_handler.setLevel(logging.WARNING)
        self.logger.addHandler(self.console_handler)

        IstariLogger._initialized = True

    @staticmethod
    def _build_file_handler(logs_dir: Path, max_size_mb: int = 10, backup_count: int = 5) -> RotatingFileHandler:
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / f"istari_{datetime.now().strftime('%Y%m%d')}.log"
        handler = RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count
        )
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        return handler

    def configure(self, level: Optional[str] = None, directory: Optional[str] = None,
                  max_size_mb: Optional[int] = None, backup_count: Optional[int] = None):
        """
        Apply the ``logging`` configuration section

        Args:
            level: Level name for the file log (e.g. "INFO")
            directory: Directory for rotated log files
            max_size_mb: Size at which the log file rotates
            backup_count: Number of rotated files to keep
        """
        if directory or max_size_mb or backup_count:
            self.logs_dir = Path(directory) if directory else self.logs_dir
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = self._build_file_handler(
                self.logs_dir,
                max_size_mb or 10,
                backup_count if backup_count is not None else 5
            )
            self.logger.addHandler(self.file_handler)

        if level:
            self.file_handler.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    def get_logger(self, name=None):
        """Get a logger instance"""
        if name:
            return logging.getLogger(f"istari.{name}")
        return self.logger

    def debug(self, message, **kwargs):
        self.logger.debug(message, **kwargs)

    def info(self, message, **kwargs):
        self.logger.info(message, **kwargs)

    def warning(self, message, **kwargs):
        self.logger.warning(message, **kwargs)

    def error(self, message, **kwargs):
        self.logger.error(message, **kwargs)

    def critical(self, message, **kwargs):
        self.logger.critical(message, **kwargs)

    def set_level(self, level):
        """Set logging level"""
        self.logger.setLevel(level)


# Singleton instance
logger = IstariLogger()
