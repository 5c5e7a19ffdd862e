"""
Flat Insulation Calculator - Logging System
===========================================
Console and optional file logging, performance tracking, and decorators for
the calculation core.

Author: Flat Insulation Calculator
Version: 1.0.0
"""

import logging
import os
import sys
import time
import threading
from collections import deque
from contextlib import contextmanager
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Deque, Dict, Optional

LOGGER_NAME = 'FlatInsulation'


def _safe_isatty(stream) -> bool:
    """Return True if stream looks like a tty; never raise."""
    try:
        return bool(getattr(stream, "isatty", lambda: False)())
    except Exception:
        return False


class InsulationLogFormatter(logging.Formatter):
    """Formatter with optional ANSI level colours."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m',
    }

    def __init__(self, use_colors: bool = True, stream=None):
        super().__init__()
        if stream is None:
            stream = sys.stderr
        self.use_colors = bool(use_colors and _safe_isatty(stream))

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        level = record.levelname
        location = f"[{record.module}.{record.funcName}:{record.lineno}]"

        thread_name = threading.current_thread().name
        thread_info = f"[{thread_name}]" if thread_name != 'MainThread' else ""

        if self.use_colors:
            color = self.COLORS.get(level, '')
            reset = self.COLORS['RESET']
            formatted = f"{timestamp} {color}{level:8s}{reset} {thread_info}{location} {record.getMessage()}"
        else:
            formatted = f"{timestamp} {level:8s} {thread_info}{location} {record.getMessage()}"

        if record.exc_info:
            formatted += '\n' + self.formatException(record.exc_info)

        return formatted


class PerformanceTracker:
    """Collects the most recent call durations per operation name."""

    MAX_SAMPLES = 1000

    def __init__(self, max_samples: int = MAX_SAMPLES):
        self.max_samples = max_samples
        self.timings: Dict[str, Deque[float]] = {}
        self.lock = threading.Lock()

    def record_timing(self, operation: str, duration_s: float):
        with self.lock:
            samples = self.timings.get(operation)
            if samples is None:
                samples = self.timings[operation] = deque(maxlen=self.max_samples)
            samples.append(duration_s)

    def get_stats(self, operation: str) -> Dict[str, float]:
        """Count/total/mean/min/max for an operation."""
        with self.lock:
            times = list(self.timings.get(operation, []))
        if not times:
            return {'count': 0, 'total': 0, 'mean': 0, 'min': 0, 'max': 0}
        return {
            'count': len(times),
            'total': sum(times),
            'mean': sum(times) / len(times),
            'min': min(times),
            'max': max(times),
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        with self.lock:
            operations = list(self.timings)
        return {op: self.get_stats(op) for op in operations}

    def clear(self):
        with self.lock:
            self.timings.clear()


class InsulationLogger:
    """Process-wide logger for the calculation core."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        """Singleton pattern for global logger access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(self,
                 log_dir: Optional[str] = None,
                 log_level: int = logging.DEBUG,
                 console_level: int = logging.WARNING,
                 enable_file_logging: bool = False,
                 enable_performance_tracking: bool = True):
        if self._initialized:
            return

        self._initialized = True
        self.log_dir = log_dir
        self.log_level = log_level
        self.console_level = console_level
        self.current_log_file: Optional[str] = None

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(log_level)
        self.logger.handlers = []

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(InsulationLogFormatter(use_colors=True, stream=sys.stderr))
        self.logger.addHandler(console_handler)

        if enable_file_logging:
            self._setup_file_handler()

        self.performance = PerformanceTracker() if enable_performance_tracking else None

    def _setup_file_handler(self):
        if not self.log_dir:
            self.log_dir = os.path.join(os.path.expanduser('~'), '.flat_insulation', 'logs')

        os.makedirs(self.log_dir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = os.path.join(self.log_dir, f'flat_insulation_{timestamp}.log')

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.log_level)
        file_handler.setFormatter(InsulationLogFormatter(use_colors=False))
        self.logger.addHandler(file_handler)

        self.current_log_file = log_file
        self.logger.info(f"Log file created: {log_file}")

    def set_log_level(self, level: int):
        self.logger.setLevel(level)
        self.log_level = level

    def set_console_level(self, level: int):
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)
        self.console_level = level

    def debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        self.logger.exception(message, *args, **kwargs)

    def log_calculation(self, name: str, params: Dict[str, Any]):
        """Log one calculation request with its parameters."""
        rendered = ", ".join(f"{k}={v}" for k, v in params.items())
        self.debug(f"{name}({rendered})")


# Global logger instance
_logger: Optional[InsulationLogger] = None


def get_logger() -> InsulationLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = InsulationLogger()
    return _logger


def initialize_logger(log_dir: Optional[str] = None,
                      log_level: int = logging.DEBUG,
                      console_level: int = logging.WARNING,
                      enable_file_logging: bool = False) -> InsulationLogger:
    """Re-initialize the global logger with custom settings."""
    global _logger
    with InsulationLogger._lock:
        InsulationLogger._instance = None
    _logger = InsulationLogger(
        log_dir=log_dir,
        log_level=log_level,
        console_level=console_level,
        enable_file_logging=enable_file_logging,
    )
    return _logger


def log_function(level: int = logging.DEBUG):
    """Decorator to log function entry and exit."""
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            func_name = func.__name__
            logger.logger.log(level, f"Entering {func_name}")
            try:
                result = func(*args, **kwargs)
                logger.logger.log(level, f"Exiting {func_name}")
                return result
            except Exception as e:
                logger.error(f"Exception in {func_name}: {e}")
                raise
        return wrapper
    return decorator


def timed_function(operation_name: Optional[str] = None):
    """Decorator to time function execution."""
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            op_name = operation_name or func.__name__
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start
                logger.debug(f"{op_name} failed after {duration:.6f}s: {e}")
                raise
            duration = time.perf_counter() - start
            if logger.performance:
                logger.performance.record_timing(op_name, duration)
            logger.debug(f"{op_name} completed in {duration:.6f}s")
            return result
        return wrapper
    return decorator


@contextmanager
def log_section(section_name: str):
    """Context manager for logging a section of code."""
    logger = get_logger()
    logger.info(f"--- {section_name} ---")
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        duration = time.perf_counter() - start
        logger.error(f"--- {section_name} failed after {duration:.3f}s: {e} ---")
        raise
    duration = time.perf_counter() - start
    logger.info(f"--- {section_name} completed in {duration:.3f}s ---")


__all__ = [
    'InsulationLogger',
    'InsulationLogFormatter',
    'PerformanceTracker',
    'get_logger',
    'initialize_logger',
    'log_function',
    'timed_function',
    'log_section',
]
