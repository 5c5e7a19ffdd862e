"""
Flat Insulation Calculator - Utilities Module
=============================================
Logging and performance tracking.
"""

from .logger import (
    InsulationLogger,
    InsulationLogFormatter,
    PerformanceTracker,
    get_logger,
    initialize_logger,
    log_function,
    timed_function,
    log_section,
)

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
