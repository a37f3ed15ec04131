"""
Utilities module - Common helper functions and classes.
"""

from .id_generator import (
    SUMMARY_RESULT_ID,
    generate_result_id,
    is_summary_id,
)
from .logger import (
    setup_logging,
    get_logger,
    LogContext,
    SampleProgress,
    log_exception,
    log_json,
)

__all__ = [
    # ID generation
    'SUMMARY_RESULT_ID',
    'generate_result_id',
    'is_summary_id',
    # Logging
    'setup_logging',
    'get_logger',
    'LogContext',
    'SampleProgress',
    'log_exception',
    'log_json',
]
