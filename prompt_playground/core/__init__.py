"""
Core module - Configuration, result records and shared playground state.
"""

from .config import (
    GenerationConfig,
    PlaygroundSettings,
    ProviderSettings,
    LoggingConfig,
    AppConfig,
    ConfigStore,
    ProviderName,
    MIN_SAMPLES,
    MAX_SAMPLES,
    get_default_config,
    load_config,
)
from .context import (
    PlaygroundContext,
    RunMode,
)
from .models import (
    Result,
    ResultStats,
    summarize_results,
)

__all__ = [
    # Config classes
    'GenerationConfig',
    'PlaygroundSettings',
    'ProviderSettings',
    'LoggingConfig',
    'AppConfig',
    'ConfigStore',
    'ProviderName',
    'MIN_SAMPLES',
    'MAX_SAMPLES',
    # Config functions
    'get_default_config',
    'load_config',
    # Context classes
    'PlaygroundContext',
    'RunMode',
    # Results
    'Result',
    'ResultStats',
    'summarize_results',
]
