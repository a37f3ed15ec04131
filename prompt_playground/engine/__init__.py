"""
Engine module - Generation runs, output post-processing and comparison.
"""

from .comparison import ComparisonEngine, COMPARISON_ERROR_OUTPUT
from .orchestrator import OrchestrationEngine, GENERATION_ERROR_OUTPUT
from .postprocessor import trim_output, find_stop_index
from .prompts import (
    PRODUCT_PLACEHOLDER,
    build_comparison_prompt,
    build_params,
    compose_prompt,
    substitute_product,
)
from .sampling import ParameterSampler
from .token_counter import count_tokens, tokenize

__all__ = [
    'OrchestrationEngine',
    'ComparisonEngine',
    'ParameterSampler',
    'GENERATION_ERROR_OUTPUT',
    'COMPARISON_ERROR_OUTPUT',
    'trim_output',
    'find_stop_index',
    'count_tokens',
    'tokenize',
    'PRODUCT_PLACEHOLDER',
    'substitute_product',
    'compose_prompt',
    'build_params',
    'build_comparison_prompt',
]
