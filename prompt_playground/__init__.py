"""
Prompt Playground - Run prompt variations and compare generated outputs.

Main modules:
- core: Configuration, result records and shared playground state
- engine: Generation runs, output post-processing and comparison
- llm: Generation provider abstractions
- cli: Command-line interface
- report: Colored console report
"""

from .cli import run_session

__version__ = "1.0.0"

__all__ = [
    'run_session',
    '__version__',
]
