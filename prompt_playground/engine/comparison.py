"""
Comparison Engine - Folds several outputs into one synthesized summary.
"""

from dataclasses import replace
from typing import List, Optional

from ..core.config import GenerationConfig
from ..core.context import PlaygroundContext
from ..core.models import Result
from ..llm.base import GenerationProvider, ProviderError
from ..utils.id_generator import SUMMARY_RESULT_ID
from ..utils.logger import LogContext, get_logger
from .postprocessor import trim_output
from .prompts import build_comparison_prompt, build_params, compose_prompt
from .token_counter import count_tokens

logger = get_logger(__name__)


COMPARISON_ERROR_OUTPUT = "Error generating comparison summary. Please try again."

SUMMARY_TEMPERATURE = 0.5
SUMMARY_MAX_TOKENS = 200


class ComparisonEngine:
    """
    Synthesizes a summary from prior outputs with one more provider call.

    Candidates come from the current result set in batched mode and from
    the history in single mode. With fewer than two candidates compare()
    does nothing.
    """

    def __init__(self, context: PlaygroundContext, provider: GenerationProvider):
        self.context = context
        self.provider = provider

    def candidate_outputs(self) -> List[str]:
        """Outputs eligible for comparison; empty if there are too few."""
        source = self.context.results if self.context.batched else self.context.history
        if len(source) < 2:
            return []
        return [result.output for result in source]

    def summary_config(self, outputs: List[str]) -> GenerationConfig:
        """
        Derive the configuration for the synthesis call.

        Stop sequences and the remaining fields come from the base config.
        """
        return replace(
            self.context.config_store.get(),
            system_prompt="",
            user_prompt=build_comparison_prompt(outputs),
            temperature=SUMMARY_TEMPERATURE,
            max_tokens=SUMMARY_MAX_TOKENS,
        )

    def compare(self) -> Optional[Result]:
        """
        Replace the result set with a synthesized summary.

        The result set is snapshotted first so the caller can restore it.
        The history is never modified.

        Returns:
            The summary Result, or None if there were fewer than two
            candidate outputs
        """
        outputs = self.candidate_outputs()
        if not outputs:
            logger.debug(f"Comparison skipped: fewer than two candidates ({self.context.mode.value} mode)")
            return None

        context = self.context
        context.snapshot()
        context.is_loading = True

        try:
            config = self.summary_config(outputs)
            with LogContext(logger, "Comparison", mode=context.mode.value, candidates=len(outputs)) as run_log:
                summary = self._synthesize(config)
                run_log.note(tokens=summary.token_count)
            context.set_results([summary])
            return summary
        finally:
            context.is_loading = False

    def _synthesize(self, config: GenerationConfig) -> Result:
        try:
            raw_output = self.provider.generate(compose_prompt(config), build_params(config))
        except ProviderError as e:
            logger.warning(f"Comparison failed ({e.provider or self.provider.provider_name}): {e}")
            return Result(config=config, output=COMPARISON_ERROR_OUTPUT, id=SUMMARY_RESULT_ID)

        output = trim_output(raw_output, config.stop_sequences)
        return Result(
            config=config,
            output=output,
            token_count=count_tokens(output),
            id=SUMMARY_RESULT_ID,
        )
