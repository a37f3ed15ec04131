"""
Orchestration Engine - Runs single-shot and batched generation workflows.

Each call goes provider -> stop-sequence trim -> token count and becomes an
immutable Result. Provider failures become placeholder Results so a batch
always runs to completion; a missing credential aborts the whole run.
"""

import time
from typing import Callable, List, Optional, Tuple

from ..core.config import GenerationConfig
from ..core.context import PlaygroundContext
from ..core.models import Result
from ..llm.base import GenerationProvider, ProviderError
from ..utils.logger import LogContext, SampleProgress, get_logger, log_json
from .postprocessor import trim_output
from .prompts import build_params, compose_prompt
from .sampling import ParameterSampler
from .token_counter import count_tokens

logger = get_logger(__name__)


GENERATION_ERROR_OUTPUT = "Error generating content. Please check your API key and try again."


class OrchestrationEngine:
    """
    Drives generation runs against a provider.

    Batched mode calls the provider once per sample, strictly one after
    another, each with a randomized variant of the base configuration.
    Single mode makes one call with the base configuration and also
    appends the result to the context history.
    """

    def __init__(
        self,
        context: PlaygroundContext,
        provider: GenerationProvider,
        sampler: Optional[ParameterSampler] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize the engine.

        Args:
            context: Shared playground state
            provider: Generation provider
            sampler: Variant sampler for batched runs (default: unseeded)
            clock: Monotonic clock in seconds, used for generation timing
        """
        self.context = context
        self.provider = provider
        self.sampler = sampler or ParameterSampler()
        self.clock = clock

    def run(self) -> List[Result]:
        """
        Run the configured workflow.

        Returns:
            The new result set

        Raises:
            ConfigurationError: If the provider has no credential; no
                results are kept in that case
        """
        context = self.context
        context.is_loading = True
        context.clear_results()

        try:
            if context.batched:
                return self._run_batched()
            return self._run_single()
        finally:
            context.is_loading = False

    def _run_batched(self) -> List[Result]:
        base = self.context.config_store.get()
        sample_count = self.context.resolve_sample_count()
        results: List[Result] = []

        with LogContext(logger, "Run", mode="batched", samples=sample_count, model=base.model) as run_log:
            progress = SampleProgress(logger, total=sample_count)
            for _ in range(sample_count):
                variant = self.sampler.variant(base)
                result, failed = self._generate(variant)
                results.append(result)
                self.context.set_results(results)
                progress.advance(
                    failed=failed,
                    temperature=variant.temperature,
                    presence_penalty=variant.presence_penalty,
                    frequency_penalty=variant.frequency_penalty,
                )
            progress.finish()
            run_log.note(results=len(results), failed=progress.failed)

        return results

    def _run_single(self) -> List[Result]:
        base = self.context.config_store.get()

        with LogContext(logger, "Run", mode="single", model=base.model) as run_log:
            result, failed = self._generate(base)
            run_log.note(tokens=result.token_count, failed=failed)

        self.context.set_results([result])
        self.context.append_history(result)
        return [result]

    def generate(self, config: GenerationConfig) -> Result:
        """
        Make one provider call and build its Result.

        Args:
            config: Configuration for this call

        Returns:
            Result with trimmed output and metrics, or a placeholder Result
            with zero metrics if the provider call failed
        """
        result, _ = self._generate(config)
        return result

    def _generate(self, config: GenerationConfig) -> Tuple[Result, bool]:
        prompt = compose_prompt(config)
        params = build_params(config)

        started = self.clock()
        try:
            raw_output = self.provider.generate(prompt, params)
        except ProviderError as e:
            logger.warning(f"Generation failed ({e.provider or self.provider.provider_name}): {e}")
            return Result(config=config, output=GENERATION_ERROR_OUTPUT), True
        elapsed_ms = max(0, int((self.clock() - started) * 1000))

        output = trim_output(raw_output, config.stop_sequences)
        result = Result(
            config=config,
            output=output,
            token_count=count_tokens(output),
            generation_time_ms=elapsed_ms,
        )
        log_json(logger, "Generated result", result.to_dict())
        return result, False
