"""Unit tests for the comparison engine."""

import pytest
from prompt_playground.core.config import GenerationConfig
from prompt_playground.core.context import PlaygroundContext
from prompt_playground.core.models import Result
from prompt_playground.engine.comparison import (
    COMPARISON_ERROR_OUTPUT,
    SUMMARY_MAX_TOKENS,
    SUMMARY_TEMPERATURE,
    ComparisonEngine,
)
from prompt_playground.engine.prompts import SYNTHESIS_INSTRUCTION
from prompt_playground.llm import AuthenticationError, MockProvider
from prompt_playground.utils.id_generator import SUMMARY_RESULT_ID


def make_result(output: str) -> Result:
    return Result(config=GenerationConfig(), output=output, token_count=1, generation_time_ms=10)


@pytest.fixture
def provider():
    return MockProvider(default_response="The best combined description.")


class TestCandidates:
    """Tests for candidate selection."""

    def test_single_mode_with_one_history_entry_is_noop(self, provider):
        context = PlaygroundContext()
        only = make_result("only one")
        context.append_history(only)
        context.set_results([only])

        assert ComparisonEngine(context, provider).compare() is None
        assert provider.call_count == 0
        assert context.results == [only]
        assert context.has_snapshot is False
        assert context.is_loading is False

    def test_batched_mode_with_one_result_is_noop(self, provider):
        context = PlaygroundContext(batched=True)
        context.set_results([make_result("a")])

        assert ComparisonEngine(context, provider).compare() is None
        assert provider.call_count == 0

    def test_batched_mode_uses_results(self):
        context = PlaygroundContext(batched=True)
        context.set_results([make_result("r1"), make_result("r2")])
        context.append_history(make_result("h1"))

        assert ComparisonEngine(context, MockProvider()).candidate_outputs() == ["r1", "r2"]

    def test_single_mode_uses_history(self):
        context = PlaygroundContext()
        context.set_results([make_result("h2")])
        context.append_history(make_result("h1"))
        context.append_history(make_result("h2"))

        assert ComparisonEngine(context, MockProvider()).candidate_outputs() == ["h1", "h2"]


class TestBatchedComparison:
    """Tests for synthesizing a summary over a batched result set."""

    @pytest.fixture
    def context(self):
        context = PlaygroundContext(batched=True)
        context.config_store.update(
            system_prompt="You are a copywriter.",
            stop_sequences=("###",),
            product_name="Tesla Model S",
        )
        context.set_results([make_result("alpha"), make_result("beta"), make_result("gamma")])
        return context

    def test_replaces_results_with_summary(self, context, provider):
        summary = ComparisonEngine(context, provider).compare()

        assert context.results == [summary]
        assert summary.id == SUMMARY_RESULT_ID
        assert summary.is_summary
        assert summary.output == "The best combined description."
        assert summary.generation_time_ms == 0
        assert summary.token_count == 5
        assert provider.call_count == 1

    def test_summary_config(self, context, provider):
        summary = ComparisonEngine(context, provider).compare()
        config = summary.config

        assert config.temperature == SUMMARY_TEMPERATURE == 0.5
        assert config.max_tokens == SUMMARY_MAX_TOKENS == 200
        assert config.system_prompt == ""
        assert config.stop_sequences == ("###",)
        assert config.product_name == "Tesla Model S"

    def test_meta_prompt_lists_outputs(self, context, provider):
        ComparisonEngine(context, provider).compare()

        prompt = provider.last_call["prompt"]
        assert "Response 1:\nalpha" in prompt
        assert "Response 2:\nbeta" in prompt
        assert "Response 3:\ngamma" in prompt
        assert prompt.endswith(SYNTHESIS_INSTRUCTION)
        assert "You are a copywriter." not in prompt

        params = provider.last_call["params"]
        assert params.temperature == 0.5
        assert params.max_output_tokens == 200
        assert params.stop_sequences == ("###",)

    def test_inherited_stop_sequence_trims_summary(self, context, provider):
        provider.set_responses(["Short summary ### trailing notes"])
        summary = ComparisonEngine(context, provider).compare()
        assert summary.output == "Short summary "

    def test_history_untouched(self, context, provider):
        ComparisonEngine(context, provider).compare()
        assert context.history == []

    def test_snapshot_allows_restore(self, context, provider):
        before = list(context.results)
        ComparisonEngine(context, provider).compare()

        assert context.restore() is True
        assert context.results == before

    def test_failure_produces_sentinel_summary(self, context, provider):
        provider.fail_always()
        summary = ComparisonEngine(context, provider).compare()

        assert summary.output == COMPARISON_ERROR_OUTPUT
        assert summary.id == SUMMARY_RESULT_ID
        assert summary.token_count == 0
        assert context.results == [summary]
        assert context.is_loading is False

    def test_missing_credential_propagates(self, context):
        provider = MockProvider(authenticated=False)
        with pytest.raises(AuthenticationError):
            ComparisonEngine(context, provider).compare()
        assert context.is_loading is False


class TestSingleModeComparison:
    """Tests for comparisons over the single-mode history."""

    def test_summarizes_history(self, provider):
        context = PlaygroundContext()
        for output in ["first take", "second take"]:
            result = make_result(output)
            context.append_history(result)
            context.set_results([result])

        summary = ComparisonEngine(context, provider).compare()

        assert "Response 1:\nfirst take" in provider.last_call["prompt"]
        assert "Response 2:\nsecond take" in provider.last_call["prompt"]
        assert context.results == [summary]
        assert len(context.history) == 2

    def test_repeated_comparisons_share_id(self, provider):
        context = PlaygroundContext()
        context.append_history(make_result("a"))
        context.append_history(make_result("b"))
        engine = ComparisonEngine(context, provider)

        assert engine.compare().id == engine.compare().id == SUMMARY_RESULT_ID
