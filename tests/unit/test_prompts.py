"""Unit tests for prompt building and parameter sampling."""

import random

import pytest
from prompt_playground.core.config import GenerationConfig
from prompt_playground.engine.prompts import (
    SYNTHESIS_INSTRUCTION,
    build_comparison_prompt,
    build_params,
    compose_prompt,
    substitute_product,
)
from prompt_playground.engine.sampling import (
    PENALTY_RANGE,
    TEMPERATURE_RANGE,
    ParameterSampler,
)


class TestPromptComposition:
    """Tests for prompt composition."""

    def test_substitutes_product(self):
        assert substitute_product("About {product_name}.", "Tesla Model S") == "About Tesla Model S."

    def test_only_first_placeholder_is_substituted(self):
        result = substitute_product("{product_name} vs {product_name}", "iPhone 15 Pro")
        assert result == "iPhone 15 Pro vs {product_name}"

    def test_template_without_placeholder(self):
        assert substitute_product("No placeholder", "X") == "No placeholder"

    def test_compose_joins_with_blank_line(self):
        config = GenerationConfig(
            system_prompt="You are a copywriter.",
            user_prompt="Describe {product_name}.",
            product_name="Nike Air Jordan",
        )
        assert compose_prompt(config) == "You are a copywriter.\n\nDescribe Nike Air Jordan."

    def test_build_params(self):
        config = GenerationConfig(
            model="gemini-1.5-pro",
            temperature=1.4,
            max_tokens=99,
            presence_penalty=1.0,
            stop_sequences=["END"],
        )
        params = build_params(config)
        assert params.to_dict() == {
            "model": "gemini-1.5-pro",
            "temperature": 1.4,
            "maxOutputTokens": 99,
            "stopSequences": ["END"],
        }

    def test_build_params_passes_out_of_range_values(self):
        params = build_params(GenerationConfig(temperature=7.5, max_tokens=0))
        assert params.temperature == 7.5
        assert params.max_output_tokens == 0


class TestComparisonPrompt:
    """Tests for the comparison meta-prompt."""

    def test_labels_are_one_based_and_ordered(self):
        prompt = build_comparison_prompt(["first", "second", "third"])
        assert prompt.index("Response 1:\nfirst") < prompt.index("Response 2:\nsecond")
        assert prompt.index("Response 2:\nsecond") < prompt.index("Response 3:\nthird")
        assert "Response 0:" not in prompt

    def test_instruction_comes_last(self):
        prompt = build_comparison_prompt(["a", "b"])
        assert prompt.endswith(SYNTHESIS_INSTRUCTION)

    def test_exact_layout(self):
        prompt = build_comparison_prompt(["a", "b"])
        assert prompt == f"Response 1:\na\n\nResponse 2:\nb\n\n{SYNTHESIS_INSTRUCTION}"


class TestParameterSampler:
    """Tests for batched-run parameter sampling."""

    @pytest.fixture
    def base(self):
        return GenerationConfig(product_name="Dyson V15 Detect", max_tokens=321)

    def test_values_within_ranges(self, base):
        sampler = ParameterSampler(seed=1)
        for _ in range(200):
            variant = sampler.variant(base)
            assert TEMPERATURE_RANGE[0] <= variant.temperature <= TEMPERATURE_RANGE[1]
            assert PENALTY_RANGE[0] <= variant.presence_penalty <= PENALTY_RANGE[1]
            assert PENALTY_RANGE[0] <= variant.frequency_penalty <= PENALTY_RANGE[1]

    def test_values_have_one_decimal(self, base):
        sampler = ParameterSampler(seed=2)
        for _ in range(50):
            variant = sampler.variant(base)
            for value in (variant.temperature, variant.presence_penalty, variant.frequency_penalty):
                assert round(value, 1) == value

    def test_other_fields_are_inherited(self, base):
        variant = ParameterSampler(seed=3).variant(base)
        assert variant.product_name == "Dyson V15 Detect"
        assert variant.max_tokens == 321
        assert variant.user_prompt == base.user_prompt

    def test_base_is_not_modified(self, base):
        ParameterSampler(seed=4).variant(base)
        assert base.temperature == 0.7

    def test_seed_is_reproducible(self, base):
        first, second = ParameterSampler(seed=42), ParameterSampler(seed=42)
        assert [first.variant(base) for _ in range(5)] == [second.variant(base) for _ in range(5)]

    def test_accepts_rng(self, base):
        a = ParameterSampler(rng=random.Random(9))
        b = ParameterSampler(rng=random.Random(9))
        assert [a.variant(base) for _ in range(5)] == [b.variant(base) for _ in range(5)]
