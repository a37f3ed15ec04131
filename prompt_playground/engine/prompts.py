"""
Prompt building for generation and comparison calls.
"""

from typing import Sequence

from ..core.config import GenerationConfig
from ..llm.base import GenerationParams


PRODUCT_PLACEHOLDER = "{product_name}"

SYNTHESIS_INSTRUCTION = (
    "Compare the responses above and write the single best, most comprehensive "
    "response, combining their strongest points."
)


def substitute_product(template: str, product_name: str) -> str:
    """
    Fill the product placeholder in a user prompt template.

    Only the first ``{product_name}`` is replaced; later ones stay literal.
    """
    return template.replace(PRODUCT_PLACEHOLDER, product_name, 1)


def compose_prompt(config: GenerationConfig) -> str:
    """
    Build the full prompt sent to the provider.

    The system prompt and the substituted user prompt are joined by a
    blank line.
    """
    user_prompt = substitute_product(config.user_prompt, config.product_name)
    return f"{config.system_prompt}\n\n{user_prompt}"


def build_params(config: GenerationConfig) -> GenerationParams:
    """Map a generation config onto provider request parameters."""
    return GenerationParams(
        model=config.model,
        temperature=config.temperature,
        max_output_tokens=config.max_tokens,
        stop_sequences=tuple(config.stop_sequences),
    )


def build_comparison_prompt(outputs: Sequence[str]) -> str:
    """
    Build the meta-prompt that asks for a synthesis of several outputs.

    Example output for two responses::

        Response 1:
        <first output>

        Response 2:
        <second output>

        Compare the responses above and write ...

    Args:
        outputs: Candidate outputs, in display order

    Returns:
        Meta-prompt text
    """
    sections = [f"Response {i}:\n{output}" for i, output in enumerate(outputs, start=1)]
    sections.append(SYNTHESIS_INSTRUCTION)
    return "\n\n".join(sections)
