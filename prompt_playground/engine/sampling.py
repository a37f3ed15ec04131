"""
Randomized parameter variants for batched runs.
"""

import random
from dataclasses import replace
from typing import Optional

from ..core.config import GenerationConfig


TEMPERATURE_RANGE = (0.0, 2.0)
# Wider than the nominal penalty range of the configuration (<= 1.5)
PENALTY_RANGE = (-2.0, 2.0)


class ParameterSampler:
    """
    Draws per-sample variants of a base configuration.

    Temperature and both penalties are drawn independently and uniformly,
    then rounded to one decimal. Pass a seed or a ``random.Random`` to make
    the draws reproducible.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def _draw(self, bounds) -> float:
        low, high = bounds
        return round(self.rng.uniform(low, high), 1)

    def variant(self, base: GenerationConfig) -> GenerationConfig:
        """
        Derive a variant configuration.

        Args:
            base: Configuration to perturb; it is not modified

        Returns:
            Copy of ``base`` with new temperature and penalties
        """
        return replace(
            base,
            temperature=self._draw(TEMPERATURE_RANGE),
            presence_penalty=self._draw(PENALTY_RANGE),
            frequency_penalty=self._draw(PENALTY_RANGE),
        )
