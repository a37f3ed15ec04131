"""
Result records and result-set statistics.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from .config import GenerationConfig
from ..utils.id_generator import generate_result_id, is_summary_id


@dataclass(frozen=True)
class Result:
    """
    Outcome of one generation call.

    Built once by an engine right after the provider call resolves and
    never mutated afterwards.
    """
    config: GenerationConfig
    output: str
    token_count: int = 0
    generation_time_ms: int = 0
    id: str = field(default_factory=generate_result_id)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_summary(self) -> bool:
        """True for comparison summaries."""
        return is_summary_id(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to JSON-serializable dict."""
        return {
            "id": self.id,
            "config": self.config.to_dict(),
            "output": self.output,
            "token_count": self.token_count,
            "generation_time_ms": self.generation_time_ms,
            "timestamp": self.timestamp.isoformat(),
        }


HIGH_TEMPERATURE = 0.8
LOW_TEMPERATURE = 0.5


@dataclass
class ResultStats:
    """Aggregate metrics over a result set."""
    count: int
    average_token_count: int
    average_generation_time_ms: int
    token_count_range: int
    high_temperature_count: int
    low_temperature_count: int

    def insights(self) -> List[str]:
        """Human-readable observations about the temperature spread."""
        high = self.high_temperature_count
        low = self.low_temperature_count
        return [
            f"Higher temperature settings ({high} variations) produced "
            f"{'more creative and varied' if high > 0 else 'no'} outputs",
            f"Lower temperature settings ({low} variations) generated "
            f"{'more consistent and focused' if low > 0 else 'no'} content",
            "Presence penalty variations affected topic exploration diversity",
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "average_token_count": self.average_token_count,
            "average_generation_time_ms": self.average_generation_time_ms,
            "token_count_range": self.token_count_range,
            "high_temperature_count": self.high_temperature_count,
            "low_temperature_count": self.low_temperature_count,
            "insights": self.insights(),
        }


def summarize_results(results: Sequence[Result]) -> Optional[ResultStats]:
    """
    Compute aggregate metrics for a result set.

    Args:
        results: Results to summarize

    Returns:
        ResultStats, or None when there are no results
    """
    if not results:
        return None

    token_counts = [r.token_count for r in results]
    times = [r.generation_time_ms for r in results]

    return ResultStats(
        count=len(results),
        average_token_count=round(sum(token_counts) / len(results)),
        average_generation_time_ms=round(sum(times) / len(results)),
        token_count_range=max(token_counts) - min(token_counts),
        high_temperature_count=sum(1 for r in results if r.config.temperature > HIGH_TEMPERATURE),
        low_temperature_count=sum(1 for r in results if r.config.temperature < LOW_TEMPERATURE),
    )
