"""
Playground Context - State shared by the playground engines.

The PlaygroundContext holds everything the engines and their collaborators
read and write: the configuration store, the run mode, the currently
displayed result set, the single-mode history, the busy flag and the
single-level result snapshot.

All state is single-writer by convention. The busy flag is advisory and
does not stop a second run() or compare() from starting; callers must
serialize those themselves.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .config import (
    AppConfig,
    ConfigStore,
    DEFAULT_SAMPLES,
    MAX_SAMPLES,
    MIN_SAMPLES,
)
from .models import Result, ResultStats, summarize_results
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RunMode(Enum):
    """How run() produces results."""
    SINGLE = "single"
    BATCHED = "batched"


@dataclass
class PlaygroundContext:
    """
    Maintains playground state across runs and comparisons.

    Tracks:
    - The live generation configuration (via ConfigStore)
    - Run mode and batched sample count
    - The current result set (wholesale-replaced)
    - The append-only single-mode history
    - The busy flag
    - One saved copy of the result set
    """

    config_store: ConfigStore = field(default_factory=ConfigStore)
    batched: bool = False
    sample_count: int = DEFAULT_SAMPLES

    results: List[Result] = field(default_factory=list)
    history: List[Result] = field(default_factory=list)
    is_loading: bool = False

    _snapshot: Optional[List[Result]] = None

    # Called with the new result list whenever the result set changes
    on_results_changed: Optional[Callable[[List[Result]], None]] = None

    @classmethod
    def from_config(cls, config: AppConfig) -> 'PlaygroundContext':
        """Build a context seeded from application configuration."""
        return cls(
            config_store=ConfigStore(config.generation),
            batched=config.playground.batched,
            sample_count=config.playground.sample_count,
        )

    @property
    def mode(self) -> RunMode:
        return RunMode.BATCHED if self.batched else RunMode.SINGLE

    def resolve_sample_count(self) -> int:
        """
        Get the batched sample count, clamped to the supported range.

        A missing or non-numeric count falls back to DEFAULT_SAMPLES.

        Returns:
            Sample count in [MIN_SAMPLES, MAX_SAMPLES]
        """
        count = self.sample_count
        try:
            number = int(count)
        except (TypeError, ValueError):
            logger.warning(f"Invalid sample count {count!r}, using {DEFAULT_SAMPLES}")
            return DEFAULT_SAMPLES
        clamped = max(MIN_SAMPLES, min(MAX_SAMPLES, number))
        if clamped != number:
            logger.warning(
                f"Sample count {count} outside [{MIN_SAMPLES}, {MAX_SAMPLES}], using {clamped}"
            )
        return clamped

    # --- Result set ---

    def set_results(self, results: List[Result]) -> None:
        """Replace the current result set."""
        self.results = list(results)
        if self.on_results_changed:
            self.on_results_changed(list(self.results))

    def clear_results(self) -> None:
        self.set_results([])

    def append_history(self, result: Result) -> None:
        """Append a single-mode result to the permanent history."""
        self.history.append(result)

    # --- Snapshot/restore ---

    def snapshot(self) -> List[Result]:
        """
        Save a copy of the current result set.

        Only one snapshot is kept; taking another overwrites it.

        Returns:
            The saved copy
        """
        self._snapshot = list(self.results)
        return list(self._snapshot)

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    def restore(self, snapshot: Optional[List[Result]] = None) -> bool:
        """
        Replace the current result set with a saved one.

        Args:
            snapshot: Result list to restore (default: the saved snapshot)

        Returns:
            True if a result set was restored
        """
        if snapshot is None:
            snapshot = self._snapshot
        if snapshot is None:
            logger.debug("Nothing to restore")
            return False

        self.set_results(snapshot)
        return True

    # --- Statistics ---

    def result_stats(self) -> Optional[ResultStats]:
        """Aggregate metrics for the current result set."""
        return summarize_results(self.results)

    # --- Reset ---

    def reset(self) -> None:
        """Reset results, history and snapshot. Configuration is kept."""
        self.results = []
        self.history = []
        self._snapshot = None
        self.is_loading = False
