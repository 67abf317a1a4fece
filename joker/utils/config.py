"""Runtime configuration for the equity calculator.

Defaults come from :mod:`joker.utils.settings` (``JOKER_*`` environment
variables, then ``config.yaml``).  Every field uses ``default_factory``
so values are read at **instantiation** time, not at import time; this
keeps ``monkeypatch.setenv`` effective in tests.  Override individual
fields when constructing from code.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass, field

from joker.utils.settings import settings


def _default_workers() -> int:
    return max(1, settings.get_int("equity.workers", os.cpu_count() or 1))


def _default_seed() -> int | None:
    raw = settings.get_str("equity.seed", "").strip()
    if not raw or raw.lower() in {"none", "null"}:
        return None
    return int(raw)


@dataclass(slots=True)
class EquityRuntimeConfig:
    """Equity calculator configuration.

    Attributes:
        simulations:        Default requested trial count.
        evaluator:          Default ranker name (``smart`` or ``default``).
        game_type:          Default variant (``texas``, ``short``, ``omaha``).
        parallel:           Allow the threaded path at all.
        workers:            Worker threads for the parallel path.
        parallel_threshold: Below this many trials the sequential path runs.
        seed:               Fixed seed for reproducible runs; ``None`` draws
                            fresh entropy on every call.
    """

    simulations: int = field(default_factory=lambda: settings.get_int("equity.simulations", 10_000))
    evaluator: str = field(default_factory=lambda: settings.get_str("equity.evaluator", "smart"))
    game_type: str = field(default_factory=lambda: settings.get_str("equity.game_type", "texas"))
    parallel: bool = field(default_factory=lambda: settings.get_bool("equity.parallel", True))
    workers: int = field(default_factory=_default_workers)
    parallel_threshold: int = field(default_factory=lambda: settings.get_int("equity.parallel_threshold", 2_000))
    seed: int | None = field(default_factory=_default_seed)

    def make_rng(self) -> random.Random:
        """Random source for one calculation: seeded when :attr:`seed` is set."""
        return random.Random(self.seed) if self.seed is not None else random.Random()

    def use_parallel(self, trials: int, workers: int | None = None) -> bool:
        """Whether a job of *trials* runouts should take the threaded path."""
        workers = self.workers if workers is None else workers
        return self.parallel and workers > 1 and trials >= self.parallel_threshold
