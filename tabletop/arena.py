"""Batch execution of independent seeded matches."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from statistics import fmean
from typing import Any, Callable, Iterable, Protocol, Sequence

from .events import MatchEvent
from .result import MatchResult, MatchRun

logger = logging.getLogger(__name__)


class Match(Protocol):
    """A fully configured game that can be played to completion once."""

    def run_match(self) -> MatchRun: ...


MatchFactory = Callable[[int], Match]


@dataclass(frozen=True)
class ArenaSummary:
    """Per-agent wins, win rates, and mean final scores over a series."""

    results: list[MatchResult]
    wins: dict[str, int]
    win_rates: dict[str, float]
    draws: int
    mean_scores: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_results(cls, results: Iterable[MatchResult]) -> ArenaSummary:
        results = list(results)
        wins: Counter[str] = Counter()
        seat_scores: dict[str, list[int]] = {}
        for result in results:
            for agent_id, scores in result.agent_scores().items():
                seat_scores.setdefault(agent_id, []).extend(scores)
            if result.winner is not None:
                wins[result.agents[result.winner]] += 1
        games = max(len(results), 1)
        return cls(
            results=results,
            wins=dict(wins),
            win_rates={agent_id: count / games for agent_id, count in wins.items()},
            draws=sum(1 for result in results if result.winner is None),
            mean_scores={agent_id: fmean(scores) for agent_id, scores in seat_scores.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [result.to_dict() for result in self.results],
            "wins": dict(self.wins),
            "win_rates": dict(self.win_rates),
            "draws": self.draws,
            "mean_scores": dict(self.mean_scores),
        }


class Arena:
    """Plays matches one at a time or fans a seeded series out over threads.

    Matches in a series share nothing: each is built fresh by the factory, so
    the threaded and sequential paths give the same results for the same seeds.
    """

    def __init__(self, max_workers: int | None = None):
        self.max_workers = max_workers
        self.last_events: list[MatchEvent] = []

    def run_match(self, match: Match) -> MatchResult:
        run = match.run_match()
        self.last_events = run.events
        return run.result

    def run_series(
        self,
        match_factory: MatchFactory,
        seeds: Sequence[int],
        max_workers: int | None = None,
    ) -> ArenaSummary:
        """Play one match per seed and summarize; results keep the order of `seeds`."""
        workers = self.max_workers if max_workers is None else max_workers
        matches = [match_factory(seed) for seed in seeds]
        if workers and workers > 1 and len(matches) > 1:
            logger.debug("Running %d matches on %d threads", len(matches), workers)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                runs = list(pool.map(lambda match: match.run_match(), matches))
        else:
            runs = [match.run_match() for match in matches]

        if runs:
            self.last_events = runs[-1].events
        summary = ArenaSummary.from_results(run.result for run in runs)
        logger.info(
            "Series of %d matches done: wins=%s draws=%d",
            len(summary.results),
            summary.wins,
            summary.draws,
        )
        return summary
