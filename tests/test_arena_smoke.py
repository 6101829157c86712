"""Smoke tests for batch execution of independent Skyjo games."""

from __future__ import annotations

from skyjo.skyjo_agents import ColumnHunterAgent
from skyjo.skyjo_loop import GameLoop, LoopConfig
from tabletop.agents.random_agent import RandomAgent
from tabletop.arena import Arena


def _random_match(seed: int) -> GameLoop:
    agents = [RandomAgent(f"random-{seat}") for seat in range(4)]
    return GameLoop(agents, seed=seed, game_id=f"series-{seed}")


def test_three_seeded_games_complete_without_crashes() -> None:
    summary = Arena().run_series(match_factory=_random_match, seeds=[11, 12, 13])

    assert len(summary.results) == 3
    assert [result.seed for result in summary.results] == [11, 12, 13]
    assert sum(summary.wins.values()) + summary.draws == 3
    assert set(summary.mean_scores) == {"random-0", "random-1", "random-2", "random-3"}
    for result in summary.results:
        assert result.game_name == "skyjo"
        assert result.termination_reason is not None


def test_threaded_series_matches_sequential_series() -> None:
    seeds = list(range(20, 28))
    sequential = Arena().run_series(match_factory=_random_match, seeds=seeds)
    threaded = Arena(max_workers=4).run_series(match_factory=_random_match, seeds=seeds)

    assert [result.scores for result in threaded.results] == [result.scores for result in sequential.results]
    assert threaded.wins == sequential.wins


def test_mixed_lineup_summary() -> None:
    def factory(seed: int) -> GameLoop:
        agents = [ColumnHunterAgent("hunter")] + [RandomAgent(f"random-{seat}") for seat in range(1, 4)]
        return GameLoop(agents, seed=seed, config=LoopConfig(max_turns=400))

    arena = Arena()
    summary = arena.run_series(match_factory=factory, seeds=[1, 2], max_workers=2)

    assert len(summary.results) == 2
    assert "hunter" in summary.mean_scores
    assert arena.last_events
    payload = summary.to_dict()
    assert len(payload["results"]) == 2


def test_run_match_records_events() -> None:
    arena = Arena()
    result = arena.run_match(_random_match(30))

    assert result.seed == 30
    assert arena.last_events[0].event_type.value == "match_start"
