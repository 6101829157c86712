"""Turn loop driving one Skyjo game from the deal to the final scores."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence
from uuid import uuid4

from tabletop.errors import AgentExecutionError, IllegalMoveError, MatchConfigurationError
from tabletop.events import EventType, MatchEvent, write_event_log
from tabletop.player import Agent
from tabletop.result import MatchResult, MatchRun, TerminationReason

from .skyjo_moves import GameMove
from .skyjo_state import PLAYER_COUNT, GameState

logger = logging.getLogger(__name__)

GAME_NAME = "skyjo"


@dataclass(frozen=True)
class LoopConfig:
    """Runtime configuration for a single game."""

    max_turns: int | None = None
    discard_middle_on_reveal_clear: bool = True
    event_log_dir: str | Path | None = None


class GameLoop:
    """Runs one game: deals, cycles seats 0..3, and scores the final state.

    The loop owns the only mutable bookkeeping (current state, seat, event
    list); every game state it holds is an immutable value.
    """

    def __init__(
        self,
        players: Sequence[Agent],
        seed: int | None = None,
        config: LoopConfig | None = None,
        *,
        game_id: str | None = None,
    ):
        if len(players) != PLAYER_COUNT:
            raise MatchConfigurationError(f"Expected {PLAYER_COUNT} agents, received {len(players)}.")
        self.players = tuple(players)
        self.config = config or LoopConfig()
        self.seed = seed if seed is not None else random.SystemRandom().randrange(2**63)
        self.game_id = game_id or f"{GAME_NAME}-{self.seed}-{uuid4().hex[:8]}"
        self.current_state: GameState | None = None
        self.current_player = 0
        self.turn = 0
        self.events: list[MatchEvent] = []

    def initialize(self) -> GameState:
        """Deal a fresh game and reset every agent."""
        self.current_state = GameState.deal(
            self.seed,
            PLAYER_COUNT,
            discard_middle_on_reveal_clear=self.config.discard_middle_on_reveal_clear,
        )
        self.current_player = 0
        self.turn = 0
        self.events = []
        self.events.append(
            self._event(
                EventType.MATCH_START,
                {
                    "seed": self.seed,
                    "agents": [agent.agent_id for agent in self.players],
                    "initial_state_digest": self.current_state.state_digest(),
                },
            )
        )
        for player_id, agent in enumerate(self.players):
            agent.reset(self.game_id, player_id, self.seed)
        return self.current_state

    @property
    def is_finished(self) -> bool:
        """True once control has come back around to the player who ended."""
        return self.current_state is not None and self.current_state.has_ended(self.current_player)

    def step(self) -> GameMove | None:
        """Play the current seat's turn and rotate to the next seat.

        Returns the move played, or `None` when the seat is skipped: it belongs
        to the player who ended the round, or it has no legal move left.
        """
        if self.current_state is None:
            raise MatchConfigurationError("initialize() must be called before step().")
        player_id = self.current_player
        try:
            return self._play_turn(self.current_state, player_id)
        finally:
            self.current_player = (player_id + 1) % len(self.players)

    def run(self) -> dict[int, int]:
        """Play a full game and return the final per-player scores."""
        return self.run_match().result.scores

    def run_match(self) -> MatchRun:
        """Play a full game and return the result with its event history."""
        self.initialize()
        reason = TerminationReason.END_DECLARED
        while not self.is_finished:
            if self.config.max_turns is not None and self.turn >= self.config.max_turns:
                reason = TerminationReason.MAX_TURNS
                break
            self.step()
        return self._finish(reason)

    def _play_turn(self, state: GameState, player_id: int) -> GameMove | None:
        if state.has_ended(player_id):
            logger.debug("%s: skipping player %d, who ended the round", self.game_id, player_id)
            self.events.append(self._event(EventType.TURN_SKIPPED, {"player_id": player_id, "reason": "ended_round"}))
            return None
        if not state.legal_moves(player_id):
            # every column cleared after someone else ended
            logger.debug("%s: player %d has no legal moves", self.game_id, player_id)
            self.events.append(self._event(EventType.TURN_SKIPPED, {"player_id": player_id, "reason": "no_legal_moves"}))
            return None

        agent = self.players[player_id]
        observation = state.redacted()
        try:
            move = agent.decide(observation, player_id)
        except Exception as exc:
            error = AgentExecutionError(player_id, f"Agent decide() failed: {exc}")
            self.events.append(
                self._event(
                    EventType.AGENT_ERROR,
                    {"player_id": player_id, "error": error.to_dict(), "agent": agent.debug_context()},
                )
            )
            raise error from exc

        try:
            self.current_state = state.applying(move, player_id)
        except IllegalMoveError as exc:
            self.events.append(
                self._event(
                    EventType.ILLEGAL_MOVE,
                    {"player_id": player_id, "error": exc.to_dict(), "agent": agent.debug_context()},
                )
            )
            raise

        self.turn += 1
        self.events.append(
            self._event(
                EventType.TURN,
                {
                    "player_id": player_id,
                    "observation_digest": observation.observation_digest(),
                    "move": move.to_dict(),
                    "state_digest": self.current_state.state_digest(),
                },
            )
        )
        return move

    def _finish(self, reason: TerminationReason) -> MatchRun:
        state = self.current_state
        assert state is not None
        scores = state.scores()
        log_path = self._resolve_log_path()
        result = MatchResult(
            game_id=self.game_id,
            game_name=GAME_NAME,
            seed=self.seed,
            winner=_lowest_scorer(scores),
            termination_reason=reason,
            scores=scores,
            raw_scores=state.raw_scores(),
            agents=tuple(agent.agent_id for agent in self.players),
            turns=self.turn,
            details=f"Round ended by player {state.ends_at}." if state.ends_at is not None else None,
            final_state_digest=state.state_digest(),
            event_count=len(self.events) + 1,
            log_path=str(log_path) if log_path is not None else None,
        )
        self.events.append(self._event(EventType.TERMINAL, {"result": result.to_dict()}))
        if log_path is not None:
            write_event_log(log_path, self.events)
        logger.info("%s finished after %d turns (%s): %s", self.game_id, self.turn, reason.value, scores)

        for agent in self.players:
            agent.on_game_end(result, self.events)
        return MatchRun(result=result, events=list(self.events))

    def _resolve_log_path(self) -> Path | None:
        if self.config.event_log_dir is None:
            return None
        return Path(self.config.event_log_dir) / f"{self.game_id}.jsonl"

    def _event(self, event_type: EventType, payload: dict[str, Any]) -> MatchEvent:
        return MatchEvent(
            event_type=event_type,
            game_id=self.game_id,
            sequence=len(self.events),
            turn=self.turn,
            payload=payload,
        )


def _lowest_scorer(scores: dict[int, int]) -> int | None:
    best = min(scores.values())
    leaders = [player_id for player_id, score in scores.items() if score == best]
    return leaders[0] if len(leaders) == 1 else None
