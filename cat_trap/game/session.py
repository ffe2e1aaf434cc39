"""Turn-based game state machine.

A turn is: the player blocks a cell, the cat answers, the session checks for
a terminal state. The cat's relocation is split from its decision so that a
host can await an animation delay in between (``select_cell_async``). Every
pending move is stamped with the session generation; any reset bumps the
generation, and a move that completes against an older generation is
discarded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from random import Random

from cat_trap.config.constants import GAME_COMPLETE_ACHIEVEMENT
from cat_trap.config.types import GameConfig, LevelConfig
from cat_trap.domain.agent import MoveDecision, MoveReason, decide_move
from cat_trap.domain.grid import ORTHOGONAL_OFFSETS, CellState, Coordinate, Grid
from cat_trap.domain.levels import build_board, config_for, validate_level
from cat_trap.domain.reachability import is_trapped
from cat_trap.domain.statistics import Statistics
from cat_trap.errors import StatisticsStoreError
from cat_trap.interfaces import (
    AudioCue,
    AudioCueSink,
    BoardFrame,
    NullAudioSink,
    NullRenderSink,
    RenderSink,
    StatisticsStore,
)
from cat_trap.io.stores import InMemoryStatisticsStore

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[object]]


class GamePhase(str, Enum):
    AWAITING_PLAYER_MOVE = "awaiting_player_move"
    AGENT_MOVING = "agent_moving"
    FROZEN = "frozen"
    GAME_WON = "game_won"
    GAME_LOST = "game_lost"
    ALL_LEVELS_COMPLETE = "all_levels_complete"


class Outcome(str, Enum):
    WIN = "win"
    LOSS = "loss"


class SpecialEffect(str, Enum):
    """Bonus granted by activating a special cell."""

    REMOVE_RANDOM_BLOCK = "remove_random_block"
    FREEZE_AGENT = "freeze_agent"
    REFUND_MOVE = "refund_move"
    CLEAR_ADJACENT = "clear_adjacent"


SPECIAL_EFFECTS: tuple[SpecialEffect, ...] = tuple(SpecialEffect)
"""Effect slots drawn uniformly on activation; order fixes the rng mapping."""


class TurnStatus(str, Enum):
    """How the session handled one player action."""

    BLOCKED = "blocked"
    SPECIAL = "special"
    IGNORED = "ignored"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class TurnResult:
    """Summary of one player action and the cat's answer."""

    status: TurnStatus
    phase: GamePhase
    cell: Coordinate
    agent_from: Coordinate | None = None
    agent_to: Coordinate | None = None
    decision: MoveDecision | None = None
    effect: SpecialEffect | None = None
    cleared: tuple[Coordinate, ...] = ()
    outcome: Outcome | None = None

    @property
    def agent_moved(self) -> bool:
        return self.agent_from is not None and self.agent_to not in (None, self.agent_from)


@dataclass(frozen=True)
class PendingMove:
    """Agent move decided but not yet applied."""

    generation: int
    cell: Coordinate
    origin: Coordinate
    target: Coordinate
    decision: MoveDecision


class GameSession:
    """One player's game: board, counters, level progression and statistics.

    All mutation goes through the public methods; collaborators are injected
    and default to headless no-op implementations.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        level: int = 1,
        rng: Random | None = None,
        render_sink: RenderSink | None = None,
        audio_sink: AudioCueSink | None = None,
        statistics_store: StatisticsStore | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.current_level = validate_level(level, self.config.max_level)
        self._rng = rng if rng is not None else Random()
        self._render_sink = render_sink or NullRenderSink()
        self._audio_sink = audio_sink or NullAudioSink()
        self._store = (
            statistics_store if statistics_store is not None else InMemoryStatisticsStore()
        )
        self._sleep: Sleep = sleep or asyncio.sleep
        self.persistence_error: StatisticsStoreError | None = None
        self.statistics = self._load_statistics()
        self.generation = 0
        self._pending: PendingMove | None = None
        self.reset()

    # -- read-only views ----------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def agent_position(self) -> Coordinate:
        return self._agent

    @property
    def level_config(self) -> LevelConfig:
        return self._level_config

    @property
    def move_in_flight(self) -> bool:
        return self._pending is not None

    def frame(self, moving: Coordinate | None = None) -> BoardFrame:
        return BoardFrame(
            cells=self._grid.to_tags(moving=moving),
            agent_position=self._agent,
            level=self.current_level,
            move_count=self.move_count,
            phase=self.phase.value,
            generation=self.generation,
        )

    # -- lifecycle ----------------------------------------------------------

    def reset(self) -> None:
        """Discard the current game and deal a fresh board at the current level."""
        grid, agent = build_board(
            self.current_level,
            self._rng,
            grid_size=self.config.grid_size,
            special_cell_probability=self.config.special_cell_probability,
        )
        self._start(grid, agent)

    def start_from(self, grid: Grid, agent_position: Coordinate) -> None:
        """Begin a game on a prepared board at the current level.

        The board must hold exactly one agent cell, at ``agent_position``.
        """
        agents = grid.cells_in_state(CellState.AGENT)
        if agents != [agent_position]:
            raise ValueError(
                f"board must hold exactly one agent at {agent_position}, found {agents}"
            )
        self._start(grid, agent_position)

    def _start(self, grid: Grid, agent: Coordinate) -> None:
        self.generation += 1
        self._pending = None
        self._grid = grid
        self._agent = agent
        self._level_config = config_for(self.current_level)
        self.move_count = 0
        self.freeze_counter = 0
        self.is_over = False
        self.last_outcome: Outcome | None = None
        self.phase = GamePhase.AWAITING_PLAYER_MOVE
        logger.debug("Level %d started (generation %d)", self.current_level, self.generation)
        self._render()

    def select_level(self, level: int) -> None:
        self.current_level = validate_level(level, self.config.max_level)
        self.reset()

    def next_level(self) -> bool:
        """Advance one level; return False once every level is complete."""
        if self.current_level < self.config.max_level:
            self.current_level += 1
            self.reset()
            return True
        self.generation += 1
        self._pending = None
        self.is_over = True
        self.phase = GamePhase.ALL_LEVELS_COMPLETE
        self._play(AudioCue.WIN)
        if self.statistics.unlock(GAME_COMPLETE_ACHIEVEMENT):
            self._save_statistics()
        logger.info("All %d levels complete", self.config.max_level)
        self._render()
        return False

    def continue_game(self) -> None:
        """Next level after a win, otherwise replay the current level."""
        if self.last_outcome is Outcome.WIN:
            self.next_level()
        else:
            self.reset()

    # -- turns --------------------------------------------------------------

    def select_cell(self, x: int, y: int) -> TurnResult:
        """Handle a player click and apply the cat's answer immediately."""
        begun = self._begin_turn(x, y)
        if isinstance(begun, TurnResult):
            return begun
        return self._complete_agent_move(begun)

    async def select_cell_async(self, x: int, y: int) -> TurnResult:
        """Like ``select_cell`` but waits out the level's move delay first.

        During the wait the board still shows the cat on its old cell. If the
        session is reset meanwhile, the move is dropped and the result status
        is ``SUPERSEDED``. If the wait itself is cancelled or fails, the move is
        dropped without touching the cat and input is accepted again.
        """
        begun = self._begin_turn(x, y)
        if isinstance(begun, TurnResult):
            return begun
        try:
            await self._sleep(self._level_config.agent_move_delay_s)
        except BaseException:
            if self._pending is begun:
                logger.debug("Agent move to %s abandoned during delay", begun.target)
                self._pending = None
                self.phase = GamePhase.AWAITING_PLAYER_MOVE
                self._render()
            raise
        return self._complete_agent_move(begun)

    def _ignored(self, cell: Coordinate) -> TurnResult:
        return TurnResult(status=TurnStatus.IGNORED, phase=self.phase, cell=cell)

    def _begin_turn(self, x: int, y: int) -> TurnResult | PendingMove:
        cell = (x, y)
        state = self._grid.cell_state(x, y)
        if self.is_over or self._pending is not None:
            return self._ignored(cell)
        if state is CellState.SPECIAL:
            return self._activate_special(cell)
        if state is not CellState.EMPTY:
            logger.debug("Ignoring selection of %s cell %s", state.tag, cell)
            return self._ignored(cell)

        self._grid.set_cell_state(x, y, CellState.BLOCKED)
        self.move_count += 1
        self._play(AudioCue.BLOCK)

        if self.freeze_counter > 0:
            return self._frozen_turn(cell)

        decision = decide_move(self._grid, self._agent)
        if decision.trapped:
            self._end_game(Outcome.WIN)
            return TurnResult(
                status=TurnStatus.BLOCKED,
                phase=self.phase,
                cell=cell,
                agent_from=self._agent,
                agent_to=self._agent,
                decision=decision,
                outcome=self.last_outcome,
            )
        if decision.target is None:
            self.phase = GamePhase.AWAITING_PLAYER_MOVE
            self._render()
            return TurnResult(
                status=TurnStatus.BLOCKED,
                phase=self.phase,
                cell=cell,
                agent_from=self._agent,
                agent_to=self._agent,
                decision=decision,
            )

        pending = PendingMove(
            generation=self.generation,
            cell=cell,
            origin=self._agent,
            target=decision.target,
            decision=decision,
        )
        self._pending = pending
        self.phase = GamePhase.AGENT_MOVING
        self._render(moving=self._agent)
        return pending

    def _frozen_turn(self, cell: Coordinate) -> TurnResult:
        self.freeze_counter -= 1
        if is_trapped(self._grid, self._agent):
            self._end_game(Outcome.WIN)
        else:
            self.phase = (
                GamePhase.FROZEN if self.freeze_counter > 0 else GamePhase.AWAITING_PLAYER_MOVE
            )
            self._render()
        logger.debug("Agent frozen; %d frozen turns left", self.freeze_counter)
        return TurnResult(
            status=TurnStatus.BLOCKED,
            phase=self.phase,
            cell=cell,
            agent_from=self._agent,
            agent_to=self._agent,
            outcome=self.last_outcome,
        )

    def _complete_agent_move(self, pending: PendingMove) -> TurnResult:
        if pending.generation != self.generation or self._pending is not pending:
            logger.debug(
                "Discarding stale agent move from generation %d (now %d)",
                pending.generation,
                self.generation,
            )
            return TurnResult(
                status=TurnStatus.SUPERSEDED,
                phase=self.phase,
                cell=pending.cell,
                decision=pending.decision,
            )
        self._pending = None
        target = pending.target
        self._grid.move_agent(pending.origin, target)
        self._agent = target
        self._play(AudioCue.MOVE)
        if pending.decision.reason is MoveReason.ESCAPE_ROUTE:
            logger.debug("Agent fell back to escape route via %s", target)

        if self._grid.is_boundary(*target):
            self._end_game(Outcome.LOSS)
        else:
            self.phase = GamePhase.AWAITING_PLAYER_MOVE
            self._render()
        return TurnResult(
            status=TurnStatus.BLOCKED,
            phase=self.phase,
            cell=pending.cell,
            agent_from=pending.origin,
            agent_to=target,
            decision=pending.decision,
            outcome=self.last_outcome,
        )

    # -- special cells ------------------------------------------------------

    def _activate_special(self, cell: Coordinate) -> TurnResult:
        self._grid.set_cell_state(*cell, CellState.EMPTY)
        self._play(AudioCue.SPECIAL)
        effect = self._rng.choice(SPECIAL_EFFECTS)
        cleared: list[Coordinate] = []

        if effect is SpecialEffect.REMOVE_RANDOM_BLOCK:
            blocked = self._grid.cells_in_state(CellState.BLOCKED)
            if blocked:
                target = self._rng.choice(blocked)
                self._grid.set_cell_state(*target, CellState.EMPTY)
                cleared.append(target)
        elif effect is SpecialEffect.FREEZE_AGENT:
            self.freeze_counter = self.config.freeze_turns
            self.phase = GamePhase.FROZEN
        elif effect is SpecialEffect.REFUND_MOVE:
            self.move_count = max(0, self.move_count - 1)
        elif effect is SpecialEffect.CLEAR_ADJACENT:
            x, y = cell
            for dx, dy in ORTHOGONAL_OFFSETS:
                nx_, ny_ = x + dx, y + dy
                if self._grid.is_inside(nx_, ny_) and (
                    self._grid.cell_state(nx_, ny_) is CellState.BLOCKED
                ):
                    self._grid.set_cell_state(nx_, ny_, CellState.EMPTY)
                    cleared.append((nx_, ny_))

        logger.debug("Special cell %s activated: %s", cell, effect.value)
        self._render()
        return TurnResult(
            status=TurnStatus.SPECIAL,
            phase=self.phase,
            cell=cell,
            effect=effect,
            cleared=tuple(cleared),
        )

    # -- endings and collaborators ------------------------------------------

    def _end_game(self, outcome: Outcome) -> None:
        self.is_over = True
        self.last_outcome = outcome
        self._pending = None
        if outcome is Outcome.WIN:
            self.phase = GamePhase.GAME_WON
            self.statistics.record_win(self.move_count, self.current_level)
            self._play(AudioCue.WIN)
        else:
            self.phase = GamePhase.GAME_LOST
            self.statistics.record_loss()
            self._play(AudioCue.LOSE)
        logger.info(
            "Level %d %s after %d moves", self.current_level, outcome.value, self.move_count
        )
        self._save_statistics()
        self._render()

    def _render(self, moving: Coordinate | None = None) -> None:
        self._render_sink.render(self.frame(moving=moving))

    def _play(self, cue: AudioCue) -> None:
        try:
            self._audio_sink.play(cue)
        except Exception:
            logger.warning("Audio sink failed to play %s", cue.value, exc_info=True)

    def _load_statistics(self) -> Statistics:
        try:
            return self._store.load()
        except StatisticsStoreError as exc:
            logger.warning("Using default statistics: %s", exc)
            self.persistence_error = exc
            return Statistics()

    def _save_statistics(self) -> None:
        try:
            self._store.save(self.statistics)
        except StatisticsStoreError as exc:
            logger.warning("Statistics not saved: %s", exc)
            self.persistence_error = exc
        else:
            self.persistence_error = None
