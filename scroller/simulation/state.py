"""The single-writer game state.

``GameState`` bundles everything a tick mutates: the phase machine, the
player body, the live obstacles, the spawn clock and the round's
progression. The engine hands it to the pipeline by exclusive reference;
no other object keeps a pointer into it between ticks.

Entering PLAYING discards the round-scoped parts and builds new ones; the
session's high score and frame counter carry over.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from scroller.entities.obstacle import Obstacle
from scroller.entities.player import PlayerBody
from scroller.state_machine import GamePhase, StateMachine, create_phase_machine
from scroller.systems.obstacle_stream import SpawnClock
from scroller.systems.progression import RoundState


@dataclass
class GameState:
    """Complete simulation state for one session.

    Attributes:
        phase_machine: IDLE / PLAYING / GAME_OVER machine
        player: The current round's player body
        round: Score, high score and difficulty of the current round
        spawn_clock: Spawn timing of the current round
        obstacles: Live obstacles, oldest first
        frame: Ticks processed this session
        now: Round time in frames, advanced only while PLAYING
        round_number: Rounds started this session
    """

    player: PlayerBody
    round: RoundState
    spawn_clock: SpawnClock
    phase_machine: StateMachine[GamePhase] = field(default_factory=create_phase_machine)
    obstacles: list[Obstacle] = field(default_factory=list)
    frame: int = 0
    now: float = 0.0
    round_number: int = 0

    @property
    def phase(self) -> GamePhase:
        return self.phase_machine.state

    @property
    def playing(self) -> bool:
        return self.phase_machine.state is GamePhase.PLAYING

    @property
    def high_score(self) -> int:
        return self.round.high_score
