"""Game engine - the per-session orchestrator.

The engine owns the systems, the input buffer and the single ``GameState``
of a session. It contains little logic of its own: each tick builds a
``FrameContext`` and hands state and context to the pipeline, whose steps
delegate to the systems.

Design Decisions:
-----------------
1. ``tick(state, dt, inputs)`` takes the state by exclusive reference and
   returns it. Nothing else mutates the state between ticks, and a tick
   that tries to start another tick raises SimulationError.

2. Inputs are latched. Hosts call ``push_input`` at any time; the buffer is
   drained once at the start of the next tick, in arrival order.

3. Phase changes go through the phase machine. A refused transition is
   logged and ignored, never raised: a START while already PLAYING is a
   normal user action, not a bug.

4. ``attach``/``teardown`` bind the engine to a FrameScheduler. After
   teardown, frames that are still in flight are ignored.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from scroller.config.game_config import GameConfig, flyer_config
from scroller.entities.player import PlayerBody
from scroller.events import EventBus, PhaseChanged, RoundStarted
from scroller.exceptions import SimulationError
from scroller.input import InputBuffer, InputKind
from scroller.simulation.clock import FrameClock, FrameScheduler, TickHandle
from scroller.simulation.frame_context import FrameContext
from scroller.simulation.pipeline import EnginePipeline, default_pipeline
from scroller.simulation.snapshot import FrameSnapshot, build_snapshot
from scroller.simulation.state import GameState
from scroller.state_machine import GamePhase
from scroller.systems.collision import CollisionSystem
from scroller.systems.obstacle_stream import ObstacleStream
from scroller.systems.physics import PhysicsSystem
from scroller.systems.progression import ProgressionTracker
from scroller.util.rng import RandomSource, create_rng

logger = logging.getLogger(__name__)


class GameEngine:
    """A headless simulation engine for one game session.

    Architecture:
        GameEngine (coordinator)
        ├── EnginePipeline (tick order)
        ├── Systems (PhysicsSystem, ObstacleStream, CollisionSystem, ProgressionTracker)
        ├── InputBuffer (latched host inputs)
        └── FrameClock (host timestamps -> dt)

    Attributes:
        config: Validated game configuration
        event_bus: Bus every system emits domain events on
        inputs: Pending inputs for the next tick
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        event_bus: Optional[EventBus] = None,
        pipeline: Optional[EnginePipeline] = None,
        clock: Optional[FrameClock] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Game configuration (flyer preset when omitted)
            rng: Random source for obstacle geometry; wins over ``seed``
            seed: Seed for a dedicated RNG when ``rng`` is not provided
            event_bus: Shared bus; a private one is created when omitted
            pipeline: Custom tick pipeline
            clock: Custom frame clock for ``on_frame``

        Raises:
            ConfigurationError: If the configuration is inconsistent
        """
        self.config = (config or flyer_config()).validate()
        self.seed = seed
        self.rng: RandomSource = rng if rng is not None else create_rng(seed)
        self.event_bus = event_bus or EventBus()
        self.pipeline = pipeline or default_pipeline()
        self.clock = clock or FrameClock()
        self.inputs = InputBuffer()

        self.progression = ProgressionTracker(self.config.progression, self.event_bus)
        self.physics = PhysicsSystem(self.event_bus)
        self.obstacle_stream = ObstacleStream(
            self.config, self.rng, self.event_bus, pass_handler=self.progression.on_pass
        )
        self.collision = CollisionSystem(self.config.collision.padding, self.event_bus)

        self._state = self.create_state()
        self._snapshot = build_snapshot(self._state)
        self._ticking = False
        self._handle: Optional[TickHandle] = None
        self._torn_down = False

        logger.info("Engine ready: %s (seed=%s)", self.config.name, seed)

    # =========================================================================
    # State
    # =========================================================================

    def create_state(self) -> GameState:
        """Fresh session state in IDLE, with placeholder round-scoped parts."""
        round_state = self.progression.new_round()
        return GameState(
            player=PlayerBody(self.config.physics),
            round=round_state,
            spawn_clock=self.obstacle_stream.new_clock(0.0, round_state.speed),
        )

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def snapshot(self) -> FrameSnapshot:
        """The snapshot published by the most recent tick (or phase change)."""
        return self._snapshot

    def publish_snapshot(self, state: GameState) -> None:
        self._snapshot = build_snapshot(state)

    # =========================================================================
    # Ticking
    # =========================================================================

    def tick(self, state: GameState, dt: float, inputs: Iterable[InputKind] = ()) -> GameState:
        """Advance ``state`` by one tick.

        Args:
            state: Session state, owned exclusively by this call
            dt: Elapsed time in frames; 0 is allowed and moves nothing
            inputs: Inputs for this tick, in arrival order

        Returns:
            The same state object, advanced

        Raises:
            SimulationError: If called re-entrantly or with a negative dt
        """
        if self._ticking:
            raise SimulationError("tick() called while a tick is already running")
        if dt < 0:
            raise SimulationError(f"dt must be non-negative, got {dt}")

        self._ticking = True
        try:
            ctx = FrameContext(dt=dt, inputs=list(inputs))
            self.pipeline.run(self, state, ctx)
        finally:
            self._ticking = False
        return state

    def step(self, dt: float = 1.0) -> FrameSnapshot:
        """Drain the input buffer, tick the session state and return the snapshot."""
        if self._torn_down:
            return self._snapshot
        self._state = self.tick(self._state, dt, self.inputs.drain())
        return self._snapshot

    def run_frames(self, frames: int, dt: float = 1.0) -> FrameSnapshot:
        """Step ``frames`` times with a fixed dt."""
        for _ in range(frames):
            self.step(dt)
        return self._snapshot

    def process_inputs(self, state: GameState, ctx: FrameContext) -> None:
        """Route this tick's inputs by phase and decide whether to simulate.

        Outside PLAYING, START (and JUMP when ``tap_to_start``) begins a
        round; the new round is simulated from the following tick. During
        PLAYING, inputs become impulses on the player body.
        """
        state.frame += 1
        state.player.begin_tick()

        for kind in ctx.inputs:
            if state.playing:
                if kind is InputKind.START:
                    logger.debug("Ignored START at frame %d: already playing", state.frame)
                    continue
                self.physics.apply_impulses(state.player, (kind,))
            elif self._starts_round(kind):
                if self._begin_round(state, reason=kind.value):
                    ctx.round_started = True
            else:
                logger.debug("Ignored %s in %s", kind.value, state.phase.name)

        ctx.simulate = state.playing and not ctx.round_started
        if ctx.simulate:
            state.now += ctx.dt

    def _starts_round(self, kind: InputKind) -> bool:
        return kind is InputKind.START or (kind is InputKind.JUMP and self.config.tap_to_start)

    # =========================================================================
    # Phase transitions
    # =========================================================================

    def start(self) -> bool:
        """Begin a round now, from IDLE or GAME_OVER.

        Returns:
            False if a round is already in progress
        """
        self._require_between_ticks("start")
        started = self._begin_round(self._state, reason="start")
        if started:
            self.publish_snapshot(self._state)
        return started

    def stop_round(self) -> bool:
        """Abandon the current round and return to IDLE without finalizing."""
        self._require_between_ticks("stop_round")
        if not self._state.playing:
            return False
        return self._transition(self._state, GamePhase.IDLE, "stop")

    def return_to_idle(self) -> bool:
        """Leave GAME_OVER for IDLE."""
        self._require_between_ticks("return_to_idle")
        if self._state.phase is not GamePhase.GAME_OVER:
            return False
        return self._transition(self._state, GamePhase.IDLE, "idle")

    def end_round(self, state: GameState, ctx: FrameContext) -> None:
        """PLAYING -> GAME_OVER after the tracker has finalized the round."""
        if self._transition(state, GamePhase.GAME_OVER, "collision"):
            rnd = state.round
            logger.info(
                "Round %d over at frame %d: score=%d high=%d",
                state.round_number,
                state.frame,
                rnd.score,
                rnd.high_score,
            )

    def _begin_round(self, state: GameState, reason: str) -> bool:
        if not self._transition(state, GamePhase.PLAYING, reason):
            return False

        state.player = PlayerBody(self.config.physics)
        state.obstacles = []
        state.round = self.progression.new_round(state.round)
        state.now = 0.0
        state.spawn_clock = self.obstacle_stream.new_clock(0.0, state.round.speed)
        state.round_number += 1

        logger.info(
            "Round %d started at frame %d (high score %d)",
            state.round_number,
            state.frame,
            state.round.high_score,
        )
        self.event_bus.emit(RoundStarted(state.round_number, state.round.high_score, state.frame))
        return True

    def _transition(self, state: GameState, target: GamePhase, reason: str) -> bool:
        previous = state.phase
        result = state.phase_machine.try_transition(target, state.frame, reason)
        if result.is_err():
            logger.debug("Transition refused (%s): %s", reason, result.error)
            return False
        self.event_bus.emit(PhaseChanged(previous.name, target.name, reason, state.frame))
        if state is self._state and not self._ticking:
            self.publish_snapshot(state)
        return True

    def _require_between_ticks(self, operation: str) -> None:
        if self._ticking:
            raise SimulationError(f"{operation}() called during a tick")

    # =========================================================================
    # Host integration
    # =========================================================================

    def push_input(self, kind: InputKind) -> bool:
        """Queue an input for the next tick; ignored after teardown."""
        if self._torn_down:
            return False
        return self.inputs.push(kind)

    def on_frame(self, timestamp_ms: float) -> None:
        """Frame callback: convert the host timestamp to dt and step."""
        if self._torn_down:
            return
        self.step(self.clock.advance(timestamp_ms))

    def attach(self, scheduler: FrameScheduler) -> TickHandle:
        """Register ``on_frame`` with a scheduler, replacing any earlier registration.

        Raises:
            SimulationError: If the engine has been torn down
        """
        if self._torn_down:
            raise SimulationError("Cannot attach a torn-down engine")
        self.detach()
        self.clock.reset()
        self._handle = scheduler.register(self.on_frame)
        return self._handle

    def detach(self) -> None:
        """Cancel the scheduler registration, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def teardown(self) -> None:
        """Stop ticking for good. Safe to call more than once."""
        if self._torn_down:
            return
        self.detach()
        self.inputs.clear()
        self._torn_down = True
        logger.info("Engine torn down after %d frames", self._state.frame)

    # =========================================================================
    # Debug
    # =========================================================================

    def get_debug_info(self) -> Dict[str, Any]:
        systems: List[Any] = [self.physics, self.obstacle_stream, self.collision, self.progression]
        return {
            "config": self.config.name,
            "phase": self._state.phase.name,
            "frame": self._state.frame,
            "round_number": self._state.round_number,
            "live_obstacles": len(self._state.obstacles),
            "pending_inputs": len(self.inputs),
            "dropped_inputs": self.inputs.dropped,
            "pipeline": self.pipeline.step_names,
            "systems": [system.get_debug_info() for system in systems],
        }
