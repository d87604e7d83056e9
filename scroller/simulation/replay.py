"""Scripted runs and snapshot fingerprints.

A script is a list of ``(frame_index, InputKind)`` pairs. ``run_script``
builds a fresh engine from a config and seed, pushes each input just before
its frame is stepped, and reduces the run to a ``RunOutcome``. Two runs of
the same config, seed and script produce equal outcomes, fingerprint
included.

Fingerprints hash a canonical JSON form of every snapshot: keys sorted,
floats rounded so platform noise in the last bits does not change the
digest.
"""

from __future__ import annotations

import hashlib
import json
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from scroller.config.game_config import GameConfig
from scroller.events import EventBus, ObstacleSpawned, RoundEnded
from scroller.input import InputKind
from scroller.simulation.engine import GameEngine
from scroller.simulation.snapshot import FrameSnapshot
from scroller.state_machine import GamePhase

FLOAT_PRECISION = 6
DIGEST_SIZE = 16


def canonicalize_for_fingerprint(value: Any, float_precision: int | None = FLOAT_PRECISION) -> Any:
    """Return a canonical, JSON-compatible structure for stable hashing."""

    def _canon(v: Any) -> Any:
        if isinstance(v, float):
            if float_precision is None:
                return v
            return round(v, int(float_precision))
        if isinstance(v, Mapping):
            return {str(k): _canon(v[k]) for k in sorted(v.keys(), key=str)}
        if isinstance(v, (list, tuple)):
            return [_canon(x) for x in v]
        return v

    return _canon(value)


def _payload(snapshot: Mapping[str, Any]) -> bytes:
    return json.dumps(
        canonicalize_for_fingerprint(snapshot),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
    ).encode("utf-8")


def fingerprint_snapshot(snapshot: FrameSnapshot | Mapping[str, Any]) -> str:
    """Stable hex digest of one snapshot."""
    data = snapshot.to_dict() if isinstance(snapshot, FrameSnapshot) else snapshot
    return hashlib.blake2b(_payload(data), digest_size=DIGEST_SIZE).hexdigest()


class RunFingerprinter:
    """Folds a sequence of snapshots into one digest."""

    def __init__(self) -> None:
        self._hasher = hashlib.blake2b(digest_size=DIGEST_SIZE)
        self.count = 0

    def add(self, snapshot: FrameSnapshot) -> None:
        self._hasher.update(_payload(snapshot.to_dict()))
        self._hasher.update(b"\n")
        self.count += 1

    def hexdigest(self) -> str:
        return self._hasher.hexdigest()


@dataclass(frozen=True)
class SpawnRecord:
    frame: int
    obstacle_id: int
    kind: str
    x: float


@dataclass
class RunOutcome:
    """Result of a scripted run.

    Attributes:
        score: Score of the last round when the run stopped
        high_score: Session high score
        termination_frame: Frame of the first GAME_OVER, or None if no round ended
        rounds_played: Rounds that ended in a collision
        frames: Frames stepped
        spawns: Every spawn, in order
        fingerprint: Digest over all snapshots of the run
    """

    score: int
    high_score: int
    termination_frame: int | None
    rounds_played: int
    frames: int
    spawns: list[SpawnRecord] = field(default_factory=list)
    fingerprint: str = ""


def run_script(
    config: GameConfig,
    seed: int,
    script: Iterable[tuple[int, InputKind]],
    frames: int,
    dt: float = 1.0,
    *,
    stop_on_game_over: bool = False,
) -> RunOutcome:
    """Drive a fresh engine through ``script`` for ``frames`` frames.

    Args:
        config: Game configuration
        seed: RNG seed
        script: ``(frame_index, input)`` pairs; index 0 is the first step
        frames: Number of steps to run
        dt: Fixed dt per step, in frames
        stop_on_game_over: End the run at the first GAME_OVER
    """
    by_frame: dict[int, list[InputKind]] = defaultdict(list)
    for index, kind in script:
        by_frame[index].append(kind)

    bus = EventBus()
    spawns: list[SpawnRecord] = []
    ended: list[RoundEnded] = []
    bus.subscribe(
        ObstacleSpawned,
        lambda e: spawns.append(SpawnRecord(e.frame, e.obstacle_id, e.kind, e.x)),
    )
    bus.subscribe(RoundEnded, ended.append)

    engine = GameEngine(config, seed=seed, event_bus=bus)
    fingerprinter = RunFingerprinter()
    termination_frame: int | None = None

    for index in range(frames):
        for kind in by_frame.get(index, ()):
            engine.push_input(kind)
        snapshot = engine.step(dt)
        fingerprinter.add(snapshot)
        if termination_frame is None and engine.phase is GamePhase.GAME_OVER:
            termination_frame = snapshot.frame
            if stop_on_game_over:
                break

    final = engine.snapshot()
    engine.teardown()
    return RunOutcome(
        score=final.score,
        high_score=final.high_score,
        termination_frame=termination_frame,
        rounds_played=len(ended),
        frames=fingerprinter.count,
        spawns=spawns,
        fingerprint=fingerprinter.hexdigest(),
    )
