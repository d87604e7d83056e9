"""Player body: position, vertical velocity and posture of the controlled entity.

The body is pure logic. It knows nothing about sprites or screens; hosts read
``position``, ``effective_box()`` and ``rotation`` to draw it.

Two body kinds share this class:

- FLYER: always under gravity, a jump (flap) sets the vertical velocity at
  any time but at most once per tick. The top edge is kept within
  [0, floor_y]; leaving that band is recorded in ``left_bounds`` for the
  collision detector before the position is clamped.
- RUNNER: rests on the ground plane at ``ground_y``. Jumps only from the
  ground and only while standing; ducks only while on the ground. Crouching
  shortens the hitbox and uses the crouch gravity.
"""

from enum import Enum

from scroller.config.game_config import BodyKind, PhysicsConfig
from scroller.entities.base import Box
from scroller.input import InputKind
from scroller.math_utils import Vector2, clamp


class Posture(Enum):
    NORMAL = "normal"
    CROUCHED = "crouched"


class PlayerBody:
    """Physics state of the controlled entity.

    Attributes:
        position: Top-left of the standing box; x never changes
        vertical_velocity: Units per frame, negative is up
        posture: NORMAL or CROUCHED
        airborne: True until the body settles on the ground plane
        left_bounds: Set by integrate() when the unclamped flyer position
            left [0, floor_y] this tick
    """

    def __init__(self, config: PhysicsConfig) -> None:
        self.config = config
        self.position = Vector2(config.player_x, config.start_y)
        self.vertical_velocity: float = 0.0
        self.posture = Posture.NORMAL
        self.airborne: bool = config.body_kind is BodyKind.FLYER
        self.left_bounds: bool = False
        self._impulse_this_tick: bool = False

    @property
    def is_flyer(self) -> bool:
        return self.config.body_kind is BodyKind.FLYER

    @property
    def crouched(self) -> bool:
        return self.posture is Posture.CROUCHED

    @property
    def gravity(self) -> float:
        """Gravity for the current posture."""
        if self.crouched:
            return self.config.crouch_gravity
        return self.config.gravity

    @property
    def rotation(self) -> float:
        """Visual tilt in radians, derived from vertical velocity."""
        limit = self.config.max_tilt
        return clamp(self.vertical_velocity * self.config.tilt_per_velocity, -limit, limit)

    def apply_impulse(self, kind: InputKind) -> bool:
        """Apply an input-driven impulse.

        Rejected impulses leave the body untouched.

        Args:
            kind: JUMP, DUCK_START or DUCK_END

        Returns:
            True if the impulse changed the body
        """
        if kind is InputKind.JUMP:
            return self._jump()
        if kind is InputKind.DUCK_START:
            return self._set_crouch(True)
        if kind is InputKind.DUCK_END:
            return self._set_crouch(False)
        return False

    def _jump(self) -> bool:
        if self.is_flyer:
            if self._impulse_this_tick:
                return False
        elif self.airborne or self.crouched:
            return False

        self.vertical_velocity = self.config.impulse_velocity
        self.airborne = True
        self._impulse_this_tick = True
        return True

    def _set_crouch(self, crouch: bool) -> bool:
        if self.is_flyer:
            return False
        if crouch:
            if self.airborne or self.crouched:
                return False
            self.posture = Posture.CROUCHED
            return True
        if not self.crouched:
            return False
        self.posture = Posture.NORMAL
        return True

    def begin_tick(self) -> None:
        """Reset the once-per-tick impulse guard before this tick's inputs."""
        self._impulse_this_tick = False

    def integrate(self, dt: float) -> None:
        """Advance the body by ``dt`` frames: one gravity step at most."""
        self.left_bounds = False
        self._impulse_this_tick = False

        if not self.airborne:
            return

        self.vertical_velocity += self.gravity * dt
        self.position.y += self.vertical_velocity * dt

        if self.is_flyer:
            self._clamp_to_band()
        elif self.position.y >= self.config.ground_y:
            self._settle(self.config.ground_y)

    def _clamp_to_band(self) -> None:
        floor_y = self.config.floor_y
        if self.position.y < 0:
            self.left_bounds = True
            self.position.y = 0.0
            self.vertical_velocity = 0.0
        elif self.position.y > floor_y:
            self.left_bounds = True
            self._settle(floor_y)

    def _settle(self, y: float) -> None:
        self.position.y = y
        self.vertical_velocity = 0.0
        self.airborne = False

    def effective_box(self) -> Box:
        """Hitbox for the current posture. Crouching keeps the feet in place."""
        height = self.config.crouch_height if self.crouched else self.config.height
        top = self.position.y + (self.config.height - height)
        return Box(self.position.x, top, self.config.width, height)

    def __repr__(self) -> str:
        return (
            f"PlayerBody(y={self.position.y:.2f}, vy={self.vertical_velocity:.2f}, "
            f"posture={self.posture.value}, airborne={self.airborne})"
        )
