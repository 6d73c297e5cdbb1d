from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from rocketlaunch.core.effects import Effect, EffectKind
from rocketlaunch.core.tuning import GameTuning

logger = logging.getLogger(__name__)

MIN_LEVEL = 0.0
MAX_LEVEL = 100.0


def clamp(value: float, lo: float = MIN_LEVEL, hi: float = MAX_LEVEL) -> float:
    return max(lo, min(hi, value))


class Mode(str, Enum):
    IGNITE = "ignite"
    REFUEL = "refuel"


@dataclass
class GameState:
    """Mutable launch state owned by a single ``LaunchSession``."""

    mode: Mode = Mode.IGNITE
    power: float = 0.0
    fuel: float = 100.0
    clear_progress: float = 0.0
    won: bool = False
    locked: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the state handed to renderers."""

    mode: Mode
    power: float
    fuel: float
    clear_progress: float
    won: bool
    locked: bool


@dataclass(frozen=True)
class StepResult:
    """State after an operation plus the cosmetic effects it emitted."""

    snapshot: GameSnapshot
    effects: tuple[Effect, ...] = ()


class LaunchSession:
    """Rocket launch game rules.

    The session is driven from outside: the UI calls :meth:`click` on rocket
    clicks, :meth:`tick` once per timer interval and :meth:`set_mode` from the
    mode buttons. Each call returns a :class:`StepResult`; the effects in it
    are purely cosmetic and have no bearing on the state.

    A tick applies power decay *before* comparing power against the clear
    threshold, so power must be at least ``threshold + decay`` going into a
    tick for the cockpit to clear further.

    Once the cockpit is fully cleared the session is won and locked: clicks
    and ticks become no-ops until :meth:`restart`.
    """

    def __init__(self, tuning: Optional[GameTuning] = None) -> None:
        self._tuning = tuning or GameTuning()
        self._state = GameState()

    @property
    def tuning(self) -> GameTuning:
        return self._tuning

    @property
    def state(self) -> GameSnapshot:
        return self.snapshot()

    def snapshot(self) -> GameSnapshot:
        s = self._state
        return GameSnapshot(
            mode=s.mode,
            power=s.power,
            fuel=s.fuel,
            clear_progress=s.clear_progress,
            won=s.won,
            locked=s.locked,
        )

    def set_mode(self, target: Union[Mode, str]) -> StepResult:
        """Select which action a click performs. Allowed while locked."""
        mode = Mode(target)
        if mode is not self._state.mode:
            logger.debug("Mode changed to %s", mode.value)
        self._state.mode = mode
        return StepResult(self.snapshot())

    def click(self) -> StepResult:
        """Apply one rocket click in the current mode."""
        s = self._state
        t = self._tuning
        if s.locked:
            return StepResult(self.snapshot())

        if s.mode is Mode.IGNITE:
            gain = t.power_gain if s.fuel > 0 else t.power_gain_no_fuel
            s.power = clamp(s.power + gain)
            s.fuel = clamp(s.fuel - t.fuel_cost)
            count = t.flame_particles if s.fuel > 0 else t.flame_particles_no_fuel
            effects = (
                Effect.particles(EffectKind.FLAME, count, t.particle_lifetime_ms),
                Effect.shake(t.shake_duration_ms),
            )
        else:
            s.fuel = clamp(s.fuel + t.refuel_amount)
            effects = (Effect.particles(EffectKind.FUEL, t.fuel_particles, t.particle_lifetime_ms),)

        return StepResult(self.snapshot(), effects)

    def tick(self) -> StepResult:
        """Advance one timer interval: decay power, then push or pull the fog."""
        s = self._state
        t = self._tuning
        if s.locked:
            return StepResult(self.snapshot())

        s.power = clamp(s.power - t.power_decay)
        if s.power >= t.clear_threshold:
            s.clear_progress = clamp(s.clear_progress + t.clear_step)
        else:
            s.clear_progress = clamp(s.clear_progress - t.clear_step)

        effects: tuple[Effect, ...] = ()
        if s.clear_progress >= MAX_LEVEL and not s.won:
            s.won = True
            s.locked = True
            logger.info("Cockpit cleared, launch sequence triggered")
            effects = (Effect.win(t.success_delay_ms),)

        return StepResult(self.snapshot(), effects)

    def restart(self) -> StepResult:
        """Reset every field to its initial value."""
        self._state = GameState()
        logger.debug("Session restarted")
        return StepResult(self.snapshot())
