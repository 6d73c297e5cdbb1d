from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

TUNING_ENV_VAR = "ROCKETLAUNCH_TUNING"


@dataclass(frozen=True)
class GameTuning:
    """Numeric rules of the game. Defaults are the stock launch rules."""

    power_gain: float = 5
    power_gain_no_fuel: float = 2
    fuel_cost: float = 5
    refuel_amount: float = 15
    power_decay: float = 4
    clear_threshold: float = 95
    clear_step: float = 20
    tick_interval_ms: int = 1000
    flame_particles: int = 3
    flame_particles_no_fuel: int = 1
    fuel_particles: int = 2
    particle_lifetime_ms: int = 800
    shake_duration_ms: int = 150
    success_delay_ms: int = 3000


_INT_FIELDS = {f.name for f in fields(GameTuning) if f.type in ("int", int)}


def default_tuning_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "tuning.yaml"


def load_tuning(path: Optional[Path] = None) -> GameTuning:
    """Load tuning from *path*, ``$ROCKETLAUNCH_TUNING`` or the packaged YAML.

    An explicitly requested file must exist. The packaged file is optional:
    when it is missing the stock defaults are used.
    """
    explicit = path is not None or bool(os.environ.get(TUNING_ENV_VAR))
    if path is None:
        env_path = os.environ.get(TUNING_ENV_VAR)
        path = Path(env_path) if env_path else default_tuning_path()
    path = Path(path)

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Tuning file not found: {path}")
        logger.warning("Tuning file %s not found, using defaults", path)
        return GameTuning()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"{path.name}: invalid YAML: {e}") from e
    tuning = parse_tuning(raw, source=path.name)
    logger.info("Loaded tuning from %s", path)
    return tuning


def parse_tuning(raw: Any, source: str = "<tuning>") -> GameTuning:
    """Build a ``GameTuning`` from a parsed YAML document."""
    if raw is None:
        return GameTuning()
    if not isinstance(raw, dict):
        raise ValueError(f"{source}: expected a mapping of tuning values")

    known = {f.name for f in fields(GameTuning)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            raise ValueError(f"{source}: unknown tuning key {key!r}")
        # bool is an int subclass; "true" is never a valid rule value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{source}: {key!r} must be a number, got {value!r}")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"{source}: {key!r} must be finite")
        if value < 0:
            raise ValueError(f"{source}: {key!r} must not be negative")
        if key in _INT_FIELDS:
            if float(value) != int(value):
                raise ValueError(f"{source}: {key!r} must be a whole number")
            value = int(value)
        values[key] = value

    tuning = replace(GameTuning(), **values)
    if tuning.clear_threshold > 100:
        raise ValueError(f"{source}: 'clear_threshold' must lie in [0, 100]")
    if tuning.tick_interval_ms == 0:
        raise ValueError(f"{source}: 'tick_interval_ms' must be positive")
    return tuning
