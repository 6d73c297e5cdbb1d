"""Data models used by the UI."""

from __future__ import annotations

import math
from dataclasses import dataclass

from rocketlaunch.core.session import GameSnapshot, Mode
from rocketlaunch.ui.colors import LaunchColors, blend_hex


@dataclass
class HudState:
    """Display values derived from a game snapshot."""

    power_percent: int
    fuel_percent: int
    cockpit_opacity: float
    ignite_active: bool
    refuel_active: bool
    show_win_modal: bool

    @property
    def power_text(self) -> str:
        return f"{self.power_percent}%"

    @property
    def fuel_text(self) -> str:
        return f"{self.fuel_percent}%"


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; meters round 2.5 up to 3
    return int(math.floor(value + 0.5))


def present(snapshot: GameSnapshot) -> HudState:
    return HudState(
        power_percent=round_half_up(snapshot.power),
        fuel_percent=round_half_up(snapshot.fuel),
        cockpit_opacity=snapshot.clear_progress / 100.0,
        ignite_active=snapshot.mode is Mode.IGNITE,
        refuel_active=snapshot.mode is Mode.REFUEL,
        show_win_modal=snapshot.won,
    )


def meter_color(percent: float) -> str:
    """Fill color for a 0-100 meter, red when empty and green when full."""
    return blend_hex(LaunchColors.METER_LOW, LaunchColors.METER_HIGH, percent / 100.0)
