"""Cosmetic effect descriptors emitted by the launch session for the UI to play."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EffectKind(str, Enum):
    FLAME = "flame"
    FUEL = "fuel"
    SHAKE = "shake"
    WIN = "win"


@dataclass(frozen=True)
class Effect:
    """A single cosmetic consequence of a click or tick.

    ``duration_ms`` is how long one instance stays on screen (a particle, a
    shake). ``delay_ms`` is only used by ``WIN``: the time the renderer waits
    before revealing the success message.
    """

    kind: EffectKind
    count: int = 1
    duration_ms: int = 0
    delay_ms: int = 0

    @classmethod
    def particles(cls, kind: EffectKind, count: int, duration_ms: int) -> "Effect":
        if kind not in (EffectKind.FLAME, EffectKind.FUEL):
            raise ValueError(f"{kind.value!r} is not a particle effect")
        return cls(kind=kind, count=count, duration_ms=duration_ms)

    @classmethod
    def shake(cls, duration_ms: int) -> "Effect":
        return cls(kind=EffectKind.SHAKE, duration_ms=duration_ms)

    @classmethod
    def win(cls, delay_ms: int) -> "Effect":
        return cls(kind=EffectKind.WIN, delay_ms=delay_ms)
