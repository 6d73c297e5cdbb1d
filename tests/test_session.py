"""Tests for rocketlaunch.core.session – launch game rules."""

from __future__ import annotations

import random

import pytest

from rocketlaunch.core.effects import Effect, EffectKind
from rocketlaunch.core.session import (
    GameSnapshot,
    GameState,
    LaunchSession,
    Mode,
    StepResult,
    clamp,
)
from rocketlaunch.core.tuning import GameTuning


INITIAL = GameSnapshot(
    mode=Mode.IGNITE,
    power=0.0,
    fuel=100.0,
    clear_progress=0.0,
    won=False,
    locked=False,
)


def _session_with(**fields) -> LaunchSession:
    """Session whose state starts from the given field values."""
    s = LaunchSession()
    s._state = GameState(**fields)
    return s


def _kinds(result: StepResult) -> list[EffectKind]:
    return [e.kind for e in result.effects]


# ---------------------------------------------------------------------------
# clamp
# ---------------------------------------------------------------------------

class TestClamp:
    def test_inside_range(self):
        assert clamp(42.5) == 42.5

    def test_below_floor(self):
        assert clamp(-3) == 0.0

    def test_above_ceiling(self):
        assert clamp(104) == 100.0

    def test_custom_bounds(self):
        assert clamp(15, 0, 10) == 10
        assert clamp(-15, -10, 10) == -10


# ---------------------------------------------------------------------------
# LaunchSession – initial state
# ---------------------------------------------------------------------------

class TestInitialState:
    def test_defaults(self):
        assert LaunchSession().snapshot() == INITIAL

    def test_state_property_matches_snapshot(self):
        s = LaunchSession()
        assert s.state == s.snapshot()

    def test_default_tuning(self):
        assert LaunchSession().tuning == GameTuning()

    def test_not_locked(self):
        assert not LaunchSession().snapshot().locked

    def test_snapshot_is_a_copy(self):
        s = LaunchSession()
        before = s.snapshot()
        s.click()
        assert before == INITIAL
        assert s.snapshot() != before

    def test_snapshot_is_frozen(self):
        snap = LaunchSession().snapshot()
        with pytest.raises(AttributeError):
            snap.power = 50.0


# ---------------------------------------------------------------------------
# LaunchSession – set_mode
# ---------------------------------------------------------------------------

class TestSetMode:
    def test_switch_to_refuel(self):
        s = LaunchSession()
        result = s.set_mode(Mode.REFUEL)
        assert result.snapshot.mode is Mode.REFUEL
        assert result.effects == ()

    def test_accepts_string_value(self):
        s = LaunchSession()
        s.set_mode("refuel")
        assert s.snapshot().mode is Mode.REFUEL
        s.set_mode("ignite")
        assert s.snapshot().mode is Mode.IGNITE

    def test_unknown_mode_raises(self):
        s = LaunchSession()
        with pytest.raises(ValueError):
            s.set_mode("boost")
        assert s.snapshot().mode is Mode.IGNITE

    def test_same_mode_is_harmless(self):
        s = LaunchSession()
        s.set_mode(Mode.IGNITE)
        assert s.snapshot() == INITIAL

    def test_allowed_while_locked(self):
        s = _session_with(clear_progress=100.0, won=True, locked=True)
        s.set_mode(Mode.REFUEL)
        snap = s.snapshot()
        assert snap.mode is Mode.REFUEL
        assert snap.locked is True
        assert snap.won is True

    def test_does_not_touch_numbers(self):
        s = _session_with(power=40.0, fuel=30.0, clear_progress=20.0)
        s.set_mode(Mode.REFUEL)
        snap = s.snapshot()
        assert (snap.power, snap.fuel, snap.clear_progress) == (40.0, 30.0, 20.0)


# ---------------------------------------------------------------------------
# LaunchSession – click in Ignite mode
# ---------------------------------------------------------------------------

class TestIgniteClick:
    def test_first_click_from_start(self):
        s = LaunchSession()
        result = s.click()
        assert result.snapshot.power == 5.0
        assert result.snapshot.fuel == 95.0

    def test_emits_three_flames_and_shake_with_fuel_left(self):
        result = LaunchSession().click()
        assert result.effects == (
            Effect(kind=EffectKind.FLAME, count=3, duration_ms=800),
            Effect(kind=EffectKind.SHAKE, duration_ms=150),
        )

    def test_no_fuel_gives_reduced_gain(self):
        s = _session_with(power=10.0, fuel=0.0)
        result = s.click()
        assert result.snapshot.power == 12.0
        assert result.snapshot.fuel == 0.0

    def test_no_fuel_emits_single_flame(self):
        s = _session_with(fuel=0.0)
        result = s.click()
        assert result.effects[0] == Effect(kind=EffectKind.FLAME, count=1, duration_ms=800)
        assert _kinds(result) == [EffectKind.FLAME, EffectKind.SHAKE]

    def test_last_fuel_unit_still_gives_full_gain(self):
        # Gain is decided before consumption, flame count after it
        s = _session_with(power=0.0, fuel=5.0)
        result = s.click()
        assert result.snapshot.power == 5.0
        assert result.snapshot.fuel == 0.0
        assert result.effects[0].count == 1

    def test_partial_fuel_clamps_to_zero(self):
        s = _session_with(fuel=2.5)
        result = s.click()
        assert result.snapshot.fuel == 0.0
        assert result.snapshot.power == 5.0

    def test_power_clamped_at_ceiling(self):
        s = _session_with(power=98.0, fuel=50.0)
        assert s.click().snapshot.power == 100.0

    def test_does_not_touch_clear_progress(self):
        s = _session_with(clear_progress=40.0)
        assert s.click().snapshot.clear_progress == 40.0

    def test_twenty_clicks_drain_a_full_tank(self):
        s = LaunchSession()
        for _ in range(20):
            s.click()
        snap = s.snapshot()
        assert snap.power == 100.0
        assert snap.fuel == 0.0


# ---------------------------------------------------------------------------
# LaunchSession – click in Refuel mode
# ---------------------------------------------------------------------------

class TestRefuelClick:
    def test_adds_fuel_power_unchanged(self):
        s = _session_with(power=30.0, fuel=50.0)
        s.set_mode(Mode.REFUEL)
        result = s.click()
        assert result.snapshot.fuel == 65.0
        assert result.snapshot.power == 30.0

    def test_emits_two_fuel_particles(self):
        s = _session_with(mode=Mode.REFUEL, fuel=10.0)
        result = s.click()
        assert result.effects == (Effect(kind=EffectKind.FUEL, count=2, duration_ms=800),)

    def test_fuel_clamped_at_ceiling(self):
        s = _session_with(mode=Mode.REFUEL, fuel=95.0)
        assert s.click().snapshot.fuel == 100.0

    def test_full_tank_still_emits_particles(self):
        s = _session_with(mode=Mode.REFUEL)
        result = s.click()
        assert result.snapshot.fuel == 100.0
        assert _kinds(result) == [EffectKind.FUEL]


# ---------------------------------------------------------------------------
# LaunchSession – tick
# ---------------------------------------------------------------------------

class TestTick:
    def test_decay_from_start_floors_at_zero(self):
        result = LaunchSession().tick()
        assert result.snapshot.power == 0.0
        assert result.snapshot.clear_progress == 0.0
        assert result.effects == ()

    def test_decay_before_threshold_check(self):
        s = _session_with(power=96.0, clear_progress=40.0)
        result = s.tick()
        assert result.snapshot.power == 92.0
        assert result.snapshot.clear_progress == 20.0

    def test_fog_returns_clamped_at_zero(self):
        s = _session_with(power=96.0, clear_progress=10.0)
        assert s.tick().snapshot.clear_progress == 0.0

    def test_threshold_is_inclusive(self):
        s = _session_with(power=99.0)
        result = s.tick()
        assert result.snapshot.power == 95.0
        assert result.snapshot.clear_progress == 20.0

    def test_just_below_threshold(self):
        s = _session_with(power=98.9, clear_progress=60.0)
        result = s.tick()
        assert result.snapshot.clear_progress == 40.0

    def test_fuel_untouched(self):
        s = _session_with(power=50.0, fuel=33.0)
        assert s.tick().snapshot.fuel == 33.0

    def test_win_on_full_clear(self):
        s = _session_with(power=100.0, clear_progress=80.0)
        result = s.tick()
        assert result.snapshot.clear_progress == 100.0
        assert result.snapshot.won is True
        assert result.snapshot.locked is True
        assert result.effects == (Effect(kind=EffectKind.WIN, delay_ms=3000),)

    def test_clear_progress_clamped_at_ceiling(self):
        s = _session_with(power=100.0, clear_progress=90.0)
        assert s.tick().snapshot.clear_progress == 100.0

    def test_no_second_win_when_already_won(self):
        # won without lock should never happen, but the guard still holds
        s = _session_with(power=100.0, clear_progress=100.0, won=True)
        result = s.tick()
        assert result.effects == ()
        assert result.snapshot.locked is False


# ---------------------------------------------------------------------------
# LaunchSession – lock after win
# ---------------------------------------------------------------------------

class TestLock:
    @pytest.fixture()
    def won_session(self) -> LaunchSession:
        s = _session_with(power=100.0, fuel=40.0, clear_progress=80.0)
        s.tick()
        assert s.snapshot().locked
        return s

    def test_click_is_noop(self, won_session: LaunchSession):
        before = won_session.snapshot()
        result = won_session.click()
        assert result.snapshot == before
        assert result.effects == ()

    def test_refuel_click_is_noop(self, won_session: LaunchSession):
        won_session.set_mode(Mode.REFUEL)
        before = won_session.snapshot()
        result = won_session.click()
        assert result.snapshot == before
        assert result.effects == ()

    def test_tick_is_noop(self, won_session: LaunchSession):
        before = won_session.snapshot()
        for _ in range(10):
            result = won_session.tick()
            assert result.snapshot == before
            assert result.effects == ()

    def test_won_stays_true(self, won_session: LaunchSession):
        for _ in range(5):
            won_session.tick()
            won_session.click()
        assert won_session.snapshot().won is True


# ---------------------------------------------------------------------------
# LaunchSession – restart
# ---------------------------------------------------------------------------

class TestRestart:
    def test_from_fresh_session(self):
        result = LaunchSession().restart()
        assert result.snapshot == INITIAL
        assert result.effects == ()

    def test_from_mid_game(self):
        s = _session_with(mode=Mode.REFUEL, power=63.0, fuel=12.0, clear_progress=40.0)
        assert s.restart().snapshot == INITIAL

    def test_from_won_game(self):
        s = _session_with(power=100.0, clear_progress=80.0)
        s.tick()
        assert s.snapshot().locked
        assert s.restart().snapshot == INITIAL
        assert not s.snapshot().locked

    def test_clicks_work_again_after_restart(self):
        s = _session_with(power=100.0, clear_progress=80.0)
        s.tick()
        s.restart()
        result = s.click()
        assert result.snapshot.power == 5.0
        assert result.snapshot.fuel == 95.0

    def test_can_win_again_after_restart(self):
        s = _session_with(power=100.0, clear_progress=80.0)
        assert _kinds(s.tick()) == [EffectKind.WIN]
        s.restart()
        s._state.power = 100.0
        s._state.clear_progress = 80.0
        assert _kinds(s.tick()) == [EffectKind.WIN]


# ---------------------------------------------------------------------------
# Full launch sequence
# ---------------------------------------------------------------------------

class TestLaunchSequence:
    def test_ticks_alone_never_clear(self):
        s = _session_with(power=100.0)
        progress = [s.tick().snapshot.clear_progress for _ in range(5)]
        # 96 clears once, then decay drops power below the threshold
        assert progress == [20.0, 0.0, 0.0, 0.0, 0.0]
        assert not s.snapshot().won

    def test_interleaved_clicks_reach_launch(self):
        s = LaunchSession()
        for _ in range(19):
            s.click()
        assert s.snapshot().power == 95.0
        assert s.snapshot().fuel == 5.0

        s.set_mode(Mode.REFUEL)
        for _ in range(5):
            s.click()
        assert s.snapshot().fuel == 80.0
        s.set_mode(Mode.IGNITE)

        wins = 0
        progress = []
        for _ in range(5):
            s.click()
            result = s.tick()
            progress.append(result.snapshot.clear_progress)
            wins += _kinds(result).count(EffectKind.WIN)

        assert progress == [20.0, 40.0, 60.0, 80.0, 100.0]
        assert wins == 1
        assert s.snapshot().won is True
        assert s.snapshot().locked is True

        for _ in range(3):
            assert s.tick().effects == ()
        assert s.snapshot().won is True

    def test_fog_rolls_back_when_power_lapses(self):
        s = _session_with(power=95.0, fuel=100.0)
        s.click()
        assert s.tick().snapshot.clear_progress == 20.0
        s.click()
        assert s.tick().snapshot.clear_progress == 40.0
        # no click: 96 - 4 = 92
        assert s.tick().snapshot.clear_progress == 20.0

    def test_custom_tuning_changes_pace(self):
        s = LaunchSession(GameTuning(clear_step=50, success_delay_ms=10))
        s._state.power = 100.0
        assert s.tick().snapshot.clear_progress == 50.0
        s._state.power = 100.0
        result = s.tick()
        assert result.snapshot.won is True
        assert result.effects == (Effect(kind=EffectKind.WIN, delay_ms=10),)


# ---------------------------------------------------------------------------
# Invariants over random play
# ---------------------------------------------------------------------------

class TestRandomPlay:
    @pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
    def test_bounds_and_single_win(self, seed: int):
        rng = random.Random(seed)
        s = LaunchSession()
        wins = 0
        was_won = False
        for _ in range(3000):
            op = rng.choice(["ignite", "refuel", "click", "click", "click", "tick", "restart"])
            before = s.snapshot()
            if op == "ignite":
                result = s.set_mode(Mode.IGNITE)
            elif op == "refuel":
                result = s.set_mode(Mode.REFUEL)
            elif op == "click":
                result = s.click()
            elif op == "tick":
                result = s.tick()
            else:
                result = s.restart()
                assert result.snapshot == INITIAL
                wins = 0
                was_won = False
                continue

            snap = result.snapshot
            for value in (snap.power, snap.fuel, snap.clear_progress):
                assert 0.0 <= value <= 100.0
            assert snap.locked == snap.won
            if was_won:
                assert snap.won
            if before.locked and op in ("click", "tick"):
                assert snap == before
                assert result.effects == ()
            wins += _kinds(result).count(EffectKind.WIN)
            assert wins <= 1
            was_won = snap.won
