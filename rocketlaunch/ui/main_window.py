from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from rocketlaunch.core.effects import Effect, EffectKind
from rocketlaunch.core.session import LaunchSession, Mode, StepResult
from rocketlaunch.ui.colors import LaunchColors
from rocketlaunch.ui.launch_overlay import LaunchOverlay
from rocketlaunch.ui.launch_widgets import (
    CockpitOverlay,
    GlassCard,
    MeterBar,
    ParticleLayer,
    RocketWidget,
    SpaceBackground,
)
from rocketlaunch.ui.models import meter_color, present


def _mode_button_style(active: bool) -> str:
    if active:
        return f"""
            QPushButton {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {LaunchColors.PRIMARY_LIGHT}, stop:1 {LaunchColors.PRIMARY});
                color: white;
                padding: 12px 28px;
                border: none;
                border-radius: 14px;
                font-weight: 800;
                font-size: 15px;
            }}
        """
    return f"""
        QPushButton {{
            background: transparent;
            color: {LaunchColors.TEXT_SECONDARY};
            padding: 12px 28px;
            border: 1px solid {LaunchColors.CARD_BORDER};
            border-radius: 14px;
            font-weight: 600;
            font-size: 15px;
        }}
        QPushButton:hover {{
            border-color: {LaunchColors.PRIMARY_LIGHT};
            color: {LaunchColors.PRIMARY_LIGHT};
        }}
    """


class MainWindow(QMainWindow):
    """Launch pad window: HUD meters, the rocket and the two mode buttons.

    The window owns the tick timer and forwards every input to the
    :class:`LaunchSession`; whatever the session returns is rendered by
    :meth:`_apply`. The timer keeps running after a win, ticks are ignored by
    the locked session until restart.
    """

    def __init__(self, session: LaunchSession) -> None:
        super().__init__()
        self._session = session

        self._power_bar: Optional[MeterBar] = None
        self._fuel_bar: Optional[MeterBar] = None
        self._power_value: Optional[QLabel] = None
        self._fuel_value: Optional[QLabel] = None
        self._ignite_btn: Optional[QPushButton] = None
        self._refuel_btn: Optional[QPushButton] = None
        self._rocket: Optional[RocketWidget] = None
        self._particles: Optional[ParticleLayer] = None
        self._cockpit: Optional[CockpitOverlay] = None
        self._launch_overlay: Optional[LaunchOverlay] = None

        self._build_ui()

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(self._session.tuning.tick_interval_ms)
        self._tick_timer.timeout.connect(self._on_tick)

        self._apply(self._session.set_mode(Mode.IGNITE))
        self._tick_timer.start()

    def _build_ui(self) -> None:
        """Construct the widget tree: HUD, launch stage, mode controls and the win overlay."""
        self.setWindowTitle("Rocket Launch")
        self.setMinimumSize(720, 760)

        root = SpaceBackground()
        self.setCentralWidget(root)
        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(24, 24, 24, 24)
        root_layout.setSpacing(18)

        title = QLabel("Rocket Launch Countdown")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(f"color: {LaunchColors.TEXT_PRIMARY}; font-size: 26px; font-weight: 900;")
        root_layout.addWidget(title)

        hud = GlassCard()
        hud_layout = QGridLayout(hud)
        hud_layout.setContentsMargins(20, 16, 20, 16)
        hud_layout.setHorizontalSpacing(14)
        hud_layout.setVerticalSpacing(10)

        def _meter_row(row: int, caption: str) -> tuple[MeterBar, QLabel]:
            label = QLabel(caption)
            label.setStyleSheet(f"color: {LaunchColors.TEXT_SECONDARY}; font-size: 13px; font-weight: 700;")
            bar = MeterBar()
            bar.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
            value = QLabel("0%")
            value.setMinimumWidth(48)
            value.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
            value.setStyleSheet(f"color: {LaunchColors.TEXT_PRIMARY}; font-size: 15px; font-weight: 800;")
            hud_layout.addWidget(label, row, 0)
            hud_layout.addWidget(bar, row, 1)
            hud_layout.addWidget(value, row, 2)
            return bar, value

        self._power_bar, self._power_value = _meter_row(0, "POWER")
        self._fuel_bar, self._fuel_value = _meter_row(1, "FUEL")
        root_layout.addWidget(hud)

        stage = QWidget()
        stage.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        stage_layout = QGridLayout(stage)
        stage_layout.setContentsMargins(0, 0, 0, 0)
        # Later widgets in the same cell paint on top
        self._rocket = RocketWidget()
        self._rocket.clicked.connect(self._on_rocket_clicked)
        self._particles = ParticleLayer()
        self._cockpit = CockpitOverlay()
        stage_layout.addWidget(self._rocket, 0, 0)
        stage_layout.addWidget(self._particles, 0, 0)
        stage_layout.addWidget(self._cockpit, 0, 0)
        root_layout.addWidget(stage, 1)

        controls = GlassCard()
        controls_layout = QHBoxLayout(controls)
        controls_layout.setContentsMargins(20, 14, 20, 14)
        controls_layout.setSpacing(14)
        self._ignite_btn = QPushButton("Ignite (Z)")
        self._ignite_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._ignite_btn.clicked.connect(lambda: self._set_mode(Mode.IGNITE))
        self._refuel_btn = QPushButton("Refuel (X)")
        self._refuel_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._refuel_btn.clicked.connect(lambda: self._set_mode(Mode.REFUEL))
        controls_layout.addStretch(1)
        controls_layout.addWidget(self._ignite_btn)
        controls_layout.addWidget(self._refuel_btn)
        controls_layout.addStretch(1)
        root_layout.addWidget(controls)

        hint = QLabel("Click the rocket. Keep power above 95% to clear the cockpit.")
        hint.setAlignment(Qt.AlignCenter)
        hint.setStyleSheet(f"color: {LaunchColors.TEXT_MUTED}; font-size: 12px;")
        root_layout.addWidget(hint)

        self._launch_overlay = LaunchOverlay(root)
        self._launch_overlay.restart_requested.connect(self._restart)
        self._launch_overlay.hide()

        self.ignite_shortcut = QShortcut(QKeySequence(Qt.Key_Z), self)
        self.ignite_shortcut.activated.connect(lambda: self._set_mode(Mode.IGNITE))
        self.refuel_shortcut = QShortcut(QKeySequence(Qt.Key_X), self)
        self.refuel_shortcut.activated.connect(lambda: self._set_mode(Mode.REFUEL))

    def _set_mode(self, mode: Mode) -> None:
        self._apply(self._session.set_mode(mode))

    def _on_rocket_clicked(self) -> None:
        self._apply(self._session.click())

    def _on_tick(self) -> None:
        self._apply(self._session.tick())

    def _restart(self) -> None:
        self._apply(self._session.restart())

    def _apply(self, result: StepResult) -> None:
        """Render the snapshot, then play the effects that came with it."""
        hud = present(result.snapshot)

        power_color = meter_color(hud.power_percent)
        self._power_bar.set_value(result.snapshot.power, LaunchColors.PRIMARY_LIGHT, power_color)
        self._fuel_bar.set_value(result.snapshot.fuel, LaunchColors.FUEL_LIGHT, LaunchColors.FUEL)
        self._power_value.setText(hud.power_text)
        self._fuel_value.setText(hud.fuel_text)
        self._cockpit.set_opacity(hud.cockpit_opacity)
        self._ignite_btn.setStyleSheet(_mode_button_style(hud.ignite_active))
        self._refuel_btn.setStyleSheet(_mode_button_style(hud.refuel_active))
        # The WIN effect opens the modal; any state without a win closes it
        if not hud.show_win_modal and self._launch_overlay.isVisible():
            self._launch_overlay.reset()

        for effect in result.effects:
            self._play_effect(effect)

    def _play_effect(self, effect: Effect) -> None:
        if effect.kind in (EffectKind.FLAME, EffectKind.FUEL):
            self._particles.spawn(effect.kind, effect.count, effect.duration_ms)
        elif effect.kind is EffectKind.SHAKE:
            self._rocket.shake(effect.duration_ms)
        elif effect.kind is EffectKind.WIN:
            self._launch_overlay.play(effect.delay_ms)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop the tick timer before the window goes away."""
        self._tick_timer.stop()
        super().closeEvent(event)
