"""In-window launch overlay: win modal with launch video and success message."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QEvent, Qt, QTimer, QUrl, Signal
from PySide6.QtGui import QColor
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from rocketlaunch.ui.colors import LaunchColors

logger = logging.getLogger(__name__)

_ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"


def _primary_button_style() -> str:
    return f"""
        QPushButton {{
            background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                stop:0 {LaunchColors.PRIMARY_LIGHT}, stop:1 {LaunchColors.PRIMARY});
            color: white;
            padding: 10px 16px;
            border: none;
            border-radius: 12px;
            font-weight: 700;
            font-size: 14px;
        }}
        QPushButton:hover {{ background: {LaunchColors.PRIMARY}; }}
    """


class LaunchOverlay(QWidget):
    """Modal shown once the cockpit is clear.

    The video is best effort: a missing file or a playback error is logged and
    otherwise ignored, the success message still appears after the delay.
    """

    restart_requested = Signal()

    def __init__(self, parent: Optional[QWidget] = None, video_path: Optional[Path] = None) -> None:
        super().__init__(parent)
        self._video_path = video_path or (_ASSETS_DIR / "launch.mp4")

        main_layout = QGridLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.setRowStretch(0, 1)
        main_layout.setColumnStretch(0, 1)

        overlay_bg = QWidget(self)
        overlay_bg.setStyleSheet("background: rgba(0, 0, 0, 0.55);")
        overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        overlay_bg.setMinimumSize(1, 1)
        main_layout.addWidget(overlay_bg, 0, 0)

        container = QFrame()
        container.setObjectName("launchContainer")
        container.setMinimumWidth(520)
        container.setMaximumWidth(760)
        container.setStyleSheet(
            f"""
            QFrame#launchContainer {{
                background: {LaunchColors.BG_TOP};
                border: 1px solid {LaunchColors.CARD_BORDER};
                border-radius: 20px;
            }}
            """
        )
        shadow = QGraphicsDropShadowEffect(container)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(0, 0, 0, 120))
        container.setGraphicsEffect(shadow)

        content = QVBoxLayout(container)
        content.setContentsMargins(24, 24, 24, 24)
        content.setSpacing(16)

        self._video_widget = QVideoWidget()
        self._video_widget.setMinimumHeight(280)
        content.addWidget(self._video_widget, 1)

        self._player = QMediaPlayer(self)
        self._audio = QAudioOutput(self)
        self._player.setAudioOutput(self._audio)
        self._player.setVideoOutput(self._video_widget)
        self._player.errorOccurred.connect(self._on_player_error)

        self._message = QLabel("Liftoff! The rocket has launched.")
        self._message.setAlignment(Qt.AlignCenter)
        self._message.setStyleSheet(
            f"color: {LaunchColors.PRIMARY_LIGHT}; font-size: 26px; font-weight: 900;"
        )
        self._message.hide()
        content.addWidget(self._message, 0)

        self._restart_btn = QPushButton("Play again")
        self._restart_btn.setStyleSheet(_primary_button_style())
        self._restart_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._restart_btn.clicked.connect(self.restart_requested.emit)
        content.addWidget(self._restart_btn, 0)

        main_layout.addWidget(container, 0, 0, 1, 1, Qt.AlignCenter)

        self._message_timer = QTimer(self)
        self._message_timer.setSingleShot(True)
        self._message_timer.timeout.connect(self._message.show)

        self._add_overlay_geometry_behavior()

    def play(self, success_delay_ms: int) -> None:
        """Show the modal, start the video and schedule the success message."""
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        self.raise_()
        self.show()
        self._start_video()
        self._message_timer.start(max(0, int(success_delay_ms)))

    def reset(self) -> None:
        """Hide the modal and rewind the video for the next game."""
        self._message_timer.stop()
        self._message.hide()
        self._player.stop()
        self._player.setPosition(0)
        self.hide()

    def _start_video(self) -> None:
        if not self._video_path.exists():
            logger.debug("Launch video not found: %s", self._video_path)
            return
        if self._player.source().isEmpty():
            self._player.setSource(QUrl.fromLocalFile(str(self._video_path)))
        self._player.play()

    def _on_player_error(self, error, error_string: str) -> None:
        logger.debug("Launch video playback failed: %s", error_string)

    def _add_overlay_geometry_behavior(self) -> None:
        def _update_geometry() -> None:
            parent = self.parentWidget()
            if parent is not None:
                self.setGeometry(parent.rect())

        self._update_geometry = _update_geometry

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._update_geometry()
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._update_geometry()
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)
