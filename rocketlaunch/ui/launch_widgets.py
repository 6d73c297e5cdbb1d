"""Launch pad widgets: background, meters, rocket, particles and cockpit fog."""

from __future__ import annotations

import math
import random
from pathlib import Path
from typing import Optional

from PySide6.QtCore import (
    QEasingCurve,
    QParallelAnimationGroup,
    QPoint,
    QPointF,
    QPropertyAnimation,
    QVariantAnimation,
    Qt,
    Signal,
)
from PySide6.QtGui import (
    QColor,
    QLinearGradient,
    QPainter,
    QPainterPath,
    QPixmap,
    QPolygonF,
    QRadialGradient,
)
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGraphicsOpacityEffect,
    QWidget,
)

from rocketlaunch.core.effects import EffectKind
from rocketlaunch.ui.colors import LaunchColors

_ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"


class SpaceBackground(QWidget):
    """Night-sky gradient with a few fixed stars."""

    _STARS = [
        (0.08, 0.12, 2), (0.22, 0.30, 1), (0.35, 0.08, 2), (0.52, 0.22, 1),
        (0.67, 0.10, 2), (0.81, 0.28, 1), (0.92, 0.15, 2), (0.14, 0.55, 1),
        (0.88, 0.50, 1), (0.74, 0.42, 2), (0.30, 0.46, 1), (0.60, 0.60, 1),
    ]

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        gradient = QLinearGradient(0, 0, 0, self.height())
        gradient.setColorAt(0.0, QColor(LaunchColors.BG_TOP))
        gradient.setColorAt(0.6, QColor(LaunchColors.BG_MIDDLE))
        gradient.setColorAt(1.0, QColor(LaunchColors.BG_BOTTOM))
        painter.fillRect(self.rect(), gradient)

        painter.setPen(Qt.NoPen)
        for x_ratio, y_ratio, radius in self._STARS:
            painter.setBrush(QColor(255, 255, 255, 180))
            painter.drawEllipse(QPoint(int(self.width() * x_ratio), int(self.height() * y_ratio)), radius, radius)

        # Horizon glow behind the launch pad
        glow = QRadialGradient(self.width() * 0.5, self.height() * 1.05, self.width() * 0.6)
        glow.setColorAt(0, QColor(255, 140, 60, 70))
        glow.setColorAt(1, QColor(255, 140, 60, 0))
        painter.setBrush(glow)
        painter.drawRect(self.rect())


class GlassCard(QFrame):
    """Translucent rounded card used for the HUD and mode controls."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("glassCard")
        self.setStyleSheet(
            f"""
            QFrame#glassCard {{
                background: {LaunchColors.CARD_BG};
                border: 1px solid {LaunchColors.CARD_BORDER};
                border-radius: 18px;
            }}
            """
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(24)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 90))
        self.setGraphicsEffect(shadow)


class MeterBar(QWidget):
    """Rounded gradient bar showing a 0-100 value."""

    def __init__(self, parent: Optional[QWidget] = None, *, height: int = 14) -> None:
        super().__init__(parent)
        self._value = 0.0
        self._color_start = LaunchColors.PRIMARY_LIGHT
        self._color_end = LaunchColors.PRIMARY
        self.setFixedHeight(height)
        self.setMinimumWidth(160)

    def set_value(self, value: float, color_start: Optional[str] = None, color_end: Optional[str] = None) -> None:
        self._value = max(0.0, min(100.0, float(value)))
        if color_start:
            self._color_start = color_start
        if color_end:
            self._color_end = color_end
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        radius = min(8, self.height() // 2)

        painter.setBrush(QColor(255, 255, 255, 30))
        painter.drawRoundedRect(0, 0, self.width(), self.height(), radius, radius)

        fill_width = int(self._value / 100.0 * self.width())
        if fill_width > 0:
            gradient = QLinearGradient(0, 0, fill_width, 0)
            gradient.setColorAt(0, QColor(self._color_start))
            gradient.setColorAt(1, QColor(self._color_end))
            painter.setBrush(gradient)
            painter.drawRoundedRect(0, 0, fill_width, self.height(), radius, radius)

            painter.setBrush(QColor(255, 255, 255, 50))
            painter.drawRoundedRect(0, 0, fill_width, max(2, self.height() // 2), radius, radius)


class RocketWidget(QWidget):
    """Clickable rocket. Uses ``assets/rocket.png`` when present, otherwise draws one."""

    clicked = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(220, 320)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self._shake_offset = 0.0
        self._pixmap: Optional[QPixmap] = None
        rocket_path = _ASSETS_DIR / "rocket.png"
        if rocket_path.exists():
            self._pixmap = QPixmap(str(rocket_path))

        self._shake_anim = QVariantAnimation(self)
        self._shake_anim.setStartValue(0.0)
        self._shake_anim.setEndValue(1.0)
        self._shake_anim.valueChanged.connect(self._on_shake_step)
        self._shake_anim.finished.connect(lambda: self._on_shake_step(1.0))

    def shake(self, duration_ms: int) -> None:
        """Jitter the rocket sideways for *duration_ms*."""
        self._shake_anim.stop()
        self._shake_anim.setDuration(max(1, int(duration_ms)))
        self._shake_anim.start()

    def _on_shake_step(self, progress: float) -> None:
        progress = float(progress)
        self._shake_offset = math.sin(progress * math.pi * 6) * 6.0 * (1.0 - progress)
        self.update()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
        painter.translate(self._shake_offset, 0)

        if self._pixmap is not None and not self._pixmap.isNull():
            scaled = self._pixmap.scaled(self.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation)
            x = (self.width() - scaled.width()) // 2
            y = (self.height() - scaled.height()) // 2
            painter.drawPixmap(x, y, scaled)
            return

        w, h = self.width(), self.height()
        body_w = min(w * 0.32, h * 0.22)
        cx = w / 2.0
        top = h * 0.08
        body_top = h * 0.28
        body_bottom = h * 0.78

        painter.setPen(Qt.NoPen)
        # Fins
        painter.setBrush(QColor(LaunchColors.PRIMARY_DARK))
        for side in (-1, 1):
            painter.drawPolygon(QPolygonF([
                QPointF(cx + side * body_w / 2, body_bottom - h * 0.18),
                QPointF(cx + side * body_w * 1.1, body_bottom + h * 0.04),
                QPointF(cx + side * body_w / 2, body_bottom),
            ]))

        # Body and nose cone
        body = QPainterPath()
        body.moveTo(cx, top)
        body.quadTo(cx + body_w * 0.75, body_top - h * 0.05, cx + body_w / 2, body_top)
        body.lineTo(cx + body_w / 2, body_bottom)
        body.lineTo(cx - body_w / 2, body_bottom)
        body.lineTo(cx - body_w / 2, body_top)
        body.quadTo(cx - body_w * 0.75, body_top - h * 0.05, cx, top)
        gradient = QLinearGradient(cx - body_w / 2, 0, cx + body_w / 2, 0)
        gradient.setColorAt(0.0, QColor("#cbd5e1"))
        gradient.setColorAt(0.5, QColor("#f8fafc"))
        gradient.setColorAt(1.0, QColor("#94a3b8"))
        painter.setBrush(gradient)
        painter.drawPath(body)

        # Window
        painter.setBrush(QColor(LaunchColors.FUEL))
        painter.drawEllipse(QPointF(cx, body_top + h * 0.08), body_w * 0.22, body_w * 0.22)

        # Nozzle
        painter.setBrush(QColor("#475569"))
        painter.drawRect(int(cx - body_w * 0.25), int(body_bottom), int(body_w * 0.5), int(h * 0.05))


class ParticleLayer(QWidget):
    """Transparent layer that spawns short-lived flame and fuel particles."""

    _COLORS = {
        EffectKind.FLAME: (LaunchColors.PRIMARY_LIGHT, LaunchColors.PRIMARY),
        EffectKind.FUEL: (LaunchColors.FUEL_LIGHT, LaunchColors.FUEL),
    }

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self._running: set[QParallelAnimationGroup] = set()

    def spawn(self, kind: EffectKind, count: int, lifetime_ms: int) -> None:
        """Emit *count* particles of *kind* from the rocket nozzle."""
        for _ in range(max(0, int(count))):
            self._spawn_one(kind, lifetime_ms)

    def _spawn_one(self, kind: EffectKind, lifetime_ms: int) -> None:
        light, dark = self._COLORS.get(kind, (LaunchColors.TEXT_PRIMARY, LaunchColors.TEXT_SECONDARY))
        size = 12
        particle = QWidget(self)
        particle.setFixedSize(size, size)
        particle.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        particle.setStyleSheet(
            f"""
            background: qradialgradient(cx:0.5, cy:0.5, radius:0.5,
                fx:0.5, fy:0.5, stop:0 {light}, stop:1 {dark});
            border-radius: {size // 2}px;
            """
        )

        angle = random.random() * math.pi * 2
        distance = 50 + random.random() * 100
        start = QPoint(int(self.width() * 0.5) - size // 2, int(self.height() * 0.7) - size // 2)
        end = start + QPoint(int(math.cos(angle) * distance), int(math.sin(angle) * distance))
        particle.move(start)

        opacity = QGraphicsOpacityEffect(particle)
        opacity.setOpacity(1.0)
        particle.setGraphicsEffect(opacity)

        move_anim = QPropertyAnimation(particle, b"pos")
        move_anim.setDuration(lifetime_ms)
        move_anim.setStartValue(start)
        move_anim.setEndValue(end)
        move_anim.setEasingCurve(QEasingCurve.Type.OutCubic)

        fade_anim = QPropertyAnimation(opacity, b"opacity")
        fade_anim.setDuration(lifetime_ms)
        fade_anim.setStartValue(1.0)
        fade_anim.setEndValue(0.0)

        group = QParallelAnimationGroup(self)
        group.addAnimation(move_anim)
        group.addAnimation(fade_anim)

        def _finish() -> None:
            self._running.discard(group)
            particle.deleteLater()
            group.deleteLater()

        group.finished.connect(_finish)
        self._running.add(group)
        particle.show()
        group.start()


class CockpitOverlay(QWidget):
    """Clear cockpit view that fades in as the fog is pushed back."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._effect = QGraphicsOpacityEffect(self)
        self._effect.setOpacity(0.0)
        self.setGraphicsEffect(self._effect)

    def set_opacity(self, opacity: float) -> None:
        self._effect.setOpacity(max(0.0, min(1.0, float(opacity))))

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        w, h = self.width(), self.height()

        frame = QPainterPath()
        frame.addRoundedRect(w * 0.05, h * 0.05, w * 0.9, h * 0.9, 40, 40)
        sky = QLinearGradient(0, 0, 0, h)
        sky.setColorAt(0.0, QColor("#7dd3fc"))
        sky.setColorAt(1.0, QColor("#e0f2fe"))
        painter.setPen(Qt.NoPen)
        painter.setBrush(sky)
        painter.drawPath(frame)

        # Window struts
        painter.setBrush(QColor(LaunchColors.BG_TOP))
        painter.drawRect(int(w * 0.49), int(h * 0.05), max(4, int(w * 0.02)), int(h * 0.9))
        painter.drawRect(int(w * 0.05), int(h * 0.72), int(w * 0.9), max(4, int(h * 0.02)))
