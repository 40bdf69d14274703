# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
ディスプレイとレジスタインスペクタを配置し、GUIスレッド上のタイマーでエンジンを駆動します。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QDockWidget, QLabel, QMessageBox
from PySide6.QtGui import QKeyEvent, QCloseEvent
from PySide6.QtCore import Qt, QTimer

from retro_chip8.config.models import DisplayConfig
from retro_chip8.core.errors import InvalidOpcodeError
from retro_chip8.engine.engine import CycleEngine, TickResult
from .display_view import DisplayView
from .register_view import RegisterView
from .qt_device import QtDevice

logger = logging.getLogger(__name__)

# @intent:constant 1回のタイマーイベントで回すティック数の上限。イベントループを塞がないための値。
TICKS_PER_EVENT = 64
INSPECTOR_REFRESH_MS = 100


# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    エンジンのティックは全てGUIスレッドで実行するため、状態の共有にロックは不要です。
    """
    def __init__(self, engine: CycleEngine, device: QtDevice, display: DisplayConfig = None,
                 max_ticks: Optional[int] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        display = display or DisplayConfig()
        self.setWindowTitle("Retro CHIP-8")

        self._engine = engine
        self._device = device
        self._max_ticks = max_ticks
        self.error = None

        self.display_view = DisplayView(display.scale, display.foreground, display.background)
        self.display_view.setFocusPolicy(Qt.StrongFocus)
        self.setCentralWidget(self.display_view)
        self._device.attach_view(self.display_view)
        self._device.tone_changed = self._on_tone_changed

        self._create_status_inspector()
        self._create_status_bar()

        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(0)
        self._tick_timer.timeout.connect(self._on_tick)

        self._inspector_timer = QTimer(self)
        self._inspector_timer.setInterval(INSPECTOR_REFRESH_MS)
        self._inspector_timer.timeout.connect(self._refresh_inspector)

    # @intent:responsibility レジスタインスペクタをドックとして作成します。
    def _create_status_inspector(self):
        self.register_view = RegisterView()
        self.register_view.set_cpu(self._engine.cpu)
        dock = QDockWidget("Registers", self)
        dock.setWidget(self.register_view)
        dock.setFeatures(QDockWidget.DockWidgetMovable | QDockWidget.DockWidgetFloatable)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    def _create_status_bar(self):
        self.tone_label = QLabel("")
        self.run_label = QLabel("Running")
        self.statusBar().addWidget(self.run_label)
        self.statusBar().addPermanentWidget(self.tone_label)

    def start(self) -> None:
        self._tick_timer.start()
        self._inspector_timer.start()

    def stop(self) -> None:
        self._tick_timer.stop()
        self._inspector_timer.stop()

    # @intent:responsibility エンジンを数ティック進めます。終了要求または致命的エラーでウィンドウを閉じます。
    def _on_tick(self):
        try:
            for _ in range(TICKS_PER_EVENT):
                if self._engine.tick() is TickResult.EXIT or self._tick_limit_reached():
                    self.stop()
                    self.close()
                    return
        except InvalidOpcodeError as e:
            logger.error("Halting on %s", e)
            self.error = e
            self.stop()
            QMessageBox.critical(self, "Invalid Opcode", str(e))
            self.close()

    def _refresh_inspector(self):
        self.register_view.update_registers()
        self.run_label.setText("Paused" if self._engine.paused else "Running")

    def _on_tone_changed(self, active: bool):
        self.tone_label.setText("BEEP" if active else "")

    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        if not self._device.handle_key_press(event.text()):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        if not self._device.handle_key_release(event.text()):
            super().keyReleaseEvent(event)

    def closeEvent(self, event: QCloseEvent):
        self.stop()
        super().closeEvent(event)

    def _tick_limit_reached(self) -> bool:
        return self._max_ticks is not None and self._engine.tick_count >= self._max_ticks
