# src/retro_chip8/ui/qt_device.py
"""
PySide6 ウィンドウと結び付くデバイスアダプタ。

キーイベントは MainWindow から文字として受け取り、エンジンのティック時にまとめてキー状態へ変換します。
"""
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.arch.chip8.state import KEY_COUNT
from retro_chip8.config.models import KeymapConfig
from retro_chip8.transport.device import DeviceAdapter, ControlEvent, KeyState, InputSample
from .display_view import DisplayView

# @intent:responsibility Qtのキーイベントを CHIP-8 の16キー状態と制御イベントに変換し、フレームとトーンをUIへ渡します。
class QtDevice(DeviceAdapter):
    """
    キーは押下後 key_hold_ms の間、解放イベントが届いていても押されたものとみなします。
    一瞬だけのタップもキー入力待ち命令が確実に観測できるようにするためです。
    """
    def __init__(self, keymap: Optional[KeymapConfig] = None, clock: Callable[[], int] = time.monotonic_ns):
        keymap = keymap or KeymapConfig()
        self._key_index: Dict[str, int] = {ch: n for n, ch in enumerate(keymap.keys)}
        self._controls: Dict[str, ControlEvent] = {
            keymap.exit_key: ControlEvent.EXIT,
            keymap.reset_key: ControlEvent.RESET,
            keymap.pause_key: ControlEvent.PAUSE,
        }
        self._hold_ns = keymap.key_hold_ms * 1_000_000
        self._clock = clock

        self._pressed_at: Dict[int, int] = {}
        self._held = set()
        self._pending: Deque[ControlEvent] = deque()

        self._view: Optional[DisplayView] = None
        self._tone = False
        self.tone_changed: Optional[Callable[[bool], None]] = None

    def attach_view(self, view: DisplayView) -> None:
        self._view = view

    # @intent:responsibility キー押下を記録します。未割り当ての文字は無視し、処理したかどうかを返します。
    def handle_key_press(self, text: str) -> bool:
        text = text.lower()
        if text in self._controls:
            self._pending.append(self._controls[text])
            return True
        index = self._key_index.get(text)
        if index is None:
            return False
        self._pressed_at[index] = self._clock()
        self._held.add(index)
        return True

    def handle_key_release(self, text: str) -> bool:
        index = self._key_index.get(text.lower())
        if index is None:
            return False
        self._held.discard(index)
        return True

    # @intent:responsibility 保留中の制御イベントを優先して返し、なければ現在の16キー状態を返します。
    def sample_input(self) -> InputSample:
        if self._pending:
            return self._pending.popleft()
        now = self._clock()
        keys = tuple(
            n in self._held or now - self._pressed_at.get(n, now - self._hold_ns) < self._hold_ns
            for n in range(KEY_COUNT)
        )
        return KeyState(keys)

    def present(self, framebuffer: bytes) -> None:
        if self._view is not None:
            self._view.set_frame(framebuffer)

    # @intent:responsibility トーンの立ち上がりでビープを鳴らし、変化をUIへ通知します。
    def present_tone(self, active: bool) -> None:
        if active == self._tone:
            return
        self._tone = active
        if active:
            QApplication.beep()
        if self.tone_changed is not None:
            self.tone_changed(active)
