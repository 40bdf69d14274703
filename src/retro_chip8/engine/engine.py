# retro_chip8/engine/engine.py
"""
サイクルエンジン

入力サンプリング → 命令実行 → キー入力待ち状態機械 → タイマー更新 → 再描画 → トーン通知
の1ティックを駆動し、実時間によるペース配分を担当します。
マシン状態を変更するのはこのエンジン（とそれが所有するCPU）だけです。
"""
import logging
import time
from enum import Enum
from typing import Callable, Optional

from retro_chip8.core.errors import DeviceError
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.transport.device import DeviceAdapter, ControlEvent, KeyState

logger = logging.getLogger(__name__)

NANOS_PER_SECOND = 1_000_000_000
# @intent:constant タイマーは CPU クロックに関係なく 60Hz でデクリメントされる。
TIMER_HZ = 60
TIMER_INTERVAL_NS = NANOS_PER_SECOND // TIMER_HZ
DEFAULT_CLOCK_SPEED = 500


# @intent:responsibility 1ティックの結果を表します。
class TickResult(Enum):
    RUNNING = "RUNNING"
    EXIT = "EXIT"


# @intent:responsibility CPUとデバイスを結び、実時間でティックループを駆動します。
class CycleEngine:
    """
    CHIP-8のティックループ。

    命令実行間隔（clock_speed から算出）とタイマー間隔（1/60秒）は
    毎ティック独立に判定されます。時刻はナノ秒単位の整数を返す clock から取得します。
    """
    def __init__(self, cpu: Chip8Cpu, device: DeviceAdapter, clock_speed: int = DEFAULT_CLOCK_SPEED,
                 clock: Callable[[], int] = time.monotonic_ns):
        if clock_speed <= 0:
            raise ValueError(f"Clock speed must be positive, got {clock_speed}")
        self._cpu = cpu
        self._device = device
        self._clock = clock
        self._clock_speed = clock_speed
        self._instruction_interval_ns = NANOS_PER_SECOND // clock_speed
        self._last_cycle: Optional[int] = None
        self._last_timer_update = clock()
        self._paused = False
        self._tick_count = 0
        self._last_snapshot: Optional[Snapshot] = None

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def clock_speed(self) -> int:
        return self._clock_speed

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility マシン状態を作り直し、プログラムを再ロードします。画面は空白で再描画されます。
    def reset(self) -> None:
        logger.info("Reset requested")
        self._cpu.reset()
        self._cpu.get_state().draw_flag = True
        self._last_cycle = None
        self._last_timer_update = self._clock()
        self._last_snapshot = None

    def toggle_pause(self) -> None:
        self._paused = not self._paused
        logger.info("Paused" if self._paused else "Resumed")

    # @intent:responsibility 1ティックを実行します。
    # @intent:post-condition InvalidOpcodeError（デコード失敗）は呼び出し元へ伝播し、実行を終了させます。
    def tick(self) -> TickResult:
        self._tick_count += 1

        sample = self._sample_input()
        if sample is ControlEvent.EXIT:
            logger.info("Exit requested")
            return TickResult.EXIT
        if sample is ControlEvent.RESET:
            self.reset()
        elif sample is ControlEvent.PAUSE:
            self.toggle_pause()
        elif isinstance(sample, KeyState):
            self._cpu.set_keys(sample.keys)

        now = self._clock()

        if self._can_cycle(now):
            self._last_snapshot = self._cpu.step()
            self._last_cycle = now

        self._cpu.update_keyboard_halt()
        self._update_timers(now)

        state = self._cpu.get_state()
        if state.draw_flag:
            self._present(bytes(state.display))
        self._device.present_tone(state.sound_timer > 0)

        return TickResult.RUNNING

    # @intent:responsibility デバイスが終了を報告するまでティックを繰り返します。
    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        実行したティック数を返します。max_ticks を指定した場合はその回数で打ち切ります。
        """
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            ticks += 1
            if self.tick() is TickResult.EXIT:
                break
        return ticks

    # @intent:responsibility キー入力待ち・一時停止中でなく、命令実行間隔が経過していれば True を返します。
    def _can_cycle(self, now: int) -> bool:
        if self._paused or self._cpu.is_halted:
            return False
        if self._last_cycle is None:
            return True
        return now - self._last_cycle >= self._instruction_interval_ns

    # @intent:responsibility 経過した 1/60 秒の周期数だけタイマーをデクリメントします。
    # @intent:rationale 端数は次回に持ち越すため、N/60 秒の経過でちょうど N 減少します。
    def _update_timers(self, now: int) -> None:
        if self._paused:
            self._last_timer_update = now
            return
        periods = (now - self._last_timer_update) // TIMER_INTERVAL_NS
        if periods > 0:
            self._cpu.decrement_timers(periods)
            self._last_timer_update += periods * TIMER_INTERVAL_NS

    def _sample_input(self):
        try:
            return self._device.sample_input()
        except DeviceError as e:
            logger.error("Error getting key: %s", e)
            return None

    # @intent:responsibility フレームを送出し、成功した場合のみ描画フラグをクリアします。
    def _present(self, frame: bytes) -> None:
        try:
            self._device.present(frame)
        except DeviceError as e:
            logger.error("Error drawing frame: %s", e)
            return
        self._cpu.get_state().draw_flag = False
